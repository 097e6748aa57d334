# aad/__init__.py
# Reverse-mode automatic differentiation on an arena-backed tape

from .core.var import ADVar
from .core.tape import Tape, get_tape, use_tape
from .core.engine import (
    reverse,
    zero_adjoints,
    seed_gradient,
    run_backward_pass,
    read_gradient,
    reset_arena,
)
from .core.seeds import grad, grads, grads_list, value
from .ops import (
    add, sub, mul, div, neg, pow, square,
    exp, log, log1p, sqrt, erf, erfc, norm_cdf,
)

__all__ = [
    # Core
    'ADVar',
    'Tape',
    'get_tape',
    'use_tape',
    # Engine
    'reverse',
    'zero_adjoints',
    'seed_gradient',
    'run_backward_pass',
    'read_gradient',
    'reset_arena',
    'grad',
    'grads',
    'grads_list',
    'value',
    # Ops
    'add', 'sub', 'mul', 'div', 'neg', 'pow', 'square',
    'exp', 'log', 'log1p', 'sqrt', 'erf', 'erfc', 'norm_cdf',
]
