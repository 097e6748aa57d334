# aad/ops/__init__.py

from . import arithmetic
from . import transcendental
from . import special

# Convenience re-exports so users can do: from aad_logprob.aad.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow, square
from .transcendental import exp, log, log1p, sqrt, erf, erfc
from .special import norm_cdf

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow", "square",
    "exp", "log", "log1p", "sqrt", "erf", "erfc",
    "norm_cdf",
]
