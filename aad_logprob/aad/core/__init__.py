# aad/core/__init__.py

"""
Core public API for the AAD package.

Exports:
    ADVar             : Handle to one recorded scalar node.
    Tape, get_tape    : The computation graph and this thread's active tape.
    use_tape          : Context manager to temporarily switch the active tape.
    Arena             : Block storage for node values and adjoints.
    reverse           : Seed outputs and run one reverse pass.
    seed_gradient     : Add a seed to one node's adjoint.
    run_backward_pass : Reverse scan over a tape (optionally down to an index).
    read_gradient     : Adjoint of an ADVar.
    reset_arena       : Drop every node on a tape in one step.
    zero_adjoints     : Reset all adjoints on a tape to zero.
    grad, grads       : Convenience gradients on an isolated tape.
    value             : Extract the primal value from an ADVar.
"""

from .arena import Arena
from .node import Node, OpKind
from .var import ADVar
from .tape import Tape, get_tape, use_tape
from .engine import (
    reverse, zero_adjoints, seed_gradient, run_backward_pass,
    read_gradient, reset_arena,
)
from .seeds import grad, grads, grads_list, value

__all__ = [
    "Arena", "Node", "OpKind",
    "ADVar",
    "Tape", "get_tape", "use_tape",
    "reverse", "zero_adjoints", "seed_gradient", "run_backward_pass",
    "read_gradient", "reset_arena",
    "grad", "grads", "grads_list", "value",
]
