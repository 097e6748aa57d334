# prob/views.py
"""
Scalar-or-sequence adaptors.

Distribution arguments are either a single scalar (float or ADVar) or a
sequence of them (list, tuple or 1-d ndarray). These helpers let a formula
read element i of any argument without caring which: a scalar repeats, a
sequence is indexed.
"""

from __future__ import annotations
import numbers
from typing import Any

import numpy as np

from ..aad.core.var import ADVar


def is_vector(x: Any) -> bool:
    if isinstance(x, np.ndarray):
        return x.ndim >= 1
    return isinstance(x, (list, tuple))


def length(x: Any) -> int:
    return len(x) if is_vector(x) else 1


def max_size(*args) -> int:
    return max(length(a) for a in args)


def value_of(x: Any) -> float:
    """Forward value of a scalar argument, stripping the ADVar wrapper."""
    if isinstance(x, ADVar):
        return x.val
    return float(x)


def values_of(x: Any) -> np.ndarray:
    """Forward values of every element of `x` as a float64 array of length(x)."""
    if not is_vector(x):
        return np.array([value_of(x)], dtype=np.float64)
    if isinstance(x, np.ndarray) and x.dtype != object:
        return x.astype(np.float64, copy=False)
    return np.array([value_of(e) for e in x], dtype=np.float64)


def is_constant(x: Any) -> bool:
    """True if no element of `x` is an ADVar (nothing to differentiate)."""
    if isinstance(x, ADVar):
        return False
    if not is_vector(x):
        return True
    if isinstance(x, np.ndarray) and x.dtype != object:
        return True
    return not any(isinstance(e, ADVar) for e in x)


def is_scalar_like(x: Any) -> bool:
    return isinstance(x, (ADVar, numbers.Real)) or (isinstance(x, np.ndarray) and x.ndim == 0)


class VectorView:
    """Indexed read access over a scalar-or-sequence argument."""

    def __init__(self, x: Any):
        self.x = x
        self.is_vector = is_vector(x)

    def __len__(self):
        return length(self.x)

    def __getitem__(self, i: int):
        if self.is_vector:
            return self.x[i]
        return self.x


def values_view(x: Any) -> VectorView:
    """VectorView over the forward values of `x` (ADVars stripped once, up front)."""
    return VectorView(values_of(x) if is_vector(x) else value_of(x))
