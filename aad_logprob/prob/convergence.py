# prob/convergence.py
from __future__ import annotations
import math

from ..aad.core.seeds import value
from .validation import DomainError


class ConvergenceError(DomainError):
    """A series would not converge (or is undefined) for the given coefficients."""

    def __init__(self, function: str, coefficients: dict):
        detail = ", ".join(f"{k}: {v}" for k, v in coefficients.items())
        self.coefficients = coefficients
        ValueError.__init__(
            self,
            f"called from function '{function}', hypergeometric function 3F2 does "
            f"not meet convergence conditions with given arguments. {detail}",
        )
        self.function = function
        self.label = "3F2 coefficients"
        self.value = coefficients
        self.condition = "a convergent series"


def _is_negative_integer(x: float) -> bool:
    return x < 0.0 and math.floor(x) == x


def check_3F2_converges(function: str, a1, a2, a3, b1, b2, z) -> bool:
    """
    Check that the generalized hypergeometric series 3F2(a1, a2, a3; b1, b2; z)
    converges, assuming finite arguments. ADVars are read by value.

    The series converges when
      - some a_i is a negative integer (the series is a polynomial), or
      - |z| < 1, or
      - |z| == 1 and b1 + b2 > a1 + a2 + a3,
    and no b_j is a negative integer within the number of terms.

    Raises ConvergenceError otherwise, regardless of the error policy.
    """
    a1, a2, a3, b1, b2, z = (float(value(c)) for c in (a1, a2, a3, b1, b2, z))
    coefficients = {"a1": a1, "a2": a2, "a3": a3, "b1": b1, "b2": b2, "z": z}
    if any(math.isnan(c) for c in coefficients.values()):
        raise ConvergenceError(function, coefficients)

    num_terms = 0
    is_polynomial = False
    for a in (a1, a2, a3):
        if _is_negative_integer(a):
            is_polynomial = True
            num_terms = max(num_terms, int(math.floor(abs(a))))

    is_undefined = any(_is_negative_integer(b) and abs(b) <= num_terms
                       for b in (b1, b2))

    if not is_undefined:
        if is_polynomial or abs(z) < 1.0:
            return True
        if abs(z) == 1.0 and b1 + b2 > a1 + a2 + a3:
            return True
    raise ConvergenceError(function, coefficients)
