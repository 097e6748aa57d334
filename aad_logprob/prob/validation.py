# prob/validation.py
"""
Argument checks run by the distribution functions before any numeric work.

Every check takes the calling function's name, the argument and a
human-readable label. On success it returns True. On failure it either
raises DomainError (error_policy "raise", the default) or logs a warning
and returns False (error_policy "recover"), in which case the caller
returns the configured sentinel instead of a result.
"""

from __future__ import annotations
import logging
import math
from typing import Any, Sequence

from ..config import get_config
from .views import is_vector, length, values_of

log = logging.getLogger(__name__)


class DomainError(ValueError):
    """An argument lies outside the domain of the function it was passed to."""

    def __init__(self, function: str, label: str, value: Any, condition: str):
        self.function = function
        self.label = label
        self.value = value
        self.condition = condition
        super().__init__(f"{function}: {label} is {value}, but must be {condition}")


def _fail(function: str, label: str, value: Any, condition: str) -> bool:
    err = DomainError(function, label, value, condition)
    if get_config().error_policy == "raise":
        raise err
    log.warning("recovered from domain error: %s", err)
    return False


def _first_bad(x: Any, ok) -> Any:
    """Return the first element value failing `ok`, or None if all pass."""
    for v in values_of(x):
        if not ok(v):
            return v
    return None


def check_not_nan(function: str, x: Any, label: str) -> bool:
    bad = _first_bad(x, lambda v: not math.isnan(v))
    if bad is not None:
        return _fail(function, label, bad, "not nan")
    return True


def check_finite(function: str, x: Any, label: str) -> bool:
    bad = _first_bad(x, math.isfinite)
    if bad is not None:
        return _fail(function, label, bad, "finite")
    return True


def check_positive(function: str, x: Any, label: str) -> bool:
    # nan fails too: the comparison is False
    bad = _first_bad(x, lambda v: v > 0.0)
    if bad is not None:
        return _fail(function, label, bad, "positive")
    return True


def check_consistent_sizes(function: str, args: Sequence[Any], labels: Sequence[str]) -> bool:
    """
    Every sequence argument must have the same length; scalars are
    compatible with any length.
    """
    expected, expected_label = None, None
    for x, label in zip(args, labels):
        if not is_vector(x):
            continue
        if expected is None:
            expected, expected_label = length(x), label
        elif length(x) != expected:
            return _fail(function, label, f"of size {length(x)}",
                         f"consistent with size {expected} of {expected_label}")
    return True
