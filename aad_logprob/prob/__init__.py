# prob/__init__.py

"""
Probability layer: distribution functions built on the AD core.

Exports:
    normal_log, normal_ss_log, normal_cdf, normal_cdf_log,
    normal_ccdf_log, normal_rng : Normal distribution family.
    OperandsAndPartials         : Partial-derivative accumulator used by
                                  distribution functions.
    DomainError, ConvergenceError
    check_*                     : Argument checks.
"""

from .normal import (
    normal_log,
    normal_ss_log,
    normal_cdf,
    normal_cdf_log,
    normal_ccdf_log,
    normal_rng,
    cdf_regime,
)
from .operands_and_partials import OperandsAndPartials, PartialsView
from .validation import (
    DomainError,
    check_not_nan,
    check_finite,
    check_positive,
    check_consistent_sizes,
)
from .convergence import ConvergenceError, check_3F2_converges
from .views import VectorView, length, max_size, value_of, values_of, is_constant

__all__ = [
    "normal_log", "normal_ss_log", "normal_cdf", "normal_cdf_log",
    "normal_ccdf_log", "normal_rng", "cdf_regime",
    "OperandsAndPartials", "PartialsView",
    "DomainError", "ConvergenceError",
    "check_not_nan", "check_finite", "check_positive", "check_consistent_sizes",
    "check_3F2_converges",
    "VectorView", "length", "max_size", "value_of", "values_of", "is_constant",
]
