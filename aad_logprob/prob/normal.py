# prob/normal.py
"""
Normal distribution: log density, sufficient-statistic log density, CDF,
log CDF, log complementary CDF and random variates.

Arguments y, mu and sigma may each be a float, an ADVar, or a sequence of
either; sequence arguments must share one length and scalars are broadcast.
The result is the sum (log statistics) or product (CDF) over elements. It is
a plain float when no argument holds an ADVar, otherwise an ADVar whose node
carries the analytic partials for every differentiated argument.
"""

from __future__ import annotations
import math
from typing import Any, Optional, Union

import numpy as np
from scipy import special

from ..aad.core.var import ADVar
from ..config import get_config
from .constants import (
    NEG_LOG_SQRT_TWO_PI, SQRT_2, SQRT_TWO_OVER_PI, LOG_HALF,
    CDF_ZERO_BELOW, CDF_ERFC_BELOW, CDF_UNIT_ABOVE,
)
from .operands_and_partials import OperandsAndPartials
from .traits import include_summand, included_terms
from .validation import (
    check_consistent_sizes, check_finite, check_not_nan, check_positive,
)
from .views import (
    VectorView, is_constant, is_scalar_like, is_vector, length, max_size,
    values_of, values_view,
)

Real = Union[float, ADVar]

# term name -> arguments the term depends on
NORMAL_LOG_TERMS = {
    "log_sqrt_two_pi": (),
    "log_sigma": ("sigma",),
    "squared_error": ("y", "mu", "sigma"),
}
NORMAL_SS_LOG_TERMS = {
    "log_sqrt_two_pi": (),
    "log_sigma": ("sigma",),
    "sum_of_squares": ("y_bar", "s_squared", "mu", "sigma"),
}

LABELS = ("Random variable", "Location parameter", "Scale parameter")


def cdf_regime(scaled_diff: float) -> str:
    """
    Which formula variant the CDF family uses at `scaled_diff`:
      "zero" : saturate to the statistic's zero
      "erfc" : complementary error function
      "unit" : saturate to the statistic's unit
      "erf"  : error function directly
    """
    if scaled_diff < CDF_ZERO_BELOW:
        return "zero"
    if scaled_diff < CDF_ERFC_BELOW:
        return "erfc"
    if scaled_diff > CDF_UNIT_ABOVE:
        return "unit"
    return "erf"


def _log(x: float) -> float:
    return -np.inf if x == 0.0 else math.log(x)


def _check_location_scale(function, y, mu, sigma, sigma_not_nan=False) -> bool:
    return (check_not_nan(function, y, LABELS[0])
            and check_finite(function, mu, LABELS[1])
            and (not sigma_not_nan or check_not_nan(function, sigma, LABELS[2]))
            and check_positive(function, sigma, LABELS[2])
            and check_consistent_sizes(function, (y, mu, sigma), LABELS))


def normal_log(y: Any, mu: Any, sigma: Any, propto: bool = False) -> Real:
    """
    Log of the normal density, summed over all (y, mu, sigma) triples.

    With propto=True, terms that are constant with respect to every
    differentiated argument are dropped; if all arguments are constants
    the result is 0.0.

    Raises DomainError if y is nan, mu is not finite, sigma is not positive,
    or sequence arguments differ in length.
    """
    function = "normal_log"

    # zero-length sequences short-circuit before validation
    if not (length(y) and length(mu) and length(sigma)):
        return 0.0

    logp = 0.0
    if not _check_location_scale(function, y, mu, sigma):
        return get_config().sentinel

    differentiated = {"y": not is_constant(y), "mu": not is_constant(mu),
                      "sigma": not is_constant(sigma)}
    include = included_terms(propto, NORMAL_LOG_TERMS, differentiated)
    if not any(include.values()):
        return 0.0

    ops = OperandsAndPartials(y, mu, sigma)
    d_y, d_mu, d_sigma = ops.d_x

    y_vec = values_view(y)
    mu_vec = values_view(mu)
    N = max_size(y, mu, sigma)

    # per-sigma quantities, computed once over length(sigma) rather than N
    sigma_vals = values_of(sigma)
    if not is_vector(sigma):
        sigma_vals = sigma_vals[0]
    inv_sigma = VectorView(1.0 / sigma_vals)
    if include["log_sigma"]:
        log_sigma = VectorView(np.log(sigma_vals))

    for n in range(N):
        y_dbl = y_vec[n]
        mu_dbl = mu_vec[n]
        inv_sigma_n = inv_sigma[n]

        y_minus_mu_over_sigma = (y_dbl - mu_dbl) * inv_sigma_n
        y_minus_mu_over_sigma_squared = y_minus_mu_over_sigma * y_minus_mu_over_sigma

        if include["log_sqrt_two_pi"]:
            logp += NEG_LOG_SQRT_TWO_PI
        if include["log_sigma"]:
            logp -= log_sigma[n]
        if include["squared_error"]:
            logp += -0.5 * y_minus_mu_over_sigma_squared

        scaled_diff = inv_sigma_n * y_minus_mu_over_sigma
        if d_y is not None:
            d_y[n] -= scaled_diff
        if d_mu is not None:
            d_mu[n] += scaled_diff
        if d_sigma is not None:
            d_sigma[n] += -inv_sigma_n + inv_sigma_n * y_minus_mu_over_sigma_squared

    return ops.to_var(logp)


def normal_ss_log(y_bar: Any, s_squared: Any, n_obs: Any, mu: Any, sigma: Any,
                  propto: bool = False) -> Real:
    """
    Normal log density of n_obs observations given their sufficient
    statistics: sample mean y_bar and sum of squared deviations s_squared.

    With n_obs == 1 and s_squared == 0 this equals normal_log(y_bar, mu, sigma).
    n_obs is treated as data and never differentiated.
    """
    function = "normal_ss_log"

    if not (length(y_bar) and length(s_squared) and length(n_obs)
            and length(mu) and length(sigma)):
        return 0.0

    logp = 0.0
    ok = (check_not_nan(function, y_bar, "Location parameter sufficient statistic")
          and check_not_nan(function, s_squared, "Scale parameter sufficient statistic")
          and check_not_nan(function, n_obs, "Number of observations")
          and check_finite(function, n_obs, "Number of observations")
          and check_positive(function, n_obs, "Number of observations")
          and check_finite(function, mu, "Location parameter")
          and check_positive(function, sigma, "Scale parameter")
          and check_consistent_sizes(
              function, (y_bar, s_squared, n_obs, mu, sigma),
              ("Location parameter sufficient statistic",
               "Scale parameter sufficient statistic",
               "Number of observations", "Location parameter", "Scale parameter")))
    if not ok:
        return get_config().sentinel

    differentiated = {"y_bar": not is_constant(y_bar),
                      "s_squared": not is_constant(s_squared),
                      "mu": not is_constant(mu), "sigma": not is_constant(sigma)}
    include = included_terms(propto, NORMAL_SS_LOG_TERMS, differentiated)
    if not include_summand(propto, *differentiated.values()):
        return 0.0

    ops = OperandsAndPartials(y_bar, s_squared, mu, sigma)
    d_y_bar, d_s_squared, d_mu, d_sigma = ops.d_x

    y_bar_vec = values_view(y_bar)
    s_squared_vec = values_view(s_squared)
    n_obs_vec = values_view(n_obs)
    mu_vec = values_view(mu)
    sigma_vec = values_view(sigma)
    N = max_size(y_bar, s_squared, n_obs, mu, sigma)

    for i in range(N):
        y_bar_dbl = y_bar_vec[i]
        s_squared_dbl = s_squared_vec[i]
        n_obs_dbl = n_obs_vec[i]
        mu_dbl = mu_vec[i]
        sigma_dbl = sigma_vec[i]
        sigma_squared = sigma_dbl * sigma_dbl

        if include["log_sqrt_two_pi"]:
            logp += NEG_LOG_SQRT_TWO_PI * n_obs_dbl
        if include["log_sigma"]:
            logp -= n_obs_dbl * math.log(sigma_dbl)

        cons_expr = s_squared_dbl + n_obs_dbl * (y_bar_dbl - mu_dbl) ** 2
        if include["sum_of_squares"]:
            logp -= cons_expr / (2.0 * sigma_squared)

        if d_y_bar is not None or d_mu is not None:
            common_derivative = n_obs_dbl * (mu_dbl - y_bar_dbl) / sigma_squared
            if d_y_bar is not None:
                d_y_bar[i] += common_derivative
            if d_mu is not None:
                d_mu[i] -= common_derivative
        if d_s_squared is not None:
            d_s_squared[i] -= 1.0 / (2.0 * sigma_squared)
        if d_sigma is not None:
            d_sigma[i] += cons_expr / sigma_dbl ** 3 - n_obs_dbl / sigma_dbl

    return ops.to_var(logp)


def normal_cdf(y: Any, mu: Any, sigma: Any) -> Real:
    """
    Normal cumulative distribution function, multiplied over elements.

    Far in the lower tail the per-element factor saturates to 0, far in the
    upper tail to 1 (see `cdf_regime`).
    """
    function = "normal_cdf"

    cdf = 1.0
    if not (length(y) and length(mu) and length(sigma)):
        return cdf

    if not _check_location_scale(function, y, mu, sigma, sigma_not_nan=True):
        return get_config().sentinel

    ops = OperandsAndPartials(y, mu, sigma)
    d_y, d_mu, d_sigma = ops.d_x

    y_vec = values_view(y)
    mu_vec = values_view(mu)
    sigma_vec = values_view(sigma)
    N = max_size(y, mu, sigma)

    for n in range(N):
        sigma_dbl = sigma_vec[n]
        scaled_diff = (y_vec[n] - mu_vec[n]) / (sigma_dbl * SQRT_2)

        regime = cdf_regime(scaled_diff)
        if regime == "zero":
            cdf_n = 0.0
        elif regime == "erfc":
            cdf_n = 0.5 * special.erfc(-scaled_diff)
        elif regime == "unit":
            cdf_n = 1.0
        else:
            cdf_n = 0.5 * (1.0 + special.erf(scaled_diff))

        cdf *= cdf_n

        # derivative of log(cdf_n); rescaled to the whole product below
        if cdf_n == 0.0:
            rep_deriv = 0.0
        else:
            rep_deriv = (SQRT_TWO_OVER_PI * 0.5 * math.exp(-scaled_diff * scaled_diff)
                         / cdf_n / sigma_dbl)
        if d_y is not None:
            d_y[n] += rep_deriv
        if d_mu is not None:
            d_mu[n] -= rep_deriv
        if d_sigma is not None:
            d_sigma[n] -= rep_deriv * scaled_diff * SQRT_2

    for d in ops.d_x:
        if d is not None:
            d.scale(cdf)

    return ops.to_var(cdf)


def _normal_tail_log(function: str, y: Any, mu: Any, sigma: Any, upper: bool) -> Real:
    """Shared body of normal_cdf_log (upper=False) and normal_ccdf_log (upper=True)."""
    total = 0.0
    if not (length(y) and length(mu) and length(sigma)):
        return total

    if not _check_location_scale(function, y, mu, sigma, sigma_not_nan=True):
        return get_config().sentinel

    ops = OperandsAndPartials(y, mu, sigma)
    d_y, d_mu, d_sigma = ops.d_x
    sign = -1.0 if upper else 1.0

    y_vec = values_view(y)
    mu_vec = values_view(mu)
    sigma_vec = values_view(sigma)
    N = max_size(y, mu, sigma)

    for n in range(N):
        sigma_dbl = sigma_vec[n]
        scaled_diff = (y_vec[n] - mu_vec[n]) / (sigma_dbl * SQRT_2)

        # one_p_erf = 1 + erf(x) for the CDF, one_m_erf = 1 - erf(x) for the CCDF
        regime = cdf_regime(scaled_diff)
        if regime == "zero":
            tail = 2.0 if upper else 0.0
        elif regime == "erfc":
            tail = 2.0 - special.erfc(-scaled_diff) if upper else special.erfc(-scaled_diff)
        elif regime == "unit":
            tail = 0.0 if upper else 2.0
        else:
            tail = 1.0 + sign * special.erf(scaled_diff)

        total += LOG_HALF + _log(tail)

        if tail == 0.0:
            rep_deriv = 0.0
        else:
            rep_deriv = SQRT_TWO_OVER_PI * math.exp(-scaled_diff * scaled_diff) / tail
        if d_y is not None:
            d_y[n] += sign * rep_deriv / sigma_dbl
        if d_mu is not None:
            d_mu[n] -= sign * rep_deriv / sigma_dbl
        if d_sigma is not None:
            d_sigma[n] -= sign * rep_deriv * scaled_diff * SQRT_2 / sigma_dbl

    return ops.to_var(total)


def normal_cdf_log(y: Any, mu: Any, sigma: Any) -> Real:
    """Log of the normal CDF, summed over elements."""
    return _normal_tail_log("normal_cdf_log", y, mu, sigma, upper=False)


def normal_ccdf_log(y: Any, mu: Any, sigma: Any) -> Real:
    """Log of the normal complementary CDF (survival function), summed over elements."""
    return _normal_tail_log("normal_ccdf_log", y, mu, sigma, upper=True)


def normal_rng(mu: float, sigma: float,
               rng: Optional[np.random.Generator] = None) -> float:
    """
    Draw one normal variate with location mu and scale sigma.

    Parameters are plain scalars (ADVars are read by value); `rng` defaults
    to a fresh `numpy.random.default_rng()`.
    """
    function = "normal_rng"
    if not (is_scalar_like(mu) and is_scalar_like(sigma)):
        raise TypeError(f"{function} expects scalar mu and sigma")

    ok = (check_finite(function, mu, "Location parameter")
          and check_not_nan(function, mu, "Location parameter")
          and check_positive(function, sigma, "Scale parameter")
          and check_not_nan(function, sigma, "Scale parameter"))
    if not ok:
        return get_config().sentinel

    rng = rng if rng is not None else np.random.default_rng()
    return float(rng.normal(values_of(mu)[0], values_of(sigma)[0]))
