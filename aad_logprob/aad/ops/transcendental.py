# aad/ops/transcendental.py
import numpy as np
from scipy import special
from ..core.node import OpKind
from .arithmetic import _unary

TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)


def exp(x):
    return _unary(x, np.exp, lambda a, out: out, OpKind.EXP)


def log(x):
    return _unary(x, np.log, lambda a, out: 1.0 / a, OpKind.LOG)


def log1p(x):
    return _unary(x, np.log1p, lambda a, out: 1.0 / (1.0 + a), OpKind.LOG1P)


def sqrt(x):
    return _unary(x, np.sqrt, lambda a, out: 0.5 / out, OpKind.SQRT)


def erf(x):
    """
    Error function: erf(x) = (2/√π) ∫₀ˣ e^(-t²) dt

    Derivative: d/dx erf(x) = (2/√π) * e^(-x²)
    """
    return _unary(x, special.erf,
                  lambda a, out: TWO_OVER_SQRT_PI * np.exp(-a * a), OpKind.ERF)


def erfc(x):
    """
    Complementary error function: erfc(x) = 1 - erf(x)

    Derivative: d/dx erfc(x) = -(2/√π) * e^(-x²)
    """
    return _unary(x, special.erfc,
                  lambda a, out: -TWO_OVER_SQRT_PI * np.exp(-a * a), OpKind.ERFC)
