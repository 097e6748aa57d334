# aad_logprob/__init__.py
# Log-probability densities with reverse-mode automatic differentiation

from . import aad
from . import prob
from .aad import ADVar, Tape, get_tape, use_tape, reverse, zero_adjoints
from .config import ADConfig, get_config, set_config, use_config
from .prob import (
    normal_log, normal_ss_log, normal_cdf, normal_cdf_log, normal_ccdf_log,
    normal_rng, OperandsAndPartials, DomainError,
)

__version__ = "0.1.0"

__all__ = [
    'aad', 'prob',
    'ADVar', 'Tape', 'get_tape', 'use_tape', 'reverse', 'zero_adjoints',
    'ADConfig', 'get_config', 'set_config', 'use_config',
    'normal_log', 'normal_ss_log', 'normal_cdf', 'normal_cdf_log',
    'normal_ccdf_log', 'normal_rng', 'OperandsAndPartials', 'DomainError',
]
