# aad_logprob/config.py
"""
Runtime configuration for the AD engine and the probability layer.

Settings:
    error_policy      : "raise" (default) makes failed argument checks raise
                        DomainError; "recover" logs a warning and lets the
                        distribution return `sentinel` instead.
    sentinel          : value returned by a distribution under "recover".
    arena_block_size  : number of node slots per arena block.

The active config is per thread, like the active tape: `use_config` only
affects the calling thread, while `set_config` changes the default that
every thread sees outside a `use_config` block.
"""

from __future__ import annotations
import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Optional

ERROR_POLICIES = ("raise", "recover")


@dataclass(frozen=True)
class ADConfig:
    error_policy: str = "raise"
    sentinel: float = float("nan")
    arena_block_size: int = 4096

    def __post_init__(self):
        if self.error_policy not in ERROR_POLICIES:
            raise ValueError(
                f"error_policy must be one of {ERROR_POLICIES}, got {self.error_policy!r}"
            )
        if self.arena_block_size < 1:
            raise ValueError(
                f"arena_block_size must be positive, got {self.arena_block_size}"
            )

    @staticmethod
    def from_env() -> "ADConfig":
        """
        Build a config from environment variables:
            AAD_LOGPROB_ERROR_POLICY      -> error_policy
            AAD_LOGPROB_ARENA_BLOCK_SIZE  -> arena_block_size
        Unset variables keep their defaults.
        """
        kwargs = {}
        policy = os.environ.get("AAD_LOGPROB_ERROR_POLICY")
        if policy:
            kwargs["error_policy"] = policy.strip().lower()
        block = os.environ.get("AAD_LOGPROB_ARENA_BLOCK_SIZE")
        if block:
            kwargs["arena_block_size"] = int(block)
        return ADConfig(**kwargs)


# Process-wide default; `use_config` overrides it for the current thread only,
# matching the per-thread active tape.
_default = ADConfig.from_env()
_local = threading.local()


def get_config() -> ADConfig:
    """Return this thread's active config: its `use_config` override, else the default."""
    config = getattr(_local, "config", None)
    return config if config is not None else _default


def set_config(**changes) -> ADConfig:
    """
    Replace selected fields of the process-wide default config; returns the
    new default. Threads inside a `use_config` block keep their override.
    """
    global _default
    _default = replace(_default, **changes)
    return _default


@contextmanager
def use_config(config: Optional[ADConfig] = None, **changes):
    """
    Context manager to temporarily switch this thread's active config:
        with use_config(error_policy="recover"):
            lp = normal_log(y, mu, sigma)
    """
    prev = getattr(_local, "config", None)
    try:
        base = config if config is not None else get_config()
        _local.config = replace(base, **changes)
        yield _local.config
    finally:
        _local.config = prev
