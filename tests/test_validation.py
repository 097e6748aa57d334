"""Tests for argument checks, the error policy, configuration and the 3F2 guard."""

from __future__ import annotations

import logging
import math
import threading

import pytest

from aad_logprob.aad import ADVar
from aad_logprob.config import ADConfig, get_config, set_config, use_config
from aad_logprob.prob import (
    ConvergenceError, DomainError,
    check_3F2_converges, check_consistent_sizes, check_finite,
    check_not_nan, check_positive,
)


class TestChecks:

    def test_passing_checks_return_true(self, tape):
        assert check_not_nan("f", [1.0, ADVar(2.0)], "x")
        assert check_finite("f", 3.0, "x")
        assert check_positive("f", [0.1, 2.0], "x")
        assert check_consistent_sizes("f", ([1.0, 2.0], 3.0, [4.0, 5.0]), ("a", "b", "c"))

    def test_error_carries_function_label_and_value(self):
        with pytest.raises(DomainError) as info:
            check_positive("normal_log", [1.0, -2.0], "Scale parameter")
        err = info.value
        assert err.function == "normal_log"
        assert err.label == "Scale parameter"
        assert err.value == -2.0
        assert "normal_log" in str(err)
        assert "Scale parameter" in str(err)
        assert "-2.0" in str(err)

    @pytest.mark.parametrize("bad", [0.0, -1.0, float("nan")])
    def test_check_positive_rejects(self, bad):
        with pytest.raises(DomainError):
            check_positive("f", bad, "x")

    @pytest.mark.parametrize("bad", [float("inf"), -float("inf"), float("nan")])
    def test_check_finite_rejects(self, bad):
        with pytest.raises(DomainError):
            check_finite("f", bad, "x")

    def test_check_not_nan_allows_inf(self):
        assert check_not_nan("f", float("inf"), "x")
        with pytest.raises(DomainError):
            check_not_nan("f", [0.0, float("nan")], "x")

    def test_check_consistent_sizes_rejects_mismatch(self):
        with pytest.raises(DomainError) as info:
            check_consistent_sizes("f", ([1.0, 2.0, 3.0], [1.0, 2.0]), ("y", "mu"))
        assert info.value.label == "mu"

    def test_domain_error_is_value_error(self):
        with pytest.raises(ValueError):
            check_finite("f", math.inf, "x")


class TestErrorPolicy:

    def test_recover_returns_false_and_logs(self, caplog):
        with use_config(error_policy="recover"):
            with caplog.at_level(logging.WARNING, logger="aad_logprob.prob.validation"):
                assert check_positive("f", -1.0, "sigma") is False
        assert "sigma" in caplog.text

    def test_use_config_restores(self):
        before = get_config()
        with use_config(error_policy="recover") as cfg:
            assert cfg.error_policy == "recover"
            assert get_config() is cfg
        assert get_config() is before

    def test_set_config(self):
        before = get_config()
        try:
            cfg = set_config(arena_block_size=16)
            assert get_config().arena_block_size == 16
            assert cfg.error_policy == before.error_policy
        finally:
            set_config(arena_block_size=before.arena_block_size)

    def test_use_config_is_thread_local(self):
        before = get_config()
        seen = {}
        entered = threading.Event()
        release = threading.Event()

        def worker():
            with use_config(error_policy="recover"):
                seen["worker"] = get_config().error_policy
                entered.set()
                release.wait(timeout=5)

        t = threading.Thread(target=worker)
        t.start()
        try:
            assert entered.wait(timeout=5)
            assert get_config() is before
            assert check_positive("f", 1.0, "sigma") is True
            with pytest.raises(DomainError):
                check_positive("f", -1.0, "sigma")
        finally:
            release.set()
            t.join()
        assert seen["worker"] == "recover"
        assert get_config() is before

    def test_use_config_accepts_explicit_config(self):
        custom = ADConfig(error_policy="recover", arena_block_size=8)
        with use_config(custom) as cfg:
            assert cfg == custom
            assert get_config().arena_block_size == 8

    def test_invalid_policy(self):
        with pytest.raises(ValueError):
            ADConfig(error_policy="ignore")
        with pytest.raises(ValueError):
            ADConfig(arena_block_size=0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AAD_LOGPROB_ERROR_POLICY", "Recover")
        monkeypatch.setenv("AAD_LOGPROB_ARENA_BLOCK_SIZE", "128")
        cfg = ADConfig.from_env()
        assert cfg.error_policy == "recover"
        assert cfg.arena_block_size == 128

    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("AAD_LOGPROB_ERROR_POLICY", raising=False)
        monkeypatch.delenv("AAD_LOGPROB_ARENA_BLOCK_SIZE", raising=False)
        assert ADConfig.from_env().error_policy == "raise"


class TestCheck3F2Converges:

    @pytest.mark.parametrize(
        "a1, a2, a3, b1, b2, z",
        [
            (1.0, 1.0, 1.0, 1.0, 1.0, 0.5),     # |z| < 1
            (-2.0, 1.0, 1.0, 1.0, 1.0, 5.0),    # polynomial
            (1.0, 1.0, 1.0, 2.0, 2.0, 1.0),     # |z| == 1, b1 + b2 > a1 + a2 + a3
            (1.0, 1.0, 1.0, 2.0, 2.0, -1.0),
        ],
    )
    def test_converges(self, a1, a2, a3, b1, b2, z):
        assert check_3F2_converges("f", a1, a2, a3, b1, b2, z)

    @pytest.mark.parametrize(
        "a1, a2, a3, b1, b2, z",
        [
            (1.0, 1.0, 1.0, 1.0, 1.0, 1.0),     # |z| == 1 without enough slack
            (1.0, 1.0, 1.0, 1.0, 1.0, 2.0),     # |z| > 1, not a polynomial
            (-3.0, 1.0, 1.0, -2.0, 1.0, 0.5),   # denominator hits zero
            (float("nan"), 1.0, 1.0, 1.0, 1.0, 0.5),
        ],
    )
    def test_diverges(self, a1, a2, a3, b1, b2, z):
        with pytest.raises(ConvergenceError) as info:
            check_3F2_converges("beta_binomial_cdf", a1, a2, a3, b1, b2, z)
        assert "beta_binomial_cdf" in str(info.value)
        assert "3F2" in str(info.value)

    def test_recover_policy_does_not_apply(self):
        with use_config(error_policy="recover"):
            with pytest.raises(DomainError):
                check_3F2_converges("f", 1.0, 1.0, 1.0, 1.0, 1.0, 2.0)

    def test_accepts_advars(self, tape):
        assert check_3F2_converges("f", ADVar(1.0), 1.0, 1.0, 2.0, 2.0, ADVar(0.2))
