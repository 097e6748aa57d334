"""Tests for the graph inspection helpers."""

from __future__ import annotations

from aad_logprob.aad import ADVar, exp
from aad_logprob.aad.core.graph_utils import (
    get_graph_stats, print_computation_graph, print_graph_summary,
)
from aad_logprob.prob import normal_log


def test_empty_graph(tape, capsys):
    stats = get_graph_stats(tape)
    assert stats['nodes'] == 0
    assert print_graph_summary(tape)['edges'] == 0
    print_computation_graph(tape)
    out = capsys.readouterr().out
    assert "Empty computation graph" in out
    assert "Empty graph" in out


def test_stats_for_model_graph(tape):
    mu = ADVar(0.0, name="mu")
    log_sigma = ADVar(0.0, name="log_sigma")
    normal_log([0.5, 1.5, -0.2], mu, exp(log_sigma))

    stats = get_graph_stats(tape)
    # two leaves, exp, one precomputed node
    assert stats['nodes'] == 4
    assert stats['operations'] == {'leaf': 2, 'exp': 1, 'precomputed': 1}
    # exp <- log_sigma, precomputed <- (mu, exp)
    assert stats['edges'] == 3
    assert stats['max_fan_in'] == 2


def test_printing(tape, capsys):
    x = ADVar(2.0)
    for _ in range(5):
        x = x * 1.5
    print_graph_summary(tape)
    print_computation_graph(tape, max_nodes=3)
    out = capsys.readouterr().out
    assert "COMPUTATION GRAPH SUMMARY" in out
    assert "mul" in out
    assert "[leaf/input]" in out
    assert "3 more nodes" in out
