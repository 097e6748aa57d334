"""Tests for the AD core: arena, tape, handles and the backward pass."""

from __future__ import annotations

import math
import threading

import pytest

from aad_logprob.aad import (
    ADVar, Tape, get_tape, use_tape, reverse, zero_adjoints,
    seed_gradient, run_backward_pass, read_gradient, reset_arena,
    exp, log,
)
from aad_logprob.aad.core import Arena, OpKind


class TestArena:

    def test_allocate_grows_by_blocks(self):
        arena = Arena(block_size=4)
        idx = [arena.allocate(float(i)) for i in range(10)]
        assert idx == list(range(10))
        assert arena.n_blocks == 3
        assert arena.value(9) == 9.0
        assert arena.adjoint(9) == 0.0

    def test_reset_keeps_blocks_and_zeroes_adjoints(self):
        arena = Arena(block_size=4)
        for i in range(10):
            arena.allocate(1.0)
        arena.add_adjoint(7, 2.5)
        gen = arena.generation
        arena.reset()
        assert len(arena) == 0
        assert arena.n_blocks == 3
        assert arena.generation == gen + 1
        arena.allocate(0.0)
        assert arena.adjoint(0) == 0.0
        assert arena._adjoints[1][3] == 0.0

    def test_release_returns_blocks(self):
        arena = Arena(block_size=2)
        for i in range(7):
            arena.allocate(1.0)
        arena.release()
        assert arena.n_blocks == 1
        assert len(arena) == 0

    def test_rewind_out_of_range(self):
        arena = Arena(block_size=2)
        arena.allocate(1.0)
        with pytest.raises(ValueError):
            arena.rewind(5)


class TestTape:

    def test_leaf_and_op_nodes(self, tape):
        x = ADVar(2.0, name="x")
        y = x * 3.0
        assert len(tape) == 2
        assert tape.nodes[0].op_tag is OpKind.LEAF
        assert tape.nodes[1].op_tag is OpKind.MUL
        # the constant 3.0 is not an operand
        assert tape.nodes[1].operands == (x.idx,)
        assert y.val == 6.0

    def test_one_node_per_operation(self, tape):
        x = ADVar(1.5)
        before = len(tape)
        y = exp(x) + 2.0 * x
        # exp, mul, add
        assert len(tape) == before + 3
        assert isinstance(y, ADVar)

    def test_constants_record_nothing(self, tape):
        assert exp(0.0) == 1.0
        assert log(1.0) == 0.0
        assert len(tape) == 0

    def test_topological_order(self, tape):
        x = ADVar(0.3)
        y = ADVar(1.2)
        z = log(x * y + exp(y)) / (x - y)
        assert isinstance(z, ADVar)
        assert tape.check_topological()

    def test_reset_invalidates_handles(self, tape):
        x = ADVar(1.0)
        reset_arena(tape)
        assert len(tape) == 0
        with pytest.raises(RuntimeError):
            x.val
        with pytest.raises(RuntimeError):
            x + 1.0

    def test_mark_and_rewind(self, tape):
        x = ADVar(1.0)
        mark = tape.mark()
        _ = exp(x) * x
        assert len(tape) == 3
        tape.rewind(mark)
        assert len(tape) == 1
        assert len(tape.arena) == 1
        y = x + 1.0
        assert y.idx == 1

    def test_mixing_tapes_is_rejected(self):
        with use_tape():
            a = ADVar(1.0)
        with use_tape():
            b = ADVar(2.0)
            with pytest.raises(ValueError):
                a + b

    def test_tape_is_thread_local(self):
        main_tape = get_tape()
        seen = {}

        def worker():
            seen["tape"] = get_tape()
            seen["x"] = ADVar(4.0).val

        t = threading.Thread(target=worker)
        t.start()
        t.join()
        assert seen["tape"] is not main_tape
        assert seen["x"] == 4.0

    def test_use_tape_restores_previous(self):
        outer = get_tape()
        custom = Tape(block_size=8)
        with use_tape(custom) as t:
            assert t is custom
            assert get_tape() is custom
        assert get_tape() is outer

    def test_use_tape_keeps_empty_custom_tape(self):
        custom = Tape()
        assert len(custom) == 0
        with use_tape(custom):
            x = ADVar(2.0)
            y = x * 3.0
        assert x.tape is custom and y.tape is custom
        assert len(custom) == 2

    def test_handle_is_not_implicitly_a_float(self, tape):
        x = ADVar(0.5)
        with pytest.raises(TypeError):
            math.exp(x)
        with pytest.raises(TypeError):
            float(x)
        assert len(tape) == 1


class TestBackwardPass:

    def test_chain_rule(self, tape):
        x = ADVar(0.7)
        y = exp(2.0 * x)
        reverse(y)
        assert x.adj == pytest.approx(2.0 * y.val)

    def test_aliased_reads_accumulate(self, tape):
        x = ADVar(3.0)
        alias = x
        y = x * alias
        reverse(y)
        assert read_gradient(x) == pytest.approx(6.0)

    def test_reused_intermediate_accumulates(self, tape):
        x = ADVar(2.0)
        u = x * x
        y = u + u * 3.0
        reverse(y)
        # y = 4 x^2
        assert x.adj == pytest.approx(16.0)

    def test_second_pass_without_zeroing_double_counts(self, tape):
        x = ADVar(3.0)
        y = x * x
        reverse(y)
        assert x.adj == pytest.approx(6.0)
        reverse(y)
        # the output seed is now 2 and x keeps its old 6
        assert x.adj == pytest.approx(18.0)
        zero_adjoints(tape)
        reverse(y)
        assert x.adj == pytest.approx(6.0)

    def test_partial_backward_pass(self, tape):
        x = ADVar(2.0)
        y = x * 3.0
        start = tape.mark()
        z = y * y
        seed_gradient(z, 1.0)
        run_backward_pass(tape, from_index=start)
        assert y.adj == pytest.approx(2.0 * y.val)
        assert x.adj == 0.0

    def test_seed_scales_gradient(self, tape):
        x = ADVar(1.0)
        y = x * 5.0
        reverse(y, seed=0.5)
        assert x.adj == pytest.approx(2.5)

    def test_reverse_multiple_outputs(self, tape):
        x = ADVar(1.0)
        reverse([x * 2.0, x * 3.0])
        assert x.adj == pytest.approx(5.0)

    def test_reverse_ignores_plain_results(self, tape):
        reverse(1.0)
        assert len(tape) == 0

    def test_reverse_rejects_mixed_tapes_before_seeding(self):
        with use_tape():
            a = ADVar(1.0)
        with use_tape():
            b = ADVar(2.0)
        with pytest.raises(ValueError):
            reverse([a, b])
        assert a.adj == 0.0
        assert b.adj == 0.0
