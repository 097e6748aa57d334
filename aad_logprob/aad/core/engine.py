# aad/core/engine.py
from __future__ import annotations
from typing import Optional, Sequence, Union

from .node import Node, OpKind, UNARY_KINDS, BINARY_KINDS
from .tape import Tape, get_tape
from .var import ADVar


def _resolve(tape: Optional[Tape]) -> Tape:
    return tape if tape is not None else get_tape()


def zero_adjoints(tape: Optional[Tape] = None):
    """
    Set all adjoints on the tape to zero. Required between two backward
    passes over the same nodes, otherwise gradients are counted twice.
    """
    _resolve(tape).arena.zero_adjoints()


def seed_gradient(v: ADVar, seed: float = 1.0):
    """Add `seed` to the adjoint of `v` (normally the final scalar result)."""
    v._check_live()
    v.tape.arena.add_adjoint(v.idx, float(seed))


def read_gradient(v: ADVar) -> float:
    return v.adj


def reset_arena(tape: Optional[Tape] = None):
    """Drop every node on the tape in one step; existing ADVars become invalid."""
    _resolve(tape).reset()


# -------- propagation rules, dispatched on Node.op_tag -------- #
def _propagate_leaf(node: Node, adj: float, arena):
    pass


def _propagate_unary(node: Node, adj: float, arena):
    arena.add_adjoint(node.operands[0], adj * node.partials[0])


def _propagate_binary(node: Node, adj: float, arena):
    # one operand when the other argument was a constant
    for p, a in zip(node.operands, node.partials):
        arena.add_adjoint(p, adj * a)


def _propagate_precomputed(node: Node, adj: float, arena):
    # the same operand may appear several times; each entry adds
    for p, a in zip(node.operands, node.partials):
        if a != 0.0:
            arena.add_adjoint(p, adj * a)


_PROPAGATE = {OpKind.LEAF: _propagate_leaf, OpKind.PRECOMPUTED: _propagate_precomputed}
_PROPAGATE.update({k: _propagate_unary for k in UNARY_KINDS})
_PROPAGATE.update({k: _propagate_binary for k in BINARY_KINDS})


def run_backward_pass(tape: Optional[Tape] = None, from_index: int = 0):
    """
    Single reverse scan over the tape, from the last node down to
    `from_index` (inclusive), calling each node's propagation rule once.

    Notes:
        - For each node, we propagate: operand.adj += node.adj * (∂node/∂operand).
        - Operands always precede their users, so no topological sort is needed.
    """
    tape = _resolve(tape)
    arena = tape.arena
    nodes = tape.nodes
    for i in range(len(nodes) - 1, from_index - 1, -1):
        node = nodes[i]
        adj = arena.adjoint(i)
        if adj == 0.0:
            continue  # nothing to propagate
        _PROPAGATE[node.op_tag](node, adj, arena)


def reverse(outputs: Union[ADVar, float, Sequence[ADVar]], seed: float = 1.0):
    """
    Seed the output(s) and run a single reverse pass on their tape.

    Args:
        outputs: an ADVar or a (list/tuple) of ADVars to seed. Plain floats
                 (results that did not depend on any ADVar) are ignored.
        seed: adjoint seed. If `outputs` is a sequence, each output is seeded
              with 1.0 (the `seed` arg is ignored in that case).
    """
    if isinstance(outputs, (list, tuple)):
        seeds = [(y, 1.0) for y in outputs]
    else:
        seeds = [(outputs, seed)]
    seeds = [(y, s) for y, s in seeds if isinstance(y, ADVar)]
    if not seeds:
        return
    tape = seeds[0][0].tape
    if any(y.tape is not tape for y, _ in seeds):
        raise ValueError("reverse() outputs must share one tape")
    for y, s in seeds:
        seed_gradient(y, s)
    run_backward_pass(tape)
