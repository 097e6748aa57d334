# aad/core/tape.py
from __future__ import annotations
import threading
from typing import List, Optional, Sequence
from contextlib import contextmanager

from .arena import Arena
from .node import Node, OpKind


class Tape:
    """
    Records Nodes in forward (creation) order.

    Each tape owns one Arena holding the node values and adjoints. Because a
    node can only reference nodes that already exist, operands always sit
    earlier on the tape than their users and a single reverse scan is a valid
    backward pass.
    """
    def __init__(self, block_size: Optional[int] = None):
        self.arena = Arena(block_size)
        self.nodes: List[Node] = []

    def __len__(self):
        return len(self.nodes)

    @property
    def generation(self) -> int:
        return self.arena.generation

    def push_node(self, *, op_tag: OpKind, value: float,
                  operands: Sequence[int] = (), partials: Sequence[float] = ()) -> int:
        """
        Append a Node(op_tag, operands, partials) to the tape, storing `value`
        in the arena. Returns the new node's index.
        """
        idx = self.arena.allocate(value)
        self.nodes.append(Node(op_tag=op_tag, index=idx,
                               operands=tuple(operands), partials=tuple(partials)))
        return idx

    def mark(self) -> int:
        """Current tape length; pass it to `rewind` to drop a nested computation."""
        return len(self.nodes)

    def rewind(self, mark: int):
        self.arena.rewind(mark)
        del self.nodes[mark:]

    def reset(self):
        """Forget every node. ADVars created before the reset become invalid."""
        self.nodes = []
        self.arena.reset()

    def release(self):
        """Like `reset`, and also return all but one arena block."""
        self.nodes = []
        self.arena.release()

    def check_topological(self) -> bool:
        """
        Assert the construction-order invariant: every node's operands were
        created before it. Raises AssertionError on violation.
        """
        for pos, node in enumerate(self.nodes):
            assert node.index == pos, f"node at position {pos} has index {node.index}"
            assert len(node.operands) == len(node.partials), \
                f"node {pos} ({node.op_tag.value}) has mismatched operands/partials"
            for p in node.operands:
                assert p < pos, f"node {pos} ({node.op_tag.value}) references later node {p}"
        return True


# One active tape per thread; tapes are never shared between threads.
_local = threading.local()


def get_tape() -> Tape:
    """Return this thread's active tape, creating it on first use."""
    tape = getattr(_local, "tape", None)
    if tape is None:
        tape = _local.tape = Tape()
    return tape


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily use a fresh (or given) tape:
        with use_tape() as tape:
            ... build computation ...
            reverse(y)
    """
    prev = getattr(_local, "tape", None)
    try:
        _local.tape = tape if tape is not None else Tape()
        yield _local.tape
    finally:
        _local.tape = prev
