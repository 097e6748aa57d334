# aad/core/arena.py
from __future__ import annotations
import logging
from typing import List, Optional

import numpy as np

log = logging.getLogger(__name__)


class Arena:
    """
    Block pool holding the forward value and the adjoint of every node
    recorded on one tape.

    Slots are handed out in creation order, so a slot index doubles as the
    node's position on the tape. Nothing is ever returned to the pool one
    node at a time: `reset()` recycles all slots at once and bumps
    `generation`, which invalidates every ADVar issued before the reset.

    Attributes
    ----------
    block_size : int
        Number of slots per block.
    generation : int
        Incremented on every reset; handles compare against it.
    """

    def __init__(self, block_size: Optional[int] = None):
        if block_size is None:
            from ...config import get_config
            block_size = get_config().arena_block_size
        self.block_size = int(block_size)
        self.generation = 0
        self._values: List[np.ndarray] = []
        self._adjoints: List[np.ndarray] = []
        self._size = 0
        self._add_block()

    def __len__(self):
        return self._size

    @property
    def n_blocks(self) -> int:
        return len(self._values)

    def _add_block(self):
        # MemoryError from numpy propagates: arena exhaustion is fatal
        self._values.append(np.empty(self.block_size, dtype=np.float64))
        self._adjoints.append(np.zeros(self.block_size, dtype=np.float64))
        log.debug("arena grew to %d blocks (%d slots)",
                  len(self._values), len(self._values) * self.block_size)

    def allocate(self, value: float) -> int:
        """Store `value` in a fresh slot with a zero adjoint; return the slot index."""
        idx = self._size
        b, i = divmod(idx, self.block_size)
        if b == len(self._values):
            self._add_block()
        self._values[b][i] = value
        self._adjoints[b][i] = 0.0
        self._size = idx + 1
        return idx

    # -------- slot access -------- #
    def value(self, idx: int) -> float:
        b, i = divmod(idx, self.block_size)
        return float(self._values[b][i])

    def adjoint(self, idx: int) -> float:
        b, i = divmod(idx, self.block_size)
        return float(self._adjoints[b][i])

    def add_adjoint(self, idx: int, amount: float):
        b, i = divmod(idx, self.block_size)
        self._adjoints[b][i] += amount

    # -------- bulk operations (O(block count)) -------- #
    def zero_adjoints(self):
        for block in self._adjoints:
            block.fill(0.0)

    def rewind(self, mark: int):
        """Drop every slot at index >= mark; handles to them must not be used again."""
        if not 0 <= mark <= self._size:
            raise ValueError(f"rewind mark {mark} outside [0, {self._size}]")
        self._size = mark

    def reset(self):
        """Recycle every slot, keeping the blocks for reuse."""
        self._size = 0
        self.generation += 1
        self.zero_adjoints()
        log.debug("arena reset (generation %d, %d blocks kept)",
                  self.generation, len(self._values))

    def release(self):
        """Reset and give back every block except the first."""
        del self._values[1:]
        del self._adjoints[1:]
        self.reset()
