# prob/operands_and_partials.py
from __future__ import annotations
from typing import Any, List, Optional, Union

import numpy as np

from ..aad.core.node import OpKind
from ..aad.core.var import ADVar
from ..aad.ops.arithmetic import _common_tape
from .views import is_constant, is_vector, length


class PartialsView:
    """
    Derivative buffer for one argument.

    A sequence argument gets one slot per element. A scalar argument gets a
    single slot and every index maps to it, so contributions from all
    elements of a broadcast computation sum into that one slot.
    """

    def __init__(self, size: int, is_vector: bool):
        self.values = np.zeros(size, dtype=np.float64)
        self.is_vector = is_vector

    def __len__(self):
        return len(self.values)

    def __getitem__(self, i: int) -> float:
        return self.values[i if self.is_vector else 0]

    def __setitem__(self, i: int, v: float):
        self.values[i if self.is_vector else 0] = v

    def scale(self, factor: float):
        self.values *= factor


class OperandsAndPartials:
    """
    Collects the analytic partial derivatives of one distribution call and
    turns them into a single node.

    Usage (inside a distribution function):
        ops = OperandsAndPartials(y, mu, sigma)
        d_y, d_mu, d_sigma = ops.d_x
        for n in range(N):
            ...
            if d_y is not None:
                d_y[n] -= scaled_diff
        return ops.to_var(logp)

    `d_x[k]` is None when argument k holds no ADVar; such arguments get no
    buffer and contribute no operands.
    """

    def __init__(self, *operands: Any):
        self.operands = operands
        self.d_x: List[Optional[PartialsView]] = [
            None if is_constant(x) else PartialsView(length(x), is_vector(x))
            for x in operands
        ]

    @property
    def any_differentiated(self) -> bool:
        return any(d is not None for d in self.d_x)

    def to_var(self, value: float) -> Union[float, ADVar]:
        """
        Materialise the result.

        Returns `float(value)` when no argument is differentiated; otherwise
        pushes one PRECOMPUTED node with forward value `value` whose operands
        are the ADVar elements of the differentiated arguments, each weighted
        by its accumulated partial.
        """
        if not self.any_differentiated:
            return float(value)

        elements = []
        partials = []
        for x, d in zip(self.operands, self.d_x):
            if d is None:
                continue
            items = x if is_vector(x) else [x]
            for e, w in zip(items, d.values):
                if isinstance(e, ADVar):
                    elements.append(e)
                    partials.append(float(w))

        tape = _common_tape(*elements)
        idx = tape.push_node(op_tag=OpKind.PRECOMPUTED, value=float(value),
                             operands=[e.idx for e in elements], partials=partials)
        return ADVar._wrap(tape, idx)
