# aad/core/var.py
from __future__ import annotations
import numbers
from typing import Any, Optional

from .node import OpKind
from . import tape as tape_mod


class ADVar:
    """
    Active scalar variable for reverse-mode Automatic Differentiation (AD).

    An ADVar is a non-owning handle to one node on a Tape: copying it never
    copies the node, and several handles may alias the same node. The node's
    value and adjoint live in the tape's Arena.

    Constructing an ADVar from a number records a new leaf node on the
    active tape (or on `tape` when given). Plain Python numbers play the role
    of constants and are never recorded.

    Attributes
    ----------
    tape : Tape
        Tape holding the node.
    idx : int
        Node index on that tape.
    name : Optional[str]
        Optional debug/pretty-print name.
    """

    __slots__ = ("tape", "idx", "generation", "name")
    __array_priority__ = 1000  # numpy scalars defer to ADVar's reflected operators

    def __init__(self, val: Any, *, name: Optional[str] = None, tape=None):
        if isinstance(val, ADVar) or not isinstance(val, numbers.Real):
            raise TypeError(f"ADVar only accepts real scalars, but got {type(val)}")
        tape = tape if tape is not None else tape_mod.get_tape()
        self.tape = tape
        self.idx = tape.push_node(op_tag=OpKind.LEAF, value=float(val))
        self.generation = tape.generation
        self.name = name

    @classmethod
    def _wrap(cls, tape, idx: int) -> "ADVar":
        """Handle for a node that was already pushed on `tape`."""
        v = cls.__new__(cls)
        v.tape = tape
        v.idx = idx
        v.generation = tape.generation
        v.name = None
        return v

    def _check_live(self):
        if self.generation != self.tape.generation:
            raise RuntimeError(
                f"ADVar(name={self.name!r}, idx={self.idx}) was created before the "
                f"tape was reset and no longer refers to a node"
            )

    @property
    def val(self) -> float:
        self._check_live()
        return self.tape.arena.value(self.idx)

    @property
    def adj(self) -> float:
        self._check_live()
        return self.tape.arena.adjoint(self.idx)

    @property
    def node(self):
        self._check_live()
        return self.tape.nodes[self.idx]

    def __repr__(self):
        return f"ADVar({self.val!r}, idx={self.idx}, name={self.name!r})"

    # Comparisons look at forward values only and record nothing
    def __lt__(self, other):
        return self.val < _plain(other)

    def __le__(self, other):
        return self.val <= _plain(other)

    def __gt__(self, other):
        return self.val > _plain(other)

    def __ge__(self, other):
        return self.val >= _plain(other)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pos__(self):
        return self

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)


def _plain(x):
    return x.val if isinstance(x, ADVar) else x
