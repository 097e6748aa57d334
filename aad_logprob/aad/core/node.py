# aad/core/node.py
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class OpKind(str, Enum):
    """Closed set of node kinds the backward pass knows how to propagate."""
    LEAF = "leaf"
    # unary
    NEG = "neg"
    EXP = "exp"
    LOG = "log"
    LOG1P = "log1p"
    SQRT = "sqrt"
    SQUARE = "square"
    ERF = "erf"
    ERFC = "erfc"
    NORM_CDF = "norm_cdf"
    # binary
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    POW = "pow"
    # n-ary weighted sum built by OperandsAndPartials
    PRECOMPUTED = "precomputed"


UNARY_KINDS = frozenset({
    OpKind.NEG, OpKind.EXP, OpKind.LOG, OpKind.LOG1P, OpKind.SQRT,
    OpKind.SQUARE, OpKind.ERF, OpKind.ERFC, OpKind.NORM_CDF,
})
BINARY_KINDS = frozenset({
    OpKind.ADD, OpKind.SUB, OpKind.MUL, OpKind.DIV, OpKind.POW,
})


@dataclass(frozen=True)
class Node:
    """
    One node on the tape produced by a primitive operation.

    The forward value and the adjoint are not stored here; they live in the
    owning Arena at slot `index`.

    Attributes
    ----------
    op_tag   : OpKind
        Operation kind; the backward pass dispatches on it.
    index    : int
        Position on the tape (and arena slot).
    operands : Tuple[int, ...]
        Tape indices of the differentiated inputs, all < index.
    partials : Tuple[float, ...]
        Local partial ∂out/∂operand, one per operand.
    """
    op_tag: OpKind
    index: int
    operands: Tuple[int, ...] = ()
    partials: Tuple[float, ...] = ()
