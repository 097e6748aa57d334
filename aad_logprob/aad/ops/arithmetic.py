# aad/ops/arithmetic.py
import numpy as np
from ..core.node import OpKind
from ..core.var import ADVar


def _val(x):
    """Forward value as float64 (numpy semantics: x/0 -> inf, not an exception)."""
    return np.float64(x.val if isinstance(x, ADVar) else x)


def _common_tape(*xs):
    """The tape shared by the ADVar arguments, or None if there are none."""
    tape = None
    for x in xs:
        if isinstance(x, ADVar):
            x._check_live()
            if tape is None:
                tape = x.tape
            elif x.tape is not tape:
                raise ValueError("cannot combine ADVars recorded on different tapes")
    return tape


def _record(tape, tag, out, args_and_partials):
    """
    Push one node for `out`; only the ADVar arguments become operands.
    `args_and_partials` is a list of (argument, ∂out/∂argument).
    """
    operands, partials = [], []
    for a, d in args_and_partials:
        if isinstance(a, ADVar):
            operands.append(a.idx)
            partials.append(float(d))
    idx = tape.push_node(op_tag=tag, value=float(out),
                         operands=operands, partials=partials)
    return ADVar._wrap(tape, idx)


def _unary(x, f, dfdx, tag):
    """
    Generic unary primitive: out = f(x), local partial dfdx(x, out).
    Constant input gives a plain float and records nothing.
    """
    tape = _common_tape(x)
    xv = _val(x)
    out = f(xv)
    if tape is None:
        return float(out)
    return _record(tape, tag, out, [(x, dfdx(xv, out))])


def _binary(x, y, f, dfdx, dfdy, tag):
    """
    Generic binary primitive:
      - computes out = f(x.val, y.val)
      - pushes exactly one Node with local partials (∂out/∂x, ∂out/∂y) for
        whichever arguments are ADVars
    """
    tape = _common_tape(x, y)
    xv, yv = _val(x), _val(y)
    out = f(xv, yv)
    if tape is None:
        return float(out)
    return _record(tape, tag, out, [(x, dfdx(xv, yv)), (y, dfdy(xv, yv))])


def add(x, y): return _binary(x, y, lambda a,b:a+b, lambda a,b:1.0,   lambda a,b:1.0,            OpKind.ADD)
def sub(x, y): return _binary(x, y, lambda a,b:a-b, lambda a,b:1.0,   lambda a,b:-1.0,           OpKind.SUB)
def mul(x, y): return _binary(x, y, lambda a,b:a*b, lambda a,b:b,     lambda a,b:a,              OpKind.MUL)
def div(x, y): return _binary(x, y, lambda a,b:a/b, lambda a,b:1.0/b, lambda a,b:-a/np.square(b), OpKind.DIV)


def neg(x):
    return _unary(x, lambda a: -a, lambda a, out: -1.0, OpKind.NEG)


def square(x):
    return _unary(x, np.square, lambda a, out: 2.0 * a, OpKind.SQUARE)


def pow(x, y):
    """
    Power:
      out = x ** y

    Local partials:
      ∂out/∂x = y * x^(y-1)
      ∂out/∂y = x^y * log(x)        (taken as 0 when x <= 0)
    """
    def dfdy(xv, yv):
        return np.power(xv, yv) * np.log(xv) if xv > 0 else 0.0

    return _binary(x, y, np.power,
                   lambda xv, yv: yv * np.power(xv, yv - 1.0),
                   dfdy, OpKind.POW)
