# aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .var import ADVar
from .tape import use_tape
from .engine import reverse


def value(x: Any) -> Any:
    """Return the numeric value of an ADVar; pass through plain numbers unchanged."""
    return x.val if isinstance(x, ADVar) else x


def _check_output(y: Any, fname: str):
    if not isinstance(y, ADVar) and not isinstance(y, (int, float)):
        raise ValueError(f"{fname} expects a scalar output, got {type(y)}")


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[ADVar], ADVar], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0 (single input).
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = ADVar(x0, name="x")
        y = f(x)
        _check_output(y, "grad(f, x0)")
        reverse(y, seed=1.0)
        return x.adj


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, ADVar]], ADVar],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of a scalar-output function y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: ADVar} and returning a scalar ADVar
    inputs  : dict {name: float}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    with use_tape():
        vars_ad = {k: ADVar(v, name=k) for k, v in inputs.items()}
        y = f(vars_ad)
        _check_output(y, "grads(f, inputs)")
        reverse(y, seed=1.0)
        return {k: vars_ad[k].adj for k in inputs.keys()}


def grads_list(f: Callable[[List[ADVar]], ADVar],
               x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs = [ADVar(v, name=f"x{i}") for i, v in enumerate(x0_list)]
        y = f(xs)
        _check_output(y, "grads_list(f, x0_list)")
        reverse(y, seed=1.0)
        return [x.adj for x in xs]
