# tapegrad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the tape.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Tuple

from .engine import backward_pass, forward_pass
from .node import getval


def _name(fun: Callable) -> str:
    return getattr(fun, "__name__", "fun")


def grad(fun: Callable, argnum: int = 1) -> Callable:
    """
    grad(fun, argnum=1) -> gradfun

    Returns a function which computes the gradient of `fun` with respect to
    positional argument number `argnum` (1-based). The returned function takes
    the same arguments as `fun` but returns the gradient instead. `fun` should
    be scalar-valued; the gradient has the same type as the argument.

    Every call of `gradfun` records on its own tape, so calls never share state.
    """
    def gradfun(*args, **kwargs):
        return backward_pass(*forward_pass(fun, args, kwargs, argnum))
    gradfun.__name__ = f"grad_{_name(fun)}"
    gradfun.__doc__ = f"Gradient of {_name(fun)} w.r.t. argument {argnum}."
    return gradfun


def value_and_grad(fun: Callable, argnum: int = 1) -> Callable:
    """Like grad, but the returned function gives (fun(*args), gradient) from one pass."""
    def value_and_gradfun(*args, **kwargs) -> Tuple[Any, Any]:
        start_node, end_node, tape = forward_pass(fun, args, kwargs, argnum)
        return getval(end_node), backward_pass(start_node, end_node, tape)
    value_and_gradfun.__name__ = f"value_and_grad_{_name(fun)}"
    return value_and_gradfun
