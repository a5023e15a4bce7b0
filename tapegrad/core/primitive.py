# tapegrad/core/primitive.py
#-----------------------------------------------------------------------------
# A Primitive wraps a plain function so that calls with Node arguments are
# recorded on the open tapes. Gradients are registered per argument position
# as *gradient-makers*:
#
#     gradmaker(ans, *args, **kwargs) -> (g -> local gradient)
#
# The maker is invoked once per call, at record time, with the call's result
# and its original (possibly wrapped) arguments; the returned transform is
# stored on the result's record and applied during the backward pass.
#-----------------------------------------------------------------------------
from __future__ import annotations
import functools
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Set, Union

from .errors import MissingGradientError
from .node import Node, new_node
from .record import Edge


@dataclass(frozen=True)
class GradientMaker:
    """Lookup hit: the registered maker for `argnum`."""
    argnum: int
    make: Callable[..., Callable[[Any], Any]]


@dataclass(frozen=True)
class MissingGradient:
    """Lookup miss. `argnum` is None when the primitive has no gradients at all."""
    name: str
    argnum: Optional[int]

    def error(self) -> MissingGradientError:
        return MissingGradientError(self.name, self.argnum)


GradientLookup = Union[GradientMaker, MissingGradient]


def _check_argnum(argnum) -> int:
    if isinstance(argnum, bool) or not isinstance(argnum, int) or argnum < 1:
        raise ValueError(f"argnum must be a positive integer (1-based), got {argnum!r}")
    return argnum


class Primitive:
    """
    Differentiable wrapper around `fun`.

    Attributes
    ----------
    fun        : Callable
        The wrapped function, always called on unwrapped values.
    grads      : Dict[int, Callable]
        Gradient-maker per 1-based argument position.
    zero_grads : Set[int]
        Positions known to contribute no gradient; not recorded.
    name       : str
        Used in error messages.
    """

    def __init__(self, fun: Callable, name: Optional[str] = None):
        self.fun = fun
        self.name = name or getattr(fun, "__name__", repr(fun))
        self.grads: Dict[int, Callable] = {}
        self.zero_grads: Set[int] = set()
        functools.update_wrapper(self, fun, updated=())
        self.__name__ = self.name

    def __repr__(self):
        return f"Primitive({self.name})"

    def __call__(self, *args, **kwargs):
        # Without Node arguments a primitive is just its function
        for arg in args:
            if isinstance(arg, Node):
                return self.apply(*args, **kwargs)
        return self.fun(*args, **kwargs)

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #
    def defgrad(self, gradmaker: Callable, argnum: int = 1):
        self.grads[_check_argnum(argnum)] = gradmaker

    def defgrads(self, gradmaker: Callable, argnums: Iterable[int]):
        for argnum in argnums:
            self.defgrad(functools.partial(gradmaker, argnum), argnum)

    def defgrad_is_zero(self, argnums: Iterable[int] = (1,)):
        for argnum in argnums:
            self.zero_grads.add(_check_argnum(argnum))

    def gradmaker(self, argnum: int) -> GradientLookup:
        maker = self.grads.get(argnum)
        if maker is not None:
            return GradientMaker(argnum, maker)
        if not self.grads:
            return MissingGradient(self.name, None)
        return MissingGradient(self.name, argnum)

    # ------------------------------------------------------------------ #
    # Call interception
    # ------------------------------------------------------------------ #
    def apply(self, *args, **kwargs):
        """
        Strip Nodes from `args`, call `fun`, and if any differentiable Node
        argument lives on an open tape, wrap the result in a Node on those
        tapes with one Edge per (tape, argument) back to the producer.
        """
        argvals = list(args)
        ops = []        # (tape, argnum, parent handle)
        tapes = {}      # insertion-ordered set
        for i, arg in enumerate(args, start=1):
            if isinstance(arg, Node):
                argvals[i - 1] = arg.value
                if i in self.zero_grads:
                    continue
                for tape, parent in arg.tapes.items():
                    if not tape.is_complete:
                        ops.append((tape, i, parent))
                        tapes[tape] = None

        result = self.fun(*argvals, **kwargs)
        if not ops:
            return result

        result = new_node(result, tapes)
        for tape, argnum, parent in ops:
            lookup = self.gradmaker(argnum)
            if isinstance(lookup, MissingGradient):
                raise lookup.error()
            transform = lookup.make(result, *args, **kwargs)
            result.record_on(tape).edges.append(Edge(parent, transform))
        return result


def primitive(fun: Callable) -> Primitive:
    """Decorator form of Primitive(fun)."""
    return Primitive(fun)


def define_gradient(p: Primitive, gradmaker: Callable, argnum: int = 1):
    """Register `gradmaker` for one argument position of `p`."""
    p.defgrad(gradmaker, argnum)


def define_gradients(p: Primitive, gradmaker: Callable, argnums: Iterable[int]):
    """Register `partial(gradmaker, argnum)` for each position in `argnums`."""
    p.defgrads(gradmaker, argnums)


def mark_zero_gradient(p: Primitive, argnums: Iterable[int] = (1,)):
    """Declare positions of `p` that never contribute a gradient."""
    p.defgrad_is_zero(argnums)


defgrad = define_gradient
defgrads = define_gradients
defgrad_is_zero = mark_zero_gradient
