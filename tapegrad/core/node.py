# tapegrad/core/node.py
from __future__ import annotations
from typing import Any, Dict, Iterable

from .record import ShadowRecord


class Node:
    """
    Value wrapper threaded through user code while a gradient is recorded.

    A Node is created
      1. by forward_pass, for the argument we differentiate with respect to;
      2. by Primitive.apply, for the output of a call that received at least
         one differentiable Node argument.

    On creation it appends a fresh ShadowRecord to each tape it is given and
    remembers the record's handle in `tapes` (Tape -> int). Ordinarily there is
    a single tape; nested `grad` calls add more.

    Attributes
    ----------
    value : float | np.ndarray | Node
        Forward (primal) value. Another Node when an outer gradient is being
        recorded around this one.
    tapes : Dict[Tape, int]
        Handle of this node's record on every tape it lives on.
    """

    __slots__ = ("value", "tapes")

    # Make NumPy scalars/arrays defer to the reflected Node operators
    __array_ufunc__ = None

    def __init__(self, value: Any, tapes: Iterable):
        self.value = value
        self.tapes: Dict = {}
        for tape in tapes:
            record = ShadowRecord(node_type=type(self), node_value=value)
            self.tapes[tape] = tape.append(record)

    def __repr__(self):
        ids = sorted(t.id for t in self.tapes)
        return f"Node({self.value!r}, tapes={ids})"

    def record_on(self, tape) -> ShadowRecord:
        return tape[self.tapes[tape]]

    # Operator overloading; bound to the primitives in tapegrad.ops
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

    def __abs__(self):
        from ..ops.arithmetic import absolute
        return absolute(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)

    # Comparisons look through to the values and are not differentiated;
    # hashing stays by identity
    __hash__ = object.__hash__

    def __eq__(self, other):
        return getval(self) == getval(other)

    def __ne__(self, other):
        return getval(self) != getval(other)

    def __lt__(self, other):
        return getval(self) < getval(other)

    def __le__(self, other):
        return getval(self) <= getval(other)

    def __gt__(self, other):
        return getval(self) > getval(other)

    def __ge__(self, other):
        return getval(self) >= getval(other)


def new_node(value: Any, tapes: Iterable) -> Node:
    return Node(value, tapes)


def getval(x: Any) -> Any:
    """Return the value of a Node; pass through anything else unchanged."""
    return x.value if isinstance(x, Node) else x
