# tapegrad/core/record.py
from dataclasses import dataclass, field
from typing import Any, Callable, List


@dataclass(frozen=True)
class Edge:
    """
    Backward edge stored on the consumer's record.

    Attributes
    ----------
    parent    : int
        Handle (index on the same tape) of the producer's record.
    transform : Callable
        Maps the upstream gradient dJ/dy to the local gradient dJ/dx
        for this producer.
    """
    parent: int
    transform: Callable[[Any], Any]


@dataclass
class ShadowRecord:
    """
    Per-node bookkeeping on one tape.

    Attributes
    ----------
    node_type  : type
        Type of the owning node's value at creation.
    node_value : Any
        Value of the owning node at creation.
    edges      : List[Edge]
        Filled by Primitive.apply, one Edge per differentiable node argument.
    outgrads   : List[Any]
        Gradient contributions pushed by consumers during backward_pass.
    """
    node_type: type
    node_value: Any
    edges: List[Edge] = field(default_factory=list)
    outgrads: List[Any] = field(default_factory=list)

    def sum_outgrads(self):
        total = self.outgrads[0]
        for g in self.outgrads[1:]:
            total = total + g
        return total
