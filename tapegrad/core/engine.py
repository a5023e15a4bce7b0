# tapegrad/core/engine.py
from __future__ import annotations
import warnings
from typing import Any, Callable, Sequence, Tuple

import numpy as np

from .config import get_config
from .errors import GradientTypeError, IndependentOutputWarning, TapeMisuseError
from .node import Node, getval, new_node
from .primitive import Primitive
from .tape import Tape, recording


def strip(x: Any) -> Any:
    """Remove every level of Node wrapping."""
    while isinstance(x, Node):
        x = x.value
    return x


def safe_type(value: Any) -> Any:
    """Promote integers to float so gradients are real-valued."""
    if isinstance(value, (bool, np.bool_)):
        return value
    if isinstance(value, (int, np.integer)):
        return float(value)
    if isinstance(value, np.ndarray) and np.issubdtype(value.dtype, np.integer):
        return value.astype(np.float64)
    return value


def zeros_like(x: Any) -> Any:
    """Additive identity with the shape of x's value."""
    value = strip(x)
    if isinstance(value, np.ndarray):
        return np.zeros_like(value, dtype=float)
    return 0.0


# merge_tapes(x, y) -> x, with gradient flowing to both arguments. forward_pass
# uses it to join the fresh start node with the original argument, which is a
# Node of the enclosing recording when grad calls are nested.
merge_tapes = Primitive(lambda x, y: x, name="merge_tapes")
merge_tapes.defgrad(lambda ans, x, y: lambda g: g, argnum=1)
merge_tapes.defgrad(lambda ans, x, y: lambda g: g, argnum=2)


def forward_pass(fun: Callable, args: Sequence, kwargs: dict,
                 argnum: int = 1) -> Tuple[Node, Any, Tape]:
    """
    forward_pass(fun, args, kwargs, argnum) -> (start_node, end_node, tape)

    Wraps the `argnum`'th (1-based) positional argument in a Node on a fresh
    tape and calls `fun`. This is the only place a tape is created; nested
    calls (grad of a function that calls grad) each open another one.
    """
    if isinstance(argnum, bool) or not isinstance(argnum, int) or not 1 <= argnum <= len(args):
        raise ValueError(
            f"argnum must be in 1..{len(args)} for a call with {len(args)} "
            f"positional argument(s), got {argnum!r}"
        )
    with recording() as tape:
        arg_wrt = args[argnum - 1]
        start_value = getval(arg_wrt)
        if get_config().promote_integers:
            start_value = safe_type(start_value)
        start_node = new_node(start_value, [tape])
        args = list(args)
        args[argnum - 1] = merge_tapes(start_node, arg_wrt)
        end_node = fun(*args, **kwargs)
    return start_node, end_node, tape


def backward_pass(start_node: Node, end_node: Any, tape: Tape):
    """
    backward_pass(start_node, end_node, tape) -> gradient w.r.t. start_node.value

    Seeds d(end)/d(end) = 1, completes the tape and sweeps it in reverse:
    every reached record sums its outgrads and pushes edge.transform(sum)
    onto the outgrads of each edge's parent.

    If the output does not depend on the seed, either because it is not on
    the tape at all or because no gradient reaches the seed's record, an
    IndependentOutputWarning is emitted and a zero gradient is returned.
    """
    cfg = get_config()
    if tape.is_complete:
        raise TapeMisuseError(f"backward_pass already ran on {tape!r}")
    if not isinstance(end_node, Node) or tape not in end_node.tapes:
        # e.g. the function returns a constant
        tape.complete()
        return _independent_output(start_node, cfg)
    if np.ndim(strip(end_node)) != 0:
        raise ValueError(
            f"grad requires a scalar-valued function, got output of shape {np.shape(strip(end_node))}"
        )

    for record in tape.records:
        record.outgrads = []
    end_node.record_on(tape).outgrads = [1.0]
    tape.complete()

    for handle in tape.reversed_handles():
        record = tape[handle]
        if not record.outgrads:
            continue
        cur_outgrad = record.sum_outgrads()
        if cfg.check_types:
            _check_gradient(record, cur_outgrad, handle)
        for edge in record.edges:
            tape[edge.parent].outgrads.append(edge.transform(cur_outgrad))

    start_record = start_node.record_on(tape)
    if not start_record.outgrads:
        return _independent_output(start_node, cfg)
    return start_record.sum_outgrads()


def _independent_output(start_node: Node, cfg):
    if cfg.warn_on_independent_output:
        # caller of grad: _independent_output <- backward_pass <- gradfun <- user
        warnings.warn("Output seems independent of input. Returning zero gradient.",
                      IndependentOutputWarning, stacklevel=4)
    return zeros_like(start_node)


def _check_gradient(record, outgrad, handle: int):
    gval = strip(outgrad)
    if not isinstance(gval, (int, float, complex, np.number, np.ndarray)):
        raise GradientTypeError(
            f"record {handle}: gradient of type {type(gval).__name__} is not numeric"
        )
    expected = np.shape(strip(record.node_value))
    if np.shape(gval) != expected:
        raise GradientTypeError(
            f"record {handle}: gradient shape {np.shape(gval)} does not match value shape {expected}"
        )
