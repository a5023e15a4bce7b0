# tapegrad/core/__init__.py

"""
Core public API of the recording / replay machinery.

Exports:
    Node            : Value wrapper linked to its shadow records on every open tape.
    Tape            : Append-only arena of ShadowRecords for one forward pass.
    ShadowRecord    : Per-node bookkeeping on a tape (outgrads, backward edges).
    Edge            : (parent handle, transform) pair stored on the consumer's record.
    Primitive       : Differentiable function wrapper with per-argument gradient-makers.
    grad            : Gradient of a scalar function w.r.t. one positional argument.
    value_and_grad  : Value and gradient from a single forward/backward pair.
    forward_pass    : Seed an argument on a fresh tape and run the function.
    backward_pass   : Reverse sweep of a tape producing the gradient of the seed.
"""

from .errors import (
    TapegradError,
    MissingGradientError,
    TapeMisuseError,
    GradientTypeError,
    GradientCheckError,
    IndependentOutputWarning,
)
from .config import GradConfig, get_config, use_config
from .record import Edge, ShadowRecord
from .tape import Tape, active_tapes, recording
from .node import Node, new_node, getval
from .primitive import (
    Primitive,
    GradientMaker,
    MissingGradient,
    primitive,
    define_gradient,
    define_gradients,
    mark_zero_gradient,
    defgrad,
    defgrads,
    defgrad_is_zero,
)
from .engine import forward_pass, backward_pass, merge_tapes, safe_type, zeros_like, strip
from .seeds import grad, value_and_grad
from .checks import numerical_grad, check_grads

__all__ = [
    "TapegradError", "MissingGradientError", "TapeMisuseError",
    "GradientTypeError", "GradientCheckError", "IndependentOutputWarning",
    "GradConfig", "get_config", "use_config",
    "Edge", "ShadowRecord",
    "Tape", "active_tapes", "recording",
    "Node", "new_node", "getval",
    "Primitive", "GradientMaker", "MissingGradient", "primitive",
    "define_gradient", "define_gradients", "mark_zero_gradient",
    "defgrad", "defgrads", "defgrad_is_zero",
    "forward_pass", "backward_pass", "merge_tapes", "safe_type", "zeros_like", "strip",
    "grad", "value_and_grad",
    "numerical_grad", "check_grads",
]
