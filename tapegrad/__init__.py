# tapegrad/__init__.py
# Reverse-mode automatic differentiation by operator overloading

from .core import (
    Node,
    Tape,
    Primitive,
    primitive,
    define_gradient,
    define_gradients,
    mark_zero_gradient,
    defgrad,
    defgrads,
    defgrad_is_zero,
    grad,
    value_and_grad,
    forward_pass,
    backward_pass,
    zeros_like,
    numerical_grad,
    check_grads,
    use_config,
    MissingGradientError,
    TapeMisuseError,
    GradientCheckError,
    IndependentOutputWarning,
)

# Registers the gradients of the shipped primitives
from . import ops
from .ops import sin, cos, tan, tanh, exp, log, sqrt, erf, norm_cdf

__version__ = "0.1.0"

__all__ = [
    # Core
    'Node',
    'Tape',
    'Primitive',
    'primitive',
    'define_gradient',
    'define_gradients',
    'mark_zero_gradient',
    'defgrad',
    'defgrads',
    'defgrad_is_zero',
    # Engine
    'grad',
    'value_and_grad',
    'forward_pass',
    'backward_pass',
    'zeros_like',
    # Checks
    'numerical_grad',
    'check_grads',
    'use_config',
    # Errors
    'MissingGradientError',
    'TapeMisuseError',
    'GradientCheckError',
    'IndependentOutputWarning',
    # Ops
    'ops',
    'sin', 'cos', 'tan', 'tanh', 'exp', 'log', 'sqrt', 'erf', 'norm_cdf',
]
