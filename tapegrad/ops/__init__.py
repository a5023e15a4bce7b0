# tapegrad/ops/__init__.py

# Example registration set: differentiable primitives built on the core.
# Importing the package registers their gradients.
from . import arithmetic
from . import transcendental
from . import special

# Convenience re-exports so users can do: from tapegrad.ops import sin, mul, ...
from .arithmetic import add, sub, mul, div, neg, pow, absolute, sign
from .transcendental import sin, cos, tan, tanh, exp, log, sqrt, erf
from .special import norm_pdf, norm_cdf

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow", "absolute", "sign",
    "sin", "cos", "tan", "tanh", "exp", "log", "sqrt", "erf",
    "norm_pdf", "norm_cdf",
]
