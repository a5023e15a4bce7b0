# tapegrad/core/checks.py
"""
Finite-difference reference gradients.

Central differences (bumping) for a scalar argument:

    df/dx ≈ [f(x+ε) - f(x-ε)] / (2ε)

used to validate reverse-mode gradients of registered primitives.
"""

from __future__ import annotations
from typing import Callable

import numpy as np

from .engine import safe_type, strip
from .errors import GradientCheckError
from .seeds import grad


def numerical_grad(fun: Callable, argnum: int = 1, eps: float = 1e-6) -> Callable:
    """Central-difference approximation of grad(fun, argnum) for scalar arguments."""
    def num_gradfun(*args, **kwargs):
        args = list(args)
        x = safe_type(strip(args[argnum - 1]))
        if np.ndim(x) != 0:
            raise ValueError("numerical_grad only supports scalar arguments")
        args[argnum - 1] = x + eps
        f_plus = strip(fun(*args, **kwargs))
        args[argnum - 1] = x - eps
        f_minus = strip(fun(*args, **kwargs))
        return (f_plus - f_minus) / (2.0 * eps)
    return num_gradfun


def check_grads(fun: Callable, *args, argnum: int = 1, eps: float = 1e-6,
                rtol: float = 1e-5, atol: float = 1e-6, **kwargs):
    """
    Compare grad(fun, argnum) against central differences at `args`.

    Returns (analytic, numeric). Raises GradientCheckError if they disagree.
    """
    analytic = strip(grad(fun, argnum)(*args, **kwargs))
    numeric = numerical_grad(fun, argnum, eps)(*args, **kwargs)
    if not np.allclose(analytic, numeric, rtol=rtol, atol=atol):
        name = getattr(fun, "__name__", repr(fun))
        raise GradientCheckError(
            f"Gradient check failed for {name} w.r.t. arg {argnum} at {args!r}: "
            f"analytic={analytic!r}, numeric={numeric!r}"
        )
    return analytic, numeric
