# tapegrad/ops/arithmetic.py
import numpy as np
from ..core.engine import strip
from ..core.primitive import Primitive

# Gradient-makers take (ans, *args) and return g -> local gradient. They are
# written with the primitives themselves so that the backward pass is recorded
# again when an outer grad is open (higher-order derivatives).

add = Primitive(lambda x, y: x + y, name="add")
add.defgrads(lambda argnum, ans, x, y: lambda g: g, [1, 2])

sub = Primitive(lambda x, y: x - y, name="sub")
sub.defgrad(lambda ans, x, y: lambda g: g, argnum=1)
sub.defgrad(lambda ans, x, y: lambda g: -g, argnum=2)

mul = Primitive(lambda x, y: x * y, name="mul")
mul.defgrad(lambda ans, x, y: lambda g: g * y, argnum=1)
mul.defgrad(lambda ans, x, y: lambda g: g * x, argnum=2)

div = Primitive(lambda x, y: x / y, name="div")
div.defgrad(lambda ans, x, y: lambda g: g / y, argnum=1)
div.defgrad(lambda ans, x, y: lambda g: -g * x / (y * y), argnum=2)

neg = Primitive(lambda x: -x, name="neg")
neg.defgrad(lambda ans, x: lambda g: -g)

sign = Primitive(np.sign, name="sign")
sign.defgrad_is_zero([1])

absolute = Primitive(np.abs, name="absolute")
absolute.defgrad(lambda ans, x: lambda g: g * sign(x))


def _pow_grad_exponent(ans, x, y):
    """
    ∂(x^y)/∂y = x^y * log(x), defined for x > 0. Elsewhere the exponent
    contributes nothing (integer powers of non-positive bases).
    """
    from .transcendental import log
    if np.all(strip(x) > 0):
        return lambda g: g * ans * log(x)
    return lambda g: g * 0.0


pow = Primitive(lambda x, y: x ** y, name="pow")
pow.defgrad(lambda ans, x, y: lambda g: g * y * x ** (y - 1), argnum=1)
pow.defgrad(_pow_grad_exponent, argnum=2)
