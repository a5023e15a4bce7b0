# tapegrad/ops/transcendental.py
import numpy as np
from scipy import special as sp_special

from ..core.primitive import Primitive

TWO_OVER_SQRT_PI = 2.0 / np.sqrt(np.pi)

sin = Primitive(np.sin, name="sin")
cos = Primitive(np.cos, name="cos")
tan = Primitive(np.tan, name="tan")
tanh = Primitive(np.tanh, name="tanh")
exp = Primitive(np.exp, name="exp")
log = Primitive(np.log, name="log")
sqrt = Primitive(np.sqrt, name="sqrt")
erf = Primitive(sp_special.erf, name="erf")

# dJ/dx = dJ/dy * dy/dx
sin.defgrad(lambda ans, x: lambda g: g * cos(x))
cos.defgrad(lambda ans, x: lambda g: -g * sin(x))
tan.defgrad(lambda ans, x: lambda g: g / (cos(x) * cos(x)))
tanh.defgrad(lambda ans, x: lambda g: g * (1.0 - ans * ans))
exp.defgrad(lambda ans, x: lambda g: g * ans)
log.defgrad(lambda ans, x: lambda g: g / x)
sqrt.defgrad(lambda ans, x: lambda g: g * 0.5 / ans)
# d/dx erf(x) = (2/√π) * e^(-x²)
erf.defgrad(lambda ans, x: lambda g: g * TWO_OVER_SQRT_PI * exp(-(x * x)))
