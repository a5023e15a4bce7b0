# tapegrad/core/errors.py
"""
Exceptions and warnings raised by the recording / replay machinery.
"""


class TapegradError(Exception):
    """Base class for every error raised by tapegrad."""


class MissingGradientError(TapegradError, NotImplementedError):
    """A primitive was differentiated w.r.t. a position with no gradient-maker."""

    def __init__(self, name: str, argnum=None):
        self.name = name
        self.argnum = argnum
        if argnum is None:
            msg = f"Gradient of {name} not yet implemented."
        else:
            msg = f"Gradient of {name} w.r.t. arg number {argnum} not yet implemented."
        super().__init__(msg)


class TapeMisuseError(TapegradError, RuntimeError):
    """Contract violation on a tape: append after completion, double completion."""


class GradientTypeError(TapegradError, TypeError):
    """Accumulated gradient does not match the type/shape of its node."""


class GradientCheckError(TapegradError, AssertionError):
    """Analytic and numerical gradients disagree."""


class IndependentOutputWarning(UserWarning):
    """The differentiated output does not depend on the requested argument."""
