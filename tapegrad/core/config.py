# tapegrad/core/config.py
"""
Runtime switches for gradient computation.

    from tapegrad.core.config import use_config
    with use_config(check_types=True):
        grad(f)(1.0)
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class GradConfig:
    """
    Attributes
    ----------
    warn_on_independent_output : bool
        Emit an IndependentOutputWarning when the output does not depend on
        the differentiated argument (a zero gradient is returned either way).
    promote_integers : bool
        Promote integer arguments to float before seeding, so gradients are
        always real-valued.
    check_types : bool
        Check every accumulated gradient against the type/shape of the node it
        belongs to during the backward pass.
    """
    warn_on_independent_output: bool = True
    promote_integers: bool = True
    check_types: bool = False


# Process-wide default; swapped by use_config()
_active = GradConfig()


def get_config() -> GradConfig:
    return _active


@contextmanager
def use_config(**overrides):
    """Temporarily override fields of the active GradConfig."""
    global _active
    known = {f.name for f in fields(GradConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown config option(s): {sorted(unknown)}")
    prev = _active
    try:
        _active = replace(prev, **overrides)
        yield _active
    finally:
        _active = prev
