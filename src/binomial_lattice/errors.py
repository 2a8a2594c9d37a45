"""Exceptions raised by lattice construction and pricing."""

from __future__ import annotations


class LatticeError(ValueError):
    """Base class for rejected lattice inputs."""


class InvalidParameterError(LatticeError):
    """Raised when a caller passes an out-of-domain parameter."""


class DegenerateModelError(LatticeError):
    """Raised when valid-looking inputs collapse the lattice numerically.

    Examples are `u == d` after floating-point rounding, non-finite growth
    factors, or a risk-neutral probability outside `[0, 1]`.
    """
