"""Error types raised by the lattice pricing code."""

from __future__ import annotations


class LatticeError(ValueError):
    """Base class for failures of a single pricing call."""


class InvalidConfiguration(LatticeError):
    """Raised when the lattice configuration cannot be built (e.g. steps < 1)."""


class DegenerateLattice(LatticeError):
    """Raised when the up and down factors collapse onto each other."""


class MalformedInput(LatticeError):
    """Raised for option or dividend records that cannot be interpreted."""
