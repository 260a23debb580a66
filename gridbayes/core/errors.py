"""Exceptions raised by the grid inference pipeline."""

__all__ = [
    "GridBayesError",
    "InvalidParameter",
    "DimensionMismatch",
    "DegenerateNormalization",
]


class GridBayesError(Exception):
    """Base class for every error raised by gridbayes."""


class InvalidParameter(GridBayesError, ValueError):
    """A configuration value or argument violates its constraint.

    Raised for non-positive spreads, non-positive sample sizes, inverted grid
    bounds and grid point counts below two.
    """


class DimensionMismatch(GridBayesError, ValueError):
    """Two sequences that must share a length (grid vs. curve) do not."""


class DegenerateNormalization(GridBayesError, ArithmeticError):
    """The sum used as a normalization denominator is zero or not finite."""
