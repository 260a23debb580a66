from dataclasses import dataclass, field

import numpy as np

from ..custom_types import Array
from ._utils import _check_finite, _check_int, _frozen
from .errors import InvalidParameter

__all__ = [
    "Grid",
    "build_grid",
]


@dataclass(frozen=True)
class Grid:
    """Evenly spaced candidate values of the unknown parameter θ.

    The grid holds ``count`` ascending points from ``lower`` to ``upper``
    inclusive. It behaves like a read-only 1-D array (``len``, indexing,
    ``np.asarray``).

    Attributes:
        lower: First grid point.
        upper: Last grid point, strictly greater than ``lower``.
        count: Number of points, at least 2.
        values: Read-only array of shape (count,).
    """

    lower: float
    upper: float
    count: int
    values: Array[np.floating] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        lower = _check_finite(self.lower, "grid lower bound")
        upper = _check_finite(self.upper, "grid upper bound")
        count = _check_int(self.count, "grid point count", 2)
        if upper <= lower:
            raise InvalidParameter(
                f"grid upper bound must exceed lower bound; got lower={lower}, upper={upper}"
            )
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)
        object.__setattr__(self, "count", count)
        values = np.linspace(lower, upper, count)
        if not np.all(np.diff(values) > 0):
            raise InvalidParameter(
                f"grid spacing {(upper - lower) / (count - 1)} is below float resolution at [{lower}, {upper}]"
            )
        object.__setattr__(self, "values", _frozen(values))

    @property
    def spacing(self) -> float:
        """Distance between neighbouring points, (upper - lower) / (count - 1)."""
        return (self.upper - self.lower) / (self.count - 1)

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, idx):
        return self.values[idx]

    def __iter__(self):
        return iter(self.values)

    def __array__(self, dtype=None, copy=None):
        if dtype is not None:
            return self.values.astype(dtype)
        return self.values.copy() if copy else self.values


def build_grid(lower: float, upper: float, count: int) -> Grid:
    """Builds ``count`` evenly spaced values from ``lower`` to ``upper`` inclusive.

    Raises:
        InvalidParameter: If ``upper`` <= ``lower`` or ``count`` < 2.
    """
    return Grid(lower=lower, upper=upper, count=count)
