import math
import numbers

from numpy.typing import NDArray

import numpy as np

from .errors import InvalidParameter, DimensionMismatch


def _to_1d_vector(values: NDArray, *, name: str = "values") -> NDArray[np.floating]:
    """Normalizes input to a 1-D float vector of shape (n,).

    Accepts scalars, 1-D arrays, or 2-D column vectors and converts them
    to a standardized 1-D float array.

    Args:
        values (NDArray): Input values as scalar, (n,), or (n, 1).
        name (str, optional): Name used in the error message.

    Returns:
        NDArray[np.floating]: Flattened 1-D array.

    Raises:
        DimensionMismatch: If the input is not scalar, (n,), or (n, 1).
    """
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 0:
        return arr.reshape(1)
    if arr.ndim == 1:
        return arr
    if arr.ndim == 2 and arr.shape[1] == 1:
        return arr[:, 0]
    raise DimensionMismatch(f"{name} must be scalar, (n,), or (n,1); got shape {arr.shape}.")


def _frozen(arr: NDArray) -> NDArray:
    """Returns ``arr`` marked read-only."""
    arr = np.array(arr, dtype=float, copy=True)
    arr.flags.writeable = False
    return arr


def _check_finite(value, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameter(f"{name} must be a real number; got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameter(f"{name} must be finite; got {value}")
    return value


def _check_positive(value, name: str) -> float:
    """Validates a strictly positive, finite real (spreads, standard deviations)."""
    value = _check_finite(value, name)
    if value <= 0:
        raise InvalidParameter(f"{name} must be > 0; got {value}")
    return value


def _check_int(value, name: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameter(f"{name} must be an integer; got {value!r}")
    if value < minimum:
        raise InvalidParameter(f"{name} must be >= {minimum}; got {value}")
    return int(value)


def _check_same_length(a: NDArray, b: NDArray, names: tuple) -> None:
    if a.shape[0] != b.shape[0]:
        raise DimensionMismatch(
            f"{names[0]} has length {a.shape[0]} but {names[1]} has length {b.shape[0]}"
        )
