import logging
from typing import NamedTuple, Optional, Tuple

import numpy as np

from ..custom_types import Array, ArrayLike, PRNG
from ._utils import _check_same_length, _frozen, _to_1d_vector
from .density import GridLike, _grid_values
from .errors import DegenerateNormalization, InvalidParameter

__all__ = [
    "Posterior",
    "GridPosterior",
    "normalize",
    "combine",
    "posterior_mean",
    "posterior_variance",
    "posterior_std",
    "posterior_mode",
    "credible_interval",
]

logger = logging.getLogger(__name__)

_SUM_TOL = 1e-6


class Posterior(NamedTuple):
    """Unnormalized product curve and its normalized counterpart."""
    unnormalized: Array[np.floating]
    normalized: Array[np.floating]


def _curve(values: ArrayLike, name: str) -> Array[np.floating]:
    arr = _to_1d_vector(values, name=name)
    if not np.all(np.isfinite(arr)):
        raise InvalidParameter(f"{name} must contain only finite values")
    if np.any(arr < 0):
        raise InvalidParameter(f"{name} must be non-negative")
    return arr


def _distribution(grid: GridLike, posterior: ArrayLike) -> Tuple[Array, Array]:
    theta = _grid_values(grid)
    p = _curve(posterior, "posterior")
    _check_same_length(theta, p, ("grid", "posterior"))
    total = p.sum()
    if not np.isclose(total, 1.0, rtol=0.0, atol=_SUM_TOL):
        raise InvalidParameter(f"posterior must sum to 1; got {total}")
    return theta, p / total


def normalize(curve: ArrayLike, *, name: str = "curve") -> Array[np.floating]:
    """Divides a non-negative curve by its own sum.

    Applying it to an already normalized distribution returns the same
    distribution.

    Raises:
        InvalidParameter: If the curve has negative or non-finite entries.
        DegenerateNormalization: If the curve sums to zero.
    """
    arr = _curve(curve, name)
    total = arr.sum()
    if total == 0.0 or not np.isfinite(total):
        raise DegenerateNormalization(f"cannot normalize {name}: its sum is {total}")
    return _frozen(arr / total)


def combine(likelihood: ArrayLike, prior: ArrayLike) -> Posterior:
    """Multiplies likelihood and prior pointwise and normalizes the product.

    Args:
        likelihood: Likelihood curve over the grid.
        prior: Prior curve over the same grid.

    Returns:
        Posterior: ``(unnormalized, normalized)``; ``normalized`` sums to 1.

    Raises:
        DimensionMismatch: If the curves differ in length.
        DegenerateNormalization: If the product is zero everywhere, e.g. when
            the likelihood and prior do not overlap on the grid.
    """
    lik = _curve(likelihood, "likelihood")
    pri = _curve(prior, "prior")
    _check_same_length(lik, pri, ("likelihood", "prior"))

    unnormalized = _frozen(lik * pri)
    normalized = normalize(unnormalized, name="posterior")
    logger.debug("combined %d-point likelihood and prior", lik.size)
    return Posterior(unnormalized, normalized)


def posterior_mean(grid: GridLike, normalized_posterior: ArrayLike) -> float:
    """Grid-weighted posterior mean Σ grid[i] · posterior[i].

    Raises:
        DimensionMismatch: If grid and posterior differ in length.
    """
    theta, p = _distribution(grid, normalized_posterior)
    return float(np.dot(theta, p))


def posterior_variance(grid: GridLike, normalized_posterior: ArrayLike) -> float:
    theta, p = _distribution(grid, normalized_posterior)
    m = np.dot(theta, p)
    return float(np.dot((theta - m) ** 2, p))


def posterior_std(grid: GridLike, normalized_posterior: ArrayLike) -> float:
    return float(np.sqrt(max(posterior_variance(grid, normalized_posterior), 0.0)))


def posterior_mode(grid: GridLike, normalized_posterior: ArrayLike) -> float:
    """Grid point carrying the most mass (first one on ties)."""
    theta, p = _distribution(grid, normalized_posterior)
    return float(theta[int(np.argmax(p))])


def credible_interval(
    grid: GridLike,
    normalized_posterior: ArrayLike,
    level: float = 0.95,
) -> Tuple[float, float]:
    """Equal-tailed credible interval read off the cumulative posterior mass.

    Returns the first grid points whose cumulative mass reaches
    (1 - level)/2 and (1 + level)/2.

    Raises:
        InvalidParameter: If ``level`` is not in (0, 1).
    """
    if not 0.0 < level < 1.0:
        raise InvalidParameter(f"level must be in (0, 1); got {level}")
    theta, p = _distribution(grid, normalized_posterior)
    cdf = np.cumsum(p)
    tail = 0.5 * (1.0 - level)
    lo = min(int(np.searchsorted(cdf, tail, side="left")), theta.size - 1)
    hi = min(int(np.searchsorted(cdf, 1.0 - tail, side="left")), theta.size - 1)
    return float(theta[lo]), float(theta[hi])


class GridPosterior:
    """
    Discrete posterior over grid values of θ.

    Parameters
    ----------
    grid : Grid or array-like, shape (n,)
        Grid points carrying the mass.
    weights : array-like, shape (n,)
        Normalized posterior mass, one entry per grid point.
    rng : np.random.Generator, optional
        RNG used for resampling.

    Notes
    -----
    - Summaries are computed on the grid, not by sampling.
    - ``sample`` resamples grid values with the stored weights.
    """

    def __init__(
        self,
        grid: GridLike,
        weights: ArrayLike,
        *,
        rng: Optional[PRNG] = None,
    ):
        theta, w = _distribution(grid, weights)
        self._grid = _frozen(theta)
        self._w = _frozen(w)
        self._rng = rng or np.random.default_rng()

        self._mean = float(np.dot(self._grid, self._w))
        self._var = float(np.dot((self._grid - self._mean) ** 2, self._w))
        self._cw = np.cumsum(self._w)

    # ------------------- basic properties -------------------

    @property
    def grid(self) -> Array[np.floating]:
        """Grid values, shape (n,)."""
        return self._grid

    @property
    def weights(self) -> Array[np.floating]:
        """Normalized posterior mass, shape (n,)."""
        return self._w

    # ------------------- summaries -------------------

    def mean(self) -> float:
        return self._mean

    def var(self) -> float:
        return self._var

    def std(self) -> float:
        return float(np.sqrt(max(self._var, 0.0)))

    def mode(self) -> float:
        return float(self._grid[int(np.argmax(self._w))])

    def cdf(self, x: ArrayLike) -> Array[np.floating]:
        """Posterior mass on grid points <= x, same shape as ``x``."""
        x = np.asarray(x, dtype=float)
        idx = np.searchsorted(self._grid, x, side="right")
        cw = np.concatenate(([0.0], self._cw))
        return np.minimum(cw[idx], 1.0)

    def credible_interval(self, level: float = 0.95) -> Tuple[float, float]:
        return credible_interval(self._grid, self._w, level)

    # ------------------- resampling -------------------

    def sample(self, n_samples: int) -> Array[np.floating]:
        """Draws ``n_samples`` grid values with probability given by the weights."""
        n_samples = int(n_samples)
        if n_samples < 1:
            raise InvalidParameter(f"n_samples must be >= 1; got {n_samples}")
        return self._rng.choice(self._grid, size=n_samples, replace=True, p=self._w)

    def __repr__(self):
        return f"GridPosterior(n={self._grid.size}, mean={self._mean:.4g}, std={self.std():.4g})"
