import logging
from typing import Union

import numpy as np
from scipy.stats import norm

from ..custom_types import Array, ArrayLike
from ._utils import _check_finite, _check_positive, _frozen, _to_1d_vector
from .errors import InvalidParameter
from .grid import Grid

__all__ = [
    "normal_density",
    "evaluate_likelihood",
    "evaluate_joint_likelihood",
    "evaluate_prior",
]

logger = logging.getLogger(__name__)

GridLike = Union[Grid, ArrayLike]


def _grid_values(grid: GridLike) -> Array[np.floating]:
    if isinstance(grid, Grid):
        return grid.values
    values = _to_1d_vector(grid, name="grid")
    if values.shape[0] < 2:
        raise InvalidParameter(f"grid must hold at least 2 points; got {values.shape[0]}")
    return values


def _sample_values(sample: ArrayLike) -> Array[np.floating]:
    values = _to_1d_vector(sample, name="sample")
    if values.shape[0] < 1:
        raise InvalidParameter("sample must hold at least one observation")
    if not np.all(np.isfinite(values)):
        raise InvalidParameter("sample must contain only finite values")
    return values


def normal_density(x: ArrayLike, mean: ArrayLike, sd: float) -> Array[np.floating]:
    """Evaluates the normal PDF 1/(sd·√(2π)) · exp(-(x - mean)² / (2 sd²)).

    ``x`` and ``mean`` broadcast against each other.

    Raises:
        InvalidParameter: If ``sd`` <= 0.
    """
    sd = _check_positive(sd, "sd")
    return np.asarray(norm.pdf(x, loc=mean, scale=sd), dtype=float)


def evaluate_likelihood(sample: ArrayLike, grid: GridLike, pop_spread: float) -> Array[np.floating]:
    """Likelihood curve of ``sample`` over every grid point θ_i.

    Each entry is the *sum* of the per-observation densities
    N(x; θ_i, pop_spread²) over the sample. Summing rather than multiplying
    agrees with the joint likelihood only for a single observation; use
    :func:`evaluate_joint_likelihood` for the product form.

    Args:
        sample: Observations, shape (n,).
        grid: Candidate θ values.
        pop_spread: Known standard deviation of the population (> 0).

    Returns:
        Read-only non-negative array with one entry per grid point.

    Raises:
        InvalidParameter: If ``pop_spread`` <= 0.
    """
    pop_spread = _check_positive(pop_spread, "population spread")
    theta = _grid_values(grid)
    x = _sample_values(sample)

    dens = normal_density(x[None, :], theta[:, None], pop_spread)  # (grid, n)
    curve = dens.sum(axis=1)
    logger.debug("likelihood evaluated on %d grid points for %d observations", theta.size, x.size)
    return _frozen(curve)


def evaluate_joint_likelihood(sample: ArrayLike, grid: GridLike, pop_spread: float) -> Array[np.floating]:
    """Product-of-densities likelihood of ``sample`` over the grid.

    Computed as a sum of log-densities, shifted by its maximum before
    exponentiating, so the curve is proportional to the joint likelihood
    and peaks at 1.

    Raises:
        InvalidParameter: If ``pop_spread`` <= 0.
    """
    pop_spread = _check_positive(pop_spread, "population spread")
    theta = _grid_values(grid)
    x = _sample_values(sample)

    log_lik = norm.logpdf(x[None, :], loc=theta[:, None], scale=pop_spread).sum(axis=1)
    curve = np.exp(log_lik - log_lik.max())
    return _frozen(curve)


def evaluate_prior(grid: GridLike, prior_mean: float, prior_spread: float) -> Array[np.floating]:
    """Normal prior N(prior_mean, prior_spread²) evaluated at every grid point.

    Raises:
        InvalidParameter: If ``prior_spread`` <= 0.
    """
    prior_spread = _check_positive(prior_spread, "prior spread")
    prior_mean = _check_finite(prior_mean, "prior mean")
    theta = _grid_values(grid)
    return _frozen(normal_density(theta, prior_mean, prior_spread))
