import logging
from typing import Optional

import numpy as np
from scipy.stats import norm

from ..custom_types import Array, PRNG
from ._utils import _check_finite, _check_int, _check_positive, _frozen

__all__ = [
    "generate_sample",
]

logger = logging.getLogger(__name__)


def generate_sample(
    n: int,
    mean: float,
    spread: float,
    *,
    rng: Optional[PRNG] = None,
    seed: Optional[int] = None,
) -> Array[np.floating]:
    """Draws synthetic observations from N(mean, spread²).

    Args:
        n: Number of observations, at least 1.
        mean: Mean of the generating normal distribution.
        spread: Standard deviation of the generating distribution (> 0).
        rng: Random number generator to draw from. Takes precedence over
            ``seed``.
        seed: Seed for a fresh ``np.random.default_rng`` when ``rng`` is not
            given. ``None`` draws fresh entropy from the OS.

    Returns:
        Read-only sample of shape (n,).

    Raises:
        InvalidParameter: If ``n`` < 1 or ``spread`` <= 0.

    Examples:
        >>> generate_sample(3, 0.0, 1.0, seed=0).shape
        (3,)
    """
    n = _check_int(n, "sample size", 1)
    mean = _check_finite(mean, "population mean")
    spread = _check_positive(spread, "population spread")
    rng = rng or np.random.default_rng(seed)

    xs = norm(loc=mean, scale=spread).rvs(size=n, random_state=rng)
    sample = _frozen(np.atleast_1d(xs))
    logger.debug("generated %d observations from N(%g, %g^2)", n, mean, spread)
    return sample
