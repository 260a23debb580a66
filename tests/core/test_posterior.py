import numpy as np
import pytest

from gridbayes.core.density import evaluate_likelihood, evaluate_prior
from gridbayes.core.errors import (
    DegenerateNormalization,
    DimensionMismatch,
    InvalidParameter,
)
from gridbayes.core.grid import build_grid
from gridbayes.core.posterior import (
    GridPosterior,
    combine,
    credible_interval,
    normalize,
    posterior_mean,
    posterior_mode,
    posterior_std,
    posterior_variance,
)


@pytest.fixture
def curves(grid, single_observation):
    likelihood = evaluate_likelihood(single_observation, grid, 0.8)
    prior = evaluate_prior(grid, 2.3, 0.5)
    return likelihood, prior


# ------------------------------- normalize --------------------------------

def test_normalize_sums_to_one(rng):
    curve = rng.uniform(0.0, 5.0, size=300)
    p = normalize(curve)
    assert p.sum() == pytest.approx(1.0, abs=1e-12)
    np.testing.assert_allclose(p, curve / curve.sum())


def test_normalize_is_idempotent(rng):
    p = normalize(rng.exponential(size=200))
    np.testing.assert_allclose(normalize(p), p, rtol=1e-12)


def test_normalize_zero_sum_raises():
    with pytest.raises(DegenerateNormalization):
        normalize(np.zeros(10))


def test_normalize_rejects_negative_and_nan():
    with pytest.raises(InvalidParameter):
        normalize(np.array([0.5, -0.1, 0.6]))
    with pytest.raises(InvalidParameter):
        normalize(np.array([0.5, np.nan]))


def test_likelihood_and_prior_normalize_independently(curves):
    likelihood, prior = curves
    for curve in (likelihood, prior):
        assert normalize(curve).sum() == pytest.approx(1.0, abs=1e-9)


# ------------------------------- combine --------------------------------

def test_combine_sum_invariant(curves):
    likelihood, prior = curves
    post = combine(likelihood, prior)

    np.testing.assert_allclose(post.unnormalized, likelihood * prior)
    assert post.normalized.sum() == pytest.approx(1.0, abs=1e-9)
    assert np.all(post.normalized >= 0)
    assert not post.normalized.flags.writeable


def test_combine_unpacks_as_pair(curves):
    unnormalized, normalized = combine(*curves)
    assert unnormalized.shape == normalized.shape


def test_combine_sum_invariant_random_curves(rng):
    for _ in range(20):
        n = int(rng.integers(2, 1000))
        post = combine(rng.uniform(size=n), rng.uniform(size=n))
        assert post.normalized.sum() == pytest.approx(1.0, abs=1e-9)


def test_combine_disjoint_supports_raises():
    likelihood = np.array([1.0, 2.0, 0.0, 0.0])
    prior = np.array([0.0, 0.0, 3.0, 4.0])
    with pytest.raises(DegenerateNormalization):
        combine(likelihood, prior)


def test_combine_underflowing_product_raises():
    # densities far apart underflow to exactly zero on the grid
    g = build_grid(-10.0, 10.0, 500)
    likelihood = evaluate_likelihood([-9.5], g, 0.01)
    prior = evaluate_prior(g, 9.5, 0.01)
    with pytest.raises(DegenerateNormalization):
        combine(likelihood, prior)


def test_combine_length_mismatch(grid, curves):
    likelihood, prior = curves
    assert len(grid) == 500
    with pytest.raises(DimensionMismatch):
        combine(likelihood[:499], prior)


# ------------------------------- summaries --------------------------------

def test_posterior_mean_between_observation_and_prior(grid, curves):
    post = combine(*curves)
    mean = posterior_mean(grid, post.normalized)
    assert 2.3 < mean < 2.8
    assert mean < 3.1


def test_posterior_mean_matches_conjugate_result(grid, curves):
    # N(3.1, 0.8^2) likelihood x N(2.3, 0.5^2) prior
    post = combine(*curves)
    precision = 1 / 0.8 ** 2 + 1 / 0.5 ** 2
    expected_mean = (3.1 / 0.8 ** 2 + 2.3 / 0.5 ** 2) / precision

    assert posterior_mean(grid, post.normalized) == pytest.approx(expected_mean, abs=1e-6)
    assert posterior_std(grid, post.normalized) == pytest.approx(np.sqrt(1 / precision), rel=1e-3)
    assert posterior_variance(grid, post.normalized) == pytest.approx(1 / precision, rel=1e-3)
    assert abs(posterior_mode(grid, post.normalized) - expected_mean) <= grid.spacing


def test_posterior_mean_is_bounded_by_grid(rng):
    g = build_grid(-4.0, 6.0, 250)
    for _ in range(25):
        p = rng.dirichlet(np.full(len(g), 0.5))
        mean = posterior_mean(g, p)
        assert g.lower <= mean <= g.upper


def test_posterior_mean_point_mass():
    g = build_grid(0.0, 1.0, 11)
    p = np.zeros(11)
    p[-1] = 1.0
    assert posterior_mean(g, p) == pytest.approx(1.0)


def test_posterior_mean_stays_in_grid_for_sum_within_tolerance():
    g = build_grid(0.0, 10.0, 11)
    p = np.zeros(11)
    p[-1] = 1.0 + 5e-7

    assert g.lower <= posterior_mean(g, p) <= g.upper
    assert posterior_mean(g, p) == pytest.approx(10.0)
    assert posterior_variance(g, p) == pytest.approx(0.0, abs=1e-12)


def test_posterior_mean_length_mismatch(grid):
    with pytest.raises(DimensionMismatch):
        posterior_mean(grid, np.full(499, 1 / 499))


def test_posterior_mean_rejects_unnormalized(grid):
    with pytest.raises(InvalidParameter):
        posterior_mean(grid, np.ones(len(grid)))


def test_credible_interval_covers_mean(grid, curves):
    post = combine(*curves)
    lo, hi = credible_interval(grid, post.normalized, 0.95)
    mean = posterior_mean(grid, post.normalized)
    std = posterior_std(grid, post.normalized)

    assert lo < mean < hi
    # roughly mean +/- 1.96 sd for a normal posterior
    assert lo == pytest.approx(mean - 1.96 * std, abs=2 * grid.spacing)
    assert hi == pytest.approx(mean + 1.96 * std, abs=2 * grid.spacing)


@pytest.mark.parametrize("level", [0.0, 1.0, -0.5, 1.5])
def test_credible_interval_rejects_bad_level(grid, curves, level):
    post = combine(*curves)
    with pytest.raises(InvalidParameter):
        credible_interval(grid, post.normalized, level)


# ------------------------------- GridPosterior --------------------------------

def test_grid_posterior_summaries(grid, curves):
    post = combine(*curves)
    gp = GridPosterior(grid, post.normalized, rng=np.random.default_rng(0))

    assert gp.mean() == pytest.approx(posterior_mean(grid, post.normalized))
    assert gp.std() == pytest.approx(posterior_std(grid, post.normalized))
    assert gp.var() == pytest.approx(gp.std() ** 2)
    assert gp.mode() == posterior_mode(grid, post.normalized)
    assert gp.credible_interval(0.9) == credible_interval(grid, post.normalized, 0.9)


def test_grid_posterior_cdf():
    g = build_grid(0.0, 3.0, 4)
    gp = GridPosterior(g, np.array([0.1, 0.2, 0.3, 0.4]))

    np.testing.assert_allclose(gp.cdf([-1.0, 0.0, 1.5, 3.0, 10.0]), [0.0, 0.1, 0.3, 1.0, 1.0])


def test_grid_posterior_sample(grid, curves):
    post = combine(*curves)
    gp = GridPosterior(grid, post.normalized, rng=np.random.default_rng(123))
    draws = gp.sample(20000)

    assert draws.shape == (20000,)
    assert np.all(np.isin(draws, grid.values))
    assert draws.mean() == pytest.approx(gp.mean(), abs=0.02)


def test_grid_posterior_rejects_bad_weights(grid):
    with pytest.raises(DimensionMismatch):
        GridPosterior(grid, np.full(10, 0.1))
    with pytest.raises(InvalidParameter):
        GridPosterior(build_grid(0.0, 1.0, 2), np.array([1.5, -0.5]))
