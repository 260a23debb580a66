from .errors import GridBayesError, InvalidParameter, DimensionMismatch, DegenerateNormalization
from .config import InferenceConfig
from .data import generate_sample
from .grid import Grid, build_grid
from .density import normal_density, evaluate_likelihood, evaluate_joint_likelihood, evaluate_prior
from .posterior import (
    Posterior,
    GridPosterior,
    normalize,
    combine,
    posterior_mean,
    posterior_variance,
    posterior_std,
    posterior_mode,
    credible_interval,
)
from .module import Module, InputSpec
from .pipeline import InferenceResult, run_inference, GridInference

__all__ = [
    "GridBayesError",
    "InvalidParameter",
    "DimensionMismatch",
    "DegenerateNormalization",
    "InferenceConfig",
    "generate_sample",
    "Grid",
    "build_grid",
    "normal_density",
    "evaluate_likelihood",
    "evaluate_joint_likelihood",
    "evaluate_prior",
    "Posterior",
    "GridPosterior",
    "normalize",
    "combine",
    "posterior_mean",
    "posterior_variance",
    "posterior_std",
    "posterior_mode",
    "credible_interval",
    "Module",
    "InputSpec",
    "InferenceResult",
    "run_inference",
    "GridInference",
]
