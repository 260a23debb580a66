from dataclasses import dataclass, fields, replace as _dc_replace
from typing import Any, Mapping, Optional

from ._utils import _check_finite, _check_int, _check_positive
from .errors import InvalidParameter

__all__ = [
    "InferenceConfig",
    "LIKELIHOOD_MODES",
]

LIKELIHOOD_MODES = ("sum", "product")


@dataclass(frozen=True)
class InferenceConfig:
    """Configuration of one grid inference run.

    Validated on construction; any violated constraint raises
    :class:`InvalidParameter` naming the field.

    Attributes:
        sample_size: Number of synthetic observations (>= 1).
        population_mean: Mean of the data-generating normal.
        population_spread: Known population standard deviation (> 0).
        grid_lower: First grid point.
        grid_upper: Last grid point (> ``grid_lower``).
        grid_point_count: Number of grid points (>= 2).
        prior_mean: Mean of the normal prior over θ.
        prior_spread: Standard deviation of the prior (> 0).
        seed: Seed for the sample generator, ``None`` for fresh entropy.
        likelihood_mode: ``"sum"`` sums per-observation densities,
            ``"product"`` uses the joint likelihood.
    """

    sample_size: int = 1
    population_mean: float = 3.0
    population_spread: float = 0.8
    grid_lower: float = -10.0
    grid_upper: float = 10.0
    grid_point_count: int = 500
    prior_mean: float = 2.3
    prior_spread: float = 0.5
    seed: Optional[int] = None
    likelihood_mode: str = "sum"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        _check_int(self.sample_size, "sample_size", 1)
        _check_finite(self.population_mean, "population_mean")
        _check_positive(self.population_spread, "population_spread")
        lower = _check_finite(self.grid_lower, "grid_lower")
        upper = _check_finite(self.grid_upper, "grid_upper")
        if upper <= lower:
            raise InvalidParameter(
                f"grid_upper must exceed grid_lower; got grid_lower={lower}, grid_upper={upper}"
            )
        _check_int(self.grid_point_count, "grid_point_count", 2)
        _check_finite(self.prior_mean, "prior_mean")
        _check_positive(self.prior_spread, "prior_spread")
        if self.seed is not None:
            _check_int(self.seed, "seed", 0)
        if self.likelihood_mode not in LIKELIHOOD_MODES:
            raise InvalidParameter(
                f"likelihood_mode must be one of {LIKELIHOOD_MODES}; got {self.likelihood_mode!r}"
            )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "InferenceConfig":
        """Builds a config from a plain mapping of option names to values."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidParameter(f"Unknown configuration options: {unknown}. Known options are: {sorted(known)}")
        return cls(**dict(options))

    def replace(self, **changes: Any) -> "InferenceConfig":
        """Returns a validated copy with ``changes`` applied."""
        unknown = sorted(set(changes) - {f.name for f in fields(self)})
        if unknown:
            raise InvalidParameter(f"Unknown configuration options: {unknown}")
        return _dc_replace(self, **changes)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
