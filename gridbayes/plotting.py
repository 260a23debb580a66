"""Comparative plot of likelihood, prior and posterior curves over the grid."""
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .core._utils import _check_same_length
from .core.density import GridLike, _grid_values
from .core.posterior import normalize
from .custom_types import ArrayLike

if TYPE_CHECKING:
    from .core.pipeline import InferenceResult

__all__ = [
    "PlotStyle",
    "plot_curves",
    "plot_result",
]


@dataclass(frozen=True)
class PlotStyle:
    """Presentation settings handed to the plotting functions.

    Kept per call instead of in matplotlib's global rcParams.
    """
    x_margin: float = 0.0
    y_margin: float = 0.05
    tick_direction: str = "in"
    figsize: Tuple[float, float] = (8.0, 4.5)
    xlabel: str = r"$\theta$"
    ylabel: str = "normalized mass"
    title: Optional[str] = None
    colors: dict = field(default_factory=lambda: {
        "likelihood": "tab:blue",
        "prior": "tab:orange",
        "posterior": "tab:green",
    })
    show_mean: bool = True


def plot_curves(
    grid: GridLike,
    likelihood: ArrayLike,
    prior: ArrayLike,
    posterior: ArrayLike,
    *,
    style: Optional[PlotStyle] = None,
    ax: Optional[plt.Axes] = None,
) -> plt.Axes:
    """Draws the three curves, each normalized to unit sum, with a legend.

    Args:
        grid: Grid the curves are defined on.
        likelihood: Raw likelihood curve.
        prior: Raw prior curve.
        posterior: Posterior curve (normalized or not).
        style: Presentation settings. Defaults to ``PlotStyle()``.
        ax: Axes to draw into; a new figure is created when omitted.

    Returns:
        The axes holding the plot.
    """
    style = style or PlotStyle()
    theta = _grid_values(grid)
    curves = {
        "likelihood": normalize(likelihood, name="likelihood"),
        "prior": normalize(prior, name="prior"),
        "posterior": normalize(posterior, name="posterior"),
    }
    for name, curve in curves.items():
        _check_same_length(theta, curve, ("grid", name))

    if ax is None:
        _, ax = plt.subplots(figsize=style.figsize)

    for name, curve in curves.items():
        ax.plot(theta, curve, label=name, color=style.colors.get(name))

    if style.show_mean:
        mean = float(np.dot(theta, curves["posterior"]))
        ax.axvline(mean, linestyle="--", color=style.colors.get("posterior"),
                   linewidth=1.0, label=f"posterior mean = {mean:.3f}")

    ax.margins(x=style.x_margin, y=style.y_margin)
    ax.tick_params(direction=style.tick_direction)
    ax.set_xlabel(style.xlabel)
    ax.set_ylabel(style.ylabel)
    if style.title:
        ax.set_title(style.title)
    ax.legend()
    return ax


def plot_result(result: "InferenceResult", *, style: Optional[PlotStyle] = None, ax: Optional[plt.Axes] = None) -> plt.Axes:
    """Plots the curves of an :class:`~gridbayes.core.pipeline.InferenceResult`."""
    return plot_curves(result.grid, result.likelihood, result.prior, result.normalized,
                       style=style, ax=ax)
