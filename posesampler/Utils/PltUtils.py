"""
Plotting utilities for checking sampled configurations by eye.
"""
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
from typing import Any, Optional


def _figure_and_axes(ax: Optional[Any]):
    if ax is None:
        fig, ax = plt.subplots()
    else:
        fig = ax.figure
    return fig, ax


def plot_planar_samples(
    samples: np.ndarray,
    ax: Optional[Any] = None,
    arrow_length: float = 0.05,
    title: str = "planar samples",
) -> Any:
    """
    Scatter [x, y, theta] samples with one heading arrow per sample.

    Args:
        samples: Array of shape (N, 3)
        ax: Axes to draw into, a new figure is created if None
        arrow_length: Length of the heading arrows
        title: Axes title
    Returns:
        matplotlib.figure.Figure
    """
    samples = np.atleast_2d(np.asarray(samples, dtype=float))
    if samples.shape[1] != 3:
        raise ValueError(f"Expected samples of shape (N, 3), got {samples.shape}")
    fig, ax = _figure_and_axes(ax)
    x, y, theta = samples[:, 0], samples[:, 1], samples[:, 2]
    ax.scatter(x, y, s=4, c="b")
    ax.quiver(
        x,
        y,
        arrow_length * np.cos(theta),
        arrow_length * np.sin(theta),
        angles="xy",
        scale_units="xy",
        scale=1.0,
        width=0.002,
        color="r",
    )
    ax.set_aspect("equal")
    ax.set_title(title)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.grid(True)
    return fig


def plot_radial_histogram(
    points: np.ndarray,
    r_min: float,
    r_max: float,
    bins: int = 20,
    ax: Optional[Any] = None,
) -> Any:
    """
    Histogram of |p|^d for 2D or 3D points.

    For points uniform in an annulus (d=2) or shell (d=3) this histogram is
    flat between r_min^d and r_max^d.

    Args:
        points: Array of shape (N, 2) or (N, 3)
        r_min, r_max: Inner and outer radius the points were drawn from
        bins: Number of histogram bins
        ax: Axes to draw into, a new figure is created if None
    Returns:
        matplotlib.figure.Figure
    """
    points = np.atleast_2d(np.asarray(points, dtype=float))
    d = points.shape[1]
    if d not in (2, 3):
        raise ValueError(f"Expected 2D or 3D points, got {d}D")
    fig, ax = _figure_and_axes(ax)
    radii_pow = np.linalg.norm(points, axis=1) ** d
    ax.hist(radii_pow, bins=bins, range=(r_min**d, r_max**d), color="g", alpha=0.7)
    ax.set_title(f"|p|^{d} histogram")
    ax.set_xlabel(f"|p|^{d}")
    ax.set_ylabel("count")
    ax.grid(True)
    return fig


def close(fig: Any) -> None:
    plt.close(fig)
