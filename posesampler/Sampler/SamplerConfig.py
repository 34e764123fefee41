"""
Bound and option structs for the samplers.

All structs are frozen and validated on construction, so a sampler never
holds a malformed bound: lower > upper or negative radii raise ValueError
instead of being swapped or clipped.
"""
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from posesampler.Random.RandomEngine import check_radii


def _as_vector(values: Sequence[float] | np.ndarray, name: str) -> np.ndarray:
    vector = np.array(values, dtype=float).reshape(-1)
    if not np.all(np.isfinite(vector)):
        raise ValueError(f"{name} must be finite, got {vector}")
    vector.flags.writeable = False
    return vector


@dataclass(frozen=True, eq=False)
class BoxBound:
    """
    Axis-aligned box [lower[i], upper[i]) for every axis i.

    Args:
        lower: lower corner, one entry per axis
        upper: upper corner, same length as lower
    """

    lower: np.ndarray
    upper: np.ndarray

    def __post_init__(self) -> None:
        lower = _as_vector(self.lower, "lower")
        upper = _as_vector(self.upper, "upper")
        if lower.shape != upper.shape:
            raise ValueError(
                f"lower and upper must have the same length, got {lower.size} and {upper.size}"
            )
        if np.any(lower > upper):
            bad = np.flatnonzero(lower > upper).tolist()
            raise ValueError(f"lower exceeds upper on axes {bad}: {lower} > {upper}")
        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)

    @property
    def dim(self) -> int:
        return int(self.lower.size)

    def contains(self, point: Sequence[float] | np.ndarray) -> bool:
        point = np.asarray(point, dtype=float)
        return bool(np.all(point >= self.lower) and np.all(point <= self.upper))


@dataclass(frozen=True, eq=False)
class AnnulusBound:
    """
    Planar annulus around center, expressed relative to reference.

    Sampled positions are disk_point + center - reference.
    """

    center: np.ndarray
    r_min: float
    r_max: float
    reference: np.ndarray = field(default_factory=lambda: np.zeros(2))

    def __post_init__(self) -> None:
        center = _as_vector(self.center, "center")
        reference = _as_vector(self.reference, "reference")
        if center.shape != (2,) or reference.shape != (2,):
            raise ValueError("center and reference must be 2D points")
        check_radii(self.r_min, self.r_max)
        object.__setattr__(self, "center", center)
        object.__setattr__(self, "reference", reference)
        object.__setattr__(self, "r_min", float(self.r_min))
        object.__setattr__(self, "r_max", float(self.r_max))

    @property
    def offset(self) -> np.ndarray:
        return self.center - self.reference


@dataclass(frozen=True)
class BallBound:
    """Spherical shell r_min <= |p| <= radius around the origin."""

    radius: float
    r_min: float = 0.0

    def __post_init__(self) -> None:
        check_radii(self.r_min, self.radius)
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "r_min", float(self.r_min))


def as_box_bound(
    lower: Optional[Sequence[float] | np.ndarray] = None,
    upper: Optional[Sequence[float] | np.ndarray] = None,
    bound: Optional[BoxBound] = None,
    dim: Optional[int] = None,
) -> Optional[BoxBound]:
    """
    Normalise the (lower, upper) / bound= calling forms into one BoxBound.

    Returns None when no bound was given at all.
    """
    if bound is not None:
        if lower is not None or upper is not None:
            raise ValueError("Pass either lower/upper or bound, not both")
    elif lower is None and upper is None:
        return None
    elif lower is None or upper is None:
        raise ValueError("lower and upper must be given together")
    else:
        bound = BoxBound(lower, upper)
    if dim is not None and bound.dim != dim:
        raise ValueError(f"Expected a {dim}D bound, got {bound.dim}D")
    return bound
