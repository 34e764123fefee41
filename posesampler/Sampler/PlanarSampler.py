"""
SE(2) pose samplers. Both produce [x, y, theta] with theta in [-pi, pi).
"""
from typing import Optional, Sequence, Tuple

import numpy as np

from posesampler.Random.RandomEngine import RandomEngine, SeedFactory
from posesampler.Sampler.BoxSampler import BoxSampler
from posesampler.Sampler.SamplerConfig import AnnulusBound, BoxBound
from posesampler.Utils.LoggerUtils import get_logger
from posesampler.Utils.RandomUtils import resolve_engine, sample_batch, sample_heading

logger = get_logger(__name__)


class PlanarBoxSampler:
    """
    Position uniform in a 2D box, heading uniform in [-pi, pi).

    x is drawn from (lower[0], upper[0]) and y from (lower[1], upper[1]),
    each axis independently.
    """

    dim = 3

    def __init__(
        self,
        lower: Optional[Sequence[float] | np.ndarray] = None,
        upper: Optional[Sequence[float] | np.ndarray] = None,
        *,
        bound: Optional[BoxBound] = None,
        engine: Optional[RandomEngine] = None,
        seed_factory: Optional[SeedFactory] = None,
    ) -> None:
        self.engine = resolve_engine(engine, seed_factory)
        self._position = BoxSampler(lower, upper, bound=bound, dim=2, engine=self.engine)

    @classmethod
    def from_limits(
        cls,
        x_min: float,
        x_max: float,
        y_min: float,
        y_max: float,
        **kwargs,
    ) -> "PlanarBoxSampler":
        return cls((x_min, y_min), (x_max, y_max), **kwargs)

    def set_bound(
        self,
        lower: Optional[Sequence[float] | np.ndarray] = None,
        upper: Optional[Sequence[float] | np.ndarray] = None,
        *,
        bound: Optional[BoxBound] = None,
    ) -> None:
        self._position.set_bound(lower, upper, bound=bound)

    def get_bound(self) -> Tuple[np.ndarray, np.ndarray]:
        return self._position.get_bound()

    def sample(self) -> np.ndarray:
        q = np.empty(3)
        q[:2] = self._position.sample()
        q[2] = sample_heading(self.engine)
        return q

    def sample_many(self, num_samples: int) -> np.ndarray:
        return sample_batch(self, num_samples)


class PlanarAnnulusSampler:
    """
    Position uniform in an annulus around a center, heading uniform in [-pi, pi).

    The position is reported relative to a reference point:
    disk_point + center - reference.

    Args:
        cx, cy: annulus center
        r_min, r_max: inner and outer radius
        cref_x, cref_y: reference point the position is expressed against
        bound: AnnulusBound, instead of the scalar arguments
    """

    dim = 3

    def __init__(
        self,
        cx: Optional[float] = None,
        cy: Optional[float] = None,
        r_min: Optional[float] = None,
        r_max: Optional[float] = None,
        cref_x: float = 0.0,
        cref_y: float = 0.0,
        *,
        bound: Optional[AnnulusBound] = None,
        engine: Optional[RandomEngine] = None,
        seed_factory: Optional[SeedFactory] = None,
    ) -> None:
        self.engine = resolve_engine(engine, seed_factory)
        self._bound: Optional[AnnulusBound] = None
        if bound is not None or cx is not None:
            self.set_bound(cx, cy, r_min, r_max, cref_x, cref_y, bound=bound)

    def set_bound(
        self,
        cx: Optional[float] = None,
        cy: Optional[float] = None,
        r_min: Optional[float] = None,
        r_max: Optional[float] = None,
        cref_x: float = 0.0,
        cref_y: float = 0.0,
        *,
        bound: Optional[AnnulusBound] = None,
    ) -> None:
        if bound is None:
            if None in (cx, cy, r_min, r_max):
                raise ValueError("cx, cy, r_min and r_max are all required")
            bound = AnnulusBound(
                center=(cx, cy), r_min=r_min, r_max=r_max, reference=(cref_x, cref_y)
            )
        elif cx is not None:
            raise ValueError("Pass either scalar bounds or bound, not both")
        self._bound = bound
        logger.debug(
            f"Annulus bound set to center={bound.center} r=[{bound.r_min}, {bound.r_max}] "
            f"reference={bound.reference}"
        )

    def get_bound(self) -> AnnulusBound:
        if self._bound is None:
            raise RuntimeError("Sampler bounds have not been set")
        return self._bound

    def sample(self) -> np.ndarray:
        bound = self.get_bound()
        q = np.empty(3)
        q[:2] = self.engine.disk(bound.r_min, bound.r_max) + bound.offset
        q[2] = sample_heading(self.engine)
        return q

    def sample_many(self, num_samples: int) -> np.ndarray:
        return sample_batch(self, num_samples)
