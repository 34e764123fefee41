"""
SE(3) pose samplers.

Position comes from a box or a ball, orientation is uniform over SO(3) and
is reported either as roll-pitch-yaw (6D output) or as the quaternion
[x, y, z, w] (7D output):

    SpatialBoxEulerSampler   [x, y, z, roll, pitch, yaw]
    SpatialBoxQuatSampler    [x, y, z, qx, qy, qz, qw]
    SpatialBallEulerSampler  [x, y, z, roll, pitch, yaw]
    SpatialBallQuatSampler   [x, y, z, qx, qy, qz, qw]
"""
from typing import Optional, Sequence, Tuple

import numpy as np

from posesampler.Random.RandomEngine import RandomEngine, SeedFactory
from posesampler.Sampler.BoxSampler import BoxSampler
from posesampler.Sampler.SamplerConfig import BallBound, BoxBound
from posesampler.Utils.LoggerUtils import get_logger
from posesampler.Utils.RandomUtils import resolve_engine, sample_batch, sample_orientation

logger = get_logger(__name__)


class SpatialBoxSampler:
    """
    Position uniform in a 3D box, orientation uniform over SO(3).

    Args:
        lower, upper: box corners; alternatively pass bound=BoxBound(...)
        as_euler: report orientation as RPY (True) or quaternion (False)
        engine: RandomEngine to borrow; by default a new one is created
        seed_factory: seed source for the new engine
    """

    def __init__(
        self,
        lower: Optional[Sequence[float] | np.ndarray] = None,
        upper: Optional[Sequence[float] | np.ndarray] = None,
        *,
        bound: Optional[BoxBound] = None,
        as_euler: bool = True,
        engine: Optional[RandomEngine] = None,
        seed_factory: Optional[SeedFactory] = None,
    ) -> None:
        self.engine = resolve_engine(engine, seed_factory)
        self.as_euler = as_euler
        self._position = BoxSampler(lower, upper, bound=bound, dim=3, engine=self.engine)

    @property
    def dim(self) -> int:
        return 6 if self.as_euler else 7

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
        position = self._position.sample()
        return np.concatenate([position, sample_orientation(self.engine, self.as_euler)])

    def sample_many(self, num_samples: int) -> np.ndarray:
        return sample_batch(self, num_samples)


class SpatialBallSampler:
    """
    Position uniform in a ball of the given radius around the origin,
    orientation uniform over SO(3).

    Args:
        radius: ball radius; alternatively pass bound=BallBound(...), which
            also allows a hollow shell through BallBound.r_min
        as_euler: report orientation as RPY (True) or quaternion (False)
    """

    def __init__(
        self,
        radius: Optional[float] = None,
        *,
        bound: Optional[BallBound] = None,
        as_euler: bool = True,
        engine: Optional[RandomEngine] = None,
        seed_factory: Optional[SeedFactory] = None,
    ) -> None:
        self.engine = resolve_engine(engine, seed_factory)
        self.as_euler = as_euler
        self._bound: Optional[BallBound] = None
        if radius is not None or bound is not None:
            self.set_bound(radius, bound=bound)

    @property
    def dim(self) -> int:
        return 6 if self.as_euler else 7

    def set_bound(self, radius: Optional[float] = None, *, bound: Optional[BallBound] = None) -> None:
        if bound is None:
            if radius is None:
                raise ValueError("set_bound needs radius or bound")
            bound = BallBound(radius)
        elif radius is not None:
            raise ValueError("Pass either radius or bound, not both")
        self._bound = bound
        logger.debug(f"Ball bound set to r=[{bound.r_min}, {bound.radius}]")

    def get_bound(self) -> float:
        return self.ball_bound.radius

    @property
    def ball_bound(self) -> BallBound:
        if self._bound is None:
            raise RuntimeError("Sampler bounds have not been set")
        return self._bound

    def sample(self) -> np.ndarray:
        bound = self.ball_bound
        position = self.engine.ball(bound.r_min, bound.radius)
        return np.concatenate([position, sample_orientation(self.engine, self.as_euler)])

    def sample_many(self, num_samples: int) -> np.ndarray:
        return sample_batch(self, num_samples)


class SpatialBoxEulerSampler(SpatialBoxSampler):
    def __init__(self, lower=None, upper=None, **kwargs) -> None:
        super().__init__(lower, upper, as_euler=True, **kwargs)


class SpatialBoxQuatSampler(SpatialBoxSampler):
    def __init__(self, lower=None, upper=None, **kwargs) -> None:
        super().__init__(lower, upper, as_euler=False, **kwargs)


class SpatialBallEulerSampler(SpatialBallSampler):
    def __init__(self, radius=None, **kwargs) -> None:
        super().__init__(radius, as_euler=True, **kwargs)


class SpatialBallQuatSampler(SpatialBallSampler):
    def __init__(self, radius=None, **kwargs) -> None:
        super().__init__(radius, as_euler=False, **kwargs)
