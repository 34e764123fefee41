from typing import Optional, Sequence, Tuple

import numpy as np

from posesampler.Random.RandomEngine import RandomEngine, SeedFactory
from posesampler.Sampler.SamplerConfig import BoxBound, as_box_bound
from posesampler.Utils.LoggerUtils import get_logger
from posesampler.Utils.RandomUtils import resolve_engine, sample_batch, sample_box

logger = get_logger(__name__)


class BoxSampler:
    """
    Uniform sampler over an N-dimensional axis-aligned box.

    Args:
        lower, upper: box corners; alternatively pass bound=BoxBound(...)
        dim: expected dimension, checked against every bound set
        engine: RandomEngine to borrow; by default a new one is created
        seed_factory: seed source for the new engine
    """

    def __init__(
        self,
        lower: Optional[Sequence[float] | np.ndarray] = None,
        upper: Optional[Sequence[float] | np.ndarray] = None,
        *,
        bound: Optional[BoxBound] = None,
        dim: Optional[int] = None,
        engine: Optional[RandomEngine] = None,
        seed_factory: Optional[SeedFactory] = None,
    ) -> None:
        self.engine = resolve_engine(engine, seed_factory)
        self._dim = dim
        self._bound = as_box_bound(lower, upper, bound, dim=dim)

    @property
    def dim(self) -> int:
        if self._dim is not None:
            return self._dim
        return self.bound.dim

    @property
    def bound(self) -> BoxBound:
        if self._bound is None:
            raise RuntimeError("Sampler bounds have not been set")
        return self._bound

    def set_bound(
        self,
        lower: Optional[Sequence[float] | np.ndarray] = None,
        upper: Optional[Sequence[float] | np.ndarray] = None,
        *,
        bound: Optional[BoxBound] = None,
    ) -> None:
        new_bound = as_box_bound(lower, upper, bound, dim=self._dim)
        if new_bound is None:
            raise ValueError("set_bound needs lower/upper or bound")
        self._bound = new_bound
        logger.debug(f"Box bound set to {new_bound.lower} .. {new_bound.upper}")

    def get_bound(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return copies of (lower, upper)."""
        return self.bound.lower.copy(), self.bound.upper.copy()

    def sample(self) -> np.ndarray:
        bound = self.bound
        return sample_box(self.engine, bound.lower, bound.upper)

    def sample_many(self, num_samples: int) -> np.ndarray:
        return sample_batch(self, num_samples)
