"""
Random number engine used by every sampler.

A RandomEngine wraps one Mersenne Twister generator (np.random.RandomState)
and exposes the scalar and geometric draws the pose samplers are built on.
An engine must not be shared between threads, but engines may be created
concurrently: each one pulls a distinct seed from a SeedFactory.
"""
import math
import os
import threading
import time
from dataclasses import dataclass
from typing import Optional

import numpy as np

from posesampler.Utils.LoggerUtils import get_logger

logger = get_logger(__name__)

MAX_SEED = 2**32 - 1


def _check_seed(seed: int) -> int:
    seed = int(seed)
    if seed < 0 or seed > MAX_SEED:
        raise ValueError(f"Seed must be in [0, {MAX_SEED}], got {seed}")
    return seed


def check_radii(r_min: float, r_max: float) -> None:
    if r_min < 0 or r_max < 0:
        raise ValueError(f"Radii must be non-negative, got r_min={r_min}, r_max={r_max}")
    if r_min > r_max:
        raise ValueError(f"r_min must not exceed r_max, got r_min={r_min}, r_max={r_max}")


@dataclass(frozen=True)
class HalfNormalConfig:
    """
    Options for half-normal draws.

    focus: ratio of the range to the standard deviation; larger values pull
        draws closer to the upper end (default 3.0)
    """

    focus: float = 3.0

    def __post_init__(self) -> None:
        if not self.focus > 0:
            raise ValueError(f"focus must be positive, got {self.focus}")


def _as_focus(focus: float | HalfNormalConfig) -> float:
    if isinstance(focus, HalfNormalConfig):
        return focus.focus
    if not focus > 0:
        raise ValueError(f"focus must be positive, got {focus}")
    return float(focus)


class SeedFactory:
    """
    Thread-safe source of engine seeds.

    The factory holds a base seed, either fixed by the caller or derived once
    from the clock and process id, and a counter. Every call to next_seed()
    bumps the counter under a lock and mixes it with the base seed, so
    engines built from one factory get distinct seeds, and a factory with a
    fixed base seed hands out the same sequence in every run.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._lock = threading.Lock()
        self._counter = 0
        self._fixed = seed is not None
        self._base_seed = _check_seed(seed) if self._fixed else self._entropy_seed()

    @staticmethod
    def _entropy_seed() -> int:
        # 时钟 + 进程号, 只在创建时取一次
        mixed = np.random.SeedSequence([time.time_ns() & MAX_SEED, os.getpid()])
        return int(mixed.generate_state(1)[0])

    @property
    def has_fixed_seed(self) -> bool:
        return self._fixed

    def set_seed(self, seed: int) -> None:
        """Fix the base seed and restart the seed sequence."""
        seed = _check_seed(seed)
        with self._lock:
            self._base_seed = seed
            self._fixed = True
            self._counter = 0

    def clear_seed(self) -> None:
        """Drop a fixed seed and go back to a clock-derived base seed."""
        with self._lock:
            self._base_seed = self._entropy_seed()
            self._fixed = False
            self._counter = 0

    def get_seed(self) -> int:
        """
        Return the base seed in use. Passing it to set_seed() in a later run
        reproduces every engine created from this factory.
        """
        return self._base_seed

    def next_seed(self) -> int:
        with self._lock:
            base, index = self._base_seed, self._counter
            self._counter += 1
        sequence = np.random.SeedSequence(entropy=base, spawn_key=(index,))
        return int(sequence.generate_state(1)[0])


_default_seed_factory = SeedFactory()


def default_seed_factory() -> SeedFactory:
    return _default_seed_factory


def set_seed(seed: int) -> None:
    """Fix the process-wide seed used by every engine created afterwards."""
    _default_seed_factory.set_seed(seed)
    logger.info(f"Process-wide sampling seed fixed to {seed}")


def clear_seed() -> None:
    _default_seed_factory.clear_seed()
    logger.info("Process-wide sampling seed cleared")


def get_seed() -> int:
    return _default_seed_factory.get_seed()


class RandomEngine:
    """
    Random number generation for the samplers.

    Args:
        seed (None or int): explicit seed for this engine; takes precedence
            over the seed factory
        seed_factory (None or SeedFactory): where to pull a seed from when no
            explicit seed is given; defaults to the process-wide factory
        rng (None or RandomState): already constructed generator to wrap

    Raises:
        AssertionError: [Invalid RNG]
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        seed_factory: Optional[SeedFactory] = None,
        rng: Optional[np.random.RandomState] = None,
    ) -> None:
        if rng is not None:
            assert isinstance(rng, np.random.RandomState), "[Invalid RNG]"
            self._seed = None
            self._rng = rng
            return
        if seed is None:
            factory = seed_factory if seed_factory is not None else _default_seed_factory
            seed = factory.next_seed()
        self._seed = _check_seed(seed)
        self._rng = np.random.RandomState(self._seed)
        logger.debug(f"RandomEngine created with seed {self._seed}")

    @property
    def seed(self) -> Optional[int]:
        """Seed the generator was initialised with (None for a wrapped RNG)."""
        return self._seed

    def reseed(self, seed: int) -> None:
        self._seed = _check_seed(seed)
        self._rng.seed(self._seed)

    def uniform01(self) -> float:
        """Random real in [0, 1)."""
        return float(self._rng.random_sample())

    def uniform_real(self, lower_bound: float, upper_bound: float) -> float:
        """Random real in [lower_bound, upper_bound)."""
        assert lower_bound <= upper_bound
        return (upper_bound - lower_bound) * self.uniform01() + lower_bound

    def uniform_int(self, lower_bound: int, upper_bound: int) -> int:
        """Random integer in [lower_bound, upper_bound], both ends included."""
        r = int(math.floor(self.uniform_real(float(lower_bound), float(upper_bound) + 1.0)))
        # floor may land on upper_bound + 1 through rounding
        return upper_bound if r > upper_bound else r

    def uniform_bool(self) -> bool:
        return self.uniform01() <= 0.5

    def gaussian01(self) -> float:
        """Standard normal draw (mean 0, variance 1)."""
        return float(self._rng.standard_normal())

    def gaussian(self, mean: float, stddev: float) -> float:
        return self.gaussian01() * stddev + mean

    def half_normal_real(
        self, r_min: float, r_max: float, focus: float | HalfNormalConfig = 3.0
    ) -> float:
        """
        Random real in [r_min, r_max] biased towards r_max.

        A normal distribution centred on r_max - r_min with standard deviation
        (r_max - r_min) / focus is folded about that centre towards zero and
        clipped. The bias is intentional: the higher the focus, the more of
        the mass sits near r_max.
        """
        assert r_min <= r_max
        focus = _as_focus(focus)
        span = r_max - r_min
        v = self.gaussian(span, span / focus)
        if v > span:
            v = 2.0 * span - v
        return r_min + min(max(v, 0.0), span)

    def half_normal_int(
        self, r_min: int, r_max: int, focus: float | HalfNormalConfig = 3.0
    ) -> int:
        """Integer counterpart of half_normal_real(), in [r_min, r_max]."""
        r = int(math.floor(self.half_normal_real(float(r_min), float(r_max) + 1.0, focus)))
        return r_max if r > r_max else r

    def quaternion(self) -> np.ndarray:
        """
        Uniform random unit quaternion in (x, y, z, w) order.

        Shoemake's subgroup algorithm: three uniform draws give a sample
        that is uniform over SO(3).
        """
        u1 = self.uniform01()
        u2 = self.uniform01()
        u3 = self.uniform01()
        s1 = math.sqrt(1.0 - u1)
        s2 = math.sqrt(u1)
        t2 = 2.0 * math.pi * u2
        t3 = 2.0 * math.pi * u3
        return np.array(
            [s1 * math.sin(t2), s1 * math.cos(t2), s2 * math.sin(t3), s2 * math.cos(t3)]
        )

    def euler_rpy(self) -> np.ndarray:
        """Roll, pitch, yaw each drawn uniformly from [-pi, pi)."""
        return np.array([self.uniform_real(-math.pi, math.pi) for _ in range(3)])

    def disk(self, r_min: float, r_max: float) -> np.ndarray:
        """Uniform random point (x, y) in the annulus r_min <= |p| <= r_max."""
        check_radii(r_min, r_max)
        theta = self.uniform_real(0.0, 2.0 * math.pi)
        # uniform in r^2 so density per unit area is constant
        rho = math.sqrt(self.uniform_real(r_min * r_min, r_max * r_max))
        return np.array([rho * math.cos(theta), rho * math.sin(theta)])

    def ball(self, r_min: float, r_max: float) -> np.ndarray:
        """Uniform random point (x, y, z) in the shell r_min <= |p| <= r_max."""
        check_radii(r_min, r_max)
        while True:
            direction = np.array([self.gaussian01(), self.gaussian01(), self.gaussian01()])
            norm = np.linalg.norm(direction)
            if norm > 0.0:
                break
        rho = np.cbrt(self.uniform_real(r_min**3, r_max**3))
        return direction * (rho / norm)
