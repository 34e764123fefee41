"""
Random utilities shared by the pose samplers.

Every helper takes the RandomEngine to draw from, so samplers compose these
functions instead of inheriting them.
"""
import math
from typing import Any, Optional

import numpy as np

from posesampler.Random.RandomEngine import RandomEngine, SeedFactory
from posesampler.Utils.TransformUtils import quat_xyzw2rpy


def resolve_engine(
    engine: Optional[RandomEngine] = None,
    seed_factory: Optional[SeedFactory] = None,
) -> RandomEngine:
    """
    Return the engine a sampler should own.

    If @engine is provided it is borrowed as is; otherwise a fresh engine is
    created from @seed_factory (or the process-wide factory).

    Raises:
        AssertionError: [Invalid engine]
    """
    if engine is not None:
        assert isinstance(engine, RandomEngine), "[Invalid engine]"
        if seed_factory is not None:
            raise ValueError("Pass either engine or seed_factory, not both")
        return engine
    return RandomEngine(seed_factory=seed_factory)


def sample_box(engine: RandomEngine, lower: np.ndarray, upper: np.ndarray) -> np.ndarray:
    """
    Draw one point uniformly from the axis-aligned box [lower, upper).
    Args:
        engine: RandomEngine to draw from
        lower: Lower corner (N,)
        upper: Upper corner (N,)
    Returns:
        np.ndarray: Point (N,)
    """
    return np.array(
        [engine.uniform_real(lo, hi) for lo, hi in zip(lower.tolist(), upper.tolist())]
    )


def sample_heading(engine: RandomEngine) -> float:
    """Planar heading, uniform in [-pi, pi)."""
    return engine.uniform_real(-math.pi, math.pi)


def sample_orientation(engine: RandomEngine, as_euler: bool) -> np.ndarray:
    """
    Draw an orientation uniformly from SO(3).
    Args:
        engine: RandomEngine to draw from
        as_euler: Return [roll, pitch, yaw] instead of the quaternion
    Returns:
        np.ndarray: Quaternion [x, y, z, w] (4,) or RPY angles (3,)
    """
    quat = engine.quaternion()
    if as_euler:
        return quat_xyzw2rpy(quat)
    return quat


def sample_batch(sampler: Any, num_samples: int) -> np.ndarray:
    """
    Stack repeated sampler.sample() draws.
    Args:
        sampler: Any object with sample() and a dim attribute
        num_samples: Number of draws. Must be a positive integer.
    Returns:
        np.ndarray: Array of shape (num_samples, sampler.dim)
    Raises:
        ValueError: If num_samples is not positive.
    """
    if num_samples <= 0:
        raise ValueError("Number of samples must be positive.")
    samples = np.empty((num_samples, sampler.dim))
    for i in range(num_samples):
        samples[i] = sampler.sample()
    return samples
