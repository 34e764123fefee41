"""
Rotation helpers for sampled configurations.

Quaternions here are in (x, y, z, w) order, which is also scipy's order.
"""
import numpy as np
from scipy.spatial.transform import Rotation as R
from typing import Sequence

# intrinsic X-Y-Z: R = Rx(roll) @ Ry(pitch) @ Rz(yaw)
RPY_SEQUENCE = "XYZ"


def quaternion_norm(q: Sequence[float]) -> float:
    return float(np.linalg.norm(np.asarray(q, dtype=float)))


def quat_xyzw2rpy(q: np.ndarray | Sequence[float], is_degree: bool = False) -> np.ndarray:
    """
    Convert a unit quaternion to roll-pitch-yaw angles.
    Args:
        q: Quaternion [x, y, z, w]
        is_degree: Return degrees instead of radians
    Returns:
        np.ndarray: [roll, pitch, yaw]
    """
    return R.from_quat(np.asarray(q, dtype=float)).as_euler(
        seq=RPY_SEQUENCE, degrees=is_degree
    )


def rpy2quat_xyzw(rpy: np.ndarray | Sequence[float], is_degree: bool = False) -> np.ndarray:
    """Inverse of quat_xyzw2rpy, returns [x, y, z, w]."""
    return R.from_euler(
        seq=RPY_SEQUENCE, angles=np.asarray(rpy, dtype=float), degrees=is_degree
    ).as_quat()


def quat_xyzw2matrix(q: np.ndarray | Sequence[float]) -> np.ndarray:
    return R.from_quat(np.asarray(q, dtype=float)).as_matrix()


def rotate_vector(
    q: np.ndarray | Sequence[float], v: np.ndarray | Sequence[float]
) -> np.ndarray:
    """
    Rotate vector(s) by a quaternion.
    Args:
        q: Quaternion [x, y, z, w], or an (N, 4) stack of quaternions
        v: Vector (3,), or (N, 3)
    Returns:
        np.ndarray: Rotated vector(s)
    """
    return R.from_quat(np.asarray(q, dtype=float)).apply(np.asarray(v, dtype=float))
