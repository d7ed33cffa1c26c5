"""Homogeneous transform helpers."""

import numpy as np
from scipy.spatial.transform import Rotation


def rpy_matrix(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """Build a rotation matrix from roll, pitch and yaw angles (Z-Y-X order)."""
    return Rotation.from_euler("xyz", [roll, pitch, yaw]).as_matrix()


def make_transform(translation=(0.0, 0.0, 0.0), rpy=(0.0, 0.0, 0.0)) -> np.ndarray:
    """Build a 4x4 homogeneous transform."""
    transform = np.eye(4)
    transform[:3, :3] = rpy_matrix(*rpy)
    transform[:3, 3] = np.asarray(translation, dtype=float)
    return transform


def inverse(transform: np.ndarray) -> np.ndarray:
    """Invert a rigid homogeneous transform."""
    rotation = transform[:3, :3]
    result = np.eye(4)
    result[:3, :3] = rotation.T
    result[:3, 3] = -rotation.T @ transform[:3, 3]
    return result


def log3(rotation: np.ndarray) -> np.ndarray:
    """Rotation vector (axis times angle) of a rotation matrix."""
    return Rotation.from_matrix(rotation).as_rotvec()


def log6(transform: np.ndarray) -> np.ndarray:
    """Translation followed by rotation vector of a rigid transform."""
    return np.concatenate([transform[:3, 3], log3(transform[:3, :3])])
