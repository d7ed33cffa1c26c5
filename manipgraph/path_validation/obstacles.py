"""Obstacles checked by collision validation."""

from typing import Sequence

import numpy as np

from ..robot.model import Joint


class ConfigurationBox:
    """Axis-aligned box over some configuration variables."""

    def __init__(
        self,
        name: str,
        indices: Sequence[int],
        lower: Sequence[float],
        upper: Sequence[float],
    ):
        self.name = name
        self.indices = np.asarray(indices, dtype=int)
        self.lower = np.asarray(lower, dtype=float)
        self.upper = np.asarray(upper, dtype=float)
        if not (self.indices.shape == self.lower.shape == self.upper.shape):
            raise ValueError(f"Box '{name}' bounds do not match its indices")

    def collides(self, q: np.ndarray) -> bool:
        values = np.asarray(q, dtype=float)[self.indices]
        return bool(np.all(values >= self.lower) and np.all(values <= self.upper))

    def __repr__(self) -> str:
        return f"ConfigurationBox({self.name!r})"


class JointSphere:
    """Ball in the workspace that a joint origin must stay out of."""

    def __init__(self, name: str, joint: Joint, center: Sequence[float], radius: float):
        self.name = name
        self.joint = joint
        self.center = np.asarray(center, dtype=float)
        self.radius = float(radius)

    def collides(self, q: np.ndarray) -> bool:
        position = self.joint.transform(q)[:3, 3]
        return float(np.linalg.norm(position - self.center)) < self.radius

    def __repr__(self) -> str:
        return f"JointSphere({self.name!r}, {self.joint.name!r})"
