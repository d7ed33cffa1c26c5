"""Kinematic model of a robot made of free-floating joints."""

from enum import Enum
from typing import Iterable

import numpy as np

from ..constraints.transforms import make_transform


class JointType(str, Enum):
    """Types of joints and the configuration variables they own."""

    TRANSLATION = "translation"  # x, y, z
    FREEFLYER = "freeflyer"  # x, y, z, roll, pitch, yaw


_CONFIG_SIZES = {
    JointType.TRANSLATION: 3,
    JointType.FREEFLYER: 6,
}


class Joint:
    """A joint placed in the world frame by a slice of the configuration."""

    def __init__(self, name: str, joint_type: JointType | str = JointType.FREEFLYER):
        self._name = name
        self._type = JointType(joint_type)
        self._rank = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def joint_type(self) -> JointType:
        return self._type

    @property
    def rank(self) -> int:
        """Index of the first configuration variable of this joint."""
        return self._rank

    @property
    def config_size(self) -> int:
        return _CONFIG_SIZES[self._type]

    def configuration(self, q: np.ndarray) -> np.ndarray:
        """Slice of ``q`` owned by this joint."""
        return np.asarray(q, dtype=float)[self._rank : self._rank + self.config_size]

    def transform(self, q: np.ndarray) -> np.ndarray:
        """World placement of the joint frame as a 4x4 matrix."""
        values = self.configuration(q)
        if self._type == JointType.TRANSLATION:
            return make_transform(values)
        return make_transform(values[:3], values[3:])

    def __repr__(self) -> str:
        return f"Joint({self._name!r}, {self._type.value!r})"


class Robot:
    """A composite robot: the concatenation of its joints' configurations."""

    def __init__(self, name: str, joints: Iterable[Joint] = ()):
        self._name = name
        self._joints: list[Joint] = []
        for joint in joints:
            self.add_joint(joint)

    @property
    def name(self) -> str:
        return self._name

    @property
    def joints(self) -> tuple[Joint, ...]:
        return tuple(self._joints)

    @property
    def config_size(self) -> int:
        return sum(j.config_size for j in self._joints)

    def add_joint(self, joint: Joint) -> Joint:
        """Append a joint; its configuration follows the existing ones."""
        if self.joint(joint.name) is not None:
            raise ValueError(f"Robot '{self._name}' already has a joint '{joint.name}'")
        joint._rank = self.config_size
        self._joints.append(joint)
        return joint

    def joint(self, name: str) -> Joint | None:
        """Get a joint by name."""
        for joint in self._joints:
            if joint.name == name:
                return joint
        return None

    def neutral_configuration(self) -> np.ndarray:
        return np.zeros(self.config_size)
