"""Grippers, handles and the grasp constraints they generate."""

import numpy as np

from ..constraints.functions import RelativeTransformation
from ..constraints.projector import Constraint
from .model import Joint

_PRE_GRASP_MASK = (False, True, True, True, True, True)
_PRE_GRASP_COMPLEMENT_MASK = (True, False, False, False, False, False)


def _frame_transform(joint: Joint | None, local_position: np.ndarray, q: np.ndarray):
    if joint is None:
        return local_position
    return joint.transform(q) @ local_position


class Gripper:
    """A frame on the robot that can grasp handles."""

    def __init__(self, name: str, local_position: np.ndarray, joint: Joint | None = None):
        self._name = name
        self._local_position = np.asarray(local_position, dtype=float)
        self._joint = joint

    @property
    def name(self) -> str:
        return self._name

    @property
    def joint(self) -> Joint | None:
        return self._joint

    @property
    def local_position(self) -> np.ndarray:
        return self._local_position.copy()

    def transform(self, q: np.ndarray) -> np.ndarray:
        """World placement of the gripper frame."""
        return _frame_transform(self._joint, self._local_position, q)

    def __str__(self) -> str:
        joint = self._joint.name if self._joint else "universe"
        return f"Gripper {self._name} on {joint}"


class Handle:
    """Part of an object that is aimed at being grasped.

    A handle is a frame given by a local position in the frame of ``joint``
    (the world frame when ``joint`` is None). It generates the constraints
    of a gripper grasping it; it knows nothing about paths or graphs.
    """

    def __init__(self, name: str, local_position: np.ndarray, joint: Joint | None = None):
        self._name = name
        self._local_position = np.asarray(local_position, dtype=float)
        self._joint = joint

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value

    @property
    def joint(self) -> Joint | None:
        """Get the joint to which the handle is linked."""
        return self._joint

    @joint.setter
    def joint(self, value: Joint | None) -> None:
        self._joint = value

    @property
    def local_position(self) -> np.ndarray:
        """Get the position of the handle in the joint frame."""
        return self._local_position.copy()

    def transform(self, q: np.ndarray) -> np.ndarray:
        """World placement of the handle frame."""
        return _frame_transform(self._joint, self._local_position, q)

    def clone(self) -> "Handle":
        return Handle(self._name, self._local_position.copy(), self._joint)

    def create_grasp(self, gripper: Gripper) -> Constraint:
        """Create the constraint of ``gripper`` grasping this handle.

        All 6 DOFs of the relative transformation are constrained.

        Args:
            gripper: The gripper grasping the handle.

        Returns:
            Constraint on the relative transformation between the handle and
            the gripper.
        """
        return Constraint(
            RelativeTransformation(f"{gripper.name} grasps {self._name}", gripper, self)
        )

    def create_pre_grasp(self, gripper: Gripper) -> Constraint:
        """Create the constraint of ``gripper`` approaching this handle.

        Only 5 DOFs are constrained: the translation along the x-axis of the
        relative transformation is free.

        Args:
            gripper: The gripper approaching the handle.

        Returns:
            Constraint on the relative transformation between the handle and
            the gripper.
        """
        return Constraint(
            RelativeTransformation(
                f"{gripper.name} pregrasps {self._name}",
                gripper,
                self,
                _PRE_GRASP_MASK,
            )
        )

    def create_pre_grasp_complement(self, gripper: Gripper, shift: float) -> Constraint:
        """Create the constraint acting on the axis left free by pre-grasp.

        Args:
            gripper: The gripper approaching the handle.
            shift: The target value along the x-axis.

        Returns:
            Constraint fixing only the x translation of the relative
            transformation to ``shift``.
        """
        return Constraint(
            RelativeTransformation(
                f"{gripper.name} pregrasps {self._name} (complement)",
                gripper,
                self,
                _PRE_GRASP_COMPLEMENT_MASK,
            ),
            rhs=[shift],
        )

    def __str__(self) -> str:
        joint = self._joint.name if self._joint else "universe"
        position = np.array2string(self._local_position[:3, 3], precision=3)
        return f"Handle {self._name} on {joint} at {position}"
