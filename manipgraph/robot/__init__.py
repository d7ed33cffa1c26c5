"""Robot model, grippers and handles."""

from .handle import Gripper, Handle
from .model import Joint, JointType, Robot

__all__ = [
    "Gripper",
    "Handle",
    "Joint",
    "JointType",
    "Robot",
]
