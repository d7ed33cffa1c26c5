"""Numerical constraints, projection and constraint sets."""

from .constraint_set import ConstraintSet, EdgeConstraintSet
from .errors import ProjectionFailure
from .functions import DifferentiableFunction, LockedJoint, RelativeTransformation
from .projector import ConfigProjector, Constraint

__all__ = [
    "ConfigProjector",
    "Constraint",
    "ConstraintSet",
    "DifferentiableFunction",
    "EdgeConstraintSet",
    "LockedJoint",
    "ProjectionFailure",
    "RelativeTransformation",
]
