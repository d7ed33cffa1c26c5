"""Path validation: collision sampling and constraint graph consistency."""

from .base import PathValidation
from .discretized import DiscretizedCollisionValidation
from .graph_path_validation import CrossingPolicy, GraphPathValidation
from .obstacles import ConfigurationBox, JointSphere
from .reports import PathValidationReport, ReportCode

__all__ = [
    "ConfigurationBox",
    "CrossingPolicy",
    "DiscretizedCollisionValidation",
    "GraphPathValidation",
    "JointSphere",
    "PathValidation",
    "PathValidationReport",
    "ReportCode",
]
