"""Schema layer for parsing and validating graph and path files."""

from .errors import SchemaLoadError, SchemaValidationError
from .models import (
    ConstraintSpec,
    EdgeSpec,
    FrameSpec,
    GraphModel,
    JointSpec,
    NodeSelectorSpec,
    ObstacleSpec,
    Parameters,
    PathModel,
    RobotSpec,
    SegmentSpec,
    StateSpec,
)
from .loader import (
    load_yaml,
    parse_graph_model,
    parse_graph_model_from_string,
    parse_path_model,
    parse_path_model_from_string,
)

__all__ = [
    "SchemaLoadError",
    "SchemaValidationError",
    "ConstraintSpec",
    "EdgeSpec",
    "FrameSpec",
    "GraphModel",
    "JointSpec",
    "NodeSelectorSpec",
    "ObstacleSpec",
    "Parameters",
    "PathModel",
    "RobotSpec",
    "SegmentSpec",
    "StateSpec",
    "load_yaml",
    "parse_graph_model",
    "parse_graph_model_from_string",
    "parse_path_model",
    "parse_path_model_from_string",
]
