"""Constraint graph: states, edges and configuration classification."""

from .builder import build_graph, build_obstacles, build_path, build_robot
from .component import GraphComponent
from .constraint_graph import Graph
from .edge import Edge
from .errors import ClassificationFailure, ConstraintGraphError, GraphConstructionError
from .node_selector import NodeSelector
from .node_types import ComponentType, EdgeType
from .state import State

__all__ = [
    "ClassificationFailure",
    "ComponentType",
    "ConstraintGraphError",
    "Edge",
    "EdgeType",
    "Graph",
    "GraphComponent",
    "GraphConstructionError",
    "NodeSelector",
    "State",
    "build_graph",
    "build_obstacles",
    "build_path",
    "build_robot",
]
