"""Component and edge type definitions for the constraint graph."""

from enum import Enum


class ComponentType(str, Enum):
    """Types of components stored in a graph."""

    NODE_SELECTOR = "node_selector"
    STATE = "state"
    EDGE = "edge"


class EdgeType(str, Enum):
    """Kinds of motion an edge describes."""

    TRANSIT = "transit"  # Move without object
    TRANSFER = "transfer"  # Move holding an object
    GRASP = "grasp"  # Close on a handle
    RELEASE = "release"  # Open from a handle
