"""Base class of the components owned by a graph."""

import weakref
from typing import TYPE_CHECKING

from .errors import ConstraintGraphError
from .node_types import ComponentType

if TYPE_CHECKING:
    from .constraint_graph import Graph


class GraphComponent:
    """A named component registered in its graph under a stable id.

    Components keep a weak reference to their graph: the graph owns them,
    never the other way around.
    """

    component_type: ComponentType

    def __init__(self, graph: "Graph", name: str):
        self._name = name
        self._graph_ref = weakref.ref(graph)
        self._id = graph._register(self)

    @property
    def name(self) -> str:
        return self._name

    @property
    def id(self) -> int:
        """Index of the component in its graph."""
        return self._id

    @property
    def graph(self) -> "Graph":
        graph = self._graph_ref()
        if graph is None:
            raise ConstraintGraphError(f"Graph of '{self._name}' no longer exists")
        return graph

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._id}: {self._name}>"
