"""States of the constraint graph."""

from typing import TYPE_CHECKING, Callable, Iterable

import numpy as np

from ..constraints.projector import ConfigProjector, Constraint
from .component import GraphComponent
from .edge import Edge
from .node_types import ComponentType, EdgeType

if TYPE_CHECKING:
    from .constraint_graph import Graph


class State(GraphComponent):
    """A class of configurations satisfying a set of constraints.

    A state owns its outgoing edges.
    """

    component_type = ComponentType.STATE

    def __init__(
        self,
        graph: "Graph",
        name: str,
        constraints: Iterable[Constraint] = (),
        initial: bool = False,
    ):
        super().__init__(graph, name)
        self._constraints = tuple(constraints)
        self._initial = initial
        self._edges: list[Edge] = []
        self._projector: ConfigProjector | None = None

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return self._constraints

    @property
    def initial(self) -> bool:
        return self._initial

    @property
    def edges(self) -> tuple[Edge, ...]:
        """Outgoing edges, in creation order."""
        return tuple(self._edges)

    def link_to(
        self,
        name: str,
        to: "State",
        path_constraints: Iterable[Constraint] = (),
        kind: EdgeType | str = EdgeType.TRANSIT,
        in_source_state: bool = False,
        path_validation_factory: Callable | None = None,
    ) -> Edge:
        """Create an edge from this state to ``to``.

        Args:
            name: The edge name, unique in the graph.
            to: The target state.
            path_constraints: Constraints that hold along the edge.
            kind: The kind of motion.
            in_source_state: Whether paths along the edge stay in this state
                rather than in the target state.
            path_validation_factory: Builds the edge's path validation;
                defaults to the graph's factory.

        Returns:
            The new edge.
        """
        edge = self.graph._create_edge(
            name,
            self,
            to,
            path_constraints=path_constraints,
            kind=kind,
            in_source_state=in_source_state,
            path_validation_factory=path_validation_factory,
        )
        self._edges.append(edge)
        return edge

    def config_constraint(self) -> ConfigProjector:
        """Projector onto this state, global constraints included."""
        if self._projector is None:
            self._projector = self.graph.config_constraint([self])
        return self._projector

    def contains(self, q: np.ndarray) -> bool:
        """Whether ``q`` satisfies the constraints of this state."""
        return self.config_constraint().is_satisfied(q)

    def _invalidate(self) -> None:
        self._projector = None
