"""Edges of the constraint graph."""

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable

import numpy as np

from ..constraints.constraint_set import ConstraintSet
from ..constraints.projector import ConfigProjector, Constraint
from .component import GraphComponent
from .node_types import ComponentType, EdgeType

if TYPE_CHECKING:
    from .constraint_graph import Graph
    from .state import State

logger = logging.getLogger(__name__)


class Edge(GraphComponent):
    """A directed transition between two states.

    An edge refers to its source and target states by id and owns the path
    validation used for paths generated along it. That validation is built
    on first use and receives every obstacle registered on the graph.
    """

    component_type = ComponentType.EDGE

    def __init__(
        self,
        graph: "Graph",
        name: str,
        from_state: "State",
        to_state: "State",
        path_constraints: Iterable[Constraint] = (),
        kind: EdgeType | str = EdgeType.TRANSIT,
        in_source_state: bool = False,
        path_validation_factory: Callable[[], Any] | None = None,
    ):
        super().__init__(graph, name)
        self._from_id = from_state.id
        self._to_id = to_state.id
        self._path_constraints = tuple(path_constraints)
        self._kind = EdgeType(kind)
        self._in_source_state = in_source_state
        self._path_validation_factory = path_validation_factory
        self._path_validation = None

    @property
    def from_state(self) -> "State":
        return self.graph.get_component(self._from_id)

    @property
    def to_state(self) -> "State":
        return self.graph.get_component(self._to_id)

    @property
    def state(self) -> "State":
        """The state whose constraints hold along the edge."""
        return self.from_state if self._in_source_state else self.to_state

    @property
    def path_constraints(self) -> tuple[Constraint, ...]:
        return self._path_constraints

    @property
    def kind(self) -> EdgeType:
        return self._kind

    @property
    def in_source_state(self) -> bool:
        return self._in_source_state

    def path_validation(self) -> Any:
        """Path validation dedicated to this edge, built on first call."""
        if self._path_validation is None:
            logger.debug(f"Building path validation of edge {self._name}")
            self._path_validation = self.graph._new_path_validation(
                self._path_validation_factory
            )
        return self._path_validation

    @property
    def has_path_validation(self) -> bool:
        """Whether the dedicated path validation has been built yet."""
        return self._path_validation is not None

    def add_obstacle(self, obstacle: Any) -> None:
        """Forward an obstacle to the dedicated path validation, if built."""
        if self._path_validation is not None:
            self._path_validation.add_obstacle(obstacle)

    def config_constraint(self, q: np.ndarray) -> ConfigProjector:
        """Projector onto the target of this edge, on the leaf through ``q``."""
        return self.graph.leaf_config_constraint([self], q)

    def path_constraint(self, q: np.ndarray) -> ConstraintSet:
        """Constraints of paths along this edge starting on the leaf of ``q``."""
        return self.graph.path_constraint([self], q)
