"""The constraint graph of a manipulation problem."""

import logging
from functools import partial
from typing import Any, Callable, Iterable, Iterator, Sequence

import networkx as nx
import numpy as np

from ..constraints.constraint_set import ConstraintSet, EdgeConstraintSet
from ..constraints.projector import ConfigProjector, Constraint
from ..path_validation.discretized import DiscretizedCollisionValidation
from ..robot.model import Robot
from .component import GraphComponent
from .edge import Edge
from .errors import ClassificationFailure, ConstraintGraphError, GraphConstructionError
from .node_selector import NodeSelector
from .node_types import ComponentType, EdgeType
from .state import State

logger = logging.getLogger(__name__)


class Graph:
    """Description of the constraint graph of a robot with end-effectors.

    Ownership only goes down: the graph owns its node selectors, a node
    selector owns its states and a state owns its outgoing edges. Every
    component is also registered in the graph under a stable integer id,
    which is how edges refer back to their states.

    The graph holds the constraints applied everywhere (e.g. stability) and
    the ``max_iterations`` / ``error_threshold`` of every projector it builds.
    """

    def __init__(
        self,
        name: str,
        robot: Robot,
        max_iterations: int = 40,
        error_threshold: float = 1e-4,
        rng: np.random.Generator | None = None,
        seed: int | None = None,
        path_validation_factory: Callable[[], Any] | None = None,
        validation_step: float = 0.05,
    ):
        """Initialize an empty graph.

        Args:
            name: The graph name.
            robot: The robot whose configurations are classified.
            max_iterations: Iteration bound of every projector.
            error_threshold: Error norm under which a constraint is satisfied.
            rng: Random source of ``choose_edge``.
            seed: Seed of the default random source, when ``rng`` is None.
            path_validation_factory: Builds the path validation of each edge.
            validation_step: Step of the default discretized validation.
        """
        self._name = name
        self._robot = robot
        self._components: list[GraphComponent] = []
        self._node_selectors: list[NodeSelector] = []
        self._global_constraints: list[Constraint] = []
        self._obstacles: list[Any] = []
        self._max_iterations = max_iterations
        self._error_threshold = error_threshold
        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self._path_validation_factory = path_validation_factory or partial(
            DiscretizedCollisionValidation, validation_step
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def robot(self) -> Robot:
        return self._robot

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _register(self, component: GraphComponent) -> int:
        self._components.append(component)
        return len(self._components) - 1

    def _check_name_available(self, name: str, component_type: ComponentType) -> None:
        for component in self._components:
            if component.component_type == component_type and component.name == name:
                raise GraphConstructionError(
                    f"Graph '{self._name}' already has a {component_type.value} '{name}'"
                )

    def create_node_selector(self, name: str) -> NodeSelector:
        """Create a node selector and append it to the graph.

        Selectors are tried in creation order during classification.
        """
        self._check_name_available(name, ComponentType.NODE_SELECTOR)
        selector = NodeSelector(self, name)
        self._node_selectors.append(selector)
        return selector

    def _create_edge(
        self,
        name: str,
        from_state: State,
        to_state: State,
        path_constraints: Iterable[Constraint] = (),
        kind: EdgeType | str = EdgeType.TRANSIT,
        in_source_state: bool = False,
        path_validation_factory: Callable[[], Any] | None = None,
    ) -> Edge:
        self._check_name_available(name, ComponentType.EDGE)
        for state in (from_state, to_state):
            if state.graph is not self:
                raise GraphConstructionError(f"State '{state.name}' belongs to another graph")
        return Edge(
            self,
            name,
            from_state,
            to_state,
            path_constraints=path_constraints,
            kind=kind,
            in_source_state=in_source_state,
            path_validation_factory=path_validation_factory,
        )

    def add_global_constraint(self, constraint: Constraint) -> None:
        """Add a constraint that holds in every state and along every edge."""
        self._global_constraints.append(constraint)
        self._invalidate_projectors()

    @property
    def global_constraints(self) -> tuple[Constraint, ...]:
        return tuple(self._global_constraints)

    # -------------------------------------------------------------------------
    # Parameters
    # -------------------------------------------------------------------------

    @property
    def max_iterations(self) -> int:
        """Maximal number of iterations of the projectors."""
        return self._max_iterations

    @max_iterations.setter
    def max_iterations(self, iterations: int) -> None:
        if iterations <= 0:
            raise ValueError(f"max_iterations must be positive, got {iterations}")
        self._max_iterations = iterations
        self._invalidate_projectors()

    @property
    def error_threshold(self) -> float:
        """Error threshold of the projectors."""
        return self._error_threshold

    @error_threshold.setter
    def error_threshold(self, threshold: float) -> None:
        if threshold <= 0:
            raise ValueError(f"error_threshold must be positive, got {threshold}")
        self._error_threshold = threshold
        self._invalidate_projectors()

    def _invalidate_projectors(self) -> None:
        for state in self.states:
            state._invalidate()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_component(self, component_id: int) -> GraphComponent:
        """Get a component by id."""
        try:
            return self._components[component_id]
        except IndexError:
            raise ConstraintGraphError(f"No component with id {component_id}") from None

    @property
    def node_selectors(self) -> tuple[NodeSelector, ...]:
        return tuple(self._node_selectors)

    @property
    def states(self) -> Iterator[State]:
        """All states, in classification order."""
        for selector in self._node_selectors:
            yield from selector.states

    @property
    def edges(self) -> Iterator[Edge]:
        for state in self.states:
            yield from state.edges

    def get_node_selector_by_name(self, name: str) -> NodeSelector | None:
        """Return the node selector with the given name if any."""
        for selector in self._node_selectors:
            if selector.name == name:
                return selector
        return None

    def get_state_by_name(self, name: str) -> State | None:
        for state in self.states:
            if state.name == name:
                return state
        return None

    def get_edge_by_name(self, name: str) -> Edge | None:
        for edge in self.edges:
            if edge.name == name:
                return edge
        return None

    @property
    def initial_state(self) -> State | None:
        for state in self.states:
            if state.initial:
                return state
        return None

    def _check_configuration(self, q: Sequence[float]) -> np.ndarray:
        q = np.asarray(q, dtype=float)
        if q.shape != (self._robot.config_size,):
            raise ValueError(
                f"Configuration of size {q.size} given, robot "
                f"'{self._robot.name}' expects {self._robot.config_size}"
            )
        return q

    def get_state(self, q: Sequence[float]) -> State:
        """Returns the state of a configuration.

        States are tried in declaration order: node selectors first, then the
        states within each selector. The first match wins.

        Args:
            q: The configuration to classify.

        Returns:
            The first state containing ``q``.

        Raises:
            ClassificationFailure: If no state contains ``q``.
        """
        q = self._check_configuration(q)
        for selector in self._node_selectors:
            state = selector.get_state(q)
            if state is not None:
                logger.debug(f"Configuration {q} is in state {state.name}")
                return state
        raise ClassificationFailure(
            f"No state of graph '{self._name}' contains configuration {q}",
            configuration=q,
        )

    def choose_edge(
        self, states: Iterable[State], rng: np.random.Generator | None = None
    ) -> list[Edge]:
        """Select randomly one outgoing edge of each given state.

        Args:
            states: The current states.
            rng: Random source; defaults to the graph's own generator.

        Returns:
            One edge per state, in the order of ``states``.

        Raises:
            ConstraintGraphError: If a state has no outgoing edge.
        """
        rng = rng if rng is not None else self._rng
        chosen = []
        for state in states:
            if not state.edges:
                raise ConstraintGraphError(f"State '{state.name}' has no outgoing edge")
            chosen.append(state.edges[int(rng.integers(len(state.edges)))])
        return chosen

    # -------------------------------------------------------------------------
    # Constraints
    # -------------------------------------------------------------------------

    def _projector(self, name: str, constraints: Iterable[Constraint]) -> ConfigProjector:
        return ConfigProjector(
            name,
            [*self._global_constraints, *constraints],
            self._max_iterations,
            self._error_threshold,
        )

    def config_constraint(self, states: Iterable[State]) -> ConfigProjector:
        """Constraint to project onto the given states.

        Args:
            states: The states on which to project.

        Returns:
            The projector, global constraints included.
        """
        states = list(states)
        return self._projector(
            "+".join(s.name for s in states),
            [c for s in states for c in s.constraints],
        )

    def leaf_config_constraint(
        self, edges: Iterable[Edge], q: Sequence[float]
    ) -> ConfigProjector:
        """Constraint to project onto the same leaf as ``q``.

        Args:
            edges: The edges defining the foliation.
            q: Configuration that initializes the parametric constraints.

        Returns:
            Projector onto the edges' target states, restricted to the leaf
            of the edges' path constraints passing through ``q``.
        """
        q = self._check_configuration(q)
        edges = list(edges)
        constraints = []
        for edge in edges:
            constraints.extend(edge.to_state.constraints)
            constraints.extend(edge.path_constraints)
        return self._projector(
            "+".join(e.name for e in edges), constraints
        ).with_rhs_from(q)

    def path_constraint(self, edges: Iterable[Edge], q: Sequence[float]) -> ConstraintSet:
        """Constraint to project a path.

        Args:
            edges: The edges defining the foliation.
            q: Configuration that initializes the parametric constraints.

        Returns:
            The constraint set of paths along ``edges`` starting on the leaf
            of ``q``. It refers to the edge when a single edge is given.
        """
        q = self._check_configuration(q)
        edges = list(edges)
        constraints = []
        for edge in edges:
            constraints.extend(edge.state.constraints)
            constraints.extend(edge.path_constraints)
        projector = self._projector(
            "+".join(e.name for e in edges), constraints
        ).with_rhs_from(q)
        if len(edges) == 1:
            return EdgeConstraintSet(projector, edges[0])
        return ConstraintSet(projector)

    # -------------------------------------------------------------------------
    # Path validation
    # -------------------------------------------------------------------------

    @property
    def obstacles(self) -> tuple[Any, ...]:
        return tuple(self._obstacles)

    def add_obstacle(self, obstacle: Any) -> None:
        """Register an obstacle on every edge path validation.

        Validations built later receive it as well.
        """
        self._obstacles.append(obstacle)
        for edge in self.edges:
            edge.add_obstacle(obstacle)

    def _new_path_validation(self, factory: Callable[[], Any] | None = None) -> Any:
        validation = (factory or self._path_validation_factory)()
        for obstacle in self._obstacles:
            validation.add_obstacle(obstacle)
        return validation

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def topology(self) -> nx.MultiDiGraph:
        """Directed multigraph of state names, one edge per graph edge."""
        topology = nx.MultiDiGraph(name=self._name)
        for state in self.states:
            topology.add_node(state.name, initial=state.initial)
        for edge in self.edges:
            topology.add_edge(
                edge.from_state.name,
                edge.to_state.name,
                key=edge.name,
                kind=edge.kind,
            )
        return topology

    def __str__(self) -> str:
        lines = [f"Graph {self._name}"]
        for selector in self._node_selectors:
            lines.append(f"  NodeSelector {selector.name}")
            for state in selector.states:
                marker = " (initial)" if state.initial else ""
                lines.append(f"    State {state.name}{marker}")
                for edge in state.edges:
                    lines.append(
                        f"      Edge {edge.name} -> {edge.to_state.name} [{edge.kind.value}]"
                    )
        return "\n".join(lines)
