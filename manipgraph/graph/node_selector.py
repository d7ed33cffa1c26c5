"""Node selectors group the states of one independent choice."""

from typing import TYPE_CHECKING, Iterable

import numpy as np

from ..constraints.projector import Constraint
from .component import GraphComponent
from .node_types import ComponentType
from .state import State

if TYPE_CHECKING:
    from .constraint_graph import Graph


class NodeSelector(GraphComponent):
    """An ordered group of states, e.g. the grasp status of one gripper."""

    component_type = ComponentType.NODE_SELECTOR

    def __init__(self, graph: "Graph", name: str):
        super().__init__(graph, name)
        self._states: list[State] = []

    @property
    def states(self) -> tuple[State, ...]:
        return tuple(self._states)

    def create_state(
        self,
        name: str,
        constraints: Iterable[Constraint] = (),
        initial: bool = False,
    ) -> State:
        """Create a state and append it to this selector.

        States are tried in creation order during classification.
        """
        self.graph._check_name_available(name, ComponentType.STATE)
        state = State(self.graph, name, constraints, initial)
        self._states.append(state)
        return state

    def get_state(self, q: np.ndarray) -> State | None:
        """Get the first state of this selector containing ``q``."""
        for state in self._states:
            if state.contains(q):
                return state
        return None

    def get_state_by_name(self, name: str) -> State | None:
        for state in self._states:
            if state.name == name:
                return state
        return None
