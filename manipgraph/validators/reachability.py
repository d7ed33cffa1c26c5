"""State reachability validators."""

import networkx as nx

from ..graph.constraint_graph import Graph
from .base import ValidationResult


def check_unreachable_states(graph: Graph) -> ValidationResult:
    """Check for states that no sequence of edges leads to from the initial state.

    States without any edge are left to ``check_isolated_states``.

    Args:
        graph: The constraint graph to check.

    Returns:
        ValidationResult with errors for unreachable states.
    """
    result = ValidationResult()
    topology = graph.topology()
    if topology.number_of_nodes() == 0:
        return result

    initial = graph.initial_state
    if initial is None:
        result.add_error(
            code="NO_INITIAL_STATE",
            message=f"Graph '{graph.name}' has states but no initial state defined",
        )
        return result

    reachable = nx.descendants(topology, initial.name) | {initial.name}
    for state in graph.states:
        if state.name not in reachable and topology.degree(state.name) > 0:
            result.add_error(
                code="UNREACHABLE_STATE",
                message=f"State '{state.name}' cannot be reached from initial state '{initial.name}'",
                state=state.name,
            )

    return result


def check_dead_end_states(graph: Graph) -> ValidationResult:
    """Check for states that have incoming edges but no outgoing edge.

    Planning cannot leave such a state once it gets there.

    Args:
        graph: The constraint graph to check.

    Returns:
        ValidationResult with warnings for dead-end states.
    """
    result = ValidationResult()
    topology = graph.topology()

    for state in graph.states:
        if topology.in_degree(state.name) > 0 and topology.out_degree(state.name) == 0:
            result.add_warning(
                code="DEAD_END_STATE",
                message=f"State '{state.name}' has no outgoing edge",
                state=state.name,
            )

    return result
