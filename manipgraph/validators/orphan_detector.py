"""Isolated state detection validator."""

from ..graph.constraint_graph import Graph
from .base import ValidationResult


def check_isolated_states(graph: Graph) -> ValidationResult:
    """Check for states with no edge at all.

    Such a state is still used for classification, but no path can be
    planned into or out of it.

    Args:
        graph: The constraint graph to check.

    Returns:
        ValidationResult with warnings for isolated states.
    """
    result = ValidationResult()
    topology = graph.topology()

    for state in graph.states:
        if topology.degree(state.name) == 0:
            result.add_warning(
                code="ISOLATED_STATE",
                message=f"State '{state.name}' has no edges to other states",
                state=state.name,
            )

    return result
