"""Validation runner that orchestrates all validators."""

from pathlib import Path

from ..graph.builder import build_graph
from ..graph.errors import GraphConstructionError
from ..schema.loader import parse_graph_model
from ..schema.models import GraphModel
from .base import ValidationResult
from .orphan_detector import check_isolated_states
from .reachability import check_dead_end_states, check_unreachable_states
from .reference_integrity import check_reference_integrity


def run_validators(model: GraphModel) -> ValidationResult:
    """Run all validators on a graph model.

    The graph is only built once references resolve; the topology checks are
    skipped otherwise.

    Args:
        model: The parsed graph model.

    Returns:
        Combined ValidationResult from all validators.
    """
    result = ValidationResult()

    # Run reference integrity first (most fundamental)
    result.merge(check_reference_integrity(model))
    if result.has_errors:
        return result

    try:
        graph = build_graph(model)
    except GraphConstructionError as e:
        result.add_error(code="INVALID_GRAPH", message=str(e))
        return result

    result.merge(check_isolated_states(graph))
    result.merge(check_unreachable_states(graph))
    result.merge(check_dead_end_states(graph))

    return result


def validate_graph_file(path: str | Path) -> ValidationResult:
    """Load and validate a graph file.

    Args:
        path: Path to the YAML graph file.

    Returns:
        ValidationResult from all validators.

    Raises:
        SchemaLoadError: If the file cannot be loaded.
        SchemaValidationError: If the model fails schema validation.
    """
    model = parse_graph_model(path)
    return run_validators(model)
