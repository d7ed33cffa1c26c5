"""Validators for structural validation of constraint graph models."""

from .base import Severity, ValidationIssue, ValidationResult
from .orphan_detector import check_isolated_states
from .reachability import check_dead_end_states, check_unreachable_states
from .reference_integrity import check_reference_integrity
from .runner import run_validators, validate_graph_file

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_dead_end_states",
    "check_isolated_states",
    "check_reference_integrity",
    "check_unreachable_states",
    "run_validators",
    "validate_graph_file",
]
