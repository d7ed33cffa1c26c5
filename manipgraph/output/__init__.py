"""Output formatting for command-line results."""

from .formatter import format_path_validation, format_validation_result

__all__ = [
    "format_path_validation",
    "format_validation_result",
]
