"""Interface of path validations."""

from abc import ABC, abstractmethod
from typing import Any

from ..paths.path import Path
from .reports import PathValidationReport


class PathValidation(ABC):
    """Validates one homogeneous path segment."""

    @abstractmethod
    def validate(
        self, path: Path, reverse: bool = False
    ) -> tuple[bool, Path, PathValidationReport | None]:
        """Validate ``path``.

        Args:
            path: The path to validate.
            reverse: Traverse the path from its end.

        Returns:
            Whether the whole path is valid, its longest valid part starting
            at the traversal start, and a report when it is not fully valid.
        """

    @abstractmethod
    def add_obstacle(self, obstacle: Any) -> None:
        """Register an obstacle to check paths against."""
