"""Constraint sets attached to paths."""

from typing import Any

import numpy as np

from .projector import ConfigProjector


class ConstraintSet:
    """The constraints a path was generated under."""

    def __init__(self, projector: ConfigProjector):
        self._projector = projector

    @property
    def name(self) -> str:
        return self._projector.name

    @property
    def projector(self) -> ConfigProjector:
        return self._projector

    def is_satisfied(self, q: np.ndarray) -> bool:
        return self._projector.is_satisfied(q)

    def apply(self, q: np.ndarray) -> tuple[np.ndarray, bool]:
        """Project ``q``; returns the configuration and a success flag."""
        return self._projector.project(q)


class EdgeConstraintSet(ConstraintSet):
    """Constraint set of a path generated along a constraint graph edge."""

    def __init__(self, projector: ConfigProjector, edge: Any):
        super().__init__(projector)
        self._edge = edge

    @property
    def edge(self) -> Any:
        return self._edge
