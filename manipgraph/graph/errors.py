"""Constraint graph exceptions."""

import numpy as np


class ConstraintGraphError(Exception):
    """Base exception for constraint graph errors."""

    pass


class GraphConstructionError(ConstraintGraphError):
    """Raised when a graph is assembled from inconsistent pieces."""

    pass


class ClassificationFailure(ConstraintGraphError):
    """Raised when no state of the graph contains a configuration."""

    def __init__(self, message: str, configuration: np.ndarray | None = None):
        self.configuration = configuration
        super().__init__(message)
