"""Constraint-related exceptions."""

import numpy as np


class ProjectionFailure(Exception):
    """Raised when a configuration cannot be projected onto its constraints."""

    def __init__(
        self,
        message: str,
        configuration: np.ndarray | None = None,
        error: np.ndarray | None = None,
    ):
        self.configuration = configuration
        self.error = error
        super().__init__(message)
