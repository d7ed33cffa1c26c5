"""Numerical constraints and the configuration projector."""

from typing import Iterable

import numpy as np

from .functions import DifferentiableFunction


class Constraint:
    """An equality ``function(q) == rhs``.

    A parametric constraint has its right-hand side taken from a
    configuration, which selects one leaf of the foliation it defines.
    """

    def __init__(
        self,
        function: DifferentiableFunction,
        rhs: Iterable[float] | None = None,
        parametric: bool = False,
    ):
        self._function = function
        if rhs is None:
            self._rhs = np.zeros(function.output_size)
        else:
            self._rhs = np.asarray(list(rhs), dtype=float)
        if self._rhs.shape != (function.output_size,):
            raise ValueError(
                f"Right-hand side of '{function.name}' must have size "
                f"{function.output_size}, got {self._rhs.size}"
            )
        self._parametric = parametric

    @property
    def name(self) -> str:
        return self._function.name

    @property
    def function(self) -> DifferentiableFunction:
        return self._function

    @property
    def rhs(self) -> np.ndarray:
        return self._rhs.copy()

    @property
    def parametric(self) -> bool:
        return self._parametric

    @property
    def size(self) -> int:
        return self._function.output_size

    def error(self, q: np.ndarray) -> np.ndarray:
        return self._function.value(q) - self._rhs

    def with_rhs_from(self, q: np.ndarray) -> "Constraint":
        """Copy of a parametric constraint whose leaf passes through ``q``.

        Non-parametric constraints are returned unchanged.
        """
        if not self._parametric:
            return self
        return Constraint(self._function, self._function.value(q), parametric=True)

    def __repr__(self) -> str:
        kind = "parametric " if self._parametric else ""
        return f"<{kind}Constraint {self.name}>"


class ConfigProjector:
    """Projects configurations onto the intersection of a set of constraints.

    Uses Gauss-Newton iterations with least-squares steps. A configuration is
    satisfied when the norm of the stacked error is below ``error_threshold``.
    """

    def __init__(
        self,
        name: str,
        constraints: Iterable[Constraint] = (),
        max_iterations: int = 40,
        error_threshold: float = 1e-4,
    ):
        self._name = name
        self._constraints = tuple(constraints)
        self._max_iterations = max_iterations
        self._error_threshold = error_threshold

    @property
    def name(self) -> str:
        return self._name

    @property
    def constraints(self) -> tuple[Constraint, ...]:
        return self._constraints

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    @property
    def error_threshold(self) -> float:
        return self._error_threshold

    def error(self, q: np.ndarray) -> np.ndarray:
        """Stacked error of every constraint at ``q``."""
        q = np.asarray(q, dtype=float)
        if not self._constraints:
            return np.zeros(0)
        return np.concatenate([c.error(q) for c in self._constraints])

    def is_satisfied(self, q: np.ndarray) -> bool:
        return float(np.linalg.norm(self.error(q))) <= self._error_threshold

    def project(self, q: np.ndarray) -> tuple[np.ndarray, bool]:
        """Project ``q`` onto the constraints.

        Args:
            q: The configuration to project.

        Returns:
            A tuple of the projected configuration and whether the projection
            converged within ``max_iterations``.
        """
        q = np.array(q, dtype=float)
        for _ in range(self._max_iterations):
            error = self.error(q)
            if float(np.linalg.norm(error)) <= self._error_threshold:
                return q, True
            jacobian = np.vstack([c.function.jacobian(q) for c in self._constraints])
            step, *_ = np.linalg.lstsq(jacobian, -error, rcond=None)
            q = q + step
        return q, self.is_satisfied(q)

    def with_rhs_from(self, q: np.ndarray) -> "ConfigProjector":
        """Copy of this projector with parametric right-hand sides read from ``q``."""
        return ConfigProjector(
            self._name,
            [c.with_rhs_from(q) for c in self._constraints],
            self._max_iterations,
            self._error_threshold,
        )

    def __repr__(self) -> str:
        names = ", ".join(c.name for c in self._constraints)
        return f"<ConfigProjector {self._name} [{names}]>"
