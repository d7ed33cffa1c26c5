"""Differentiable functions of the robot configuration."""

from abc import ABC, abstractmethod
from typing import Any, Sequence

import numpy as np

from .transforms import inverse, log6


class DifferentiableFunction(ABC):
    """A vector valued function of a configuration.

    Subclasses provide ``value``; the Jacobian defaults to central finite
    differences and may be overridden when an exact expression is cheap.
    """

    def __init__(self, name: str, output_size: int):
        self._name = name
        self._output_size = output_size

    @property
    def name(self) -> str:
        """Get the function name."""
        return self._name

    @property
    def output_size(self) -> int:
        """Get the dimension of the function value."""
        return self._output_size

    @abstractmethod
    def value(self, q: np.ndarray) -> np.ndarray:
        """Evaluate the function at configuration ``q``."""

    def jacobian(self, q: np.ndarray, eps: float = 1e-6) -> np.ndarray:
        """Jacobian of the function at ``q``, shape (output_size, len(q))."""
        q = np.asarray(q, dtype=float)
        jac = np.zeros((self._output_size, q.size))
        for i in range(q.size):
            step = np.zeros(q.size)
            step[i] = eps
            jac[:, i] = (self.value(q + step) - self.value(q - step)) / (2.0 * eps)
        return jac

    def __call__(self, q: np.ndarray) -> np.ndarray:
        return self.value(q)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r})"


class LockedJoint(DifferentiableFunction):
    """Configuration of one joint; locking it fixes the joint in place."""

    def __init__(self, joint: Any, name: str | None = None):
        super().__init__(name or f"locked_{joint.name}", joint.config_size)
        self._joint = joint

    @property
    def joint(self) -> Any:
        return self._joint

    def value(self, q: np.ndarray) -> np.ndarray:
        return np.asarray(self._joint.configuration(q), dtype=float)

    def jacobian(self, q: np.ndarray, eps: float = 1e-6) -> np.ndarray:
        jac = np.zeros((self._output_size, np.asarray(q).size))
        rank = self._joint.rank
        jac[:, rank : rank + self._output_size] = np.eye(self._output_size)
        return jac


class RelativeTransformation(DifferentiableFunction):
    """Relative placement of a handle frame expressed in a gripper frame.

    The value is the translation followed by the rotation vector of
    ``inverse(gripper) @ handle``; ``mask`` keeps a subset of the six
    components.
    """

    def __init__(
        self,
        name: str,
        gripper: Any,
        handle: Any,
        mask: Sequence[bool] = (True,) * 6,
    ):
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != (6,):
            raise ValueError(f"Mask must have 6 components, got {mask.size}")
        super().__init__(name, int(mask.sum()))
        self._gripper = gripper
        self._handle = handle
        self._mask = mask

    @property
    def mask(self) -> np.ndarray:
        return self._mask.copy()

    def value(self, q: np.ndarray) -> np.ndarray:
        relative = inverse(self._gripper.transform(q)) @ self._handle.transform(q)
        return log6(relative)[self._mask]
