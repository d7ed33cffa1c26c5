"""Path validation by sampling configurations along the path."""

import logging
import math
from typing import Any, Iterable

import numpy as np

from ..paths.path import Path
from .base import PathValidation
from .reports import PathValidationReport, ReportCode

logger = logging.getLogger(__name__)


class DiscretizedCollisionValidation(PathValidation):
    """Checks configurations sampled every ``step`` against obstacles.

    The valid part ends at the last collision-free sample. A sample whose
    configuration cannot be computed ends the valid part as well.
    """

    def __init__(self, step: float = 0.05, obstacles: Iterable[Any] = ()):
        if step <= 0:
            raise ValueError(f"Validation step must be positive, got {step}")
        self._step = step
        self._obstacles = list(obstacles)

    @property
    def step(self) -> float:
        return self._step

    @property
    def obstacles(self) -> tuple[Any, ...]:
        return tuple(self._obstacles)

    def add_obstacle(self, obstacle: Any) -> None:
        self._obstacles.append(obstacle)

    def _parameters(self, path: Path, reverse: bool) -> np.ndarray:
        start, end = path.time_range
        count = max(1, math.ceil(path.length / self._step))
        params = np.linspace(start, end, count + 1)
        return params[::-1] if reverse else params

    def _first_collision(self, q: np.ndarray) -> Any | None:
        for obstacle in self._obstacles:
            if obstacle.collides(q):
                return obstacle
        return None

    def validate(
        self, path: Path, reverse: bool = False
    ) -> tuple[bool, Path, PathValidationReport | None]:
        last_valid = None
        report = None
        for t in self._parameters(path, reverse):
            t = float(t)
            q, success = path.eval(t)
            if not success:
                report = PathValidationReport(
                    code=ReportCode.PROJECTION_FAILURE,
                    message="Configuration could not be projected",
                    parameter=t,
                    details={"configuration": q.tolist()},
                )
                break
            obstacle = self._first_collision(q)
            if obstacle is not None:
                report = PathValidationReport(
                    code=ReportCode.COLLISION,
                    message=f"Collision with obstacle '{obstacle.name}'",
                    parameter=t,
                    details={"obstacle": obstacle.name, "configuration": q.tolist()},
                )
                break
            last_valid = t

        if report is None:
            return True, path, None

        logger.debug(f"Path {path!r} invalid: {report}")
        start, end = path.time_range
        if last_valid is None:
            origin = end if reverse else start
            return False, path.extract(origin, origin), report
        if reverse:
            return False, path.extract(last_valid, end), report
        return False, path.extract(start, last_valid), report
