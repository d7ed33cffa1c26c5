"""Atomic and composite paths in configuration space."""

from abc import ABC, abstractmethod
from typing import Iterable, Sequence

import numpy as np

from ..constraints.constraint_set import ConstraintSet

_TIME_TOLERANCE = 1e-9


class Path(ABC):
    """A continuous motion defined over a closed time interval."""

    def __init__(
        self,
        time_range: tuple[float, float],
        constraints: ConstraintSet | None = None,
    ):
        start, end = float(time_range[0]), float(time_range[1])
        if end < start:
            raise ValueError(f"Invalid time range ({start}, {end})")
        self._time_range = (start, end)
        self._constraints = constraints

    @property
    def time_range(self) -> tuple[float, float]:
        return self._time_range

    @property
    def length(self) -> float:
        return self._time_range[1] - self._time_range[0]

    @property
    def constraints(self) -> ConstraintSet | None:
        """Constraints the path was generated under, if any."""
        return self._constraints

    def _check_time(self, t: float) -> float:
        start, end = self._time_range
        if t < start - _TIME_TOLERANCE or t > end + _TIME_TOLERANCE:
            raise ValueError(f"Parameter {t} outside of time range ({start}, {end})")
        return min(max(t, start), end)

    @abstractmethod
    def eval(self, t: float) -> tuple[np.ndarray, bool]:
        """Configuration at time ``t`` and whether it could be computed."""

    @abstractmethod
    def initial(self) -> np.ndarray:
        """Initial configuration."""

    @abstractmethod
    def end(self) -> np.ndarray:
        """End configuration."""

    @abstractmethod
    def extract(self, t0: float, t1: float) -> "Path":
        """Sub-path over ``[t0, t1]``."""

    @abstractmethod
    def copy(self) -> "Path":
        pass


class StraightPath(Path):
    """Linear interpolation between two configurations.

    When constraints are attached, every evaluated configuration is projected
    onto them, so evaluation may fail.
    """

    def __init__(
        self,
        initial: Sequence[float],
        end: Sequence[float],
        time_range: tuple[float, float] = (0.0, 1.0),
        constraints: ConstraintSet | None = None,
    ):
        super().__init__(time_range, constraints)
        self._initial = np.array(initial, dtype=float)
        self._end = np.array(end, dtype=float)
        if self._initial.shape != self._end.shape:
            raise ValueError(
                f"Configuration sizes differ: {self._initial.size} and {self._end.size}"
            )

    def _interpolate(self, t: float) -> np.ndarray:
        start, _ = self._time_range
        if self.length == 0.0:
            return self._initial.copy()
        s = (t - start) / self.length
        return (1.0 - s) * self._initial + s * self._end

    def eval(self, t: float) -> tuple[np.ndarray, bool]:
        q = self._interpolate(self._check_time(t))
        if self._constraints is None:
            return q, True
        return self._constraints.apply(q)

    def initial(self) -> np.ndarray:
        return self._initial.copy()

    def end(self) -> np.ndarray:
        return self._end.copy()

    def extract(self, t0: float, t1: float) -> "StraightPath":
        t0, t1 = self._check_time(t0), self._check_time(t1)
        if t1 < t0:
            raise ValueError(f"Cannot extract reversed interval ({t0}, {t1})")
        return StraightPath(
            self._interpolate(t0),
            self._interpolate(t1),
            (t0, t1),
            self._constraints,
        )

    def copy(self) -> "StraightPath":
        return StraightPath(self._initial, self._end, self._time_range, self._constraints)

    def __repr__(self) -> str:
        start, end = self._time_range
        return f"StraightPath([{start:g}, {end:g}])"


class PathVector(Path):
    """Concatenation of paths, laid end to end in time.

    The vector starts at ``start`` (default: the start of its first path)
    and each sub-path occupies a slot as long as itself.
    """

    def __init__(self, paths: Iterable[Path], start: float | None = None):
        self._paths = list(paths)
        if start is None:
            start = self._paths[0].time_range[0] if self._paths else 0.0
        total = sum(p.length for p in self._paths)
        super().__init__((start, start + total))

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(self._paths)

    def number_paths(self) -> int:
        return len(self._paths)

    def path_at_rank(self, rank: int) -> Path:
        return self._paths[rank]

    def _locate(self, t: float) -> tuple[Path, float]:
        """Sub-path containing ``t`` and the matching local parameter."""
        if not self._paths:
            raise ValueError("Cannot evaluate an empty path vector")
        offset = self._time_range[0]
        for path in self._paths:
            if t <= offset + path.length or path is self._paths[-1]:
                local = min(max(t - offset, 0.0), path.length)
                return path, path.time_range[0] + local
            offset += path.length
        raise AssertionError("unreachable")

    def eval(self, t: float) -> tuple[np.ndarray, bool]:
        path, local = self._locate(self._check_time(t))
        return path.eval(local)

    def initial(self) -> np.ndarray:
        return self._paths[0].initial()

    def end(self) -> np.ndarray:
        return self._paths[-1].end()

    def extract(self, t0: float, t1: float) -> "PathVector":
        t0, t1 = self._check_time(t0), self._check_time(t1)
        if t1 < t0:
            raise ValueError(f"Cannot extract reversed interval ({t0}, {t1})")
        if t0 == t1:
            path, local = self._locate(t0)
            return PathVector([path.extract(local, local)], start=t0)

        pieces = []
        offset = self._time_range[0]
        for path in self._paths:
            lower, upper = offset, offset + path.length
            offset = upper
            if upper <= t0 or lower >= t1:
                continue
            local_start = path.time_range[0] + max(t0, lower) - lower
            local_end = path.time_range[0] + min(t1, upper) - lower
            pieces.append(path.extract(local_start, local_end))
        return PathVector(pieces, start=t0)

    def copy(self) -> "PathVector":
        return PathVector([p.copy() for p in self._paths], start=self._time_range[0])

    def __repr__(self) -> str:
        start, end = self._time_range
        return f"PathVector([{start:g}, {end:g}], {len(self._paths)} paths)"
