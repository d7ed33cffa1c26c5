"""Path validation aware of the constraint graph."""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

import numpy as np

from ..constraints.constraint_set import EdgeConstraintSet
from ..constraints.errors import ProjectionFailure
from ..graph.errors import ClassificationFailure, ConstraintGraphError
from ..paths.path import Path, PathVector
from .base import PathValidation
from .reports import PathValidationReport, ReportCode

if TYPE_CHECKING:
    from ..graph.constraint_graph import Graph
    from ..graph.edge import Edge
    from ..graph.state import State

logger = logging.getLogger(__name__)


class CrossingPolicy(str, Enum):
    """What to keep when a truncated segment ends in an unexpected state."""

    ZERO_LENGTH = "zero_length"  # Nothing of the segment
    KEEP_VALID_PART = "keep_valid_part"  # The collision-free part anyway


class GraphPathValidation:
    """Validates paths against collisions and the constraint graph.

    Composite paths are validated segment by segment and cut at the first
    segment that is not fully valid. Each atomic segment is checked by the
    path validation of the edge it was generated along, or by the default
    validation when it does not refer to an edge.

    A segment that is fully accepted is trusted to stay on its edge: the
    graph is not consulted. When a segment is truncated, the states of the
    truncated and of the original end points are compared. The truncated part
    is kept only if both pairs of states match; otherwise the segment is cut
    down to a zero-length path (see ``CrossingPolicy``).
    """

    def __init__(
        self,
        path_validation: PathValidation,
        constraint_graph: "Graph | None" = None,
        crossing_policy: CrossingPolicy | str = CrossingPolicy.ZERO_LENGTH,
    ):
        self._path_validation = path_validation
        self._graph: "Graph | None" = None
        self._obstacles: list[Any] = []
        self._crossing_policy = CrossingPolicy(crossing_policy)
        if constraint_graph is not None:
            self.constraint_graph = constraint_graph

    @property
    def path_validation(self) -> PathValidation:
        """The default validation, for segments not generated along an edge."""
        return self._path_validation

    @property
    def constraint_graph(self) -> "Graph | None":
        return self._graph

    @constraint_graph.setter
    def constraint_graph(self, graph: "Graph") -> None:
        self._graph = graph
        for obstacle in self._obstacles:
            if obstacle not in graph.obstacles:
                graph.add_obstacle(obstacle)
        for obstacle in graph.obstacles:
            if obstacle not in self._obstacles:
                self._obstacles.append(obstacle)
                self._path_validation.add_obstacle(obstacle)

    @property
    def crossing_policy(self) -> CrossingPolicy:
        return self._crossing_policy

    def add_obstacle(self, obstacle: Any) -> None:
        """Register an obstacle on the default and on every edge validation."""
        self._obstacles.append(obstacle)
        self._path_validation.add_obstacle(obstacle)
        if self._graph is not None:
            self._graph.add_obstacle(obstacle)

    def validate(self, path: Path, reverse: bool = False) -> tuple[bool, Path]:
        """Validate a path.

        Args:
            path: The path to validate, atomic or composite.
            reverse: Traverse the path from its end.

        Returns:
            Whether the whole path is valid, and its longest valid part
            starting at the traversal start.
        """
        success, valid_part, _ = self.validate_with_report(path, reverse)
        return success, valid_part

    def validate_with_report(
        self, path: Path, reverse: bool = False
    ) -> tuple[bool, Path, PathValidationReport | None]:
        """Same as ``validate``, also returning why the path was cut."""
        if path is None:
            raise ValueError("Cannot validate a null path")
        if self._graph is None:
            raise ConstraintGraphError("No constraint graph set on the path validation")
        return self._validate(path, reverse)

    def _validate(
        self, path: Path, reverse: bool
    ) -> tuple[bool, Path, PathValidationReport | None]:
        if isinstance(path, PathVector):
            return self._validate_vector(path, reverse)
        return self._validate_segment(path, reverse)

    def _validate_vector(
        self, path: PathVector, reverse: bool
    ) -> tuple[bool, Path, PathValidationReport | None]:
        paths = path.paths
        ranks = range(len(paths) - 1, -1, -1) if reverse else range(len(paths))

        for rank in ranks:
            success, valid_sub_part, report = self._validate(paths[rank], reverse)
            if success:
                continue

            # Stop at the first segment that is not fully valid
            if reverse:
                kept = [valid_sub_part, *(p.copy() for p in paths[rank + 1 :])]
                length = sum(p.length for p in kept)
                valid_part = PathVector(kept, start=path.time_range[1] - length)
            else:
                kept = [*(p.copy() for p in paths[:rank]), valid_sub_part]
                valid_part = PathVector(kept, start=path.time_range[0])
            return False, valid_part, report

        return True, path, None

    def _validate_segment(
        self, path: Path, reverse: bool
    ) -> tuple[bool, Path, PathValidationReport | None]:
        edge = self._edge_of(path)
        if edge is not None:
            logger.debug(f"Using path validation of edge {edge.name}")
            validation = edge.path_validation()
        else:
            logger.debug("Using default path validation")
            validation = self._path_validation

        success, valid_part, report = validation.validate(path, reverse)
        if success:
            return True, path, None

        try:
            configurations = (
                self._configuration_at(valid_part, "initial"),
                self._configuration_at(valid_part, "end"),
                self._configuration_at(path, "initial"),
                self._configuration_at(path, "end"),
            )
        except ProjectionFailure as e:
            logger.error(f"Validation of {path!r} aborted: {e}")
            return False, self._zero_length(path, reverse), PathValidationReport(
                code=ReportCode.PROJECTION_FAILURE,
                message=str(e),
                edge=edge.name if edge else None,
                cause=report,
            )

        try:
            new_start, new_end, old_start, old_end = (
                self._graph.get_state(q) for q in configurations
            )
        except ClassificationFailure as e:
            return False, self._zero_length(path, reverse), self._classification_report(
                edge, e, report
            )

        if new_start is old_start and new_end is old_end:
            return False, valid_part, report

        # The valid part does not correspond to the same edge. No new path is
        # generated to recover from this.
        logger.info(
            f"Truncated path goes from {new_start.name} to {new_end.name} "
            f"instead of {old_start.name} to {old_end.name}"
        )
        crossing = PathValidationReport(
            code=ReportCode.STATE_CROSSING,
            message=(
                f"Valid part goes from {new_start.name} to {new_end.name}, "
                f"expected {old_start.name} to {old_end.name}"
            ),
            edge=edge.name if edge else None,
            cause=report,
            details={
                "valid_part_states": [new_start.name, new_end.name],
                "path_states": [old_start.name, old_end.name],
            },
        )
        if self._crossing_policy == CrossingPolicy.KEEP_VALID_PART:
            return False, valid_part, crossing
        return False, self._zero_length(path, reverse), crossing

    @staticmethod
    def _edge_of(path: Path) -> "Edge | None":
        constraints = path.constraints
        if isinstance(constraints, EdgeConstraintSet):
            return constraints.edge
        return None

    @staticmethod
    def _configuration_at(path: Path, which: str) -> np.ndarray:
        start, end = path.time_range
        q, success = path.eval(start if which == "initial" else end)
        if success:
            return q

        message = (
            f"{which.capitalize()} configuration of {path!r} failed to be "
            f"projected. q={np.array2string(q, precision=4)}"
        )
        error = None
        if path.constraints is not None:
            error = path.constraints.projector.error(q)
            message += f"; error={np.array2string(error, precision=4)}"
        raise ProjectionFailure(message, configuration=q, error=error)

    @staticmethod
    def _zero_length(path: Path, reverse: bool) -> Path:
        """Zero-length part of ``path`` at its traversal start."""
        start, end = path.time_range
        origin = end if reverse else start
        return path.extract(origin, origin)

    def _classification_report(
        self,
        edge: "Edge | None",
        error: ClassificationFailure,
        cause: PathValidationReport | None,
    ) -> PathValidationReport:
        # State constraints may hold within the threshold at the start of the
        # path while path constraints only bound a subset of them along it.
        # The sum of errors can then exceed the threshold of the state.
        edge_name = edge.name if edge else "(default)"
        state: "State | None" = edge.state if edge else None
        state_name = state.name if state else None
        logger.warning(f"Edge {edge_name} generated an error: {error}")
        logger.warning(
            "Likely, the constraints for paths are relaxed. If this problem "
            "occurs often, you may want to use the same constraints for state "
            f"and paths in {state_name or 'the edge state'}"
        )
        return PathValidationReport(
            code=ReportCode.CLASSIFICATION_FAILURE,
            message=str(error),
            edge=edge.name if edge else None,
            state=state_name,
            cause=cause,
        )
