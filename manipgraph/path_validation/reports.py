"""Reports explaining why a path is not fully valid."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ReportCode(str, Enum):
    """Reason a path was truncated."""

    COLLISION = "COLLISION"
    PROJECTION_FAILURE = "PROJECTION_FAILURE"
    CLASSIFICATION_FAILURE = "CLASSIFICATION_FAILURE"
    STATE_CROSSING = "STATE_CROSSING"


@dataclass
class PathValidationReport:
    """Why and where a path stopped being valid."""

    code: ReportCode
    message: str
    parameter: float | None = None
    edge: str | None = None
    state: str | None = None
    cause: "PathValidationReport | None" = None
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        location = ""
        if self.edge:
            location = f" [{self.edge}"
            if self.state:
                location += f" in {self.state}"
            location += "]"
        at = f" at t={self.parameter:g}" if self.parameter is not None else ""
        return f"{self.code.value}{location}{at} - {self.message}"
