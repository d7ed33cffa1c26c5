"""Pydantic models for constraint graph and path files."""

from typing import Literal

from pydantic import BaseModel, Field, model_validator


class Parameters(BaseModel):
    """Numerical parameters shared by the whole graph."""

    max_iterations: int = Field(default=40, gt=0)
    error_threshold: float = Field(default=1e-4, gt=0)
    validation_step: float = Field(default=0.05, gt=0)
    seed: int | None = None


class JointSpec(BaseModel):
    """A joint of the robot."""

    name: str
    type: Literal["translation", "freeflyer"] = "freeflyer"


class RobotSpec(BaseModel):
    """The robot, as an ordered list of joints."""

    name: str = "robot"
    joints: list[JointSpec] = Field(default_factory=list)


class FrameSpec(BaseModel):
    """A gripper or handle frame attached to a joint (or to the world)."""

    name: str
    joint: str | None = None
    position: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])
    rpy: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])


class ConstraintSpec(BaseModel):
    """A named numerical constraint."""

    name: str
    type: Literal["grasp", "pre_grasp", "pre_grasp_complement", "locked_joint"]
    gripper: str | None = None
    handle: str | None = None
    joint: str | None = None
    shift: float = 0.0
    value: list[float] | None = None
    parametric: bool = False

    @model_validator(mode="after")
    def check_required_fields(self) -> "ConstraintSpec":
        """Each constraint type needs its own references."""
        if self.type == "locked_joint":
            if self.joint is None:
                raise ValueError(f"locked_joint '{self.name}' requires 'joint'")
            if self.value is None and not self.parametric:
                raise ValueError(
                    f"locked_joint '{self.name}' requires 'value' unless parametric"
                )
        elif self.gripper is None or self.handle is None:
            raise ValueError(f"{self.type} '{self.name}' requires 'gripper' and 'handle'")
        return self


class StateSpec(BaseModel):
    """A state and the names of its constraints."""

    name: str
    initial: bool = False
    constraints: list[str] = Field(default_factory=list)


class NodeSelectorSpec(BaseModel):
    """An ordered group of states."""

    name: str
    states: list[StateSpec] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_states(cls, data: dict) -> dict:
        """Normalize states given as bare names."""
        if isinstance(data, dict):
            states = data.get("states") or []
            data["states"] = [{"name": s} if isinstance(s, str) else s for s in states]
        return data


class EdgeSpec(BaseModel):
    """A transition between states."""

    name: str
    from_states: list[str] = Field(alias="from")
    to: str
    kind: Literal["transit", "transfer", "grasp", "release"] = "transit"
    path_constraints: list[str] = Field(default_factory=list)
    in_source_state: bool = False
    validation_step: float | None = Field(default=None, gt=0)

    @model_validator(mode="before")
    @classmethod
    def normalize_from_states(cls, data: dict) -> dict:
        """Normalize from to always be a list."""
        if isinstance(data, dict):
            from_val = data.get("from")
            if from_val is not None and not isinstance(from_val, list):
                data["from"] = [from_val]
        return data

    def edge_names(self) -> list[tuple[str, str]]:
        """Pairs of (edge name, source state), one edge per source."""
        if len(self.from_states) == 1:
            return [(self.name, self.from_states[0])]
        return [(f"{self.name}:{source}", source) for source in self.from_states]


class ObstacleSpec(BaseModel):
    """An obstacle for collision validation."""

    name: str
    type: Literal["box", "sphere"]
    indices: list[int] = Field(default_factory=list)
    lower: list[float] = Field(default_factory=list)
    upper: list[float] = Field(default_factory=list)
    joint: str | None = None
    center: list[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0])
    radius: float = 0.0

    @model_validator(mode="after")
    def check_shape(self) -> "ObstacleSpec":
        if self.type == "box":
            if not (len(self.indices) == len(self.lower) == len(self.upper)):
                raise ValueError(f"box '{self.name}' needs matching indices, lower, upper")
        elif self.joint is None or self.radius <= 0:
            raise ValueError(f"sphere '{self.name}' requires 'joint' and a positive 'radius'")
        return self


class GraphModel(BaseModel):
    """Root model for a constraint graph YAML file."""

    name: str = "graph"
    parameters: Parameters = Field(default_factory=Parameters)
    robot: RobotSpec = Field(default_factory=RobotSpec)
    grippers: list[FrameSpec] = Field(default_factory=list)
    handles: list[FrameSpec] = Field(default_factory=list)
    constraints: list[ConstraintSpec] = Field(default_factory=list)
    global_constraints: list[str] = Field(default_factory=list)
    node_selectors: list[NodeSelectorSpec] = Field(default_factory=list)
    edges: list[EdgeSpec] = Field(default_factory=list)
    obstacles: list[ObstacleSpec] = Field(default_factory=list)

    def get_all_state_names(self) -> list[str]:
        """Get all state names, in declaration order."""
        return [s.name for sel in self.node_selectors for s in sel.states]


class SegmentSpec(BaseModel):
    """A straight segment of a path file."""

    start: list[float]
    end: list[float]
    edge: str | None = None
    length: float = Field(default=1.0, ge=0)


class PathModel(BaseModel):
    """Root model for a path YAML file."""

    segments: list[SegmentSpec] = Field(min_length=1)
