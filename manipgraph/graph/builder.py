"""Builder for converting a GraphModel into a constraint Graph."""

from functools import partial

import numpy as np

from ..constraints.functions import LockedJoint
from ..constraints.projector import Constraint
from ..constraints.transforms import make_transform
from ..path_validation.discretized import DiscretizedCollisionValidation
from ..path_validation.obstacles import ConfigurationBox, JointSphere
from ..paths.path import Path, PathVector, StraightPath
from ..robot.handle import Gripper, Handle
from ..robot.model import Joint, Robot
from ..schema.models import ConstraintSpec, FrameSpec, GraphModel, PathModel
from .constraint_graph import Graph
from .errors import GraphConstructionError


def build_robot(model: GraphModel) -> Robot:
    """Build the robot described by a GraphModel."""
    return Robot(
        model.robot.name,
        [Joint(spec.name, spec.type) for spec in model.robot.joints],
    )


def _joint(robot: Robot, name: str | None) -> Joint | None:
    if name is None:
        return None
    joint = robot.joint(name)
    if joint is None:
        raise GraphConstructionError(f"Undefined joint '{name}'")
    return joint


def _frame(spec: FrameSpec, robot: Robot) -> tuple[str, np.ndarray, Joint | None]:
    if len(spec.position) != 3 or len(spec.rpy) != 3:
        raise GraphConstructionError(f"Frame '{spec.name}' needs 3 position and 3 rpy values")
    return spec.name, make_transform(spec.position, spec.rpy), _joint(robot, spec.joint)


def _build_constraint(
    spec: ConstraintSpec,
    robot: Robot,
    grippers: dict[str, Gripper],
    handles: dict[str, Handle],
) -> Constraint:
    if spec.type == "locked_joint":
        joint = _joint(robot, spec.joint)
        if spec.value is not None and len(spec.value) != joint.config_size:
            raise GraphConstructionError(
                f"Constraint '{spec.name}' locks joint '{joint.name}' of size "
                f"{joint.config_size} with {len(spec.value)} values"
            )
        return Constraint(
            LockedJoint(joint, spec.name), spec.value, parametric=spec.parametric
        )

    try:
        gripper = grippers[spec.gripper]
        handle = handles[spec.handle]
    except KeyError as e:
        raise GraphConstructionError(
            f"Constraint '{spec.name}' references undefined {e.args[0]!r}"
        ) from None

    if spec.type == "grasp":
        constraint = handle.create_grasp(gripper)
    elif spec.type == "pre_grasp":
        constraint = handle.create_pre_grasp(gripper)
    else:
        constraint = handle.create_pre_grasp_complement(gripper, spec.shift)
    return Constraint(constraint.function, constraint.rhs, parametric=spec.parametric)


def build_graph(model: GraphModel) -> Graph:
    """Build a Graph from a GraphModel.

    Args:
        model: The parsed graph model.

    Returns:
        The constraint graph, states ordered as declared.

    Raises:
        GraphConstructionError: If the model references undefined names.
    """
    robot = build_robot(model)
    params = model.parameters
    graph = Graph(
        model.name,
        robot,
        max_iterations=params.max_iterations,
        error_threshold=params.error_threshold,
        seed=params.seed,
        validation_step=params.validation_step,
    )

    grippers = {g.name: Gripper(*_frame(g, robot)) for g in model.grippers}
    handles = {h.name: Handle(*_frame(h, robot)) for h in model.handles}
    constraints = {
        spec.name: _build_constraint(spec, robot, grippers, handles)
        for spec in model.constraints
    }

    def resolve(names: list[str]) -> list[Constraint]:
        missing = [n for n in names if n not in constraints]
        if missing:
            raise GraphConstructionError(f"Undefined constraint(s): {', '.join(missing)}")
        return [constraints[n] for n in names]

    for constraint in resolve(model.global_constraints):
        graph.add_global_constraint(constraint)

    # Add all states first
    for selector_spec in model.node_selectors:
        selector = graph.create_node_selector(selector_spec.name)
        for state_spec in selector_spec.states:
            selector.create_state(
                state_spec.name,
                resolve(state_spec.constraints),
                initial=state_spec.initial,
            )

    for edge_spec in model.edges:
        to_state = graph.get_state_by_name(edge_spec.to)
        if to_state is None:
            raise GraphConstructionError(f"Edge '{edge_spec.name}' targets undefined state '{edge_spec.to}'")
        factory = None
        if edge_spec.validation_step is not None:
            factory = partial(DiscretizedCollisionValidation, edge_spec.validation_step)

        for edge_name, source in edge_spec.edge_names():
            from_state = graph.get_state_by_name(source)
            if from_state is None:
                raise GraphConstructionError(f"Edge '{edge_name}' leaves undefined state '{source}'")
            from_state.link_to(
                edge_name,
                to_state,
                path_constraints=resolve(edge_spec.path_constraints),
                kind=edge_spec.kind,
                in_source_state=edge_spec.in_source_state,
                path_validation_factory=factory,
            )

    return graph


def build_obstacles(model: GraphModel, robot: Robot) -> list:
    """Build the obstacles of a GraphModel."""
    obstacles = []
    for spec in model.obstacles:
        if spec.type == "box":
            if any(i < 0 or i >= robot.config_size for i in spec.indices):
                raise GraphConstructionError(f"Box '{spec.name}' indexes outside the configuration")
            obstacles.append(ConfigurationBox(spec.name, spec.indices, spec.lower, spec.upper))
        else:
            obstacles.append(
                JointSphere(spec.name, _joint(robot, spec.joint), spec.center, spec.radius)
            )
    return obstacles


def build_path(model: PathModel, graph: Graph) -> Path:
    """Build a path from a PathModel.

    Segments are laid end to end. A segment naming an edge carries the path
    constraints of that edge, on the leaf of its start configuration.

    Args:
        model: The parsed path model.
        graph: The graph the edges belong to.

    Returns:
        A StraightPath for a single segment, a PathVector otherwise.
    """
    size = graph.robot.config_size
    segments = []
    t = 0.0
    for index, spec in enumerate(model.segments):
        if len(spec.start) != size or len(spec.end) != size:
            raise GraphConstructionError(
                f"Segment {index} has configurations of size "
                f"{len(spec.start)}/{len(spec.end)}, expected {size}"
            )
        constraints = None
        if spec.edge is not None:
            edge = graph.get_edge_by_name(spec.edge)
            if edge is None:
                raise GraphConstructionError(f"Segment {index} references undefined edge '{spec.edge}'")
            constraints = edge.path_constraint(spec.start)
        segments.append(StraightPath(spec.start, spec.end, (t, t + spec.length), constraints))
        t += spec.length

    if len(segments) == 1:
        return segments[0]
    return PathVector(segments)
