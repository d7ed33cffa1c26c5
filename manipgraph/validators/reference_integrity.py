"""Reference integrity validator."""

from collections import Counter

from ..schema.models import GraphModel
from .base import ValidationResult


def _check_duplicates(result: ValidationResult, kind: str, names: list[str]) -> None:
    for name, count in Counter(names).items():
        if count > 1:
            result.add_error(
                code="DUPLICATE_NAME",
                message=f"{kind.capitalize()} '{name}' is defined {count} times",
                kind=kind,
                name=name,
            )


def check_reference_integrity(model: GraphModel) -> ValidationResult:
    """Check that all references resolve to defined names.

    This validator checks:
    - Names of joints, frames, constraints, states and edges are unique
    - Frames, constraints and obstacles reference defined joints
    - Constraints reference defined grippers and handles
    - States, edges and global constraints reference defined constraints
    - Edges reference defined states

    Args:
        model: The parsed graph model.

    Returns:
        ValidationResult with errors for broken references.
    """
    result = ValidationResult()

    joint_names = [j.name for j in model.robot.joints]
    gripper_names = [g.name for g in model.grippers]
    handle_names = [h.name for h in model.handles]
    constraint_names = [c.name for c in model.constraints]
    state_names = model.get_all_state_names()
    edge_names = [name for e in model.edges for name, _ in e.edge_names()]

    _check_duplicates(result, "joint", joint_names)
    _check_duplicates(result, "gripper", gripper_names)
    _check_duplicates(result, "handle", handle_names)
    _check_duplicates(result, "constraint", constraint_names)
    _check_duplicates(result, "state", state_names)
    _check_duplicates(result, "edge", edge_names)

    joints = set(joint_names)
    for frame in [*model.grippers, *model.handles]:
        if frame.joint is not None and frame.joint not in joints:
            result.add_error(
                code="UNDEFINED_JOINT_REF",
                message=f"Frame '{frame.name}' references undefined joint '{frame.joint}'",
                referenced_joint=frame.joint,
            )

    for constraint in model.constraints:
        if constraint.joint is not None and constraint.joint not in joints:
            result.add_error(
                code="UNDEFINED_JOINT_REF",
                message=f"Constraint '{constraint.name}' references undefined joint '{constraint.joint}'",
                referenced_joint=constraint.joint,
            )
        if constraint.gripper is not None and constraint.gripper not in gripper_names:
            result.add_error(
                code="UNDEFINED_GRIPPER_REF",
                message=f"Constraint '{constraint.name}' references undefined gripper '{constraint.gripper}'",
                referenced_gripper=constraint.gripper,
            )
        if constraint.handle is not None and constraint.handle not in handle_names:
            result.add_error(
                code="UNDEFINED_HANDLE_REF",
                message=f"Constraint '{constraint.name}' references undefined handle '{constraint.handle}'",
                referenced_handle=constraint.handle,
            )

    for obstacle in model.obstacles:
        if obstacle.joint is not None and obstacle.joint not in joints:
            result.add_error(
                code="UNDEFINED_JOINT_REF",
                message=f"Obstacle '{obstacle.name}' references undefined joint '{obstacle.joint}'",
                referenced_joint=obstacle.joint,
            )

    constraints = set(constraint_names)
    for name in model.global_constraints:
        if name not in constraints:
            result.add_error(
                code="UNDEFINED_CONSTRAINT_REF",
                message=f"Global constraint '{name}' is not defined",
                referenced_constraint=name,
            )

    for selector in model.node_selectors:
        for state in selector.states:
            for name in state.constraints:
                if name not in constraints:
                    result.add_error(
                        code="UNDEFINED_CONSTRAINT_REF",
                        message=f"State references undefined constraint '{name}'",
                        state=state.name,
                        referenced_constraint=name,
                    )

    states = set(state_names)
    for edge in model.edges:
        for name in edge.path_constraints:
            if name not in constraints:
                result.add_error(
                    code="UNDEFINED_CONSTRAINT_REF",
                    message=f"Edge references undefined constraint '{name}'",
                    edge=edge.name,
                    referenced_constraint=name,
                )

        # Check source and target states
        for source in edge.from_states:
            if source not in states:
                result.add_error(
                    code="UNDEFINED_STATE_REF",
                    message=f"Edge references undefined source state '{source}'",
                    edge=edge.name,
                    state=source,
                )
        if edge.to not in states:
            result.add_error(
                code="UNDEFINED_STATE_REF",
                message=f"Edge references undefined target state '{edge.to}'",
                edge=edge.name,
                state=edge.to,
            )

    return result
