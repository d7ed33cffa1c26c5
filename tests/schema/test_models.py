"""Tests for schema models."""

import pytest
from pydantic import ValidationError

from manipgraph.schema.models import (
    ConstraintSpec,
    EdgeSpec,
    NodeSelectorSpec,
    ObstacleSpec,
    Parameters,
)


class TestParameters:
    def test_defaults(self):
        params = Parameters()

        assert params.max_iterations == 40
        assert params.error_threshold == pytest.approx(1e-4)
        assert params.validation_step == pytest.approx(0.05)
        assert params.seed is None

    @pytest.mark.parametrize("field", ["max_iterations", "error_threshold", "validation_step"])
    def test_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Parameters(**{field: 0})


class TestConstraintSpec:
    def test_grasp_requires_frames(self):
        with pytest.raises(ValidationError) as exc_info:
            ConstraintSpec(name="grasp", type="grasp", gripper="hand")
        assert "requires 'gripper' and 'handle'" in str(exc_info.value)

    def test_locked_joint_requires_joint(self):
        with pytest.raises(ValidationError):
            ConstraintSpec(name="lock", type="locked_joint", value=[0.0])

    def test_locked_joint_requires_value_unless_parametric(self):
        with pytest.raises(ValidationError):
            ConstraintSpec(name="lock", type="locked_joint", joint="box")

        spec = ConstraintSpec(name="lock", type="locked_joint", joint="box", parametric=True)
        assert spec.value is None

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            ConstraintSpec(name="weld", type="weld")


class TestNodeSelectorSpec:
    def test_states_as_names(self):
        selector = NodeSelectorSpec(name="hand", states=["free", {"name": "grasp", "initial": True}])

        assert [s.name for s in selector.states] == ["free", "grasp"]
        assert selector.states[1].initial


class TestEdgeSpec:
    def test_single_source(self):
        edge = EdgeSpec.model_validate({"name": "move", "from": "free", "to": "free"})

        assert edge.from_states == ["free"]
        assert edge.edge_names() == [("move", "free")]
        assert edge.kind == "transit"

    def test_multiple_sources(self):
        edge = EdgeSpec.model_validate({"name": "home", "from": ["a", "b"], "to": "c"})

        assert edge.edge_names() == [("home:a", "a"), ("home:b", "b")]

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            EdgeSpec.model_validate({"name": "x", "from": "a", "to": "b", "kind": "teleport"})


class TestObstacleSpec:
    def test_box_shape(self):
        with pytest.raises(ValidationError):
            ObstacleSpec(name="wall", type="box", indices=[0, 1], lower=[0.0], upper=[1.0, 1.0])

    def test_sphere_requires_radius(self):
        with pytest.raises(ValidationError):
            ObstacleSpec(name="ball", type="sphere", joint="box")

