"""Tests for sampled collision validation."""

import numpy as np
import pytest

from manipgraph.constraints.constraint_set import ConstraintSet
from manipgraph.constraints.projector import ConfigProjector, Constraint
from manipgraph.path_validation.discretized import DiscretizedCollisionValidation
from manipgraph.path_validation.obstacles import ConfigurationBox, JointSphere
from manipgraph.path_validation.reports import ReportCode
from manipgraph.paths.path import StraightPath
from manipgraph.robot.model import Joint, Robot

from ..conftest import Interval


@pytest.fixture
def wall():
    return ConfigurationBox("wall", [0], [0.45], [0.55])


@pytest.fixture
def path():
    return StraightPath([0.0, 0.0, 0.0], [1.0, 0.0, 0.0])


class TestDiscretizedCollisionValidation:
    """Tests for DiscretizedCollisionValidation."""

    def test_free_path(self, path):
        validation = DiscretizedCollisionValidation(0.1)

        success, valid_part, report = validation.validate(path)

        assert success
        assert valid_part is path
        assert report is None

    def test_stops_before_collision(self, path, wall):
        validation = DiscretizedCollisionValidation(0.1, [wall])

        success, valid_part, report = validation.validate(path)

        assert not success
        assert valid_part.time_range == pytest.approx((0.0, 0.4))
        assert report.code == ReportCode.COLLISION
        assert report.parameter == pytest.approx(0.5)
        assert report.details["obstacle"] == "wall"

    def test_reverse(self, path, wall):
        validation = DiscretizedCollisionValidation(0.1)
        validation.add_obstacle(wall)

        success, valid_part, _ = validation.validate(path, reverse=True)

        assert not success
        assert valid_part.time_range == pytest.approx((0.6, 1.0))

    def test_collision_at_start(self, wall):
        path = StraightPath([0.5, 0.0, 0.0], [1.0, 0.0, 0.0])

        success, valid_part, _ = DiscretizedCollisionValidation(0.1, [wall]).validate(path)

        assert not success
        assert valid_part.time_range == (0.0, 0.0)

    def test_projection_failure(self):
        projector = ConfigProjector(
            "contradiction",
            [Constraint(Interval(0, 2.0, 3.0)), Constraint(Interval(0, -3.0, -2.0))],
        )
        path = StraightPath([0.0, 0.0, 0.0], [1.0, 0.0, 0.0], constraints=ConstraintSet(projector))

        success, valid_part, report = DiscretizedCollisionValidation(0.1).validate(path)

        assert not success
        assert valid_part.length == 0.0
        assert report.code == ReportCode.PROJECTION_FAILURE
        assert report.parameter == 0.0

    def test_step_must_be_positive(self):
        with pytest.raises(ValueError):
            DiscretizedCollisionValidation(0.0)


class TestObstacles:
    """Tests for obstacle shapes."""

    def test_box_bounds_are_inclusive(self, wall):
        assert wall.collides(np.array([0.45, 3.0, 3.0]))
        assert wall.collides(np.array([0.55, 0.0, 0.0]))
        assert not wall.collides(np.array([0.56, 0.0, 0.0]))

    def test_box_bounds_must_match_indices(self):
        with pytest.raises(ValueError):
            ConfigurationBox("bad", [0, 1], [0.0], [1.0])

    def test_joint_sphere(self):
        robot = Robot("r", [Joint("base", "translation"), Joint("tool", "translation")])
        sphere = JointSphere("ball", robot.joint("tool"), [1.0, 0.0, 0.0], 0.5)

        assert sphere.collides(np.array([5.0, 5.0, 5.0, 1.2, 0.0, 0.0]))
        assert not sphere.collides(np.array([1.0, 0.0, 0.0, 0.0, 0.0, 0.0]))
