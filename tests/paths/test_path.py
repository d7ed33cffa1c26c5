"""Tests for straight paths and path vectors."""

import numpy as np
import pytest

from manipgraph.constraints.constraint_set import ConstraintSet
from manipgraph.constraints.projector import ConfigProjector, Constraint
from manipgraph.paths.path import PathVector, StraightPath

from ..conftest import LowerBound


@pytest.fixture
def vector():
    return PathVector(
        [
            StraightPath([0.0], [1.0], (0.0, 1.0)),
            StraightPath([1.0], [1.0], (0.0, 0.5)),
            StraightPath([1.0], [3.0], (2.0, 4.0)),
        ]
    )


class TestStraightPath:
    """Tests for StraightPath."""

    def test_interpolation(self):
        path = StraightPath([0.0, 2.0], [1.0, 0.0], (1.0, 3.0))

        q, success = path.eval(2.0)

        assert success
        assert q == pytest.approx([0.5, 1.0])
        assert path.length == 2.0

    def test_eval_outside_range(self):
        with pytest.raises(ValueError):
            StraightPath([0.0], [1.0]).eval(1.5)

    def test_extract_keeps_parameters(self):
        path = StraightPath([0.0], [1.0], (0.0, 2.0))

        part = path.extract(0.5, 1.0)

        assert part.time_range == (0.5, 1.0)
        assert part.initial() == pytest.approx([0.25])
        assert part.end() == pytest.approx([0.5])

    def test_zero_length_extract(self):
        part = StraightPath([0.0], [1.0]).extract(1.0, 1.0)

        assert part.length == 0.0
        assert part.eval(1.0)[0] == pytest.approx([1.0])

    def test_constraints_are_applied(self):
        constraints = ConstraintSet(ConfigProjector("above", [Constraint(LowerBound(0, 0.5))]))
        path = StraightPath([0.0], [1.0], constraints=constraints)

        q, success = path.eval(0.0)

        assert success
        assert q[0] == pytest.approx(0.5, abs=1e-4)
        assert path.extract(0.0, 0.5).constraints is constraints

    def test_size_mismatch(self):
        with pytest.raises(ValueError):
            StraightPath([0.0], [1.0, 2.0])


class TestPathVector:
    """Tests for PathVector."""

    def test_segments_are_laid_end_to_end(self, vector):
        assert vector.time_range == (0.0, 3.5)
        assert vector.number_paths() == 3
        assert vector.path_at_rank(2).time_range == (2.0, 4.0)

    def test_eval_maps_to_segment_parameters(self, vector):
        assert vector.eval(0.5)[0] == pytest.approx([0.5])
        assert vector.eval(1.25)[0] == pytest.approx([1.0])
        assert vector.eval(2.5)[0] == pytest.approx([2.0])
        assert vector.initial() == pytest.approx([0.0])
        assert vector.end() == pytest.approx([3.0])

    def test_extract_across_segments(self, vector):
        part = vector.extract(0.5, 2.5)

        assert part.time_range == pytest.approx((0.5, 2.5))
        assert part.number_paths() == 3
        assert part.initial() == pytest.approx([0.5])
        assert part.end() == pytest.approx([2.0])

    def test_zero_length_extract(self, vector):
        part = vector.extract(1.0, 1.0)

        assert part.length == 0.0
        assert part.time_range == (1.0, 1.0)

    def test_copy_is_independent(self, vector):
        copy = vector.copy()

        assert copy is not vector
        assert copy.time_range == vector.time_range
        assert np.allclose(copy.end(), vector.end())

    def test_explicit_start(self):
        vector = PathVector([StraightPath([0.0], [1.0])], start=2.0)

        assert vector.time_range == (2.0, 3.0)
        assert vector.eval(2.5)[0] == pytest.approx([0.5])
