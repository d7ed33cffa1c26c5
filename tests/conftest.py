"""Shared fixtures for tests."""

from pathlib import Path

import numpy as np
import pytest

from manipgraph.constraints.functions import DifferentiableFunction
from manipgraph.constraints.projector import Constraint
from manipgraph.graph.builder import build_graph
from manipgraph.graph.constraint_graph import Graph
from manipgraph.robot.model import Joint, Robot
from manipgraph.schema.loader import parse_graph_model_from_string


class LowerBound(DifferentiableFunction):
    """How far configuration variable ``index`` is below ``bound``."""

    def __init__(self, index: int, bound: float):
        super().__init__(f"q[{index}] >= {bound}", 1)
        self.index = index
        self.bound = bound

    def value(self, q):
        return np.array([max(0.0, self.bound - q[self.index])])


class Interval(DifferentiableFunction):
    """How far configuration variable ``index`` is outside ``[low, high]``."""

    def __init__(self, index: int, low: float, high: float):
        super().__init__(f"{low} <= q[{index}] <= {high}", 1)
        self.index = index
        self.low = low
        self.high = high

    def value(self, q):
        x = q[self.index]
        return np.array([max(0.0, self.low - x, x - self.high)])


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def point_robot() -> Robot:
    """A single point moving in space."""
    return Robot("point", [Joint("point", "translation")])


@pytest.fixture
def make_graph(point_robot):
    """Build a small grasping graph over a point robot.

    States, in classification order: Hovering (0.4 <= x <= 0.6, only when
    ``hovering`` is set), Grasped (x >= 0.4) and Free (anything, unless
    ``free`` is unset). Edges: move (Free -> Free), approach
    (Free -> Grasped) and lift (Grasped -> Grasped). Paths along move and
    approach stay in Free, so evaluating them never projects.

    ``factories`` maps edge names to path validation factories.
    """

    def _make(factories=None, hovering=False, free=True, **graph_options) -> Graph:
        factories = factories or {}
        graph = Graph("grasping", point_robot, **graph_options)
        selector = graph.create_node_selector("gripper")
        if hovering:
            selector.create_state("Hovering", [Constraint(Interval(0, 0.4, 0.6))])
        grasped = selector.create_state("Grasped", [Constraint(LowerBound(0, 0.4))])
        if free:
            free_state = selector.create_state("Free", initial=True)
            free_state.link_to(
                "move",
                free_state,
                in_source_state=True,
                path_validation_factory=factories.get("move"),
            )
            free_state.link_to(
                "approach",
                grasped,
                kind="grasp",
                in_source_state=True,
                path_validation_factory=factories.get("approach"),
            )
        grasped.link_to(
            "lift",
            grasped,
            kind="transfer",
            path_validation_factory=factories.get("lift"),
        )
        return graph

    return _make


@pytest.fixture
def pick_and_place_yaml(examples_dir) -> str:
    """Return the pick and place example graph."""
    return (examples_dir / "pick_and_place.yaml").read_text()


@pytest.fixture
def pick_and_place_model(pick_and_place_yaml):
    """Return the parsed pick and place model."""
    return parse_graph_model_from_string(pick_and_place_yaml)


@pytest.fixture
def pick_and_place_graph(pick_and_place_model):
    """Return the graph built from the pick and place model."""
    return build_graph(pick_and_place_model)
