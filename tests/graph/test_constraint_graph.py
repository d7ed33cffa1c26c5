"""Tests for the constraint graph."""

import gc

import numpy as np
import pytest

from manipgraph.constraints.constraint_set import ConstraintSet, EdgeConstraintSet
from manipgraph.constraints.functions import LockedJoint
from manipgraph.constraints.projector import Constraint
from manipgraph.graph.constraint_graph import Graph
from manipgraph.graph.errors import (
    ClassificationFailure,
    ConstraintGraphError,
    GraphConstructionError,
)
from manipgraph.graph.node_types import EdgeType
from manipgraph.robot.model import Joint, Robot

from ..conftest import LowerBound


def point(x):
    return np.array([x, 0.0, 0.0])


class TestConstruction:
    """Tests for building graphs."""

    def test_components_have_stable_ids(self, make_graph):
        graph = make_graph()

        for component_id, component in enumerate(graph._components):
            assert component.id == component_id
            assert graph.get_component(component_id) is component

    def test_edges_refer_to_their_states(self, make_graph):
        graph = make_graph()
        approach = graph.get_edge_by_name("approach")

        assert approach.from_state is graph.get_state_by_name("Free")
        assert approach.to_state is graph.get_state_by_name("Grasped")
        assert approach.state is approach.from_state
        assert approach.kind == EdgeType.GRASP
        assert graph.get_edge_by_name("lift").state.name == "Grasped"

    def test_outgoing_edges_in_creation_order(self, make_graph):
        graph = make_graph()

        assert [e.name for e in graph.get_state_by_name("Free").edges] == ["move", "approach"]

    def test_duplicate_state_name(self, make_graph):
        graph = make_graph()

        with pytest.raises(GraphConstructionError):
            graph.node_selectors[0].create_state("Free")

    def test_duplicate_edge_name(self, make_graph):
        graph = make_graph()
        free = graph.get_state_by_name("Free")

        with pytest.raises(GraphConstructionError):
            free.link_to("move", free)

    def test_same_name_for_different_components(self, point_robot):
        graph = Graph("g", point_robot)
        selector = graph.create_node_selector("hand")
        state = selector.create_state("hand")

        assert state.link_to("hand", state).name == "hand"

    def test_states_of_another_graph(self, make_graph):
        graph = make_graph()
        other = make_graph()

        with pytest.raises(GraphConstructionError):
            graph.get_state_by_name("Free").link_to(
                "escape", other.get_state_by_name("Free")
            )

    def test_components_do_not_keep_graph_alive(self, point_robot):
        graph = Graph("g", point_robot)
        state = graph.create_node_selector("hand").create_state("Free")
        del graph
        gc.collect()

        with pytest.raises(ConstraintGraphError):
            state.graph

    def test_lookups_by_name(self, make_graph):
        graph = make_graph()

        assert graph.get_node_selector_by_name("gripper") is graph.node_selectors[0]
        assert graph.get_node_selector_by_name("arm") is None
        assert graph.node_selectors[0].get_state_by_name("Grasped").name == "Grasped"
        assert graph.get_state_by_name("Hovering") is None
        assert graph.get_edge_by_name("fly") is None

    def test_initial_state(self, make_graph):
        assert make_graph().initial_state.name == "Free"
        assert make_graph(free=False).initial_state is None


class TestGetState:
    """Tests for configuration classification."""

    def test_first_matching_state_wins(self, make_graph):
        graph = make_graph(hovering=True)

        assert graph.get_state(point(0.5)).name == "Hovering"
        assert graph.get_state(point(0.8)).name == "Grasped"
        assert graph.get_state(point(0.1)).name == "Free"

    def test_classification_is_deterministic(self, make_graph):
        graph = make_graph(hovering=True)

        assert {graph.get_state(point(0.5)).name for _ in range(10)} == {"Hovering"}

    def test_no_matching_state(self, make_graph):
        graph = make_graph(free=False)

        with pytest.raises(ClassificationFailure) as exc_info:
            graph.get_state(point(0.1))
        assert exc_info.value.configuration == pytest.approx(point(0.1))

    def test_configuration_size(self, make_graph):
        with pytest.raises(ValueError):
            make_graph().get_state([0.0, 0.0])

    def test_selectors_are_tried_in_order(self, point_robot):
        graph = Graph("g", point_robot)
        graph.create_node_selector("first").create_state("high", [Constraint(LowerBound(0, 1.0))])
        graph.create_node_selector("second").create_state("anywhere")

        assert graph.get_state(point(2.0)).name == "high"
        assert graph.get_state(point(0.0)).name == "anywhere"

    def test_error_threshold_applies_to_states(self, make_graph):
        graph = make_graph(free=False)
        q = point(0.39)

        with pytest.raises(ClassificationFailure):
            graph.get_state(q)

        graph.error_threshold = 0.05

        assert graph.get_state(q).name == "Grasped"

    def test_global_constraints_apply_to_every_state(self, make_graph):
        graph = make_graph()
        graph.add_global_constraint(Constraint(LowerBound(1, 0.0)))

        with pytest.raises(ClassificationFailure):
            graph.get_state([0.0, -1.0, 0.0])

    @pytest.mark.parametrize("name,value", [("max_iterations", 0), ("error_threshold", 0.0)])
    def test_parameters_must_be_positive(self, make_graph, name, value):
        with pytest.raises(ValueError):
            setattr(make_graph(), name, value)


class TestChooseEdge:
    """Tests for random edge selection."""

    def test_one_edge_per_state(self, make_graph):
        graph = make_graph()
        free, grasped = graph.get_state_by_name("Free"), graph.get_state_by_name("Grasped")

        edges = graph.choose_edge([free, grasped])

        assert edges[0] in free.edges
        assert edges[1].name == "lift"

    def test_seeded_choice_is_reproducible(self, make_graph):
        graph_a, graph_b = make_graph(seed=7), make_graph(seed=7)

        picks_a = [graph_a.choose_edge([graph_a.get_state_by_name("Free")])[0].name for _ in range(20)]
        picks_b = [graph_b.choose_edge([graph_b.get_state_by_name("Free")])[0].name for _ in range(20)]

        assert picks_a == picks_b
        assert set(picks_a) <= {"move", "approach"}

    def test_explicit_random_source(self, make_graph):
        graph = make_graph()
        free = graph.get_state_by_name("Free")

        picks_a = [graph.choose_edge([free], np.random.default_rng(1))[0] for _ in range(5)]
        picks_b = [graph.choose_edge([free], np.random.default_rng(1))[0] for _ in range(5)]

        assert picks_a == picks_b

    def test_state_without_edges(self, point_robot):
        graph = Graph("g", point_robot)
        state = graph.create_node_selector("hand").create_state("stuck")

        with pytest.raises(ConstraintGraphError):
            graph.choose_edge([state])


class TestConstraints:
    """Tests for the projectors built by the graph."""

    @pytest.fixture
    def locked_graph(self):
        robot = Robot("pair", [Joint("gripper", "translation"), Joint("box", "translation")])
        graph = Graph("locked", robot)
        free = graph.create_node_selector("hand").create_state("free", initial=True)
        lock = Constraint(LockedJoint(robot.joint("box")), parametric=True)
        free.link_to("transit", free, [lock])
        return graph

    def test_config_constraint_of_states(self, make_graph):
        graph = make_graph()
        grasped = graph.get_state_by_name("Grasped")

        projector = grasped.config_constraint()

        assert projector is grasped.config_constraint()
        assert [c.name for c in projector.constraints] == ["q[0] >= 0.4"]

    def test_path_constraint_of_one_edge(self, locked_graph):
        edge = locked_graph.get_edge_by_name("transit")
        q = np.array([0.0, 0.0, 0.0, 1.0, 2.0, 3.0])

        constraints = edge.path_constraint(q)

        assert isinstance(constraints, EdgeConstraintSet)
        assert constraints.edge is edge
        projected, success = constraints.apply(np.zeros(6))
        assert success
        assert projected[3:] == pytest.approx([1.0, 2.0, 3.0])

    def test_path_constraint_of_several_edges(self, make_graph):
        graph = make_graph()

        constraints = graph.path_constraint(
            [graph.get_edge_by_name("move"), graph.get_edge_by_name("approach")], point(0.0)
        )

        assert type(constraints) is ConstraintSet
        assert constraints.name == "move+approach"

    def test_leaf_config_constraint(self, locked_graph):
        edge = locked_graph.get_edge_by_name("transit")
        q = np.array([0.0, 0.0, 0.0, 1.0, 2.0, 3.0])

        projector = edge.config_constraint(q)

        assert projector.is_satisfied(np.array([5.0, 5.0, 5.0, 1.0, 2.0, 3.0]))
        assert not projector.is_satisfied(np.zeros(6))

    def test_parameters_reach_projectors(self, make_graph):
        graph = make_graph(max_iterations=5, error_threshold=1e-3)
        projector = graph.get_edge_by_name("lift").path_constraint(point(0.5)).projector

        assert projector.max_iterations == 5
        assert projector.error_threshold == 1e-3


class TestTopology:
    """Tests for the exported topology."""

    def test_nodes_and_edges(self, make_graph):
        topology = make_graph().topology()

        assert set(topology.nodes) == {"Grasped", "Free"}
        assert topology.nodes["Free"]["initial"] is True
        assert topology.number_of_edges() == 3
        assert topology.has_edge("Grasped", "Grasped", key="lift")
        assert topology.edges["Free", "Grasped", "approach"]["kind"] == EdgeType.GRASP

    def test_str(self, make_graph):
        text = str(make_graph())

        assert "State Free (initial)" in text
        assert "Edge approach -> Grasped [grasp]" in text
