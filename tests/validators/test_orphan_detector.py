"""Tests for isolated state detector."""

from manipgraph.graph.builder import build_graph
from manipgraph.schema.loader import parse_graph_model_from_string
from manipgraph.validators.orphan_detector import check_isolated_states


class TestIsolatedStates:
    def test_no_isolated_states(self, pick_and_place_graph):
        result = check_isolated_states(pick_and_place_graph)

        assert result.is_valid
        assert len(result.warnings) == 0

    def test_detects_isolated_state(self):
        yaml = """
node_selectors:
  - name: hand
    states:
      - name: free
        initial: true
      - name: lost
edges:
  - name: move
    from: free
    to: free
"""
        graph = build_graph(parse_graph_model_from_string(yaml))

        result = check_isolated_states(graph)

        assert len(result.warnings) == 1
        assert result.warnings[0].code == "ISOLATED_STATE"
        assert result.warnings[0].state == "lost"

    def test_self_loop_is_not_isolated(self):
        yaml = """
node_selectors:
  - name: hand
    states: [free]
edges:
  - name: move
    from: free
    to: free
"""
        graph = build_graph(parse_graph_model_from_string(yaml))

        assert check_isolated_states(graph).warnings == []
