import unittest

from causal_sim.graph.model import CausalGraph, Edge, Variable
from causal_sim.graph.normalize import normalize_edges, normalize_graph, normalize_variables
from causal_sim.graph.template import DEFAULT_GRAPH


class NormalizeVariablesTestCase(unittest.TestCase):
    def test_list_of_records_with_aliases(self) -> None:
        variables = normalize_variables({
            "variables": [
                {"id": "A", "value": 7, "baseline": 4},
                {"name": "B", "initial": 3},
                {"id": "C", "start": "2.5", "setPoint": 6},
            ]
        })
        self.assertEqual(
            variables,
            [Variable("A", 7.0, 4.0), Variable("B", 3.0, 3.0), Variable("C", 2.5, 6.0)],
        )

    def test_first_present_field_wins(self) -> None:
        variables = normalize_variables({"nodes": [{"id": "A", "initial": None, "value": 8, "start": 1}]})
        self.assertEqual(variables, [Variable("A", 8.0, 8.0)])

    def test_string_items_and_missing_ids(self) -> None:
        variables = normalize_variables({"stocks": ["A", "", {"value": 3}, None, {"id": "B"}]})
        self.assertEqual(variables, [Variable("A", 5.0, 5.0), Variable("B", 5.0, 5.0)])

    def test_keyed_mapping_of_records_and_numbers(self) -> None:
        variables = normalize_variables({"vertices": {"A": {"value": 9, "baseline": 1}, "B": 2}})
        self.assertEqual(variables, [Variable("A", 9.0, 1.0), Variable("B", 2.0, 2.0)])

    def test_bare_mapping_without_wrapper_key(self) -> None:
        variables = normalize_variables({
            "A": 3,
            "B": {"value": 7},
            "edges": [{"from": "A", "to": "B", "weight": 1}],
        })
        self.assertEqual(variables, [Variable("A", 3.0, 3.0), Variable("B", 7.0, 7.0)])

    def test_values_are_clamped(self) -> None:
        variables = normalize_variables({"variables": [{"id": "A", "value": 42, "baseline": -3}]})
        self.assertEqual(variables, [Variable("A", 10.0, 0.0)])

    def test_non_finite_values_fall_back(self) -> None:
        variables = normalize_variables({
            "variables": [
                {"id": "A", "value": float("nan")},
                {"id": "B", "value": "high", "baseline": float("inf")},
                {"id": "C", "value": True},
                {"id": "D", "value": 2, "baseline": "n/a"},
            ]
        })
        self.assertEqual(
            variables,
            [
                Variable("A", 5.0, 5.0),
                Variable("B", 5.0, 5.0),
                Variable("C", 5.0, 5.0),
                Variable("D", 2.0, 5.0),
            ],
        )

    def test_duplicate_ids_keep_first_position_and_last_value(self) -> None:
        variables = normalize_variables({
            "variables": [{"id": "A", "value": 1}, {"id": "B"}, {"id": "A", "value": 9}]
        })
        self.assertEqual(variables, [Variable("A", 9.0, 9.0), Variable("B", 5.0, 5.0)])

    def test_non_mapping_description(self) -> None:
        self.assertEqual(normalize_variables(None), [])
        self.assertEqual(normalize_variables("A -> B"), [])


class NormalizeEdgesTestCase(unittest.TestCase):
    def test_list_of_records_with_aliases(self) -> None:
        edges = normalize_edges({
            "edges": [
                {"from": "A", "to": "B", "weight": 0.4},
                {"source": "B", "target": "C", "strength": "-0.2"},
                {"from": "C", "to": "A", "value": 1.5},
                {"from": "C", "to": "D"},
            ]
        })
        self.assertEqual(
            edges,
            [Edge("A", "B", 0.4), Edge("B", "C", -0.2), Edge("C", "A", 1.5), Edge("C", "D", 0.0)],
        )

    def test_edges_without_endpoints_are_dropped(self) -> None:
        edges = normalize_edges({
            "links": [{"from": "A"}, {"to": "B", "weight": 1}, {"from": "", "to": "B"}, "A->B", None]
        })
        self.assertEqual(edges, [])

    def test_adjacency_mapping(self) -> None:
        edges = normalize_edges({
            "connections": {
                "A": ["B", {"to": "C", "weight": -0.3}, {"target": "D"}, {"weight": 2}],
            }
        })
        self.assertEqual(
            edges,
            [Edge("A", "B", 0.5), Edge("A", "C", -0.3), Edge("A", "D", 0.0)],
        )

    def test_keyed_edge_records(self) -> None:
        edges = normalize_edges({
            "edges": {
                "e1": {"from": "A", "to": "B", "weight": 0.7},
                "B": {"to": "A", "strength": -0.1},
                "e3": {"from": "A"},
            }
        })
        self.assertEqual(edges, [Edge("A", "B", 0.7), Edge("B", "A", -0.1)])


class NormalizeGraphTestCase(unittest.TestCase):
    def test_empty_description_uses_template(self) -> None:
        graph = normalize_graph({})
        self.assertIs(graph, DEFAULT_GRAPH)
        self.assertEqual(len(graph.variables), 8)
        self.assertEqual(len(graph.edges), 12)

    def test_missing_edges_replaces_whole_graph(self) -> None:
        graph = normalize_graph({"variables": [{"id": "X", "value": 1}]})
        self.assertIs(graph, DEFAULT_GRAPH)
        self.assertNotIn("X", graph.variable_ids)

    def test_missing_variables_replaces_whole_graph(self) -> None:
        graph = normalize_graph({"edges": [{"from": "X", "to": "Y", "weight": 1}]})
        self.assertIs(graph, DEFAULT_GRAPH)

    def test_empty_variable_collection_uses_template(self) -> None:
        edges = [{"from": "A", "to": "B", "weight": 1}]
        for key in ("variables", "nodes", "stocks", "vertices"):
            for empty in ([], {}, None):
                with self.subTest(key=key, empty=empty):
                    description = {key: empty, "edges": edges}
                    self.assertEqual(normalize_variables(description), [])
                    self.assertIs(normalize_graph(description), DEFAULT_GRAPH)

    def test_empty_variable_key_defers_to_next_key(self) -> None:
        description = {"variables": [], "nodes": ["A", "B"], "edges": [{"from": "A", "to": "B", "weight": 1}]}
        self.assertEqual(normalize_variables(description), [Variable("A", 5.0, 5.0), Variable("B", 5.0, 5.0)])

    def test_custom_graph(self) -> None:
        graph = normalize_graph({
            "variables": [{"id": "X", "value": 4}],
            "edges": [{"from": "X", "to": "Y", "weight": 0.2}],
        })
        self.assertEqual(
            graph,
            CausalGraph(variables=(Variable("X", 4.0, 4.0),), edges=(Edge("X", "Y", 0.2),)),
        )

    def test_custom_template(self) -> None:
        template = CausalGraph(variables=(Variable("T", 1.0, 1.0),), edges=(Edge("T", "T", -1.0),))
        self.assertIs(normalize_graph([], template=template), template)

    def test_to_dict_uses_wire_keys(self) -> None:
        data = normalize_graph({}).to_dict()
        self.assertEqual(data["variables"][0], {"id": "Isolation", "value": 6.0, "baseline": 5.0})
        self.assertEqual(data["edges"][0], {"from": "Isolation", "to": "HPA", "weight": 0.65})


if __name__ == "__main__":
    unittest.main()
