import math

import networkx as nx
import numpy as np
import pytest
import torch

from genetic_tsp.distance import DistanceMatrix
from genetic_tsp.errors import InvalidDistanceMatrix, InvalidRoute
from genetic_tsp.genome import Route


class TestConstruction:
    def test_dimension(self, small_matrix):
        assert small_matrix.dimension() == 3
        assert len(small_matrix) == 3

    def test_keeps_values(self):
        dm = DistanceMatrix([[0.0, 1.0], [1.0, 0.0]])
        assert dm.distances.tolist() == [[0.0, 1.0], [1.0, 0.0]]
        assert dm[0, 1] == 1.0

    def test_is_read_only(self, small_matrix):
        with pytest.raises(ValueError):
            small_matrix.distances[0, 1] = 5.0

    def test_tensor_copy(self, small_matrix):
        assert small_matrix.tensor.dtype == torch.float64
        assert small_matrix.tensor.tolist() == small_matrix.distances.tolist()

    @pytest.mark.parametrize(
        "table",
        [
            [[0.0, 1.0, 2.0], [1.0, 0.0, 3.0]],
            [],
            [[0.0, -1.0], [-1.0, 0.0]],
            [[1.0, 1.0], [1.0, 0.0]],
            [[0.0, 1.0], [2.0, 0.0]],
            [[0.0, float("nan")], [float("nan"), 0.0]],
            [[0.0, 1.0], [1.0]],
        ],
        ids=["not-square", "empty", "negative", "diagonal", "asymmetric", "nan", "ragged"],
    )
    def test_rejects_malformed(self, table):
        with pytest.raises(InvalidDistanceMatrix):
            DistanceMatrix(table)

    def test_validation_can_be_skipped(self):
        dm = DistanceMatrix([[0.0, 1.0], [2.0, 0.0]], validate=False)
        assert dm.tour_cost([0, 1]) == 3.0

    def test_from_coordinates(self):
        dm = DistanceMatrix.from_coordinates([[0.0, 0.0], [3.0, 0.0], [3.0, 4.0]])
        assert dm[0, 1] == pytest.approx(3.0)
        assert dm[1, 2] == pytest.approx(4.0)
        assert dm[0, 2] == pytest.approx(5.0)
        assert dm.tour_cost([0, 1, 2]) == pytest.approx(12.0)

    def test_from_graph(self):
        graph = nx.Graph()
        graph.add_weighted_edges_from([("a", "b", 1.0), ("a", "c", 2.0), ("b", "c", 3.0)])
        dm = DistanceMatrix.from_graph(graph)
        assert dm.distances.tolist() == [[0.0, 1.0, 2.0], [1.0, 0.0, 3.0], [2.0, 3.0, 0.0]]

    def test_from_graph_node_order(self):
        graph = nx.Graph()
        graph.add_weighted_edges_from([(1, 2, 4.0), (2, 3, 5.0), (1, 3, 6.0)])
        dm = DistanceMatrix.from_graph(graph, nodes=[3, 2, 1])
        assert dm[0, 1] == 5.0
        assert dm[0, 2] == 6.0


class TestTourCost:
    def test_same_node(self, small_matrix):
        assert small_matrix.tour_cost([0, 0]) == 0.0

    def test_single_node(self, small_matrix):
        assert small_matrix.tour_cost([2]) == 0.0

    def test_two_nodes(self, small_matrix):
        assert small_matrix.tour_cost([0, 1]) == 2.0
        assert small_matrix.tour_cost([0, 2]) == 4.0
        assert small_matrix.tour_cost([1, 2]) == 6.0
        assert small_matrix.tour_cost([1, 0]) == 2.0

    def test_three_nodes(self, small_matrix):
        assert small_matrix.tour_cost([0, 1, 2]) == 6.0
        assert small_matrix.tour_cost([0, 2, 1]) == 6.0
        assert small_matrix.tour_cost([1, 2, 0]) == 6.0

    def test_repeat_visit(self, small_matrix):
        assert small_matrix.tour_cost([0, 2, 1, 2]) == 10.0

    def test_accepts_route(self, small_matrix):
        assert small_matrix.tour_cost(Route([1, 2, 0])) == 6.0

    def test_empty_route(self, small_matrix):
        with pytest.raises(InvalidRoute):
            small_matrix.tour_cost([])

    @pytest.mark.parametrize("route", [[0, 3], [-1, 0, 1]])
    def test_out_of_range(self, small_matrix, route):
        with pytest.raises(InvalidRoute):
            small_matrix.tour_cost(route)

    def test_matches_explicit_sum(self, city_matrix):
        route = [int(i) for i in np.random.default_rng(3).permutation(12)]
        d = city_matrix.distances
        expected = sum(d[route[i - 1], route[i]] for i in range(len(route)))
        assert math.isclose(city_matrix.tour_cost(route), expected)


class TestTourCosts:
    def test_mixed_lengths(self, small_matrix):
        routes = [Route([1, 2, 0]), Route([1, 0]), Route([2, 0])]
        assert small_matrix.tour_costs(routes) == [6.0, 2.0, 4.0]

    def test_agrees_with_tour_cost(self, city_matrix):
        gen = np.random.default_rng(5)
        routes = [[int(i) for i in gen.permutation(12)] for _ in range(20)]
        batched = city_matrix.tour_costs(routes)
        for route, cost in zip(routes, batched):
            assert cost == pytest.approx(city_matrix.tour_cost(route))

    def test_no_routes(self, small_matrix):
        assert small_matrix.tour_costs([]) == []

    def test_out_of_range(self, small_matrix):
        with pytest.raises(InvalidRoute):
            small_matrix.tour_costs([[0, 1, 2], [0, 1, 5]])

    def test_empty_route(self, small_matrix):
        with pytest.raises(InvalidRoute):
            small_matrix.tour_costs([[]])
