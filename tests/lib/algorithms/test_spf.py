import random

import networkx as nx
import pytest

from valvenet.lib.algorithms.spf import distances_from, spf
from valvenet.lib.graph import StrictDiGraph


def _random_digraph(seed: int, num_nodes: int, edge_prob: float) -> StrictDiGraph:
    reference = nx.gnp_random_graph(num_nodes, edge_prob, seed=seed, directed=True)
    g = StrictDiGraph()
    for n in reference.nodes:
        g.add_node(n)
    for u, v in reference.edges:
        g.add_edge(u, v)
    return g


class TestSPF:
    def test_spf_line(self, line_abc):
        assert spf(line_abc.graph, "A") == {"A": 0, "B": 1, "C": 2}
        assert spf(line_abc.graph, "B") == {"B": 0, "A": 1, "C": 1}

    def test_spf_classic(self, classic):
        costs = spf(classic.graph, "AA")
        assert costs == {
            "AA": 0,
            "BB": 1,
            "DD": 1,
            "II": 1,
            "CC": 2,
            "EE": 2,
            "JJ": 2,
            "FF": 3,
            "GG": 4,
            "HH": 5,
        }

    def test_spf_directed_costs_differ(self, one_way_loop):
        """Walking against the tunnel direction takes the long way round."""
        assert spf(one_way_loop.graph, "X")["Y"] == 1
        assert spf(one_way_loop.graph, "Y")["X"] == 3

    def test_spf_unreachable_absent(self, islands):
        costs = spf(islands.graph, "S")
        assert costs == {"S": 0, "P": 1}
        assert spf(islands.graph, "Q") == {"Q": 0}

    def test_spf_uses_edge_cost(self):
        g = StrictDiGraph()
        for n in "ABC":
            g.add_node(n)
        g.add_edge("A", "B", cost=5)
        g.add_edge("A", "C", cost=1)
        g.add_edge("C", "B", cost=1)
        assert spf(g, "A") == {"A": 0, "C": 1, "B": 2}

    def test_spf_missing_source(self, line_abc):
        with pytest.raises(KeyError, match="not in the graph"):
            spf(line_abc.graph, "Z")

    @pytest.mark.parametrize("seed", range(8))
    def test_spf_matches_bfs_on_random_graphs(self, seed):
        """Unit-cost Dijkstra agrees with BFS hop counts from every source."""
        rng = random.Random(seed)
        g = _random_digraph(seed, rng.randint(5, 25), rng.choice([0.05, 0.1, 0.3]))
        for src in g.nodes:
            expected = nx.single_source_shortest_path_length(g, src)
            assert spf(g, src) == dict(expected)


def test_distances_from_includes_zero_flow(classic):
    distances = distances_from(classic, "HH")
    assert distances["GG"] == 1
    assert distances["FF"] == 2
    assert distances["AA"] == 5
    assert distances["JJ"] == 7
    assert distances["HH"] == 0
    assert all(isinstance(d, int) for d in distances.values())
