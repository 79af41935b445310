import pytest
import networkx as nx

from valvenet.lib.graph import StrictDiGraph


def test_init_empty_graph():
    g = StrictDiGraph()
    assert len(g) == 0
    assert g.number_of_edges() == 0
    assert isinstance(g, nx.DiGraph)


def test_add_node():
    """Test adding a single node with attributes."""
    g = StrictDiGraph()
    g.add_node("A", flow_rate=3)
    assert "A" in g
    assert g.nodes["A"] == {"flow_rate": 3}


def test_add_node_duplicate():
    """Adding a node that already exists should raise ValueError."""
    g = StrictDiGraph()
    g.add_node("A")
    with pytest.raises(ValueError, match="already exists"):
        g.add_node("A")


def test_add_edge_basic():
    """Add an edge when both source and target nodes exist."""
    g = StrictDiGraph()
    g.add_node("A")
    g.add_node("B")
    g.add_edge("A", "B", cost=1)
    assert g.has_edge("A", "B")
    assert not g.has_edge("B", "A")
    assert g["A"]["B"] == {"cost": 1}


@pytest.mark.parametrize("src,dst", [("X", "A"), ("A", "X")])
def test_add_edge_missing_node(src, dst):
    """Edges never create nodes implicitly."""
    g = StrictDiGraph()
    g.add_node("A")
    with pytest.raises(ValueError, match="does not exist"):
        g.add_edge(src, dst)
    assert "X" not in g


def test_add_edge_duplicate():
    g = StrictDiGraph()
    g.add_node("A")
    g.add_node("B")
    g.add_edge("A", "B")
    with pytest.raises(ValueError, match="already exists"):
        g.add_edge("A", "B")


def test_successors_list_keeps_insertion_order():
    g = StrictDiGraph()
    for n in ("A", "D", "C", "B"):
        g.add_node(n)
    g.add_edge("A", "D")
    g.add_edge("A", "B")
    g.add_edge("A", "C")
    assert g.successors_list("A") == ["D", "B", "C"]
    assert g.successors_list("B") == []

    with pytest.raises(ValueError, match="does not exist"):
        g.successors_list("Z")
