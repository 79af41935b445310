from __future__ import annotations

from typing import Any, Hashable, List

import networkx as nx

NodeID = Hashable


class StrictDiGraph(nx.DiGraph):
    """
    A directed graph that never grows by accident.

    This class enforces:
      - No automatic creation of missing nodes when adding an edge.
      - No duplicate nodes (raising ValueError on duplicates).
      - No duplicate edges between the same ordered pair of nodes.

    Successor order follows edge insertion order, so neighbour lists keep
    the order in which tunnels were declared.

    Inherits from:
        networkx.DiGraph
    """

    def add_node(self, n: NodeID, **attr: Any) -> None:
        """
        Add a single node, disallowing duplicates.

        Args:
            n (NodeID): The node to add.
            **attr: Arbitrary attributes for this node.

        Raises:
            ValueError: If the node already exists in the graph.
        """
        if n in self:
            raise ValueError(f"Node '{n}' already exists in this graph.")
        super().add_node(n, **attr)

    def add_edge(self, u_of_edge: NodeID, v_of_edge: NodeID, **attr: Any) -> None:
        """
        Add a directed edge from u_of_edge to v_of_edge.

        Both endpoints must already exist in the graph.

        Raises:
            ValueError: If either node does not exist, or if the edge already exists.
        """
        if u_of_edge not in self:
            raise ValueError(f"Source node '{u_of_edge}' does not exist.")
        if v_of_edge not in self:
            raise ValueError(f"Target node '{v_of_edge}' does not exist.")
        if self.has_edge(u_of_edge, v_of_edge):
            raise ValueError(
                f"Edge from '{u_of_edge}' to '{v_of_edge}' already exists."
            )
        super().add_edge(u_of_edge, v_of_edge, **attr)

    def successors_list(self, n: NodeID) -> List[NodeID]:
        """
        List the successors of a node in insertion order.

        Raises:
            ValueError: If the node does not exist in the graph.
        """
        if n not in self:
            raise ValueError(f"Node '{n}' does not exist.")
        return list(self._succ[n])
