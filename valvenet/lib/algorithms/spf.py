from heapq import heappop, heappush
from typing import Dict, List, Tuple

from valvenet.lib.algorithms.base import Cost
from valvenet.lib.graph import NodeID, StrictDiGraph
from valvenet.network import ValveNetwork


def spf(graph: StrictDiGraph, src_node: NodeID) -> Dict[NodeID, Cost]:
    """
    Compute minimal costs from a source node using Dijkstra's algorithm.

    Each edge contributes its "cost" attribute (one minute when absent). The
    queue holds (cost, node) pairs; stale entries whose cost is worse than the
    finalized one are skipped when popped. Ties are broken arbitrarily.

    Args:
        graph: The directed graph (StrictDiGraph).
        src_node: The source node from which to compute shortest paths.

    Returns:
        Maps each reachable node (including src_node itself, at cost 0) to its
        minimal cost from src_node. Unreachable nodes are absent.

    Raises:
        KeyError: If src_node does not exist in graph.
    """
    outgoing_adjacencies = graph._succ
    if src_node not in outgoing_adjacencies:
        raise KeyError(f"Source node '{src_node}' is not in the graph.")

    costs: Dict[NodeID, Cost] = {src_node: 0}
    min_pq: List[Tuple[Cost, int, NodeID]] = [(0, 0, src_node)]
    # Insertion counter keeps heap entries comparable for any hashable node
    counter = 1

    while min_pq:
        current_cost, _, node_id = heappop(min_pq)
        if current_cost > costs[node_id]:
            continue

        for neighbor_id, edge_attr in outgoing_adjacencies[node_id].items():
            new_cost = current_cost + edge_attr.get("cost", 1)
            if (neighbor_id not in costs) or (new_cost < costs[neighbor_id]):
                costs[neighbor_id] = new_cost
                heappush(min_pq, (new_cost, counter, neighbor_id))
                counter += 1

    return costs


def distances_from(network: ValveNetwork, source: str) -> Dict[str, int]:
    """
    Minutes needed to walk from source to every reachable valve.

    Zero-flow valves are included; pruning happens when the distance table
    is assembled.

    Args:
        network: The ValveNetwork to walk.
        source: Name of the starting valve.

    Returns:
        Valve name -> travel time in minutes.
    """
    return {name: int(cost) for name, cost in spf(network.graph, source).items()}
