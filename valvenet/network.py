"""Valve network modeling with Valve and ValveNetwork classes."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

import networkx as nx

from valvenet.lib.graph import StrictDiGraph

#: Raw network description: valve name -> (flow rate, neighbour names).
ValveMapping = Mapping[str, Tuple[int, Sequence[str]]]


class MalformedGraph(ValueError):
    """Raised when a tunnel references a valve that was never defined."""


@dataclass(frozen=True)
class Valve:
    """Represents a valve in the network.

    Each valve is uniquely identified by its name; two valves with the same
    name compare equal regardless of their flow rates.

    Attributes:
        name (str): Unique identifier for the valve.
        flow_rate (int): Pressure released per minute once the valve is open.
    """

    name: str
    flow_rate: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        """Reject flow rates that cannot be credited."""
        if isinstance(self.flow_rate, bool) or not isinstance(self.flow_rate, int):
            raise ValueError(
                f"Valve '{self.name}' flow rate must be an integer, "
                f"got {self.flow_rate!r}."
            )
        if self.flow_rate < 0:
            raise ValueError(
                f"Valve '{self.name}' flow rate must be non-negative, "
                f"got {self.flow_rate}."
            )


class ValveNetwork:
    """A read-only container of valves and the tunnels between them.

    Valves are stored by name in a StrictDiGraph; every tunnel is a directed
    edge with unit cost. Build networks with ``from_mapping``; it either
    succeeds or raises before returning anything. Nothing can be added or
    removed afterwards: ``valves`` is a read-only mapping and ``graph`` a
    frozen view.
    """

    def __init__(self) -> None:
        self._valves: Dict[str, Valve] = {}
        self._graph = StrictDiGraph()

    @classmethod
    def from_mapping(cls, mapping: ValveMapping) -> ValveNetwork:
        """Build a network from ``{name: (flow_rate, [neighbour names])}``.

        All neighbour names are resolved before any valve is added, so a
        malformed description never produces a partial network.

        Args:
            mapping: Valve definitions with their outgoing tunnels.

        Returns:
            ValveNetwork: The constructed network.

        Raises:
            MalformedGraph: If a neighbour name has no valve definition.
            ValueError: If a flow rate is negative or not an integer.
        """
        for name, (_, neighbours) in mapping.items():
            for neighbour in neighbours:
                if neighbour not in mapping:
                    raise MalformedGraph(
                        f"Valve '{name}' references undefined valve '{neighbour}'."
                    )

        network = cls()
        for name, (flow_rate, _) in mapping.items():
            network._add_valve(Valve(name=name, flow_rate=flow_rate))
        for name, (_, neighbours) in mapping.items():
            for neighbour in neighbours:
                # Repeated tunnels collapse into one edge
                if neighbour not in network._graph.succ[name]:
                    network._add_tunnel(name, neighbour)
        return network

    def _add_valve(self, valve: Valve) -> None:
        """Add a valve to the network (keyed by valve.name).

        Raises:
            ValueError: If a valve with the same name already exists.
        """
        if valve.name in self._valves:
            raise ValueError(f"Valve '{valve.name}' already exists in the network.")
        self._valves[valve.name] = valve
        self._graph.add_node(valve.name, flow_rate=valve.flow_rate)

    def _add_tunnel(self, source: str, target: str) -> None:
        """Add a one-minute directed tunnel from source to target.

        Raises:
            MalformedGraph: If either endpoint is not a known valve.
            ValueError: If the tunnel already exists.
        """
        for name in (source, target):
            if name not in self._valves:
                raise MalformedGraph(
                    f"Tunnel {source} -> {target} references undefined valve '{name}'."
                )
        self._graph.add_edge(source, target, cost=1)

    def get_valve(self, name: str) -> Valve:
        """Look up a valve by name.

        Raises:
            KeyError: If no valve has this name.
        """
        if name not in self._valves:
            raise KeyError(f"Valve '{name}' not found in network.")
        return self._valves[name]

    def neighbors(self, name: str) -> List[str]:
        """Names of the valves reachable in one minute, in declaration order."""
        self.get_valve(name)
        return self._graph.successors_list(name)

    def flow_rate(self, name: str) -> int:
        return self.get_valve(name).flow_rate

    def flow_rates(self) -> Dict[str, int]:
        return {name: valve.flow_rate for name, valve in self._valves.items()}

    def useful_valves(self) -> List[str]:
        """Names of valves with a positive flow rate, in insertion order."""
        return [name for name, valve in self._valves.items() if valve.flow_rate > 0]

    @property
    def valves(self) -> Mapping[str, Valve]:
        """Read-only mapping from valve name -> Valve object."""
        return MappingProxyType(self._valves)

    @property
    def graph(self) -> nx.DiGraph:
        """Frozen view of the tunnel graph; mutating it raises NetworkXError."""
        return nx.graphviews.generic_graph_view(self._graph)

    def __contains__(self, name: object) -> bool:
        return name in self._valves

    def __len__(self) -> int:
        return len(self._valves)

    def __iter__(self) -> Iterator[Valve]:
        return iter(self._valves.values())
