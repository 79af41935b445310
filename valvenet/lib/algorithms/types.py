"""Types and data structures for the valve release search."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, NamedTuple, Optional, Tuple

from valvenet.lib.algorithms.base import DistanceTable


class AgentState(NamedTuple):
    """One agent's position in the search tree.

    Attributes:
        valve: Valve the agent is heading to (and will open).
        elapsed: Minutes spent once that valve is open.
    """

    valve: str
    elapsed: int


#: Valves opened so far along one branch of the search.
OpenSet = FrozenSet[str]

#: First targets handed to the agents by the driver.
Seed = Tuple[AgentState, ...]


@dataclass(frozen=True)
class ReleaseProblem:
    """Read-only inputs shared by every branch of one search.

    Attributes:
        distances: Travel times between the valves of interest.
        flow_rates: Flow rate per valve name.
        time_budget: Minutes available in total.
        targets: Every valve with a positive flow rate.
    """

    distances: DistanceTable
    flow_rates: Dict[str, int]
    time_budget: int
    targets: FrozenSet[str]

    def credit(self, agent: AgentState) -> int:
        """Pressure released by an agent's valve over the remaining minutes."""
        return (self.time_budget - agent.elapsed) * self.flow_rates[agent.valve]


@dataclass(frozen=True)
class ReleaseSummary:
    """Summary of a completed release search.

    Attributes:
        total_release: The maximum pressure released.
        best_seed: The first targets that achieved it (None if nothing to open).
        seeds_evaluated: Number of seeds searched.
        distances: The distance table the search ran on.
    """

    total_release: int
    best_seed: Optional[Seed]
    seeds_evaluated: int
    distances: DistanceTable


#: Best release per search state: (agents after opening, open set) -> value.
ReleaseCache = Dict[Tuple[FrozenSet[AgentState], OpenSet], int]
