"""valvenet: maximum pressure release over valve networks.

Given valves with flow rates connected by one-minute tunnels, valvenet finds
the largest total pressure that one or two agents can release before a time
budget runs out. Opening a valve takes one minute; afterwards it releases its
flow rate every remaining minute.

Primary API:
    max_total_release() - Run the full search and return the best total
    ValveNetwork, Valve - Network model
    build_distance_table() - Travel times between useful valves
    max_release() - The underlying branch-and-bound search

Example:
    from valvenet import max_total_release

    total = max_total_release(
        {"AA": (0, ["BB"]), "BB": (13, ["AA", "CC"]), "CC": (2, ["BB"])},
        time_budget=4,
        agents=2,
        start="AA",
    )
"""

from __future__ import annotations

from valvenet import logging
from valvenet.config import SEARCH_CONFIG, SearchConfig
from valvenet.lib.algorithms.distances import build_distance_table
from valvenet.lib.algorithms.release import max_release
from valvenet.lib.algorithms.spf import distances_from
from valvenet.lib.algorithms.types import AgentState, ReleaseProblem, ReleaseSummary
from valvenet.network import MalformedGraph, Valve, ValveNetwork
from valvenet.solver import max_total_release

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "Valve",
    "ValveNetwork",
    "MalformedGraph",
    # Search
    "max_total_release",
    "build_distance_table",
    "distances_from",
    "max_release",
    # Types
    "AgentState",
    "ReleaseProblem",
    "ReleaseSummary",
    # Configuration
    "SearchConfig",
    "SEARCH_CONFIG",
    "logging",
]
