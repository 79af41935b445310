"""Two-agent search for the maximum pressure released within a time budget."""

from __future__ import annotations

from typing import List, Optional, Sequence

from valvenet.lib.algorithms.base import OPEN_COST
from valvenet.lib.algorithms.types import (
    AgentState,
    OpenSet,
    ReleaseCache,
    ReleaseProblem,
)


class ConflictingOpen(Exception):
    """Two agents of one branch tried to open the same valve."""


def max_release(
    agents: Sequence[AgentState],
    open_set: OpenSet,
    problem: ReleaseProblem,
    cache: Optional[ReleaseCache] = None,
) -> int:
    """Maximum pressure released from this state onwards.

    Each agent in ``agents`` has just travelled to its valve and opened it at
    ``agent.elapsed``. The value returned covers those openings plus the best
    continuation, so every valve is credited exactly once: at the level where
    it is opened.

    Steps:
      1. Agents past the time budget are dropped; if none remain the branch
         is worth nothing.
      2. Each remaining agent's valve joins a fresh copy of the open set. A
         valve that is already open invalidates the branch.
      3. Once every valve with positive flow is open, only the current
         openings count.
      4. Otherwise branch over every next valve (one agent) or every pair of
         distinct next valves (two agents) and keep the best. With two agents
         either one may also retire while the other keeps going.

    Results are memoized per state (agents after opening, open set), so
    orderings that reach the same state are searched once. Pass the same
    ``cache`` to several calls on one problem to share that work; agent order
    does not matter to the key.

    Args:
        agents: One or two agent states.
        open_set: Valves opened earlier on this branch.
        problem: Distance table, flow rates, targets and time budget.
        cache: Memo shared across calls on the same problem. A fresh one is
            used when omitted.

    Returns:
        The best total pressure for this branch.

    Raises:
        ValueError: If more than two agents are given.
    """
    if len(agents) > 2:
        raise ValueError(f"At most two agents are supported, got {len(agents)}.")
    if cache is None:
        cache = {}

    active = [agent for agent in agents if agent.elapsed <= problem.time_budget]
    if not active:
        return 0

    try:
        open_set = _register_openings(active, open_set)
    except ConflictingOpen:
        return 0

    # Registration succeeded, so the active agents hold distinct valves
    key = (frozenset(active), open_set)
    if key in cache:
        return cache[key]

    released = sum(problem.credit(agent) for agent in active)
    if problem.targets <= open_set:
        cache[key] = released
        return released

    best = 0
    if len(active) == 1:
        for move in _next_moves(active[0], open_set, problem):
            best = max(best, max_release((move,), open_set, problem, cache))
    else:
        first, second = active
        # None stands for an agent that stops moving
        first_moves: List[Optional[AgentState]] = [
            *_next_moves(first, open_set, problem),
            None,
        ]
        second_moves: List[Optional[AgentState]] = [
            *_next_moves(second, open_set, problem),
            None,
        ]
        for move1 in first_moves:
            for move2 in second_moves:
                if move1 is None and move2 is None:
                    continue
                if move1 is not None and move2 is not None:
                    if move1.valve == move2.valve:
                        continue
                movers = tuple(move for move in (move1, move2) if move is not None)
                best = max(best, max_release(movers, open_set, problem, cache))

    cache[key] = best + released
    return cache[key]


def _register_openings(agents: Sequence[AgentState], open_set: OpenSet) -> OpenSet:
    """Return a new open set with every agent's valve added.

    Raises:
        ConflictingOpen: If a valve is already open or targeted twice.
    """
    opened = set(open_set)
    for agent in agents:
        if agent.valve in opened:
            raise ConflictingOpen(agent.valve)
        opened.add(agent.valve)
    return frozenset(opened)


def _next_moves(
    agent: AgentState, open_set: OpenSet, problem: ReleaseProblem
) -> List[AgentState]:
    """Closed valves the agent can still reach and open within the budget."""
    moves = []
    for valve, distance in problem.distances.get(agent.valve, {}).items():
        if valve in open_set:
            continue
        elapsed = agent.elapsed + distance + OPEN_COST
        if elapsed > problem.time_budget:
            continue
        moves.append(AgentState(valve, elapsed))
    return moves
