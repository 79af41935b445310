"""Driver for the valve release search.

Builds the distance table once, hands every possible set of first targets
to the branch-and-bound search and keeps the best result.
"""

from __future__ import annotations

import logging
import os
import pickle
import time
from concurrent.futures import ProcessPoolExecutor
from itertools import permutations
from typing import List, Optional, Tuple, Union

from valvenet.config import SEARCH_CONFIG
from valvenet.lib.algorithms.base import OPEN_COST, DistanceTable
from valvenet.lib.algorithms.distances import build_distance_table
from valvenet.lib.algorithms.release import max_release
from valvenet.lib.algorithms.types import (
    AgentState,
    ReleaseCache,
    ReleaseProblem,
    ReleaseSummary,
    Seed,
)
from valvenet.logging import get_logger
from valvenet.network import ValveMapping, ValveNetwork

logger = get_logger(__name__)

# Problem and memo shared by every seed evaluated inside one worker process
_shared_problem: Optional[ReleaseProblem] = None
_shared_cache: ReleaseCache = {}


def max_total_release(
    network: Union[ValveNetwork, ValveMapping],
    time_budget: Optional[int] = None,
    agents: Optional[int] = None,
    start: Optional[str] = None,
    *,
    parallelism: int = 1,
    return_summary: bool = False,
) -> Union[int, Tuple[int, ReleaseSummary]]:
    """Maximum pressure one or two agents can release within the time budget.

    Every agent starts at ``start``. All inputs are validated before any
    search runs.

    Args:
        network: The valve network, or a ``{name: (flow_rate, [neighbours])}``
            mapping to build one from.
        time_budget: Minutes available. Defaults to SEARCH_CONFIG.time_budget.
        agents: Number of agents, 1 or 2. Defaults to SEARCH_CONFIG.agents.
        start: Starting valve name. Defaults to SEARCH_CONFIG.start.
        parallelism: Number of worker processes used to evaluate seeds.
        return_summary: If True, also return a ReleaseSummary.

    Returns:
        The maximum total release, or ``(total, summary)`` when
        ``return_summary`` is True.

    Raises:
        MalformedGraph: If a mapping references an undefined valve.
        ValueError: If the agent count, time budget or start valve is invalid.
    """
    if not isinstance(network, ValveNetwork):
        network = ValveNetwork.from_mapping(network)

    time_budget = SEARCH_CONFIG.time_budget if time_budget is None else time_budget
    agents = SEARCH_CONFIG.agents if agents is None else agents
    start = SEARCH_CONFIG.start if start is None else start

    if agents not in (1, 2):
        raise ValueError(f"Agent count must be 1 or 2, got {agents}.")
    if (
        isinstance(time_budget, bool)
        or not isinstance(time_budget, int)
        or time_budget < 0
    ):
        raise ValueError(
            f"Time budget must be a non-negative integer, got {time_budget!r}."
        )
    if start not in network:
        raise ValueError(f"Start valve '{start}' not found in network.")

    distances = build_distance_table(network, start)
    flow_rates = network.flow_rates()
    problem = ReleaseProblem(
        distances=distances,
        flow_rates=flow_rates,
        time_budget=time_budget,
        targets=frozenset(network.useful_valves()),
    )
    seeds = seed_states(distances, start, agents)

    logger.info(
        f"Searching {len(network)} valves ({len(problem.targets)} useful) with "
        f"{agents} agent(s), budget={time_budget}, seeds={len(seeds)}"
    )
    started = time.time()

    workers = SEARCH_CONFIG.effective_workers(parallelism, len(seeds))
    if workers > 1:
        results = _evaluate_parallel(problem, seeds, workers)
    else:
        # Seeds overlap heavily, so they share one memo
        cache: ReleaseCache = {}
        results = [
            (max_release(seed, frozenset(), problem, cache), seed) for seed in seeds
        ]

    total, best_seed = _best_of(results)
    logger.info(
        f"Search finished in {time.time() - started:.2f} seconds: "
        f"max release {total}"
    )

    if return_summary:
        return total, ReleaseSummary(
            total_release=total,
            best_seed=best_seed,
            seeds_evaluated=len(seeds),
            distances=distances,
        )
    return total


def seed_states(distances: DistanceTable, start: str, agents: int) -> List[Seed]:
    """First targets for the agents, each opened on arrival.

    A single agent is seeded with every useful valve reachable from the
    start. Two agents get every ordered pair of distinct such valves; with
    fewer than two reachable, the lone valve (if any) goes to one agent.

    Args:
        distances: Distance table containing a row for ``start``.
        start: Starting valve name.
        agents: Number of agents, 1 or 2.

    Returns:
        List of seeds, each a tuple of AgentState.
    """
    first_moves = [
        AgentState(valve, distance + OPEN_COST)
        for valve, distance in distances[start].items()
    ]
    if agents == 1 or len(first_moves) < 2:
        return [(move,) for move in first_moves]
    return list(permutations(first_moves, 2))


def _best_of(results: List[Tuple[int, Seed]]) -> Tuple[int, Optional[Seed]]:
    best_total, best_seed = 0, None
    for total, seed in results:
        logger.debug(f"Seed {seed} released {total}")
        if best_seed is None or total > best_total:
            best_total, best_seed = total, seed
    return best_total, best_seed


def _evaluate_parallel(
    problem: ReleaseProblem, seeds: List[Seed], workers: int
) -> List[Tuple[int, Seed]]:
    problem_pickle = pickle.dumps(problem)
    chunksize = max(1, len(seeds) // (workers * 4))

    parent_level = logging.getLogger("valvenet").getEffectiveLevel()
    os.environ["VALVENET_LOG_LEVEL"] = logging.getLevelName(parent_level)

    with ProcessPoolExecutor(
        max_workers=workers,
        initializer=_worker_init,
        initargs=(problem_pickle,),
    ) as pool:
        logger.debug(f"ProcessPoolExecutor created with {workers} workers")
        return list(pool.map(_seed_worker, seeds, chunksize=chunksize))


def _worker_init(problem_pickle: bytes) -> None:
    """Load the shared problem once per worker process."""
    global _shared_problem, _shared_cache

    _shared_problem = pickle.loads(problem_pickle)
    _shared_cache = {}

    env_level = os.getenv("VALVENET_LOG_LEVEL")
    if env_level:
        from valvenet.logging import set_global_log_level

        set_global_log_level(getattr(logging, env_level.upper(), logging.INFO))

    get_logger(f"{__name__}.worker").debug(f"Worker {os.getpid()} initialized")


def _seed_worker(seed: Seed) -> Tuple[int, Seed]:
    if _shared_problem is None:
        raise RuntimeError("Worker process was not initialized with a problem.")
    return max_release(seed, frozenset(), _shared_problem, _shared_cache), seed
