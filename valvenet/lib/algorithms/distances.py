"""Distance table construction over the valves worth visiting."""

from __future__ import annotations

from valvenet.lib.algorithms.base import DistanceTable
from valvenet.lib.algorithms.spf import distances_from
from valvenet.logging import get_logger
from valvenet.network import ValveNetwork

logger = get_logger(__name__)


def build_distance_table(network: ValveNetwork, start: str) -> DistanceTable:
    """Compute travel times between the start valve and every useful valve.

    One SPF runs per valve with a positive flow rate, plus one for ``start``.
    Inner maps keep only positive-flow destinations, since a zero-flow valve
    is never worth travelling to. Destinations with no path are absent.

    Args:
        network: The ValveNetwork to analyse.
        start: Name of the valve the agents start at.

    Returns:
        DistanceTable keyed by source valve name.

    Raises:
        KeyError: If start is not a valve in the network.
    """
    flow_rates = network.flow_rates()
    if start not in flow_rates:
        raise KeyError(f"Start valve '{start}' not found in network.")

    sources = [name for name, rate in flow_rates.items() if rate > 0]
    if start not in sources:
        sources.append(start)

    table: DistanceTable = {}
    for source in sources:
        table[source] = {
            name: distance
            for name, distance in distances_from(network, source).items()
            if flow_rates[name] > 0
        }

    logger.debug(
        "Distance table built: %d sources, %d entries",
        len(table),
        sum(len(row) for row in table.values()),
    )
    return table
