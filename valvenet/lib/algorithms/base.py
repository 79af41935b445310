from __future__ import annotations

from typing import Dict, Union

#: Represents numeric cost in the network (minutes of travel).
Cost = Union[int, float]

#: Minutes spent at a valve to open it once the agent has arrived.
OPEN_COST = 1

#: Precomputed travel times: source valve -> destination valve -> minutes.
DistanceTable = Dict[str, Dict[str, int]]
