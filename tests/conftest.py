"""Shared valve network fixtures.

Fixtures live here rather than in an importable helper module so tests in
any folder can request them by name.
"""

from __future__ import annotations

import pytest

from valvenet.network import ValveNetwork


@pytest.fixture
def line_abc():
    # Flow:
    #   A(0) ◄──► B(13) ◄──► C(2)
    return ValveNetwork.from_mapping(
        {
            "A": (0, ["B"]),
            "B": (13, ["A", "C"]),
            "C": (2, ["B"]),
        }
    )


@pytest.fixture
def classic_mapping():
    # Ten valves, six of them useful; AA is the start.
    #
    #        JJ(21)
    #          │
    #        II(0)         HH(22)
    #          │             │
    #  BB(13)─AA(0)─DD(20)  GG(0)
    #    │           │  │    │
    #    └──CC(2)────┘ EE(3)─FF(0)
    return {
        "AA": (0, ["DD", "II", "BB"]),
        "BB": (13, ["CC", "AA"]),
        "CC": (2, ["DD", "BB"]),
        "DD": (20, ["CC", "AA", "EE"]),
        "EE": (3, ["FF", "DD"]),
        "FF": (0, ["EE", "GG"]),
        "GG": (0, ["FF", "HH"]),
        "HH": (22, ["GG"]),
        "II": (0, ["AA", "JJ"]),
        "JJ": (21, ["II"]),
    }


@pytest.fixture
def classic(classic_mapping):
    return ValveNetwork.from_mapping(classic_mapping)


@pytest.fixture
def one_way_loop():
    # Tunnels only run clockwise, so travel times are asymmetric:
    #   S(0) ──► X(5) ──► Y(7) ──► Z(0)
    #   ▲                           │
    #   └───────────────────────────┘
    return ValveNetwork.from_mapping(
        {
            "S": (0, ["X"]),
            "X": (5, ["Y"]),
            "Y": (7, ["Z"]),
            "Z": (0, ["S"]),
        }
    )


@pytest.fixture
def islands():
    # Q is useful but unreachable from S.
    #   S(0) ◄──► P(4)      Q(9)
    return ValveNetwork.from_mapping(
        {
            "S": (0, ["P"]),
            "P": (4, ["S"]),
            "Q": (9, []),
        }
    )
