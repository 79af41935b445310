"""Graph primitives and search algorithms for valvenet."""

from valvenet.lib.graph import StrictDiGraph

__all__ = ["StrictDiGraph"]
