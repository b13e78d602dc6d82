"""Graph module providing the chip registry and graph algorithms.

This module contains:
- ChipGraph: The registry that owns, wires, and resolves chips
- find_cycle: Algorithm for locating a dependency cycle
"""

from ._algorithms import find_cycle
from ._chip_graph import ChipGraph

__all__ = ["ChipGraph", "find_cycle"]
