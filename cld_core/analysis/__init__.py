"""Feedback loop detection over the diagram graph."""

from .cycles import Cycle, canonical_rotation, find_all_simple_cycles, node_id_key
from .loops import (
    Loop,
    LoopStats,
    LoopType,
    classify_cycle,
    classify_loops,
    get_all_loops,
    is_arc_in_loop,
    loop_stats,
)

__all__ = [
    "Cycle",
    "canonical_rotation",
    "find_all_simple_cycles",
    "node_id_key",
    "Loop",
    "LoopStats",
    "LoopType",
    "classify_cycle",
    "classify_loops",
    "get_all_loops",
    "is_arc_in_loop",
    "loop_stats",
]
