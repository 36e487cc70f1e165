"""Feedback loop classification by edge-sign product."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..config import AnalysisConfig
from ..logging_utils import apply_debug_logging
from ..model import Arc, Node, NodeId
from .cycles import find_all_simple_cycles

logger = logging.getLogger(__name__)


class LoopType(str, Enum):
    REINFORCING = "R"
    BALANCING = "B"
    UNKNOWN = "?"


@dataclass(frozen=True)
class Loop:
    id: str
    nodes: Tuple[NodeId, ...]
    type: LoopType

    @property
    def length(self) -> int:
        return len(self.nodes)

    def edges(self) -> List[Tuple[NodeId, NodeId]]:
        """Consecutive ``(from, to)`` pairs, including the closing edge."""
        count = len(self.nodes)
        return [(self.nodes[i], self.nodes[(i + 1) % count]) for i in range(count)]

    def describe(self) -> str:
        return " -> ".join(list(self.nodes) + [self.nodes[0]]) if self.nodes else ""


@dataclass(frozen=True)
class LoopStats:
    total: int
    reinforcing: int
    balancing: int
    unknown: int


def classify_cycle(cycle: Sequence[NodeId], arcs_by_pair: Dict[Tuple[NodeId, NodeId], Arc]) -> LoopType:
    product = 1
    count = len(cycle)
    for idx in range(count):
        pair = (cycle[idx], cycle[(idx + 1) % count])
        arc = arcs_by_pair.get(pair)
        if arc is None:
            logger.warning("No arc for loop edge %s -> %s; loop polarity unknown", *pair)
            return LoopType.UNKNOWN
        product *= arc.sign.factor
    return LoopType.REINFORCING if product > 0 else LoopType.BALANCING


def classify_loops(cycles: Iterable[Sequence[NodeId]], arcs: Iterable[Arc]) -> List[Loop]:
    """Label each cycle reinforcing or balancing; ids are ``L1, L2, ...`` in order."""

    arcs_by_pair: Dict[Tuple[NodeId, NodeId], Arc] = {}
    for arc in arcs:
        arcs_by_pair.setdefault((arc.from_id, arc.to_id), arc)

    loops = []
    for idx, cycle in enumerate(cycles, start=1):
        loops.append(Loop(id=f"L{idx}", nodes=tuple(cycle), type=classify_cycle(cycle, arcs_by_pair)))
    return loops


def get_all_loops(
    nodes: Iterable[Union[Node, NodeId]],
    arcs: Iterable[Arc],
    *,
    config: Optional[AnalysisConfig] = None,
) -> List[Loop]:
    arcs = list(arcs)
    cycles = find_all_simple_cycles(nodes, arcs, config=config)
    return classify_loops(cycles, arcs)


def is_arc_in_loop(arc: Arc, loop: Loop) -> bool:
    count = len(loop.nodes)
    for idx in range(count):
        if arc.from_id == loop.nodes[idx] and arc.to_id == loop.nodes[(idx + 1) % count]:
            return True
    return False


def loop_stats(loops: Iterable[Loop]) -> LoopStats:
    loops = list(loops)
    return LoopStats(
        total=len(loops),
        reinforcing=sum(1 for loop in loops if loop.type is LoopType.REINFORCING),
        balancing=sum(1 for loop in loops if loop.type is LoopType.BALANCING),
        unknown=sum(1 for loop in loops if loop.type is LoopType.UNKNOWN),
    )


apply_debug_logging(globals(), logger=logger, skip={"classify_cycle", "is_arc_in_loop"})


__all__ = [
    "LoopType",
    "Loop",
    "LoopStats",
    "classify_cycle",
    "classify_loops",
    "get_all_loops",
    "is_arc_in_loop",
    "loop_stats",
]
