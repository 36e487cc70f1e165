"""Enumeration of simple directed cycles (Johnson's algorithm, iterative form)."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple, Union

from ..config import AnalysisConfig, get_analysis_config
from ..logging_utils import apply_debug_logging
from ..model import Arc, Node, NodeId, numeric_id

logger = logging.getLogger(__name__)

Cycle = List[NodeId]


def node_id_key(node_id: NodeId) -> Tuple[int, Union[int, str]]:
    """Sort key placing numeric ids first, in numeric order, then other ids."""

    value = numeric_id(node_id)
    if value is not None:
        return (0, value)
    return (1, node_id)


def canonical_rotation(cycle: Sequence[NodeId]) -> Tuple[NodeId, ...]:
    """Rotate ``cycle`` so its smallest id (by :func:`node_id_key`) comes first."""

    if not cycle:
        return ()
    start = min(range(len(cycle)), key=lambda idx: node_id_key(cycle[idx]))
    return tuple(cycle[start:]) + tuple(cycle[:start])


def _node_ids(nodes: Iterable[Union[Node, NodeId]]) -> List[NodeId]:
    ids: List[NodeId] = []
    seen: Set[NodeId] = set()
    for node in nodes:
        node_id = getattr(node, "id", node)
        if node_id not in seen:
            seen.add(node_id)
            ids.append(node_id)
    return ids


def _adjacency(order: Sequence[NodeId], arcs: Iterable[Arc]) -> Dict[NodeId, List[NodeId]]:
    adjacency: Dict[NodeId, List[NodeId]] = {node_id: [] for node_id in order}
    for arc in arcs:
        if arc.from_id not in adjacency or arc.to_id not in adjacency:
            logger.debug("Ignoring arc %s with unknown endpoint", arc.id)
            continue
        if arc.from_id == arc.to_id:
            continue
        if arc.to_id not in adjacency[arc.from_id]:
            adjacency[arc.from_id].append(arc.to_id)
    return adjacency


def _unblock(node: NodeId, blocked: Set[NodeId], waiting: Dict[NodeId, Set[NodeId]]) -> None:
    pending = [node]
    while pending:
        current = pending.pop()
        if current not in blocked:
            continue
        blocked.discard(current)
        pending.extend(waiting.pop(current, ()))


def _circuits_through(start: NodeId, successors: Dict[NodeId, List[NodeId]]) -> Iterator[Cycle]:
    """Yield every simple cycle through ``start`` within ``successors``.

    Each stack frame is ``(node, neighbour iterator, closed flag)``; a frame is
    closed once some path below it has returned to ``start``.
    """

    blocked: Set[NodeId] = {start}
    waiting: Dict[NodeId, Set[NodeId]] = defaultdict(set)
    path: List[NodeId] = [start]
    frames: List[List] = [[start, iter(successors[start]), False]]

    while frames:
        frame = frames[-1]
        node, neighbours = frame[0], frame[1]
        descended = False
        for nxt in neighbours:
            if nxt == start:
                yield list(path)
                frame[2] = True
            elif nxt not in blocked:
                path.append(nxt)
                blocked.add(nxt)
                frames.append([nxt, iter(successors[nxt]), False])
                descended = True
                break
        if descended:
            continue

        frames.pop()
        path.pop()
        closed = frame[2]
        if closed:
            _unblock(node, blocked, waiting)
        else:
            for nxt in successors[node]:
                waiting[nxt].add(node)
        if frames and closed:
            frames[-1][2] = True


def find_all_simple_cycles(
    nodes: Iterable[Union[Node, NodeId]],
    arcs: Iterable[Arc],
    *,
    config: Optional[AnalysisConfig] = None,
) -> List[Cycle]:
    """Return every simple directed cycle, each rotated to start at its smallest id.

    Cycles are listed in discovery order: by start node in ``nodes`` order, then
    depth-first along arcs in ``arcs`` order. Graphs above the configured size
    limits are not analysed and yield an empty list.
    """

    if config is None:
        config = get_analysis_config()
    order = _node_ids(nodes)
    arcs = list(arcs)

    if (config.max_nodes is not None and len(order) > config.max_nodes) or (
        config.max_arcs is not None and len(arcs) > config.max_arcs
    ):
        logger.warning(
            "Graph too large for cycle enumeration (%d nodes, %d arcs); skipping",
            len(order),
            len(arcs),
        )
        return []

    adjacency = _adjacency(order, arcs)
    rank = {node_id: idx for idx, node_id in enumerate(order)}

    cycles: List[Cycle] = []
    seen: Set[Tuple[NodeId, ...]] = set()
    for idx, start in enumerate(order):
        # subgraph induced by start and the nodes after it
        successors = {
            node_id: [nxt for nxt in adjacency[node_id] if rank[nxt] >= idx]
            for node_id in order[idx:]
        }
        for cycle in _circuits_through(start, successors):
            key = canonical_rotation(cycle)
            if key in seen:
                continue
            seen.add(key)
            cycles.append(list(key))

    logger.debug("Found %d simple cycle(s) in %d node(s)", len(cycles), len(order))
    return cycles


apply_debug_logging(globals(), logger=logger, skip={"node_id_key", "canonical_rotation"})


__all__ = [
    "Cycle",
    "node_id_key",
    "canonical_rotation",
    "find_all_simple_cycles",
]
