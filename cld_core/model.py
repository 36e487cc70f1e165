"""Graph model for causal loop diagrams: nodes, signed arcs and the diagram."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .config import get_geometry_config

logger = logging.getLogger(__name__)

NodeId = str
ArcId = str

DEFAULT_NODE_LABEL = "Variable"
DEFAULT_NODE_COLOR = "#222"
DEFAULT_ARC_COLOR = "#888"


class DiagramError(ValueError):
    """Base class for edits rejected by the graph model."""


class UnknownNodeError(DiagramError):
    def __init__(self, node_id: NodeId):
        super().__init__(f"unknown node {node_id!r}")
        self.node_id = node_id


class UnknownArcError(DiagramError):
    def __init__(self, arc_id: ArcId):
        super().__init__(f"unknown arc {arc_id!r}")
        self.arc_id = arc_id


class SelfLoopError(DiagramError):
    def __init__(self, node_id: NodeId):
        super().__init__(f"cannot create self-loop on node {node_id!r}")
        self.node_id = node_id


class DuplicateArcError(DiagramError):
    def __init__(self, from_id: NodeId, to_id: NodeId):
        super().__init__(f"arc from {from_id!r} to {to_id!r} already exists")
        self.from_id = from_id
        self.to_id = to_id


class Sign(str, Enum):
    POSITIVE = "+"
    NEGATIVE = "-"

    @property
    def factor(self) -> int:
        return 1 if self is Sign.POSITIVE else -1

    def flipped(self) -> "Sign":
        return Sign.NEGATIVE if self is Sign.POSITIVE else Sign.POSITIVE


def curvature_sign_of(curvature: float) -> int:
    return -1 if curvature < 0 else 1


@dataclass(frozen=True)
class Node:
    id: NodeId
    x: float
    y: float
    label: str = DEFAULT_NODE_LABEL
    color: str = DEFAULT_NODE_COLOR

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Arc:
    id: ArcId
    from_id: NodeId
    to_id: NodeId
    sign: Sign = Sign.POSITIVE
    color: str = DEFAULT_ARC_COLOR
    curvature: float = 40.0

    @property
    def curvature_sign(self) -> int:
        return curvature_sign_of(self.curvature)

    @property
    def key(self) -> Tuple[NodeId, NodeId]:
        return (self.from_id, self.to_id)


@dataclass(frozen=True)
class DiagramState:
    """Immutable view of the diagram contents at one point in time."""

    nodes: Tuple[Node, ...] = ()
    arcs: Tuple[Arc, ...] = ()


@dataclass
class Diagram:
    """Mutable graph of nodes and signed arcs.

    Node order is insertion order; the cycle finder relies on it for stable
    loop numbering.
    """

    default_node_color: str = DEFAULT_NODE_COLOR
    default_arc_color: str = DEFAULT_ARC_COLOR
    _nodes: Dict[NodeId, Node] = field(default_factory=dict, repr=False)
    _arcs: Dict[ArcId, Arc] = field(default_factory=dict, repr=False)
    _node_counter: int = field(default=1, repr=False)
    _arc_counter: int = field(default=1, repr=False)

    # -- queries -----------------------------------------------------------

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def arcs(self) -> List[Arc]:
        return list(self._arcs.values())

    def node(self, node_id: NodeId) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def arc(self, arc_id: ArcId) -> Arc:
        try:
            return self._arcs[arc_id]
        except KeyError:
            raise UnknownArcError(arc_id) from None

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._nodes

    def find_arc(self, from_id: NodeId, to_id: NodeId) -> Optional[Arc]:
        for arc in self._arcs.values():
            if arc.from_id == from_id and arc.to_id == to_id:
                return arc
        return None

    def arcs_touching(self, node_id: NodeId) -> List[Arc]:
        return [a for a in self._arcs.values() if a.from_id == node_id or a.to_id == node_id]

    def state(self) -> DiagramState:
        return DiagramState(nodes=tuple(self._nodes.values()), arcs=tuple(self._arcs.values()))

    def restore(self, state: DiagramState) -> None:
        """Replace the contents with ``state``. Id counters are not rewound."""

        self._nodes = {n.id: n for n in state.nodes}
        self._arcs = {a.id: a for a in state.arcs}
        self._node_counter = max(self._node_counter, _next_counter(self._nodes))
        self._arc_counter = max(self._arc_counter, _next_counter(self._arcs))

    # -- validation --------------------------------------------------------

    def check_arc(self, from_id: NodeId, to_id: NodeId) -> None:
        """Raise the error :meth:`add_arc` would raise for ``from_id -> to_id``."""

        if from_id == to_id:
            raise SelfLoopError(from_id)
        for node_id in (from_id, to_id):
            if node_id not in self._nodes:
                raise UnknownNodeError(node_id)
        if self.find_arc(from_id, to_id) is not None:
            raise DuplicateArcError(from_id, to_id)

    # -- mutation ----------------------------------------------------------

    def add_node(
        self,
        x: float,
        y: float,
        label: str = DEFAULT_NODE_LABEL,
        color: Optional[str] = None,
        *,
        node_id: Optional[NodeId] = None,
    ) -> Node:
        if node_id is None:
            node_id = self._take_node_id()
        elif node_id in self._nodes:
            raise DiagramError(f"node {node_id!r} already exists")
        node = Node(node_id, float(x), float(y), label, color or self.default_node_color)
        counter = max(self._node_counter, _next_counter([*self._nodes, node_id]))
        self._nodes[node_id] = node
        self._node_counter = counter
        logger.debug("Added node %s at (%.1f, %.1f)", node_id, node.x, node.y)
        return node

    def move_node(self, node_id: NodeId, x: float, y: float) -> Node:
        return self._update_node(node_id, x=float(x), y=float(y))

    def update_node_label(self, node_id: NodeId, label: str) -> Node:
        return self._update_node(node_id, label=label)

    def set_node_color(self, node_id: NodeId, color: str) -> Node:
        return self._update_node(node_id, color=color)

    def remove_node(self, node_id: NodeId) -> List[Arc]:
        """Remove a node and every arc touching it; return the removed arcs."""

        self.node(node_id)
        removed = self.arcs_touching(node_id)
        for arc in removed:
            del self._arcs[arc.id]
        del self._nodes[node_id]
        logger.debug("Removed node %s and %d arc(s)", node_id, len(removed))
        return removed

    def add_arc(
        self,
        from_id: NodeId,
        to_id: NodeId,
        sign: Sign = Sign.POSITIVE,
        *,
        curvature: Optional[float] = None,
        color: Optional[str] = None,
        arc_id: Optional[ArcId] = None,
    ) -> Arc:
        self.check_arc(from_id, to_id)
        if arc_id is None:
            arc_id = self._take_arc_id()
        elif arc_id in self._arcs:
            raise DiagramError(f"arc {arc_id!r} already exists")
        if curvature is None:
            curvature = get_geometry_config().default_curvature
        arc = Arc(
            arc_id,
            from_id,
            to_id,
            Sign(sign),
            color or self.default_arc_color,
            float(curvature),
        )
        counter = max(self._arc_counter, _next_counter([*self._arcs, arc_id]))
        self._arcs[arc_id] = arc
        self._arc_counter = counter
        logger.debug("Added arc %s: %s -> %s (%s)", arc_id, from_id, to_id, arc.sign.value)
        return arc

    def remove_arc(self, arc_id: ArcId) -> Arc:
        arc = self.arc(arc_id)
        del self._arcs[arc_id]
        return arc

    def set_arc_sign(self, arc_id: ArcId, sign: Sign) -> Arc:
        return self._update_arc(arc_id, sign=Sign(sign))

    def toggle_arc_sign(self, arc_id: ArcId) -> Arc:
        return self._update_arc(arc_id, sign=self.arc(arc_id).sign.flipped())

    def set_arc_color(self, arc_id: ArcId, color: str) -> Arc:
        return self._update_arc(arc_id, color=color)

    def set_arc_curvature(self, arc_id: ArcId, curvature: float) -> Arc:
        return self._update_arc(arc_id, curvature=float(curvature))

    def clear(self) -> None:
        self._nodes.clear()
        self._arcs.clear()
        self._node_counter = 1
        self._arc_counter = 1

    # -- internals ---------------------------------------------------------

    def _update_node(self, node_id: NodeId, **changes) -> Node:
        node = replace(self.node(node_id), **changes)
        self._nodes[node_id] = node
        return node

    def _update_arc(self, arc_id: ArcId, **changes) -> Arc:
        arc = replace(self.arc(arc_id), **changes)
        self._arcs[arc_id] = arc
        return arc

    def _take_node_id(self) -> NodeId:
        while str(self._node_counter) in self._nodes:
            self._node_counter += 1
        node_id = str(self._node_counter)
        self._node_counter += 1
        return node_id

    def _take_arc_id(self) -> ArcId:
        while str(self._arc_counter) in self._arcs:
            self._arc_counter += 1
        arc_id = str(self._arc_counter)
        self._arc_counter += 1
        return arc_id


def numeric_id(key: str) -> Optional[int]:
    """Integer value of an id made only of ASCII digits, else ``None``."""
    if key.isascii() and key.isdecimal():
        return int(key)
    return None


def _next_counter(keys: Iterable[str]) -> int:
    numeric = [value for value in map(numeric_id, keys) if value is not None]
    return max(numeric) + 1 if numeric else 1


def diagram_from_state(state: DiagramState, **kwargs) -> Diagram:
    diagram = Diagram(**kwargs)
    diagram.restore(state)
    return diagram


def index_nodes(nodes: Iterable[Node]) -> Dict[NodeId, Node]:
    return {node.id: node for node in nodes}


__all__ = [
    "NodeId",
    "ArcId",
    "DEFAULT_NODE_LABEL",
    "DEFAULT_NODE_COLOR",
    "DEFAULT_ARC_COLOR",
    "DiagramError",
    "UnknownNodeError",
    "UnknownArcError",
    "SelfLoopError",
    "DuplicateArcError",
    "Sign",
    "curvature_sign_of",
    "Node",
    "Arc",
    "DiagramState",
    "Diagram",
    "diagram_from_state",
    "index_nodes",
    "numeric_id",
]
