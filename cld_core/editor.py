"""Editing session tying the diagram to its undo history."""

from __future__ import annotations

import logging
from typing import Callable, List, Mapping, Optional, TypeVar

from .analysis import Loop, get_all_loops
from .geometry import ArcPath, Footprint, compute_arc_path, footprint_for_label
from .history import History
from .logging_utils import apply_debug_logging
from .model import Arc, ArcId, Diagram, DiagramState, Node, NodeId, Sign

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Editor:
    """A diagram plus history.

    Every mutating method records the state from just before the change, and
    only when the change succeeds, so a rejected edit leaves history untouched.
    """

    def __init__(self, diagram: Optional[Diagram] = None, history: Optional[History] = None) -> None:
        self.diagram = diagram if diagram is not None else Diagram()
        self.history = history if history is not None else History()

    # -- history -----------------------------------------------------------

    def _record(self, mutate: Callable[..., T], *args, **kwargs) -> T:
        before = self.diagram.state()
        result = mutate(*args, **kwargs)
        self.history.snapshot(before)
        return result

    def checkpoint(self, before: DiagramState) -> None:
        """Record ``before`` as the undo point for changes made without history."""
        self.history.snapshot(before)

    def undo(self) -> bool:
        previous = self.history.undo(self.diagram.state())
        if previous is None:
            return False
        self.diagram.restore(previous)
        return True

    def redo(self) -> bool:
        following = self.history.redo(self.diagram.state())
        if following is None:
            return False
        self.diagram.restore(following)
        return True

    # -- nodes -------------------------------------------------------------

    def add_node(self, x: float, y: float, label: Optional[str] = None, color: Optional[str] = None) -> Node:
        if label is None:
            return self._record(self.diagram.add_node, x, y, color=color)
        return self._record(self.diagram.add_node, x, y, label, color)

    def move_node(self, node_id: NodeId, x: float, y: float) -> Node:
        return self._record(self.diagram.move_node, node_id, x, y)

    def move_node_preview(self, node_id: NodeId, x: float, y: float) -> Node:
        return self.diagram.move_node(node_id, x, y)

    def update_node_label(self, node_id: NodeId, label: str) -> Node:
        return self._record(self.diagram.update_node_label, node_id, label)

    def set_node_color(self, node_id: NodeId, color: str) -> Node:
        return self._record(self.diagram.set_node_color, node_id, color)

    def remove_node(self, node_id: NodeId) -> List[Arc]:
        return self._record(self.diagram.remove_node, node_id)

    # -- arcs --------------------------------------------------------------

    def add_arc(self, from_id: NodeId, to_id: NodeId, sign: Sign = Sign.POSITIVE, **kwargs) -> Arc:
        return self._record(self.diagram.add_arc, from_id, to_id, sign, **kwargs)

    def remove_arc(self, arc_id: ArcId) -> Arc:
        return self._record(self.diagram.remove_arc, arc_id)

    def toggle_arc_sign(self, arc_id: ArcId) -> Arc:
        return self._record(self.diagram.toggle_arc_sign, arc_id)

    def set_arc_color(self, arc_id: ArcId, color: str) -> Arc:
        return self._record(self.diagram.set_arc_color, arc_id, color)

    def set_arc_curvature(self, arc_id: ArcId, curvature: float) -> Arc:
        return self._record(self.diagram.set_arc_curvature, arc_id, curvature)

    # -- whole document ----------------------------------------------------

    def clear(self) -> None:
        """Empty the diagram and forget history, like starting a new document."""
        self.diagram.clear()
        self.history.clear()

    def load(self, diagram: Diagram) -> None:
        self.diagram = diagram
        self.history.clear()

    # -- derived views -----------------------------------------------------

    def loops(self) -> List[Loop]:
        return get_all_loops(self.diagram.nodes, self.diagram.arcs)

    def footprint(self, node_id: NodeId) -> Footprint:
        return footprint_for_label(self.diagram.node(node_id).label)

    def arc_path(
        self,
        arc_id: ArcId,
        footprints: Optional[Mapping[NodeId, Footprint]] = None,
        *,
        curvature: Optional[float] = None,
    ) -> ArcPath:
        """Geometry for one arc; ``curvature`` overrides the stored value (drag preview)."""

        arc = self.diagram.arc(arc_id)
        from_node = self.diagram.node(arc.from_id)
        to_node = self.diagram.node(arc.to_id)
        footprints = footprints or {}
        return compute_arc_path(
            from_node,
            to_node,
            arc.curvature if curvature is None else curvature,
            footprints.get(arc.from_id) or self.footprint(arc.from_id),
            footprints.get(arc.to_id) or self.footprint(arc.to_id),
        )


apply_debug_logging(globals(), logger=logger, skip={"Editor.footprint"}, wrap_methods=True)


__all__ = ["Editor"]
