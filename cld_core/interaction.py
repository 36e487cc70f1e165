"""Pointer interaction as an explicit state machine.

Handlers take the current state and return a :class:`Transition`; nothing
here keeps ambient "pending arc" or "dragging" fields. Model changes go through
the :class:`~cld_core.editor.Editor` passed in, so history is recorded there.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .editor import Editor
from .geometry import clamp_curvature, curvature_from_pointer, node_distance
from .model import ArcId, DiagramError, DiagramState, NodeId

logger = logging.getLogger(__name__)

Point = Tuple[float, float]

DRAG_THRESHOLD = 4.0


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class PendingArc:
    from_id: NodeId


@dataclass(frozen=True)
class DraggingNode:
    node_id: NodeId
    pointer_origin: Point
    node_origin: Point
    before: DiagramState
    moved: bool = False


@dataclass(frozen=True)
class DraggingCurvature:
    arc_id: ArcId
    curvature: float


InteractionState = Union[Idle, PendingArc, DraggingNode, DraggingCurvature]


@dataclass(frozen=True)
class Transition:
    state: InteractionState
    error: Optional[str] = None


IDLE = Idle()


def arc_click(state: InteractionState, editor: Editor, node_id: NodeId) -> Transition:
    """First click picks the source node, second click creates the arc."""

    if not isinstance(state, PendingArc):
        editor.diagram.node(node_id)
        logger.info("Starting arc from node %s", node_id)
        return Transition(PendingArc(node_id))
    try:
        arc = editor.add_arc(state.from_id, node_id)
    except DiagramError as exc:
        logger.warning("Arc rejected: %s", exc)
        return Transition(IDLE, str(exc))
    logger.info("Arc %s created from %s to %s", arc.id, arc.from_id, arc.to_id)
    return Transition(IDLE)


def begin_node_drag(state: InteractionState, editor: Editor, node_id: NodeId, pointer: Point) -> Transition:
    node = editor.diagram.node(node_id)
    return Transition(
        DraggingNode(
            node_id=node_id,
            pointer_origin=(float(pointer[0]), float(pointer[1])),
            node_origin=node.position,
            before=editor.diagram.state(),
        )
    )


def drag_node(state: InteractionState, editor: Editor, pointer: Point) -> Transition:
    """Move the dragged node once the pointer has left the drag threshold."""

    if not isinstance(state, DraggingNode):
        return Transition(state)
    dx = pointer[0] - state.pointer_origin[0]
    dy = pointer[1] - state.pointer_origin[1]
    if not state.moved and math.hypot(dx, dy) < DRAG_THRESHOLD:
        return Transition(state)
    editor.move_node_preview(state.node_id, state.node_origin[0] + dx, state.node_origin[1] + dy)
    if state.moved:
        return Transition(state)
    return Transition(
        DraggingNode(state.node_id, state.pointer_origin, state.node_origin, state.before, moved=True)
    )


def end_node_drag(state: InteractionState, editor: Editor) -> Transition:
    """Finish a drag; a drag that moved the node becomes a single undo step."""

    if isinstance(state, DraggingNode) and state.moved:
        editor.checkpoint(state.before)
    return Transition(IDLE)


def begin_curvature_drag(state: InteractionState, editor: Editor, arc_id: ArcId) -> Transition:
    arc = editor.diagram.arc(arc_id)
    return Transition(DraggingCurvature(arc_id, arc.curvature))


def drag_curvature(state: InteractionState, editor: Editor, pointer: Point) -> Transition:
    """Project the pointer onto the arc normal; the clamped value is held in the state."""

    if not isinstance(state, DraggingCurvature):
        return Transition(state)
    arc = editor.diagram.arc(state.arc_id)
    from_node = editor.diagram.node(arc.from_id)
    to_node = editor.diagram.node(arc.to_id)
    raw = curvature_from_pointer(from_node, to_node, pointer)
    curvature = clamp_curvature(raw, node_distance(from_node, to_node))
    return Transition(DraggingCurvature(state.arc_id, curvature))


def end_curvature_drag(state: InteractionState, editor: Editor) -> Transition:
    if not isinstance(state, DraggingCurvature):
        return Transition(IDLE)
    try:
        editor.set_arc_curvature(state.arc_id, state.curvature)
    except DiagramError as exc:
        # the arc was removed while dragging
        return Transition(IDLE, str(exc))
    return Transition(IDLE)


def cancel(state: InteractionState, editor: Editor) -> Transition:
    """Abandon the current gesture, restoring a dragged node to where it started."""

    if isinstance(state, DraggingNode) and state.moved:
        editor.move_node_preview(state.node_id, *state.node_origin)
    return Transition(IDLE)


__all__ = [
    "DRAG_THRESHOLD",
    "Idle",
    "PendingArc",
    "DraggingNode",
    "DraggingCurvature",
    "InteractionState",
    "Transition",
    "IDLE",
    "arc_click",
    "begin_node_drag",
    "drag_node",
    "end_node_drag",
    "begin_curvature_drag",
    "drag_curvature",
    "end_curvature_drag",
    "cancel",
]
