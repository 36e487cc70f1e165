import pytest

from cld_core.editor import Editor
from cld_core.interaction import (
    IDLE,
    DraggingCurvature,
    DraggingNode,
    PendingArc,
    arc_click,
    begin_curvature_drag,
    begin_node_drag,
    cancel,
    drag_curvature,
    drag_node,
    end_curvature_drag,
    end_node_drag,
)


@pytest.fixture
def editor():
    editor = Editor()
    editor.add_node(0, 0, "A")
    editor.add_node(100, 0, "B")
    editor.history.clear()
    return editor


def test_two_clicks_create_an_arc(editor):
    step = arc_click(IDLE, editor, "1")
    assert step.state == PendingArc("1")

    step = arc_click(step.state, editor, "2")

    assert step.state is IDLE
    assert step.error is None
    assert [arc.key for arc in editor.diagram.arcs] == [("1", "2")]
    assert editor.history.depth == 1


def test_clicking_the_same_node_reports_self_loop(editor):
    step = arc_click(arc_click(IDLE, editor, "1").state, editor, "1")

    assert step.state is IDLE
    assert "self-loop" in step.error
    assert editor.diagram.arcs == []
    assert editor.history.depth == 0


def test_duplicate_arc_reports_error(editor):
    editor.add_arc("1", "2")

    step = arc_click(arc_click(IDLE, editor, "1").state, editor, "2")

    assert step.state is IDLE
    assert "already exists" in step.error
    assert len(editor.diagram.arcs) == 1


def test_small_pointer_motion_is_not_a_drag(editor):
    state = begin_node_drag(IDLE, editor, "1", (0, 0)).state
    state = drag_node(state, editor, (2, 2)).state

    assert isinstance(state, DraggingNode) and not state.moved
    assert end_node_drag(state, editor).state is IDLE
    assert editor.diagram.node("1").position == (0.0, 0.0)
    assert editor.history.depth == 0


def test_drag_is_a_single_undo_step(editor):
    state = begin_node_drag(IDLE, editor, "1", (3, 3)).state
    for pointer in [(10, 3), (20, 13), (33, 43)]:
        state = drag_node(state, editor, pointer).state

    assert editor.diagram.node("1").position == (30.0, 40.0)
    end_node_drag(state, editor)
    assert editor.history.depth == 1

    editor.undo()
    assert editor.diagram.node("1").position == (0.0, 0.0)


def test_cancel_restores_dragged_node(editor):
    state = begin_node_drag(IDLE, editor, "2", (100, 0)).state
    state = drag_node(state, editor, (150, 60)).state

    assert cancel(state, editor).state is IDLE
    assert editor.diagram.node("2").position == (100.0, 0.0)
    assert editor.history.depth == 0


@pytest.mark.parametrize("pointer, expected", [((50, 200), 49.0), ((50, 5), 20.0), ((50, -30), -30.0)])
def test_curvature_drag_is_clamped(editor, pointer, expected):
    arc = editor.add_arc("1", "2")
    state = begin_curvature_drag(IDLE, editor, arc.id).state

    state = drag_curvature(state, editor, pointer).state

    assert isinstance(state, DraggingCurvature)
    assert state.curvature == pytest.approx(expected)
    assert editor.diagram.arc(arc.id).curvature == 40.0


def test_curvature_drag_commits_once_and_undoes(editor):
    arc = editor.add_arc("1", "2")
    depth = editor.history.depth
    state = begin_curvature_drag(IDLE, editor, arc.id).state
    state = drag_curvature(state, editor, (50, 30)).state
    state = drag_curvature(state, editor, (50, 200)).state

    end_curvature_drag(state, editor)

    assert editor.diagram.arc(arc.id).curvature == pytest.approx(49.0)
    assert editor.history.depth == depth + 1
    editor.undo()
    assert editor.diagram.arc(arc.id).curvature == 40.0


def test_curvature_drag_on_removed_arc_reports_error(editor):
    arc = editor.add_arc("1", "2")
    state = begin_curvature_drag(IDLE, editor, arc.id).state
    editor.remove_arc(arc.id)

    step = end_curvature_drag(state, editor)

    assert step.state is IDLE
    assert step.error


def test_second_click_on_removed_node_returns_to_idle(editor):
    state = arc_click(IDLE, editor, "1").state
    editor.remove_node("2")

    step = arc_click(state, editor, "2")

    assert step.state is IDLE
    assert "unknown node" in step.error
    assert editor.diagram.arcs == []
