import pytest

from cld_core.editor import Editor
from cld_core.geometry import ArcPath
from cld_core.model import DuplicateArcError, SelfLoopError, Sign
from cld_core.analysis import LoopType


@pytest.fixture
def editor():
    return Editor()


def test_each_edit_is_one_undo_step(editor):
    a = editor.add_node(0, 0, "A")
    b = editor.add_node(100, 0, "B")
    arc = editor.add_arc(a.id, b.id)

    assert editor.history.depth == 3
    assert editor.undo()
    assert editor.diagram.arcs == []
    assert editor.redo()
    assert editor.diagram.arc(arc.id) == arc


def test_undo_and_redo_on_empty_history(editor):
    assert editor.undo() is False
    assert editor.redo() is False


def test_failed_edit_leaves_history_untouched(editor):
    a = editor.add_node(0, 0)
    b = editor.add_node(100, 0)
    editor.add_arc(a.id, b.id)
    depth = editor.history.depth

    with pytest.raises(SelfLoopError):
        editor.add_arc(a.id, a.id)
    with pytest.raises(DuplicateArcError):
        editor.add_arc(a.id, b.id)

    assert editor.history.depth == depth


def test_undo_restores_removed_node_and_arcs(editor):
    a = editor.add_node(0, 0)
    b = editor.add_node(100, 0)
    editor.add_arc(a.id, b.id)
    editor.add_arc(b.id, a.id, Sign.NEGATIVE)

    editor.remove_node(b.id)
    assert editor.diagram.arcs == []

    editor.undo()
    assert len(editor.diagram.arcs) == 2
    assert [loop.type for loop in editor.loops()] == [LoopType.BALANCING]


def test_new_edit_after_undo_drops_redo(editor):
    a = editor.add_node(0, 0)
    editor.move_node(a.id, 50, 50)
    editor.undo()

    editor.update_node_label(a.id, "Stock")

    assert not editor.history.can_redo
    assert editor.diagram.node(a.id).position == (0.0, 0.0)


def test_undo_does_not_rewind_id_counters(editor):
    editor.add_node(0, 0)
    editor.add_node(10, 0)
    editor.undo()

    assert editor.add_node(20, 0).id == "3"


def test_preview_moves_skip_history(editor):
    a = editor.add_node(0, 0)
    before = editor.diagram.state()

    editor.move_node_preview(a.id, 5, 5)
    editor.move_node_preview(a.id, 9, 9)
    assert editor.history.depth == 1

    editor.checkpoint(before)
    editor.undo()
    assert editor.diagram.node(a.id).position == (0.0, 0.0)


def test_clear_also_clears_history(editor):
    editor.add_node(0, 0)

    editor.clear()

    assert editor.diagram.nodes == []
    assert not editor.history.can_undo


def test_arc_path_uses_stored_or_override_curvature(editor):
    a = editor.add_node(0, 0)
    b = editor.add_node(200, 0)
    arc = editor.add_arc(a.id, b.id)

    stored = editor.arc_path(arc.id)
    flipped = editor.arc_path(arc.id, curvature=-40.0)

    assert isinstance(stored, ArcPath)
    assert stored.sweep == -flipped.sweep
    assert stored.control_point == pytest.approx((100.0, 40.0))
