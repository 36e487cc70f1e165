import json

import cld_core.__main__ as cli
from cld_core.fileio import dump_diagram
from cld_core.model import Diagram, Sign


def _write_triangle(tmp_path):
    diagram = Diagram()
    a = diagram.add_node(0, 0, "A")
    b = diagram.add_node(200, 0, "B")
    c = diagram.add_node(100, 160, "C")
    diagram.add_arc(a.id, b.id)
    diagram.add_arc(b.id, c.id)
    diagram.add_arc(c.id, a.id, Sign.NEGATIVE)
    return dump_diagram(diagram, tmp_path / "triangle.cld")


def test_main_reports_loops(tmp_path, capsys):
    path = _write_triangle(tmp_path)

    assert cli.main([str(path)]) == 0

    out = capsys.readouterr().out
    assert "Nodes: 3" in out
    assert "Arcs: 3" in out
    assert "Loops: 1 (reinforcing=0, balancing=1, unknown=0)" in out
    assert "  L1 [B] 1 -> 2 -> 3 -> 1" in out


def test_main_prints_arc_geometry(tmp_path, capsys):
    path = _write_triangle(tmp_path)

    assert cli.main([str(path), "--arcs"]) == 0

    out = capsys.readouterr().out
    assert "Arc geometry:" in out
    assert "  1: 1 -> 2 [+] circle=" in out
    assert "sweep=" in out


def test_main_missing_file_returns_error(tmp_path):
    assert cli.main([str(tmp_path / "absent.cld")]) == 1


def _write_document(tmp_path, name, arcs):
    document = {
        "version": 1,
        "nodes": [{"id": "1", "x": 0, "y": 0}, {"id": "2", "x": 100, "y": 0}],
        "arcs": arcs,
    }
    path = tmp_path / name
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_main_rejects_document_with_duplicate_arc(tmp_path):
    path = _write_document(
        tmp_path,
        "dup.cld",
        [{"id": "1", "from": "1", "to": "2", "sign": "+"}, {"id": "2", "from": "1", "to": "2", "sign": "-"}],
    )

    assert cli.main([str(path)]) == 1


def test_main_rejects_document_with_bad_sign(tmp_path):
    path = _write_document(tmp_path, "sign.cld", [{"id": "1", "from": "1", "to": "2", "sign": "x"}])

    assert cli.main([str(path)]) == 1
