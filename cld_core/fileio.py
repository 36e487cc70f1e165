"""Reading and writing ``.cld`` diagram documents (JSON, version 1)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from .model import DEFAULT_ARC_COLOR, DEFAULT_NODE_COLOR, DEFAULT_NODE_LABEL, Diagram, DiagramError, Sign

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
FILE_SUFFIX = ".cld"


class DiagramFileError(ValueError):
    """Raised when a document cannot be read as a diagram."""


def diagram_to_dict(diagram: Diagram) -> Dict[str, Any]:
    return {
        "version": FORMAT_VERSION,
        "nodes": [
            {"id": n.id, "x": n.x, "y": n.y, "label": n.label, "color": n.color}
            for n in diagram.nodes
        ],
        "arcs": [
            {
                "id": a.id,
                "from": a.from_id,
                "to": a.to_id,
                "sign": a.sign.value,
                "color": a.color,
                "curvature": a.curvature,
                "curvatureSign": a.curvature_sign,
            }
            for a in diagram.arcs
        ],
        "defaultNodeColor": diagram.default_node_color,
        "defaultArcColor": diagram.default_arc_color,
    }


def diagram_from_dict(data: Dict[str, Any]) -> Diagram:
    """Rebuild a diagram through the model, so its invariants apply to the document."""

    if not isinstance(data, dict):
        raise DiagramFileError("document is not a JSON object")
    version = data.get("version")
    if version != FORMAT_VERSION:
        raise DiagramFileError(f"unsupported document version {version!r}")

    diagram = Diagram(
        default_node_color=data.get("defaultNodeColor", DEFAULT_NODE_COLOR),
        default_arc_color=data.get("defaultArcColor", DEFAULT_ARC_COLOR),
    )
    try:
        for node in data.get("nodes", []):
            diagram.add_node(
                node["x"],
                node["y"],
                node.get("label", DEFAULT_NODE_LABEL),
                node.get("color"),
                node_id=str(node["id"]),
            )
        for arc in data.get("arcs", []):
            diagram.add_arc(
                str(arc["from"]),
                str(arc["to"]),
                Sign(arc.get("sign", "+")),
                curvature=arc.get("curvature"),
                color=arc.get("color"),
                arc_id=str(arc["id"]),
            )
    except DiagramError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise DiagramFileError(f"malformed document: {exc!r}") from exc
    logger.info("Loaded diagram with %d node(s) and %d arc(s)", len(diagram.nodes), len(diagram.arcs))
    return diagram


def dumps_diagram(diagram: Diagram) -> str:
    return json.dumps(diagram_to_dict(diagram), indent=2)


def loads_diagram(text: str) -> Diagram:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DiagramFileError(f"not valid JSON: {exc}") from exc
    return diagram_from_dict(data)


def dump_diagram(diagram: Diagram, path: Union[str, Path]) -> Path:
    path = Path(path)
    if path.suffix.lower() != FILE_SUFFIX:
        path = path.with_name(path.name + FILE_SUFFIX)
    path.write_text(dumps_diagram(diagram), encoding="utf-8")
    return path


def load_diagram(path: Union[str, Path]) -> Diagram:
    return loads_diagram(Path(path).read_text(encoding="utf-8"))


__all__ = [
    "FORMAT_VERSION",
    "FILE_SUFFIX",
    "DiagramFileError",
    "diagram_to_dict",
    "diagram_from_dict",
    "dumps_diagram",
    "loads_diagram",
    "dump_diagram",
    "load_diagram",
]
