import argparse
import logging
import sys
from typing import Optional, Sequence

from cld_core import (
    DegenerateCircleError,
    DiagramError,
    DiagramFileError,
    Editor,
    load_diagram,
    loop_stats,
)
from cld_core.geometry import footprint_for_label

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Analyse a causal loop diagram (.cld)")
    parser.add_argument("path", help="Path to the .cld document")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--arcs",
        action="store_true",
        help="Print the computed geometry for every arc",
    )
    parser.add_argument(
        "--font-size",
        type=float,
        default=None,
        help="Label font size used to size node footprints",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    logger.info("Loading diagram from %s", args.path)
    try:
        diagram = load_diagram(args.path)
    except (OSError, DiagramFileError, DiagramError) as exc:
        logger.error("Cannot read %s: %s", args.path, exc)
        return 1

    editor = Editor(diagram)
    loops = editor.loops()
    stats = loop_stats(loops)

    print(f"Nodes: {len(diagram.nodes)}")
    print(f"Arcs: {len(diagram.arcs)}")
    print(
        f"Loops: {stats.total} "
        f"(reinforcing={stats.reinforcing}, balancing={stats.balancing}, unknown={stats.unknown})"
    )
    for loop in loops:
        print(f"  {loop.id} [{loop.type.value}] {loop.describe()}")

    if args.arcs:
        footprints = {
            node.id: footprint_for_label(node.label, args.font_size) for node in diagram.nodes
        }
        print("Arc geometry:")
        for arc in diagram.arcs:
            try:
                path = editor.arc_path(arc.id, footprints)
            except DegenerateCircleError as exc:
                logger.warning("Arc %s (%s -> %s) is degenerate: %s", arc.id, arc.from_id, arc.to_id, exc)
                print(f"  {arc.id}: degenerate")
                continue
            circle = path.circle
            (sx, sy), (ex, ey) = path.start_point, path.end_point
            print(
                f"  {arc.id}: {arc.from_id} -> {arc.to_id} [{arc.sign.value}] "
                f"circle=({circle.cx:.3f}, {circle.cy:.3f}, r={circle.r:.3f}) "
                f"start=({sx:.3f}, {sy:.3f}) end=({ex:.3f}, {ey:.3f}) sweep={path.sweep:+d}"
            )
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
