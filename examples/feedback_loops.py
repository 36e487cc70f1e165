"""Example session: build a small causal loop diagram, analyse it and save it."""

from cld_core import Editor, Sign, dump_diagram, loop_stats

OUTPUT = "epidemic"


def main() -> None:
    editor = Editor()
    susceptible = editor.add_node(80, 200, "Susceptible")
    infections = editor.add_node(300, 80, "Infection rate")
    infected = editor.add_node(520, 200, "Infected")
    recoveries = editor.add_node(300, 340, "Recovery rate")

    editor.add_arc(susceptible.id, infections.id)
    editor.add_arc(infections.id, infected.id)
    editor.add_arc(infected.id, infections.id)
    editor.add_arc(infections.id, susceptible.id, Sign.NEGATIVE)
    editor.add_arc(infected.id, recoveries.id)
    editor.add_arc(recoveries.id, infected.id, Sign.NEGATIVE)

    loops = editor.loops()
    stats = loop_stats(loops)
    print(f"Loops: {stats.total} (reinforcing={stats.reinforcing}, balancing={stats.balancing})")
    for loop in loops:
        labels = [editor.diagram.node(node_id).label for node_id in loop.nodes]
        print(f"  {loop.id} [{loop.type.value}] {' -> '.join(labels + labels[:1])}")

    print("\nArcs:")
    for arc in editor.diagram.arcs:
        path = editor.arc_path(arc.id)
        (sx, sy), (ex, ey) = path.start_point, path.end_point
        print(f"  {arc.id} [{arc.sign.value}] ({sx:.1f}, {sy:.1f}) -> ({ex:.1f}, {ey:.1f})")
        print(f"    {path.svg_arc_path()}")

    path = dump_diagram(editor.diagram, OUTPUT)
    print(f"\nSaved to {path}")


if __name__ == "__main__":
    main()
