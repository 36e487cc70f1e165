import logging
import random
from typing import List, Sequence, Tuple

import networkx as nx
import pytest

from cld_core.analysis import canonical_rotation, find_all_simple_cycles, node_id_key
from cld_core.config import AnalysisConfig
from cld_core.model import Arc, Node


def _graph(node_ids: Sequence[str], edges: Sequence[Tuple[str, str]]):
    nodes = [Node(node_id, 0.0, 0.0) for node_id in node_ids]
    arcs = [Arc(str(idx), a, b) for idx, (a, b) in enumerate(edges, start=1)]
    return nodes, arcs


def _rotation_free(cycles: List[List[str]]) -> bool:
    keys = [canonical_rotation(c) for c in cycles]
    return len(keys) == len(set(keys))


def test_single_triangle():
    nodes, arcs = _graph("ABC", [("A", "B"), ("B", "C"), ("C", "A")])

    assert find_all_simple_cycles(nodes, arcs) == [["A", "B", "C"]]


def test_two_cycle_and_three_cycle_share_a_node():
    nodes, arcs = _graph("ABCD", [("A", "B"), ("B", "A"), ("B", "C"), ("C", "D"), ("D", "B")])

    cycles = find_all_simple_cycles(nodes, arcs)

    assert sorted(cycles) == [["A", "B"], ["B", "C", "D"]]


def test_acyclic_and_empty_graphs():
    nodes, arcs = _graph("ABC", [("A", "B"), ("B", "C"), ("A", "C")])

    assert find_all_simple_cycles(nodes, arcs) == []
    assert find_all_simple_cycles([], []) == []


def test_complete_digraph_cycle_count():
    ids = "ABCD"
    edges = [(a, b) for a in ids for b in ids if a != b]
    nodes, arcs = _graph(ids, edges)

    cycles = find_all_simple_cycles(nodes, arcs)

    # C(4,2)*1! + C(4,3)*2! + C(4,4)*3!
    assert len(cycles) == 20
    assert _rotation_free(cycles)


def test_cycles_start_at_smallest_numeric_id():
    nodes, arcs = _graph(["10", "2", "3"], [("10", "2"), ("2", "3"), ("3", "10")])

    assert find_all_simple_cycles(nodes, arcs) == [["2", "3", "10"]]


def test_node_id_key_orders_numbers_before_text():
    assert sorted(["b", "10", "2", "a", "1"], key=node_id_key) == ["1", "2", "10", "a", "b"]


def test_discovery_order_follows_node_order():
    nodes, arcs = _graph("CAB", [("A", "B"), ("B", "A"), ("C", "A"), ("A", "C")])

    # C is processed first, so the C-A loop is discovered before A-B
    assert find_all_simple_cycles(nodes, arcs) == [["A", "C"], ["A", "B"]]


def test_arcs_with_unknown_endpoints_are_ignored():
    nodes, arcs = _graph("AB", [("A", "B"), ("B", "A"), ("B", "Z")])

    assert find_all_simple_cycles(nodes, arcs) == [["A", "B"]]


def test_node_ids_can_be_passed_directly():
    _, arcs = _graph("AB", [("A", "B"), ("B", "A")])

    assert find_all_simple_cycles(["A", "B"], arcs) == [["A", "B"]]


def test_long_cycle_does_not_recurse():
    count = 1200
    ids = [str(i) for i in range(count)]
    edges = [(ids[i], ids[(i + 1) % count]) for i in range(count)]
    nodes, arcs = _graph(ids, edges)

    cycles = find_all_simple_cycles(nodes, arcs, config=AnalysisConfig(max_nodes=None, max_arcs=None))

    assert cycles == [ids]


def test_oversized_graph_is_skipped(caplog):
    ids = [str(i) for i in range(5)]
    nodes, arcs = _graph(ids, [(ids[i], ids[(i + 1) % 5]) for i in range(5)])

    with caplog.at_level(logging.WARNING, logger="cld_core.analysis.cycles"):
        cycles = find_all_simple_cycles(nodes, arcs, config=AnalysisConfig(max_nodes=4))

    assert cycles == []
    assert "too large" in caplog.text


@pytest.mark.parametrize("seed", range(8))
def test_matches_networkx_on_random_graphs(seed):
    rng = random.Random(seed)
    ids = [str(i) for i in range(1, 8)]
    edges = [(a, b) for a in ids for b in ids if a != b and rng.random() < 0.3]
    nodes, arcs = _graph(ids, edges)

    graph = nx.DiGraph()
    graph.add_nodes_from(ids)
    graph.add_edges_from(edges)
    expected = {canonical_rotation(c) for c in nx.simple_cycles(graph)}

    cycles = find_all_simple_cycles(nodes, arcs)

    assert _rotation_free(cycles)
    assert {tuple(c) for c in cycles} == expected


def test_non_ascii_digits_sort_as_names():
    assert sorted(["²", "3", "b"], key=node_id_key) == ["3", "b", "²"]

    nodes, arcs = _graph(["²", "1"], [("²", "1"), ("1", "²")])
    assert find_all_simple_cycles(nodes, arcs) == [["1", "²"]]
