"""Tests for breadth-first augmenting path search."""

import sys
from pathlib import Path

import numpy as np

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from network_maxflow.data import build_graph  # noqa: E402
from network_maxflow.search import breadth_first_search, trace_path  # noqa: E402


def test_finds_path_in_chain():
    graph = build_graph([[1, 5], [2, 3], []])

    found, predecessors = breadth_first_search(graph.adjacency, 0, 2, graph.capacity)

    assert found is True
    assert predecessors == {1: 0, 2: 1}
    assert trace_path(predecessors, 0, 2) == [0, 1, 2]


def test_prefers_fewest_edges():
    # 0 -> 1 -> 2 -> 4 is listed first, but 0 -> 3 -> 4 has fewer hops.
    graph = build_graph([[1, 1, 3, 1], [2, 1], [4, 1], [4, 1], []])

    found, predecessors = breadth_first_search(graph.adjacency, 0, 4, graph.capacity)

    assert found
    assert trace_path(predecessors, 0, 4) == [0, 3, 4]


def test_stops_as_soon_as_sink_is_discovered():
    # Node 2 follows the sink in node 0's neighbor order and is never discovered.
    graph = build_graph([[1, 1, 3, 1, 2, 1], [3, 1], [3, 1], []])

    found, predecessors = breadth_first_search(graph.adjacency, 0, 3, graph.capacity)

    assert found
    assert predecessors == {1: 0, 3: 0}


def test_unreachable_sink():
    graph = build_graph([[1, 4], [], [1, 2]], source=0, sink=1)

    found, predecessors = breadth_first_search(graph.adjacency, 1, 2, graph.capacity)

    assert found is False
    assert predecessors == {}


def test_unreachable_map_only_holds_reachable_nodes():
    graph = build_graph([[1, 4], [3, 1], [3, 1], []])

    found, predecessors = breadth_first_search(graph.adjacency, 1, 2, graph.capacity)

    assert not found
    assert predecessors == {3: 1}


def test_zero_and_missing_capacity_are_not_traversed():
    capacity = np.array(
        [
            [-1, 0, -1],
            [-1, -1, 5],
            [-1, -1, -1],
        ],
        dtype=np.int64,
    )
    adjacency = {0: [1], 1: [2], 2: []}

    found, _ = breadth_first_search(adjacency, 0, 2, capacity)

    assert not found


def test_fills_supplied_predecessor_map():
    graph = build_graph([[1, 5], [2, 3], []])
    predecessors: dict[int, int] = {}

    found, returned = breadth_first_search(
        graph.adjacency, 0, 2, graph.capacity, predecessors
    )

    assert found
    assert returned is predecessors
    assert predecessors[2] == 1


def test_does_not_mutate_inputs():
    graph = build_graph([[1, 5], [2, 3], []])
    before = graph.capacity.copy()

    breadth_first_search(graph.adjacency, 0, 2, graph.capacity)

    assert np.array_equal(graph.capacity, before)
    assert graph.adjacency == {0: [1], 1: [2], 2: []}


def test_nodes_missing_from_adjacency_have_no_neighbors():
    capacity = np.full((3, 3), -1, dtype=np.int64)
    capacity[0, 1] = 2

    found, predecessors = breadth_first_search({0: [1]}, 0, 2, capacity)

    assert not found
    assert predecessors == {1: 0}
