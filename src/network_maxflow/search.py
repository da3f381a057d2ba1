"""Breadth-first search for shortest augmenting paths."""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping, Sequence

import numpy as np


def breadth_first_search(
    adjacency: Mapping[int, Sequence[int]],
    source: int,
    sink: int,
    residual: np.ndarray,
    predecessors: dict[int, int] | None = None,
) -> tuple[bool, dict[int, int]]:
    """Find a fewest-edges path from source to sink with positive residual capacity.

    Edge ``u -> v`` is followed only when ``residual[u, v] > 0`` and ``v`` has
    not been visited. A node's predecessor is recorded when it is discovered,
    before the sink check, and the search stops as soon as the sink is
    discovered.

    Args:
        adjacency: Neighbor order for each node. Nodes without a key have no
                   neighbors.
        source: Start node.
        sink: Target node.
        residual: Square residual capacity matrix.
        predecessors: Optional map to fill in place. A fresh dict is used
                      when None.

    Returns:
        ``(found, predecessors)``. When ``found`` is False the map only holds
        nodes reachable from the source.
    """
    if predecessors is None:
        predecessors = {}
    visited = [False] * residual.shape[0]
    queue: deque[int] = deque([source])
    visited[source] = True

    while queue:
        node = queue.popleft()
        row = residual[node]
        for neighbor in adjacency.get(node, ()):
            if visited[neighbor] or row[neighbor] <= 0:
                continue
            predecessors[neighbor] = node
            if neighbor == sink:
                return True, predecessors
            visited[neighbor] = True
            queue.append(neighbor)

    return False, predecessors


def trace_path(predecessors: Mapping[int, int], source: int, sink: int) -> list[int]:
    """Walk the predecessor map back from sink and return the path source -> sink."""
    path = [sink]
    node = sink
    while node != source:
        node = predecessors[node]
        path.append(node)
    path.reverse()
    return path
