"""Edmonds-Karp maximum flow over a dense residual capacity matrix.

Each phase finds a shortest (fewest-edges) augmenting path with
``breadth_first_search``, pushes the path bottleneck along it and credits the
same amount to the reverse residual edges so later paths can cancel flow.
Shortest-path augmentation bounds the run at O(V * E) augmentations.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence

import numpy as np

from .data import NO_EDGE, AugmentationCallback, AugmentationInfo, MaxFlowResult
from .search import breadth_first_search, trace_path

logger = logging.getLogger(__name__)


def _residual_adjacency(
    adjacency: Mapping[int, Sequence[int]], node_count: int
) -> dict[int, list[int]]:
    # Forward neighbors keep their order; reverse neighbors follow them.
    residual: dict[int, list[int]] = {node: [] for node in range(node_count)}
    seen: dict[int, set[int]] = {node: set() for node in range(node_count)}
    for tail, neighbors in adjacency.items():
        for head in neighbors:
            if head not in seen[tail]:
                seen[tail].add(head)
                residual[tail].append(head)
    for tail, neighbors in adjacency.items():
        for head in neighbors:
            if tail not in seen[head]:
                seen[head].add(tail)
                residual[head].append(tail)
    return residual


def _edge_flows(capacity: np.ndarray, residual: np.ndarray) -> dict[tuple[int, int], int]:
    # Net flow on an edge is what its residual lost; opposite edges cancel.
    flows: dict[tuple[int, int], int] = {}
    for tail, head in zip(*np.nonzero(capacity != NO_EDGE)):
        sent = int(capacity[tail, head]) - int(residual[tail, head])
        flows[(int(tail), int(head))] = max(sent, 0)
    return flows


def _format_residual(capacity: np.ndarray, residual: np.ndarray) -> str:
    lines = []
    for tail in range(residual.shape[0]):
        cells = [
            f"{tail} -> {head}: {int(residual[tail, head])}"
            for head in range(residual.shape[1])
            if head != tail and (capacity[tail, head] != NO_EDGE or residual[tail, head] != 0)
        ]
        lines.append("\t".join(cells))
    return "\n".join(lines)


def compute_max_flow(
    adjacency: Mapping[int, Sequence[int]],
    source: int,
    sink: int,
    capacity: np.ndarray,
    progress_callback: AugmentationCallback | None = None,
) -> MaxFlowResult:
    """Compute the maximum flow from source to sink.

    The inputs are never mutated; the run works on a private residual copy of
    the adjacency index (extended with reverse neighbors) and of the capacity
    matrix (``NO_EDGE`` cells become zero residual capacity).

    Args:
        adjacency: Neighbor order for each node.
        source: Source node.
        sink: Sink node.
        capacity: ``(N, N)`` capacity matrix using ``NO_EDGE`` for missing edges.
        progress_callback: Called with an AugmentationInfo after every
                           augmentation.

    Returns:
        MaxFlowResult with the flow value, net flow per original edge, the
        augmentation count and the final residual matrix.

    Examples:
        >>> from network_maxflow import build_graph
        >>> graph = build_graph([[1, 5], [2, 3], []])
        >>> compute_max_flow(graph.adjacency, graph.source, graph.sink, graph.capacity).value
        3
    """
    original = np.asarray(capacity, dtype=np.int64)
    node_count = original.shape[0] if original.ndim == 2 else 0
    if node_count == 0 or not adjacency:
        return MaxFlowResult(value=0)

    start_time = time.perf_counter()
    residual_adjacency = _residual_adjacency(adjacency, node_count)
    residual = np.where(original == NO_EDGE, 0, original).astype(np.int64)

    total_flow = 0
    iteration = 0
    while True:
        found, predecessors = breadth_first_search(residual_adjacency, source, sink, residual)
        if not found:
            break

        path = trace_path(predecessors, source, sink)
        steps = list(zip(path, path[1:]))
        bottleneck = min(int(residual[tail, head]) for tail, head in steps)
        for tail, head in steps:
            residual[tail, head] -= bottleneck
            residual[head, tail] += bottleneck

        total_flow += bottleneck
        iteration += 1

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Augmented path %s (bottleneck %d, total %d)\nResidual capacities:\n%s",
                " -> ".join(str(node) for node in path),
                bottleneck,
                total_flow,
                _format_residual(original, residual),
            )
        if progress_callback is not None:
            progress_callback(
                AugmentationInfo(
                    iteration=iteration,
                    path=tuple(path),
                    bottleneck=bottleneck,
                    total_flow=total_flow,
                    elapsed_time=time.perf_counter() - start_time,
                )
            )

    logger.info(
        "Maximum flow %d from %d to %d after %d augmentations",
        total_flow,
        source,
        sink,
        iteration,
    )
    return MaxFlowResult(
        value=total_flow,
        flows=_edge_flows(original, residual),
        augmentations=iteration,
        residual=residual,
    )


def max_flow(
    adjacency: Mapping[int, Sequence[int]],
    source: int,
    sink: int,
    capacity: np.ndarray,
) -> int:
    """Return only the maximum flow value; see ``compute_max_flow``."""
    return compute_max_flow(adjacency, source, sink, capacity).value
