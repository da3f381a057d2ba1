"""Random test-graph generation in the line-oriented graph format.

Generated graphs always route through every node: a random chain runs from
the source through all other nodes to the sink, and extra random edges are
layered on top. The source has no inbound edges and the sink row is the only
empty one, so loading a generated file infers the same source and sink.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .data import GeneratorOptions
from .exceptions import FlowConfigurationError
from .io import save_rows

logger = logging.getLogger(__name__)


@dataclass
class GeneratedGraph:
    """Token rows of a generated graph plus its intended source and sink."""

    rows: list[list[int]]
    source: int
    sink: int


def generate_graph(
    num_nodes: int,
    rng: np.random.Generator,
    min_capacity: int = 1,
    max_capacity: int = 30,
) -> GeneratedGraph:
    """Generate one random graph without self-loops or antiparallel edges.

    Args:
        num_nodes: Number of nodes (at least 2).
        rng: Random source; pass a seeded generator for reproducible graphs.
        min_capacity: Smallest capacity drawn.
        max_capacity: Largest capacity drawn (inclusive).

    Raises:
        FlowConfigurationError: If fewer than two nodes are requested.
    """
    if num_nodes < 2:
        raise FlowConfigurationError(f"A graph needs at least 2 nodes, got {num_nodes}.")

    source, sink = (int(node) for node in rng.choice(num_nodes, size=2, replace=False))
    middle = [node for node in range(num_nodes) if node not in (source, sink)]
    chain = [source, *(int(node) for node in rng.permutation(middle)), sink]

    def draw_capacity() -> int:
        return int(rng.integers(min_capacity, max_capacity, endpoint=True))

    weights: dict[int, dict[int, int]] = {node: {} for node in range(num_nodes)}
    for tail, head in zip(chain, chain[1:]):
        weights[tail][head] = draw_capacity()

    for tail in range(num_nodes):
        if tail == sink:
            continue
        candidates = [
            head
            for head in range(num_nodes)
            if head not in (tail, source)
            and head not in weights[tail]
            and tail not in weights[head]
        ]
        if not candidates:
            continue
        extra = int(rng.integers(0, len(candidates), endpoint=True))
        for head in rng.choice(candidates, size=extra, replace=False):
            weights[tail][int(head)] = draw_capacity()

    rows = [
        [token for head in sorted(weights[tail]) for token in (head, weights[tail][head])]
        for tail in range(num_nodes)
    ]
    return GeneratedGraph(rows=rows, source=source, sink=sink)


def graph_file_name(num_nodes: int, timestamp_ms: int, run: int | None = None) -> str:
    """File name for a generated graph, e.g. ``1700000000000_graph_8.txt``."""
    suffix = "" if run is None else f"_{run}"
    return f"{timestamp_ms}_graph_{num_nodes}{suffix}.txt"


def generate_graphs(
    options: GeneratorOptions,
    rng: np.random.Generator,
    clock: Callable[[], float] = time.time,
) -> list[Path]:
    """Generate and write one graph per node count, ``options.repeat`` times.

    Files land in ``options.output_dir`` (created if missing). When
    ``repeat`` is above one, the run number is appended to each file name.

    Returns:
        Paths of the written files, in generation order.
    """
    output_dir = Path(options.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp_ms = int(clock() * 1000)

    written: list[Path] = []
    for run in range(1, options.repeat + 1):
        for num_nodes in range(options.min_nodes, options.max_nodes + 1):
            graph = generate_graph(
                num_nodes,
                rng,
                min_capacity=options.min_capacity,
                max_capacity=options.max_capacity,
            )
            name = graph_file_name(num_nodes, timestamp_ms, run if options.repeat > 1 else None)
            path = save_rows(output_dir / name, graph.rows)
            logger.info(
                "Wrote %s (source %d, sink %d)", path, graph.source, graph.sink
            )
            written.append(path)
    return written
