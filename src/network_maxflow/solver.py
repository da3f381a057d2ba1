"""Public solver entrypoints."""

from __future__ import annotations

from pathlib import Path

from .circulation import solve_circulation
from .data import AugmentationCallback, CirculationResult, FlowGraph, MaxFlowResult
from .exceptions import FlowConfigurationError
from .io import load_graph as load_graph_file
from .io import read_rows
from .maxflow import compute_max_flow
from .utils import FlowPath, find_shortest_path


def solve_max_flow(
    graph: FlowGraph,
    progress_callback: AugmentationCallback | None = None,
) -> MaxFlowResult:
    """Solve the maximum flow problem on a graph between its source and sink.

    Uses Edmonds-Karp: breadth-first search picks the shortest augmenting
    path each phase, which bounds the run at O(V * E) augmentations.

    Args:
        graph: Graph built by build_graph() or load_graph(). Its capacity
               matrix and adjacency index are left untouched.
        progress_callback: Optional callback receiving an AugmentationInfo
                           after every augmentation.

    Returns:
        MaxFlowResult containing:
        - value: Total flow from source to sink (0 for the empty graph)
        - flows: Net flow on each edge
        - augmentations: Number of augmenting paths used
        - residual: Final residual capacity matrix

    Raises:
        FlowConfigurationError: If a non-empty graph was built with
                                ``infer_source=False`` and no source.

    Time Complexity:
        O(V * E) augmentations, each an O(V + E) search, so O(V * E^2)
        overall; building the residual copy adds O(V^2).

    Examples:
        >>> from network_maxflow import build_graph, solve_max_flow
        >>> graph = build_graph([[1, 10, 2, 10], [3, 10], [3, 10], []])
        >>> solve_max_flow(graph).value
        20

    See Also:
        - compute_max_flow(): Same algorithm over raw adjacency and matrix
        - check_circulation(): Supply/demand feasibility built on max flow
    """
    if graph.node_count == 0:
        return MaxFlowResult(value=0)
    if graph.source is None or graph.sink is None:
        raise FlowConfigurationError("Graph was built without a source; max flow needs one.")
    return compute_max_flow(
        graph.adjacency,
        graph.source,
        graph.sink,
        graph.capacity,
        progress_callback=progress_callback,
    )


def find_path(graph: FlowGraph, source: int, sink: int) -> FlowPath | None:
    """Find the shortest path (fewest edges) from source to sink.

    Returns:
        FlowPath when the sink is reachable, None otherwise.

    Raises:
        FlowConfigurationError: If source or sink is not a node of the graph.
    """
    try:
        return find_shortest_path(graph, source, sink)
    except ValueError as exc:
        raise FlowConfigurationError(str(exc)) from exc


def load_graph(
    path: str | Path,
    source: int | None = None,
    sink: int | None = None,
    *,
    infer_source: bool = True,
) -> FlowGraph:
    """Load a graph from a text file.

    Args:
        path: Path to the graph file.
        source: Explicit source, inferred when None.
        sink: Explicit sink, inferred when None.
        infer_source: Pass False to skip source inference (shortest-path
                      queries supply their own endpoints).

    Returns:
        FlowGraph ready to solve.

    Raises:
        FileNotFoundError: If file does not exist.
        MalformedInputError: If the text is not a valid graph.
        InvalidEdgeError: If an edge is a self-loop or has negative capacity.

    Examples:
        >>> from network_maxflow import load_graph, solve_max_flow
        >>> graph = load_graph("examples/diamond.txt")
        >>> solve_max_flow(graph).value
        20
    """
    # Reuse the IO helpers so callers interact with a single parsing implementation.
    return load_graph_file(path, source=source, sink=sink, infer_source=infer_source)


def check_circulation(path: str | Path) -> CirculationResult:
    """Decide whether a supply/demand graph file has a circulation.

    Raises:
        FileNotFoundError: If file does not exist.
        MalformedInputError: If the text is not a valid circulation instance.
        InvalidEdgeError: If an edge is a self-loop or has negative capacity.
    """
    return solve_circulation(read_rows(path))
