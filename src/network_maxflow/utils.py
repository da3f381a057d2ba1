"""Utility functions for querying graphs and checking max-flow results."""

from __future__ import annotations

from dataclasses import dataclass

from .data import NO_EDGE, FlowGraph, MaxFlowResult
from .search import breadth_first_search, trace_path


@dataclass
class FlowPath:
    """Represents a path from source to target.

    Attributes:
        nodes: Sequence of node IDs from source to target.
        edges: Sequence of (tail, head) edge tuples along the path.
        bottleneck: Smallest capacity along the path (0 for a single node).
    """

    nodes: list[int]
    edges: list[tuple[int, int]]
    bottleneck: int


@dataclass
class ValidationResult:
    """Results from validating a max-flow result against its graph.

    Attributes:
        is_valid: True if the flow satisfies all constraints.
        errors: List of validation error messages (empty if valid).
        flow_balance: Node ID to inflow minus outflow.
        capacity_violations: Edges whose flow exceeds capacity.
    """

    is_valid: bool
    errors: list[str]
    flow_balance: dict[int, int]
    capacity_violations: list[tuple[int, int]]


@dataclass
class SaturatedEdge:
    """An edge whose flow uses its whole capacity.

    Attributes:
        tail: Source node ID.
        head: Destination node ID.
        flow: Flow on the edge.
        capacity: Edge capacity.
    """

    tail: int
    head: int
    flow: int
    capacity: int


def _check_node(graph: FlowGraph, node: int, role: str) -> None:
    if not 0 <= node < graph.node_count:
        raise ValueError(f"{role} node {node} not found in graph with {graph.node_count} nodes")


def find_shortest_path(graph: FlowGraph, source: int, target: int) -> FlowPath | None:
    """Find a fewest-edges path from source to target.

    Only edges with positive capacity can be followed; zero-capacity edges
    carry no flow and do not connect nodes here.

    Args:
        graph: Graph to search.
        source: Starting node ID.
        target: Ending node ID.

    Returns:
        FlowPath object if a path exists, None otherwise.

    Raises:
        ValueError: If source or target node doesn't exist in the graph.
    """
    _check_node(graph, source, "Source")
    _check_node(graph, target, "Target")

    if source == target:
        return FlowPath(nodes=[source], edges=[], bottleneck=0)

    found, predecessors = breadth_first_search(graph.adjacency, source, target, graph.capacity)
    if not found:
        return None

    nodes = trace_path(predecessors, source, target)
    edges = list(zip(nodes, nodes[1:]))
    bottleneck = min(int(graph.capacity[tail, head]) for tail, head in edges)
    return FlowPath(nodes=nodes, edges=edges, bottleneck=bottleneck)


def validate_flow(graph: FlowGraph, result: MaxFlowResult) -> ValidationResult:
    """Validate that a max-flow result is a feasible flow of its value.

    Checks:
    - Flow only on existing edges, never negative, never above capacity
    - Conservation at every node except source and sink
    - Net outflow of the source equals the reported value

    Args:
        graph: Graph the flow was computed on.
        result: Result to validate.

    Returns:
        ValidationResult with detailed information about any violations.
    """
    errors: list[str] = []
    capacity_violations: list[tuple[int, int]] = []
    flow_balance = dict.fromkeys(graph.nodes, 0)

    for (tail, head), flow in result.flows.items():
        capacity = int(graph.capacity[tail, head])
        if capacity == NO_EDGE:
            errors.append(f"Edge ({tail}, {head}) carries flow {flow} but does not exist")
            continue
        if flow < 0:
            errors.append(f"Edge ({tail}, {head}): negative flow {flow}")
        if flow > capacity:
            capacity_violations.append((tail, head))
            errors.append(f"Edge ({tail}, {head}): flow {flow} exceeds capacity {capacity}")
        flow_balance[tail] -= flow
        flow_balance[head] += flow

    for node, balance in flow_balance.items():
        if node in (graph.source, graph.sink):
            continue
        if balance != 0:
            errors.append(f"Node {node}: flow imbalance {balance} (should be zero)")

    if graph.source is not None and -flow_balance.get(graph.source, 0) != result.value:
        errors.append(
            f"Source {graph.source} sends {-flow_balance[graph.source]} but the result "
            f"reports {result.value}"
        )

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        flow_balance=flow_balance,
        capacity_violations=capacity_violations,
    )


def compute_saturated_edges(graph: FlowGraph, result: MaxFlowResult) -> list[SaturatedEdge]:
    """List edges with positive capacity whose flow equals their capacity.

    Every minimum cut is made of saturated edges, so these are the edges
    that limit the flow.

    Returns:
        Saturated edges sorted by (tail, head).
    """
    saturated: list[SaturatedEdge] = []
    for (tail, head), flow in sorted(result.flows.items()):
        capacity = int(graph.capacity[tail, head])
        if capacity > 0 and flow == capacity:
            saturated.append(SaturatedEdge(tail=tail, head=head, flow=flow, capacity=capacity))
    return saturated
