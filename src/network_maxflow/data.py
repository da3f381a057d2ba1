"""Core data structures for capacitated flow graphs."""

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from .exceptions import FlowConfigurationError, InvalidEdgeError, MalformedInputError

logger = logging.getLogger(__name__)

# Capacity matrix cell for "no edge". Zero is a usable (if empty) edge, so the
# sentinel has to be a value no capacity can take.
NO_EDGE = -1

# Largest accepted edge capacity. Residual cells can grow to the sum of two
# opposite capacities, which must still fit in int64.
MAX_CAPACITY = (2**63 - 1) // 2

Token = int | str


@dataclass(frozen=True)
class Edge:
    """Represents a directed edge with a non-negative integer capacity.

    Attributes:
        tail: Node the edge leaves.
        head: Node the edge enters.
        capacity: Maximum flow the edge can carry. Zero is allowed.

    Examples:
        >>> Edge(tail=0, head=1, capacity=5)
        Edge(tail=0, head=1, capacity=5)

    Raises:
        InvalidEdgeError: If tail == head (self-loops are not supported).
        InvalidEdgeError: If capacity is negative or exceeds MAX_CAPACITY.
    """

    tail: int
    head: int
    capacity: int

    def __post_init__(self) -> None:
        if self.tail == self.head:
            raise InvalidEdgeError(
                f"Self-loop detected on node {self.tail}. An edge must connect two "
                f"different nodes.",
                tail=self.tail,
                head=self.head,
                capacity=self.capacity,
            )
        if self.capacity < 0:
            raise InvalidEdgeError(
                f"Edge {self.tail} -> {self.head} has negative capacity ({self.capacity}). "
                f"Capacity must be a non-negative integer.",
                tail=self.tail,
                head=self.head,
                capacity=self.capacity,
            )
        if self.capacity > MAX_CAPACITY:
            raise InvalidEdgeError(
                f"Edge {self.tail} -> {self.head} capacity {self.capacity} exceeds the "
                f"supported maximum {MAX_CAPACITY}.",
                tail=self.tail,
                head=self.head,
                capacity=self.capacity,
            )


@dataclass
class FlowGraph:
    """A directed capacitated graph ready for flow computations.

    The capacity matrix is the single source of truth for capacities. The
    adjacency index only fixes the order in which neighbors are explored.

    Attributes:
        nodes: Node ids, always ``0 .. node_count - 1``.
        edges: Edges in input order (a repeated pair replaces the earlier edge).
        adjacency: Node id to ordered, duplicate-free neighbor ids.
        capacity: ``(N, N)`` int64 matrix, ``NO_EDGE`` where no edge exists.
        source: Source node, None for the empty graph or when inference is off.
        sink: Sink node, None only for the empty graph.
    """

    nodes: list[int]
    edges: list[Edge]
    adjacency: dict[int, list[int]]
    capacity: np.ndarray
    source: int | None = None
    sink: int | None = None

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def capacity_of(self, tail: int, head: int) -> int | None:
        """Return the capacity of ``tail -> head`` or None when there is no edge."""
        value = int(self.capacity[tail, head])
        return None if value == NO_EDGE else value

    def summary(self) -> str:
        """Human-readable dump of the graph size and adjacency index."""
        lines = [f"Graph (V, E): ({self.node_count}, {self.edge_count})"]
        lines.append(f"Source: {self.source}, Sink: {self.sink}")
        lines.append("Adjacency list:")
        for node, neighbors in self.adjacency.items():
            lines.append(f"{node} -> {neighbors}")
        return "\n".join(lines)


@dataclass(frozen=True)
class AugmentationInfo:
    """Progress information reported after every augmentation.

    Attributes:
        iteration: Augmentation number, starting at 1.
        path: Nodes of the augmenting path from source to sink.
        bottleneck: Flow pushed along the path.
        total_flow: Flow accumulated so far, including this path.
        elapsed_time: Seconds since the max-flow run started.
    """

    iteration: int
    path: tuple[int, ...]
    bottleneck: int
    total_flow: int
    elapsed_time: float


# Type alias for progress callback function
AugmentationCallback = Callable[[AugmentationInfo], None]


@dataclass
class MaxFlowResult:
    """Represents the output of a maximum-flow computation.

    Attributes:
        value: Total flow from source to sink.
        flows: Net flow on each original edge, keyed by (tail, head).
        augmentations: Number of augmenting paths used.
        residual: Final residual capacity matrix (None when nothing ran).
    """

    value: int
    flows: dict[tuple[int, int], int] = field(default_factory=dict)
    augmentations: int = 0
    residual: np.ndarray | None = None


@dataclass
class CirculationResult:
    """Outcome of a circulation feasibility check.

    Infeasibility is a normal result, never an exception.

    Attributes:
        feasible: True if every supply can be routed to the demands.
        reason: Why the instance is infeasible, empty when feasible.
        total_supply: Sum of supply magnitudes.
        total_demand: Sum of demands.
        max_flow: Flow found on the reduced instance, None when the balance
                  check failed and no flow was computed.
    """

    feasible: bool
    reason: str
    total_supply: int
    total_demand: int
    max_flow: int | None = None


@dataclass
class GeneratorOptions:
    """Configuration for random graph generation.

    Attributes:
        min_nodes: Smallest graph to generate (at least 2).
        max_nodes: Largest graph to generate.
        repeat: How many graphs to generate per node count.
        min_capacity: Lower bound of the uniform capacity draw.
        max_capacity: Upper bound of the uniform capacity draw (inclusive).
        output_dir: Directory receiving the generated files.

    Examples:
        >>> options = GeneratorOptions(min_nodes=4, max_nodes=8, repeat=2)
        >>> options = GeneratorOptions(max_capacity=100, output_dir=Path("graphs"))
    """

    min_nodes: int = 4
    max_nodes: int = 10
    repeat: int = 1
    min_capacity: int = 1
    max_capacity: int = 30
    output_dir: Path = Path("fileinput")

    def __post_init__(self) -> None:
        if self.min_nodes < 2:
            raise FlowConfigurationError(
                f"min_nodes must be at least 2, got {self.min_nodes}. A graph needs a "
                f"distinct source and sink."
            )
        if self.min_nodes > self.max_nodes:
            raise FlowConfigurationError(
                f"min_nodes must be <= max_nodes, got min={self.min_nodes}, max={self.max_nodes}."
            )
        if self.repeat < 1:
            raise FlowConfigurationError(f"repeat must be positive, got {self.repeat}.")
        if self.min_capacity < 0 or self.min_capacity > self.max_capacity:
            raise FlowConfigurationError(
                f"Capacity range must satisfy 0 <= min <= max, got "
                f"min={self.min_capacity}, max={self.max_capacity}."
            )
        if self.max_capacity > MAX_CAPACITY:
            raise FlowConfigurationError(
                f"max_capacity must not exceed {MAX_CAPACITY}, got {self.max_capacity}."
            )
        object.__setattr__(self, "output_dir", Path(self.output_dir))


def _as_int(token: Token, line: int) -> int:
    # Accept raw text tokens and real integers, but never floats or bools.
    if isinstance(token, str):
        try:
            return int(token)
        except ValueError:
            raise MalformedInputError(
                f"Line {line}: token {token!r} is not an integer.", line=line, token=token
            ) from None
    if isinstance(token, bool):
        raise MalformedInputError(
            f"Line {line}: token {token!r} is not an integer.", line=line, token=str(token)
        )
    try:
        return operator.index(token)
    except TypeError:
        raise MalformedInputError(
            f"Line {line}: token {token!r} is not an integer.", line=line, token=str(token)
        ) from None


def _infer_source(nodes: Sequence[int], adjacency: dict[int, list[int]], sink: int) -> int:
    inbound = dict.fromkeys(nodes, 0)
    for neighbors in adjacency.values():
        for head in neighbors:
            inbound[head] += 1
    candidates = [node for node in nodes if node != sink]
    if not candidates:
        raise MalformedInputError(
            f"Graph has a single node ({sink}); a source distinct from the sink cannot be chosen."
        )
    # Fewest inbound edges wins; ties go to the smallest id.
    return min(candidates, key=lambda node: (inbound[node], node))


def build_graph(
    rows: Sequence[Sequence[Token]],
    source: int | None = None,
    sink: int | None = None,
    *,
    infer_source: bool = True,
) -> FlowGraph:
    """Build a FlowGraph from per-node adjacency token rows.

    Row ``i`` lists the outbound edges of node ``i`` as flat
    ``neighbor capacity`` pairs. An empty row marks a node without outbound
    edges; the first such node becomes the sink unless ``sink`` is given. When
    no row is empty, a sink node is appended one past the last row.

    Args:
        rows: Token rows, one per node in id order. Tokens may be ints or
              integer strings.
        source: Explicit source node. Inferred as the node with the fewest
                inbound edges (smallest id on ties) when None.
        sink: Explicit sink node, ``0 .. len(rows)``. ``len(rows)`` appends a
              synthesized node.
        infer_source: When False and ``source`` is None, the graph keeps no
                      source. Reachability queries name their own endpoints
                      and still work on a graph whose only node is the sink.

    Returns:
        The constructed graph. Empty input yields a graph with no nodes.

    Raises:
        MalformedInputError: Odd token count, non-integer token, or a neighbor
                             id outside the node range.
        InvalidEdgeError: Negative capacity or self-loop.
        FlowConfigurationError: Explicit source/sink out of range or equal.

    Examples:
        >>> graph = build_graph([[1, 5], [2, 3], []])
        >>> graph.source, graph.sink
        (0, 2)
    """
    row_count = len(rows)
    if row_count == 0:
        if source is not None or sink is not None:
            raise FlowConfigurationError("Cannot select a source or sink in an empty graph.")
        return FlowGraph(
            nodes=[],
            edges=[],
            adjacency={},
            capacity=np.full((0, 0), NO_EDGE, dtype=np.int64),
        )

    nodes: list[int] = []
    edges: list[Edge] = []
    edge_positions: dict[tuple[int, int], int] = {}
    adjacency: dict[int, list[int]] = {}
    first_empty: int | None = None

    for line, row in enumerate(rows):
        # The node exists before any of its edges, even for empty rows.
        nodes.append(line)
        neighbors: list[int] = []
        adjacency[line] = neighbors

        tokens = [_as_int(token, line) for token in row]
        if len(tokens) % 2:
            raise MalformedInputError(
                f"Line {line} has an odd number of tokens ({len(tokens)}); expected "
                f"'neighbor capacity' pairs.",
                line=line,
            )
        if not tokens:
            if first_empty is None:
                first_empty = line
            continue

        for head, capacity in zip(tokens[::2], tokens[1::2]):
            try:
                edge = Edge(tail=line, head=head, capacity=capacity)
            except InvalidEdgeError as exc:
                raise InvalidEdgeError(
                    f"Line {line}: {exc}", tail=exc.tail, head=exc.head, capacity=exc.capacity
                ) from exc

            # Repeated pairs: the last edge wins, the neighbor keeps its first slot.
            key = (line, head)
            if key in edge_positions:
                edges[edge_positions[key]] = edge
            else:
                edge_positions[key] = len(edges)
                edges.append(edge)
                neighbors.append(head)

    if sink is None:
        sink = first_empty if first_empty is not None else row_count
    elif not 0 <= sink <= row_count:
        raise FlowConfigurationError(
            f"Sink {sink} is outside the node range 0..{row_count}."
        )
    if sink == row_count:
        nodes.append(sink)
        adjacency[sink] = []

    node_count = len(nodes)
    for edge in edges:
        if not 0 <= edge.head < node_count:
            raise MalformedInputError(
                f"Line {edge.tail} references node {edge.head}, outside the node range "
                f"0..{node_count - 1}.",
                line=edge.tail,
                token=str(edge.head),
            )

    if source is None:
        if infer_source:
            source = _infer_source(nodes, adjacency, sink)
    elif not 0 <= source < node_count:
        raise FlowConfigurationError(
            f"Source {source} is outside the node range 0..{node_count - 1}."
        )
    if source == sink:
        raise FlowConfigurationError(f"Source and sink must differ, got {source} for both.")

    capacity = np.full((node_count, node_count), NO_EDGE, dtype=np.int64)
    for edge in edges:
        capacity[edge.tail, edge.head] = edge.capacity

    graph = FlowGraph(
        nodes=nodes,
        edges=edges,
        adjacency=adjacency,
        capacity=capacity,
        source=source,
        sink=sink,
    )
    if logger.isEnabledFor(logging.INFO):
        logger.info("Built graph from input data:\n%s", graph.summary())
    return graph
