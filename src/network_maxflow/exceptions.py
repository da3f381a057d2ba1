"""Custom exceptions for the network max-flow library."""

from __future__ import annotations


class NetworkFlowError(Exception):
    """Base exception for all network flow errors.

    All custom exceptions in the network_maxflow package inherit from this class,
    allowing users to catch all library errors with a single except clause.

    Example:
        try:
            graph = load_graph("graph.txt")
        except NetworkFlowError as e:
            print(f"Flow error: {e}")
    """


class MalformedInputError(NetworkFlowError):
    """Raised when graph input text cannot be turned into a graph.

    This includes:
    - Odd token count on an adjacency line (tokens are read in pairs)
    - Non-integer tokens
    - Neighbor ids that do not resolve to a constructed node
    - Inputs too small to resolve both a source and a sink

    Example:
        MalformedInputError("Line 3 has an odd number of tokens (5)", line=3)
    """

    def __init__(self, message: str, line: int | None = None, token: str | None = None):
        """Initialize with message and optional location of the offending input."""
        super().__init__(message)
        self.line = line
        self.token = token


class InvalidEdgeError(NetworkFlowError):
    """Raised when an edge violates the graph rules.

    Edges must connect two distinct nodes and carry a non-negative capacity
    that fits the signed 64-bit residual matrix.

    Example:
        InvalidEdgeError("Self-loop detected on node 2", tail=2, head=2, capacity=4)
    """

    def __init__(
        self,
        message: str,
        tail: int | None = None,
        head: int | None = None,
        capacity: int | None = None,
    ):
        """Initialize with message and the offending edge."""
        super().__init__(message)
        self.tail = tail
        self.head = head
        self.capacity = capacity


class FlowConfigurationError(NetworkFlowError):
    """Raised when options or a source/sink selection are invalid.

    This includes:
    - Explicit source or sink outside the node range
    - Source equal to sink
    - Invalid generator options (node range, capacity range, repeat count)

    Example:
        FlowConfigurationError("Source and sink must differ, got 3 for both")
    """
