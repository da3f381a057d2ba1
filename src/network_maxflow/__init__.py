"""High-level entrypoints for the network max-flow library."""

from .circulation import ReducedCirculation, reduce_circulation, solve_circulation
from .data import (
    MAX_CAPACITY,
    NO_EDGE,
    AugmentationCallback,
    AugmentationInfo,
    CirculationResult,
    Edge,
    FlowGraph,
    GeneratorOptions,
    MaxFlowResult,
    build_graph,
)
from .exceptions import (
    FlowConfigurationError,
    InvalidEdgeError,
    MalformedInputError,
    NetworkFlowError,
)
from .generator import GeneratedGraph, generate_graph, generate_graphs
from .io import format_rows, parse_rows, read_rows, save_rows
from .maxflow import compute_max_flow, max_flow
from .search import breadth_first_search, trace_path
from .solver import check_circulation, find_path, load_graph, solve_max_flow
from .utils import (
    FlowPath,
    SaturatedEdge,
    ValidationResult,
    compute_saturated_edges,
    find_shortest_path,
    validate_flow,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "build_graph",
    "load_graph",
    "solve_max_flow",
    "find_path",
    "check_circulation",
    # Core algorithms
    "breadth_first_search",
    "trace_path",
    "compute_max_flow",
    "max_flow",
    "reduce_circulation",
    "solve_circulation",
    # Data model
    "Edge",
    "FlowGraph",
    "MaxFlowResult",
    "CirculationResult",
    "ReducedCirculation",
    "NO_EDGE",
    "MAX_CAPACITY",
    # Progress tracking
    "AugmentationCallback",
    "AugmentationInfo",
    # File format
    "parse_rows",
    "read_rows",
    "format_rows",
    "save_rows",
    # Generation
    "GeneratorOptions",
    "GeneratedGraph",
    "generate_graph",
    "generate_graphs",
    # Utilities
    "find_shortest_path",
    "validate_flow",
    "compute_saturated_edges",
    "FlowPath",
    "ValidationResult",
    "SaturatedEdge",
    # Exceptions
    "NetworkFlowError",
    "MalformedInputError",
    "InvalidEdgeError",
    "FlowConfigurationError",
    # Version
    "__version__",
]
