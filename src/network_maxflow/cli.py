"""Command-line entry points.

``python -m network_maxflow -b FILE SOURCE SINK`` prints the shortest path,
``-f FILE`` the maximum flow and ``-c FILE`` the circulation verdict.
``flow-generate MIN MAX`` writes random graph files.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from .data import GeneratorOptions
from .exceptions import NetworkFlowError
from .generator import generate_graphs
from .solver import check_circulation, find_path, load_graph, solve_max_flow


def _configure_logging(verbose: int) -> None:
    # Configure logging based on verbosity
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _print_duration(started: float) -> None:
    print(f"Duration (in seconds): {time.perf_counter() - started:.6f}")


def _run_bfs(path: str, source: int, sink: int) -> None:
    graph = load_graph(path, infer_source=False)
    started = time.perf_counter()
    flow_path = find_path(graph, source, sink)
    if flow_path is None:
        print("Oops! sink cannot be reached from source.")
    else:
        print("Shortest path: " + ", ".join(str(node) for node in flow_path.nodes))
    _print_duration(started)


def _run_max_flow(path: str) -> None:
    graph = load_graph(path)
    started = time.perf_counter()
    result = solve_max_flow(graph)
    print(f"Maximum flow: {result.value}")
    _print_duration(started)


def _run_circulation(path: str) -> None:
    started = time.perf_counter()
    result = check_circulation(path)
    if result.feasible:
        print("Yes, it has a circulation.")
    else:
        print(f"No, it does not have a circulation. Reason: {result.reason}")
    _print_duration(started)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="network_maxflow",
        description="Shortest paths, maximum flow and circulation checks on graph files",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "-b",
        "--bfs",
        nargs=3,
        metavar=("FILE", "SOURCE", "SINK"),
        help="Print the shortest path from SOURCE to SINK",
    )
    mode.add_argument("-f", "--max-flow", metavar="FILE", help="Print the maximum flow")
    mode.add_argument(
        "-c", "--circulation", metavar="FILE", help="Print whether a circulation exists"
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.bfs is not None:
            path, source_text, sink_text = args.bfs
            try:
                source, sink = int(source_text), int(sink_text)
            except ValueError:
                parser.error(f"SOURCE and SINK must be integers, got {source_text!r} {sink_text!r}")
            _run_bfs(path, source, sink)
        elif args.max_flow is not None:
            _run_max_flow(args.max_flow)
        else:
            _run_circulation(args.circulation)
    except (NetworkFlowError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


def generate_main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="flow-generate", description="Generate random graph files"
    )
    parser.add_argument("min_nodes", type=int, help="Smallest node count")
    parser.add_argument("max_nodes", type=int, help="Largest node count")
    parser.add_argument("--repeat", type=int, default=1, help="Graphs per node count")
    parser.add_argument("--min-capacity", type=int, default=1)
    parser.add_argument("--max-capacity", type=int, default=30)
    parser.add_argument("--output-dir", type=Path, default=Path("fileinput"))
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        options = GeneratorOptions(
            min_nodes=args.min_nodes,
            max_nodes=args.max_nodes,
            repeat=args.repeat,
            min_capacity=args.min_capacity,
            max_capacity=args.max_capacity,
            output_dir=args.output_dir,
        )
        paths = generate_graphs(options, np.random.default_rng(args.seed))
    except (NetworkFlowError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    for path in paths:
        print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
