"""CLI script that solves the bundled diamond graph and reports each augmentation."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from network_maxflow import (  # noqa: E402
    AugmentationInfo,
    compute_saturated_edges,
    load_graph,
    solve_max_flow,
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Solve the diamond max-flow example")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    )
    args = parser.parse_args()

    # Configure logging based on verbosity
    if args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose >= 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    base_dir = Path(__file__).resolve().parent
    graph_path = base_dir / "diamond.txt"

    def report(info: AugmentationInfo) -> None:
        path = " -> ".join(str(node) for node in info.path)
        print(f"  #{info.iteration}: {path} carries {info.bottleneck} (total {info.total_flow})")

    graph = load_graph(graph_path)
    print(f"Augmenting paths for {graph_path.name}:")
    result = solve_max_flow(graph, progress_callback=report)

    saturated = ", ".join(f"{edge.tail}->{edge.head}" for edge in compute_saturated_edges(graph, result))
    print(f"Solved {graph_path.name}: max_flow={result.value}, saturated edges: {saturated}")


if __name__ == "__main__":
    main()
