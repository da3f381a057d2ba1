"""File I/O helpers for the line-oriented graph format.

One line per node, 0-indexed by line position. A non-empty line is a
whitespace separated list of ``neighbor capacity`` pairs; an empty line is a
node without outbound edges. Circulation inputs carry one extra leading
supply/demand token per line.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from .data import FlowGraph, Token, _as_int, build_graph


def parse_rows(text: str) -> list[list[str]]:
    """Split graph text into token rows, one per line.

    A single trailing newline does not produce an extra empty row, so text
    written by ``format_rows`` reads back to the same rows.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.split() for line in lines]


def parse_int_rows(rows: Iterable[Sequence[Token]]) -> list[list[int]]:
    """Convert token rows to integers, reporting the offending line and token.

    Uses the same conversion as ``build_graph``: floats and bools are
    rejected rather than truncated.
    """
    return [[_as_int(token, line) for token in row] for line, row in enumerate(rows)]


def read_rows(path: str | Path) -> list[list[str]]:
    """Read a graph file into raw token rows."""
    return parse_rows(Path(path).read_text(encoding="utf-8"))


def load_graph(
    path: str | Path,
    source: int | None = None,
    sink: int | None = None,
    *,
    infer_source: bool = True,
) -> FlowGraph:
    """Load a graph file and build it, inferring source and sink when omitted."""
    return build_graph(read_rows(path), source=source, sink=sink, infer_source=infer_source)


def format_rows(rows: Iterable[Sequence[Token]]) -> str:
    """Render token rows in the graph file format."""
    return "".join(" ".join(str(token) for token in row) + "\n" for row in rows)


def save_rows(path: str | Path, rows: Iterable[Sequence[Token]]) -> Path:
    """Write token rows to ``path`` and return it."""
    target = Path(path)
    target.write_text(format_rows(rows), encoding="utf-8")
    return target
