import sys
from pathlib import Path

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from network_maxflow.data import build_graph  # noqa: E402
from network_maxflow.exceptions import MalformedInputError  # noqa: E402
from network_maxflow.io import (  # noqa: E402
    format_rows,
    load_graph,
    parse_int_rows,
    parse_rows,
    read_rows,
    save_rows,
)

# These tests pin the text format implemented by network_maxflow.io.


def test_parse_rows_keeps_empty_lines_as_empty_rows():
    rows = parse_rows("1 5\n2 3\n\n")

    assert rows == [["1", "5"], ["2", "3"], []]


def test_parse_rows_without_trailing_newline():
    assert parse_rows("1 5\n") == parse_rows("1 5")


def test_parse_rows_tolerates_extra_whitespace_and_crlf():
    rows = parse_rows("1  5\t2 3\r\n\r\n")

    assert rows == [["1", "5", "2", "3"], []]


def test_parse_int_rows_reports_line_and_token():
    with pytest.raises(MalformedInputError) as exc_info:
        parse_int_rows([["1", "2"], ["3", "4.5"]])

    assert exc_info.value.line == 1
    assert exc_info.value.token == "4.5"


@pytest.mark.parametrize("token", [2.7, True, None])
def test_parse_int_rows_rejects_non_integer_objects(token):
    with pytest.raises(MalformedInputError, match="is not an integer"):
        parse_int_rows([[1, token]])


def test_parse_int_rows_accepts_ints_and_integer_strings():
    assert parse_int_rows([[1, "2"], [], ["-3"]]) == [[1, 2], [], [-3]]


def test_format_rows_writes_one_line_per_node():
    assert format_rows([[1, 5], [2, 3], []]) == "1 5\n2 3\n\n"


def test_save_and_load_round_trip(tmp_path: Path):
    # Output written by save_rows must rebuild the same graph semantics.
    rows = [[1, 10, 2, 10], [3, 10], [3, 10], []]
    path = save_rows(tmp_path / "diamond.txt", rows)

    assert read_rows(path) == [[str(token) for token in row] for row in rows]

    loaded = load_graph(path)
    direct = build_graph(rows)
    assert loaded.adjacency == direct.adjacency
    assert np.array_equal(loaded.capacity, direct.capacity)
    assert (loaded.source, loaded.sink) == (0, 3)


def test_load_graph_with_explicit_endpoints(tmp_path: Path):
    path = tmp_path / "chain.txt"
    path.write_text("1 5\n2 3\n\n", encoding="utf-8")

    graph = load_graph(path, source=1, sink=2)

    assert graph.source == 1
    assert graph.sink == 2


def test_load_graph_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_graph(tmp_path / "missing.txt")


def test_load_graph_rejects_odd_tokens(tmp_path: Path):
    path = tmp_path / "bad.txt"
    path.write_text("1 5 2\n\n", encoding="utf-8")

    with pytest.raises(MalformedInputError, match="Line 0"):
        load_graph(path)
