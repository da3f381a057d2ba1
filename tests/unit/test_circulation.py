"""Tests for the circulation reduction and feasibility check."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from network_maxflow.circulation import (  # noqa: E402
    DEMAND_EXCEEDS_SUPPLY,
    MINIMUM_CUT,
    SUPPLY_EXCEEDS_DEMAND,
    CirculationDetail,
    reduce_circulation,
    solve_circulation,
    supply_demand_totals,
)
from network_maxflow.exceptions import InvalidEdgeError, MalformedInputError  # noqa: E402


class TestReduceCirculation:
    """Shape of the reduced max-flow instance."""

    def test_renumbering_and_synthetic_edges(self):
        rows = [
            [-5, 1, 3, 2, 4],
            [2, 2, 1],
            [3],
        ]
        reduced = reduce_circulation(rows)

        assert reduced.source == 0
        assert reduced.sink == 4
        assert reduced.rows == [
            [1, 5],
            [2, 3, 3, 4],
            [3, 1, 4, 2],
            [4, 3],
        ]
        assert reduced.details == [
            CirculationDetail(tail=0, head=1, value=5),
            CirculationDetail(tail=2, head=4, value=2),
            CirculationDetail(tail=3, head=4, value=3),
        ]
        assert reduced.total_supply == 5
        assert reduced.total_demand == 5

    def test_supply_edges_follow_row_order(self):
        reduced = reduce_circulation([[-2], [-3], [5]])

        assert reduced.rows[0] == [1, 2, 2, 3]
        assert reduced.rows[3] == [4, 5]

    def test_empty_rows_count_as_zero(self):
        reduced = reduce_circulation([[-1, 2, 1], [], [1]])

        assert reduced.rows == [[1, 1], [3, 1], [], [4, 1]]

    def test_accepts_string_tokens(self):
        reduced = reduce_circulation([["-4", "1", "4"], ["4"]])

        assert reduced.rows == [[1, 4], [2, 4], [3, 4]]

    def test_odd_adjacency_tokens(self):
        with pytest.raises(MalformedInputError, match="Line 1"):
            reduce_circulation([[-1, 1, 1], [1, 0]])

    def test_neighbor_outside_input_lines(self):
        # Id 2 would silently become the super-sink after shifting.
        with pytest.raises(MalformedInputError, match="references node 2"):
            reduce_circulation([[-1, 2, 1], [1]])

    def test_non_integer_balance(self):
        with pytest.raises(MalformedInputError):
            reduce_circulation([["x", "1", "1"], ["1"]])


class TestSolveCirculation:
    """Feasibility verdicts."""

    def test_feasible_instance(self):
        result = solve_circulation([[-5, 1, 5], [5]])

        assert result.feasible
        assert result.reason == ""
        assert result.max_flow == 5
        assert result.total_supply == result.total_demand == 5

    def test_supply_with_zero_capacity_edge(self):
        # Node 0 supplies 5 to node 1, plus an unrelated zero-capacity edge to node 2.
        rows = [[-5, 1, 5, 2, 0], [0, 2, 5], [5]]

        result = solve_circulation(rows)

        assert result.feasible
        assert result.max_flow == 5

    def test_minimum_cut_blocks_supply(self):
        result = solve_circulation([[-5, 1, 3], [5]])

        assert not result.feasible
        assert result.reason == MINIMUM_CUT
        assert result.max_flow == 3

    def test_multiple_sources_and_sinks(self):
        rows = [
            [-3, 2, 3],
            [-4, 2, 2, 3, 2],
            [2, 3, 3],
            [5],
        ]

        result = solve_circulation(rows)

        assert result.feasible
        assert result.max_flow == 7

    def test_supply_exceeds_demand(self):
        result = solve_circulation([[-5, 1, 5], [4]])

        assert not result.feasible
        assert result.reason == SUPPLY_EXCEEDS_DEMAND
        assert result.max_flow is None

    def test_demand_exceeds_supply(self):
        result = solve_circulation([[-5, 1, 5], [6]])

        assert result.reason == DEMAND_EXCEEDS_SUPPLY
        assert result.total_demand == 6

    def test_imbalance_skips_flow_engine(self):
        with patch("network_maxflow.circulation.max_flow") as engine:
            result = solve_circulation([[-5, 1, 5], [1]])

        engine.assert_not_called()
        assert not result.feasible

    def test_no_supply_or_demand_is_trivially_feasible(self):
        result = solve_circulation([[0, 1, 4], [0]])

        assert result.feasible
        assert result.max_flow == 0

    def test_empty_input_is_feasible(self):
        assert solve_circulation([]).feasible

    def test_self_loop_in_input(self):
        with pytest.raises(InvalidEdgeError):
            solve_circulation([[-1, 0, 1], [1]])

    @pytest.mark.parametrize(
        "rows",
        [
            [[-5, 1, 2.7], [5]],
            [[-5, 1, True], [5]],
            [[-5.0, 1, 5], [5]],
        ],
    )
    def test_non_integer_tokens_are_rejected(self, rows):
        # Floats and bools must not be truncated into capacities or balances.
        with pytest.raises(MalformedInputError) as exc_info:
            solve_circulation(rows)

        assert exc_info.value.line == 0


def test_supply_demand_totals():
    assert supply_demand_totals([[-5, 1, 1], [], [3], [2], [0]]) == (5, 5)
