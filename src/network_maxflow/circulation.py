"""Circulation feasibility via reduction to maximum flow.

Every input line starts with a supply/demand value (positive demand, negative
supply, zero neither) followed by the usual ``neighbor capacity`` pairs. The
reduction inserts a super-source as node 0, shifts every original node id up
by one and appends a super-sink as node ``len(rows) + 1``. Supplies become
edges out of the super-source, demands become edges into the super-sink. A
circulation exists iff the maximum flow saturates every supply edge.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .data import CirculationResult, Token, build_graph
from .exceptions import MalformedInputError
from .io import parse_int_rows
from .maxflow import max_flow

logger = logging.getLogger(__name__)

SUPER_SOURCE = 0

SUPPLY_EXCEEDS_DEMAND = "supply exceeds demand"
DEMAND_EXCEEDS_SUPPLY = "demand exceeds supply"
MINIMUM_CUT = "minimum cut separates supply from demand"


@dataclass(frozen=True)
class CirculationDetail:
    """A synthetic super-source or super-sink edge produced for one input line."""

    tail: int
    head: int
    value: int


@dataclass
class ReducedCirculation:
    """A circulation instance rewritten as a max-flow instance.

    Attributes:
        rows: Adjacency rows of the reduced graph (row 0 is the super-source).
        source: Super-source id (always 0).
        sink: Super-sink id (``len(original rows) + 1``).
        details: Synthetic edges added for supplies and demands.
        total_supply: Sum of supply magnitudes.
        total_demand: Sum of demands.
    """

    rows: list[list[int]]
    source: int
    sink: int
    details: list[CirculationDetail]
    total_supply: int
    total_demand: int


def _split_balance(row: Sequence[int]) -> tuple[int, list[int]]:
    if not row:
        return 0, []
    return row[0], list(row[1:])


def supply_demand_totals(rows: Sequence[Sequence[Token]]) -> tuple[int, int]:
    """Return ``(total_supply, total_demand)`` from the leading tokens."""
    total_supply = 0
    total_demand = 0
    for row in parse_int_rows(rows):
        balance, _ = _split_balance(row)
        if balance < 0:
            total_supply -= balance
        else:
            total_demand += balance
    return total_supply, total_demand


def reduce_circulation(rows: Sequence[Sequence[Token]]) -> ReducedCirculation:
    """Rewrite a supply/demand instance into super-source/super-sink rows.

    This is a pure transformation; it does not check that supply and demand
    balance.

    Raises:
        MalformedInputError: Non-integer tokens, an odd number of adjacency
                             tokens, or a neighbor id outside the input lines.
    """
    int_rows = parse_int_rows(rows)
    line_count = len(int_rows)
    sink = line_count + 1

    details: list[CirculationDetail] = []
    shifted_rows: list[list[int]] = []
    total_supply = 0
    total_demand = 0

    for line, row in enumerate(int_rows):
        balance, pairs = _split_balance(row)
        if len(pairs) % 2:
            raise MalformedInputError(
                f"Line {line} has an odd number of adjacency tokens ({len(pairs)}) after "
                f"the supply/demand value.",
                line=line,
            )
        node = line + 1
        shifted: list[int] = []
        for neighbor, capacity in zip(pairs[::2], pairs[1::2]):
            if not 0 <= neighbor < line_count:
                raise MalformedInputError(
                    f"Line {line} references node {neighbor}, outside the node range "
                    f"0..{line_count - 1}.",
                    line=line,
                    token=str(neighbor),
                )
            shifted.extend((neighbor + 1, capacity))
        shifted_rows.append(shifted)

        if balance > 0:
            details.append(CirculationDetail(tail=node, head=sink, value=balance))
            total_demand += balance
        elif balance < 0:
            details.append(CirculationDetail(tail=SUPER_SOURCE, head=node, value=-balance))
            total_supply -= balance

    source_row: list[int] = []
    for detail in details:
        if detail.tail == SUPER_SOURCE:
            source_row.extend((detail.head, detail.value))
        else:
            shifted_rows[detail.tail - 1].extend((detail.head, detail.value))

    return ReducedCirculation(
        rows=[source_row, *shifted_rows],
        source=SUPER_SOURCE,
        sink=sink,
        details=details,
        total_supply=total_supply,
        total_demand=total_demand,
    )


def solve_circulation(rows: Sequence[Sequence[Token]]) -> CirculationResult:
    """Decide whether a supply/demand instance has a circulation.

    Unbalanced totals are reported as infeasible without running max flow.
    Otherwise the reduced instance is solved and the instance is feasible iff
    the maximum flow equals the total supply.

    Examples:
        >>> solve_circulation([[-5, 1, 5], [5]]).feasible
        True
        >>> solve_circulation([[-5, 1, 5], [4]]).reason
        'supply exceeds demand'
    """
    int_rows = parse_int_rows(rows)
    total_supply, total_demand = supply_demand_totals(int_rows)
    imbalance = total_demand - total_supply
    if imbalance != 0:
        reason = SUPPLY_EXCEEDS_DEMAND if imbalance < 0 else DEMAND_EXCEEDS_SUPPLY
        logger.info(
            "Circulation rejected before solving: %s (supply %d, demand %d)",
            reason,
            total_supply,
            total_demand,
        )
        return CirculationResult(
            feasible=False,
            reason=reason,
            total_supply=total_supply,
            total_demand=total_demand,
        )

    reduced = reduce_circulation(int_rows)
    graph = build_graph(reduced.rows, source=reduced.source, sink=reduced.sink)
    flow = max_flow(graph.adjacency, reduced.source, reduced.sink, graph.capacity)

    feasible = flow == reduced.total_supply
    logger.info(
        "Circulation max flow %d against total supply %d", flow, reduced.total_supply
    )
    return CirculationResult(
        feasible=feasible,
        reason="" if feasible else MINIMUM_CUT,
        total_supply=reduced.total_supply,
        total_demand=reduced.total_demand,
        max_flow=flow,
    )
