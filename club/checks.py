# v1
# file: club/checks.py

"""Invariant checks over a ClubState."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass
class CheckResult:
    name: str
    passed: bool
    details: str


def check_seating_bijection(state) -> CheckResult:
    """Occupied tables and seated clients must map one-to-one."""
    problems: List[str] = []
    for table in state.tables.values():
        if table.occupant is None:
            continue
        if state.client_tables.get(table.occupant) != table.table_id:
            problems.append(f"table {table.table_id} held by {table.occupant} without a matching seat")
        if table.occupant not in state.clients:
            problems.append(f"table {table.table_id} held by absent client {table.occupant}")
    for client, table_id in state.client_tables.items():
        table = state.tables.get(table_id)
        if table is None or table.occupant != client:
            problems.append(f"client {client} mapped to table {table_id} they do not occupy")
    return CheckResult("seating_bijection", not problems, "; ".join(problems) or "ok")


def check_seated_waiting_disjoint(state) -> CheckResult:
    both = sorted(set(state.waiting) & set(state.client_tables))
    details = f"seated and waiting: {', '.join(both)}" if both else "ok"
    return CheckResult("seated_waiting_disjoint", not both, details)


def check_queue_capacity(state) -> CheckResult:
    length = len(state.waiting)
    return CheckResult(
        "queue_capacity",
        length <= state.table_count,
        f"queue length {length}, capacity {state.table_count}",
    )


def check_queue_membership(state) -> CheckResult:
    strays = [client for client in state.waiting if client not in state.clients]
    details = f"waiting but absent: {', '.join(strays)}" if strays else "ok"
    return CheckResult("queue_membership", not strays, details)


def check_table_count(state) -> CheckResult:
    expected = list(range(1, state.table_count + 1))
    actual = sorted(state.tables)
    return CheckResult("table_count", actual == expected, f"tables {actual}")


def check_state(state) -> List[CheckResult]:
    return [
        check_seating_bijection(state),
        check_seated_waiting_disjoint(state),
        check_queue_capacity(state),
        check_queue_membership(state),
        check_table_count(state),
    ]
