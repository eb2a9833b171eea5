# v2
# file: club/entities.py

"""
Defines the table entity and the shared ClubState for a single club day.
Tables, present clients, seating and the waiting queue live here; the rules
deciding when they change belong to ClubLogic.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Set, Tuple

from .clock import ClockValue, billed_hours


class Table:
    """A numbered table with its running revenue and busy time."""

    def __init__(self, table_id: int):
        self.table_id = table_id
        self.occupant: Optional[str] = None
        self.occupied_since = ClockValue()
        self.revenue = 0
        self.busy_time = ClockValue()
        self.sessions = 0
        self.hours_billed = 0

    @property
    def is_free(self) -> bool:
        return self.occupant is None

    def occupy(self, client: str, time: ClockValue):
        self.occupant = client
        self.occupied_since = time

    def release(self, time: ClockValue, hourly_rate: int) -> Tuple[ClockValue, int]:
        """Close the current session at ``time``; return (duration, billed hours)."""
        duration = time - self.occupied_since
        hours = billed_hours(duration)
        self.revenue += hours * hourly_rate
        self.busy_time = self.busy_time + duration
        self.sessions += 1
        self.hours_billed += hours
        self.occupant = None
        return duration, hours


class ClubState:
    """Holds tables, the present-client registry, seating, and the waiting queue."""

    def __init__(self, table_count: int):
        if table_count <= 0:
            raise ValueError(f"Table count must be positive, got {table_count}")
        self.table_count = table_count
        self.tables: Dict[int, Table] = {idx: Table(idx) for idx in range(1, table_count + 1)}
        self.clients: Set[str] = set()
        self.client_tables: Dict[str, int] = {}
        self.waiting: Deque[str] = deque()

    # ---- Client helpers -------------------------------------------------
    def is_present(self, client: str) -> bool:
        return client in self.clients

    def admit(self, client: str):
        self.clients.add(client)

    def remove_client(self, client: str):
        self.clients.discard(client)
        self.client_tables.pop(client, None)
        if client in self.waiting:
            self.waiting.remove(client)
            logging.debug("Client %s dropped from waiting queue", client)

    def table_of(self, client: str) -> Optional[Table]:
        table_id = self.client_tables.get(client)
        return self.tables[table_id] if table_id is not None else None

    # ---- Table helpers --------------------------------------------------
    def has_table(self, table_id: int) -> bool:
        return table_id in self.tables

    def free_table_count(self) -> int:
        return sum(1 for table in self.tables.values() if table.is_free)

    def seat(self, client: str, table_id: int, time: ClockValue):
        self.tables[table_id].occupy(client, time)
        self.client_tables[client] = table_id
        if client in self.waiting:
            self.waiting.remove(client)

    def unseat(self, client: str) -> Optional[Table]:
        table_id = self.client_tables.pop(client, None)
        if table_id is None:
            return None
        return self.tables[table_id]

    def tables_in_order(self) -> List[Table]:
        return [self.tables[idx] for idx in sorted(self.tables)]

    # ---- Queue helpers --------------------------------------------------
    def queue_is_full(self) -> bool:
        return len(self.waiting) >= self.table_count

    def enqueue_waiting(self, client: str):
        self.waiting.append(client)
        logging.debug("Client %s enqueued (queue length %d)", client, len(self.waiting))

    def dequeue_waiting(self) -> Optional[str]:
        if len(self.waiting) == 0:
            return None
        client = self.waiting.popleft()
        logging.debug("Client %s dequeued (queue length %d)", client, len(self.waiting))
        return client
