# v3
# file: club/club_logic.py

"""
ClubLogic encapsulates the rules of a club day.
Every incoming command is checked against the current ClubState, applied,
and recorded in the EventLog together with whatever it synthesizes: errors,
queue promotions and forced departures. Billing happens whenever a table
session closes.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .checks import check_state
from .clock import ClockValue
from .config import ClubConfig
from .entities import ClubState, Table
from .events import (
    ArriveCommand,
    Command,
    DepartureEvent,
    ErrorCode,
    ErrorEvent,
    Event,
    EventLog,
    LeaveCommand,
    QueuePromotionEvent,
    SitCommand,
    WaitCommand,
)
from .stats import StatsCollector


class ClubLogic:
    """Applies commands to the club state and settles the day at closing."""

    def __init__(
        self,
        config: ClubConfig,
        state: Optional[ClubState] = None,
        stats: Optional[StatsCollector] = None,
        check_invariants: bool = False,
    ):
        self.config = config.validate()
        self.state = state if state is not None else ClubState(config.table_count)
        self.stats = stats if stats is not None else StatsCollector(self.config, self.state)
        self.log = EventLog()
        self.check_invariants = check_invariants
        self.closed = False
        self._emitted: List[Event] = []

    # ------------------------------------------------------------------
    def apply(self, command: Command) -> List[Event]:
        """Record ``command`` and apply it; return the events it synthesized."""
        if not isinstance(command, Command):
            raise ValueError(f"Not an incoming command: {command!r}")
        if self.closed:
            raise ValueError(f"Club already closed; cannot apply {command}")

        self.log.append(command)
        self._emitted = []
        command.process(self)
        if self.check_invariants:
            self._verify_state(str(command))
        return list(self._emitted)

    def _emit(self, event: Event):
        self.log.append(event)
        self._emitted.append(event)

    def _reject(self, time: ClockValue, code: ErrorCode):
        logging.warning("Rejected at %s: %s", time, code.value)
        self.stats.log_rejection(code)
        self._emit(ErrorEvent(time, code))

    # ------------------------------------------------------------------
    def handle_arrival(self, command: ArriveCommand):
        if not self.config.is_open_at(command.time):
            self._reject(command.time, ErrorCode.NOT_OPEN_YET)
            return
        if self.state.is_present(command.client):
            self._reject(command.time, ErrorCode.YOU_SHALL_NOT_PASS)
            return

        self.state.admit(command.client)
        self.stats.log_arrival(command.client, command.time)
        logging.info("Client %s arrived at %s", command.client, command.time)

    def handle_sit(self, command: SitCommand):
        if not self.state.is_present(command.client):
            self._reject(command.time, ErrorCode.CLIENT_UNKNOWN)
            return
        if not self.state.has_table(command.table) or not self.state.tables[command.table].is_free:
            self._reject(command.time, ErrorCode.PLACE_IS_BUSY)
            return

        previous = self._vacate(command.client, command.time)
        if previous is not None:
            logging.info(
                "Client %s moved from table %d to table %d at %s",
                command.client,
                previous.table_id,
                command.table,
                command.time,
            )
        self.state.seat(command.client, command.table, command.time)
        self.stats.log_seating(command.client, command.table, command.time)
        logging.info("Client %s took table %d at %s", command.client, command.table, command.time)

    def handle_wait(self, command: WaitCommand):
        if not self.state.is_present(command.client):
            self._reject(command.time, ErrorCode.CLIENT_UNKNOWN)
            return
        if self.state.free_table_count() > 0:
            self._reject(command.time, ErrorCode.I_CAN_WAIT_NO_LONGER)
            return
        if self.state.table_of(command.client) is not None or command.client in self.state.waiting:
            logging.info("Client %s already seated or waiting at %s; nothing to do", command.client, command.time)
            return

        if self.state.queue_is_full():
            self.state.remove_client(command.client)
            self.stats.log_departure(command.client, command.time, "ejected")
            logging.info(
                "Queue full (%d/%d); client %s ejected at %s",
                len(self.state.waiting),
                self.state.table_count,
                command.client,
                command.time,
            )
            self._emit(DepartureEvent(command.time, command.client))
            return

        self.state.enqueue_waiting(command.client)
        self.stats.log_queued(command.client, command.time, len(self.state.waiting))
        logging.info("Client %s is waiting at %s (position %d)", command.client, command.time, len(self.state.waiting))

    def handle_leave(self, command: LeaveCommand):
        if not self.state.is_present(command.client):
            self._reject(command.time, ErrorCode.CLIENT_UNKNOWN)
            return

        table = self._vacate(command.client, command.time)
        self.state.remove_client(command.client)
        self.stats.log_departure(command.client, command.time, "leave")
        logging.info("Client %s left at %s", command.client, command.time)
        if table is not None:
            self._promote_from_queue(table, command.time)

    # ------------------------------------------------------------------
    def _vacate(self, client: str, time: ClockValue) -> Optional[Table]:
        """Bill and free the client's table, if any; return that table."""
        table = self.state.unseat(client)
        if table is None:
            return None
        duration, hours = table.release(time, self.config.hourly_rate)
        self.stats.log_billing(table.table_id, client, duration, hours, hours * self.config.hourly_rate)
        logging.info(
            "Table %d billed %d hour(s) at %s (%s occupied by %s)",
            table.table_id,
            hours,
            time,
            duration,
            client,
        )
        return table

    def _promote_from_queue(self, table: Table, time: ClockValue):
        client = self.state.dequeue_waiting()
        if client is None:
            return
        self.state.seat(client, table.table_id, time)
        self.stats.log_promotion(client, table.table_id, time)
        logging.info("Client %s promoted from queue to table %d at %s", client, table.table_id, time)
        self._emit(QueuePromotionEvent(time, client, table.table_id))

    def _verify_state(self, label: str):
        for result in check_state(self.state):
            if not result.passed:
                logging.error("Invariant %s failed after %s: %s", result.name, label, result.details)

    # ------------------------------------------------------------------
    def close_day(self) -> List[Event]:
        """Evict everyone still present, in name order, billing open sessions at close."""
        if self.closed:
            logging.warning("close_day called twice; ignoring.")
            return []

        close_time = self.config.close_time
        self._emitted = []
        remaining = sorted(self.state.clients)
        logging.info("Closing at %s with %d client(s) present", close_time, len(remaining))
        for client in remaining:
            self._vacate(client, close_time)
            self.state.remove_client(client)
            self.stats.log_departure(client, close_time, "closing")
            self._emit(DepartureEvent(close_time, client))
        self.state.waiting.clear()
        self.closed = True
        if self.check_invariants:
            self._verify_state("closing")
        return list(self._emitted)
