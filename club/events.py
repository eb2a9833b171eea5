# v3
# file: club/events.py

"""
Event records for a club day and the append-only event log.
Incoming commands delegate their semantics to ClubLogic; outgoing
notifications are plain records emitted by it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import ClassVar, Dict, Iterator, List, Sequence, Type

from .clock import ClockValue


class EventKind(IntEnum):
    """Numeric event identifiers used in the input and the report."""

    ARRIVE = 1
    SIT = 2
    WAIT = 3
    LEAVE = 4
    DEPARTURE = 11
    QUEUE_PROMOTION = 12
    ERROR = 13


class ErrorCode(str, Enum):
    NOT_OPEN_YET = "NotOpenYet"
    YOU_SHALL_NOT_PASS = "YouShallNotPass"
    CLIENT_UNKNOWN = "ClientUnknown"
    PLACE_IS_BUSY = "PlaceIsBusy"
    I_CAN_WAIT_NO_LONGER = "ICanWaitNoLonger!"


@dataclass(frozen=True)
class Event:
    """Base event storing the time; subclasses fix the kind."""

    time: ClockValue

    KIND: ClassVar[EventKind]

    @property
    def kind(self) -> EventKind:
        return self.KIND

    def fields(self) -> List[str]:
        return []

    def __str__(self) -> str:
        return " ".join([str(self.time), str(int(self.kind)), *self.fields()])


@dataclass(frozen=True)
class ClientEvent(Event):
    client: str

    def fields(self) -> List[str]:
        return [self.client]


@dataclass(frozen=True)
class Command(ClientEvent):
    """An incoming command; processing is forwarded to ClubLogic."""

    def process(self, logic) -> None:  # pragma: no cover - interface only
        raise NotImplementedError("Subclasses must implement process().")


@dataclass(frozen=True)
class ArriveCommand(Command):
    KIND: ClassVar[EventKind] = EventKind.ARRIVE

    def process(self, logic) -> None:
        logic.handle_arrival(self)


@dataclass(frozen=True)
class SitCommand(Command):
    table: int

    KIND: ClassVar[EventKind] = EventKind.SIT

    def fields(self) -> List[str]:
        return [self.client, str(self.table)]

    def process(self, logic) -> None:
        logic.handle_sit(self)


@dataclass(frozen=True)
class WaitCommand(Command):
    KIND: ClassVar[EventKind] = EventKind.WAIT

    def process(self, logic) -> None:
        logic.handle_wait(self)


@dataclass(frozen=True)
class LeaveCommand(Command):
    KIND: ClassVar[EventKind] = EventKind.LEAVE

    def process(self, logic) -> None:
        logic.handle_leave(self)


@dataclass(frozen=True)
class DepartureEvent(ClientEvent):
    """Forced exit: queue overflow ejection or the closing sweep."""

    KIND: ClassVar[EventKind] = EventKind.DEPARTURE


@dataclass(frozen=True)
class QueuePromotionEvent(ClientEvent):
    table: int

    KIND: ClassVar[EventKind] = EventKind.QUEUE_PROMOTION

    def fields(self) -> List[str]:
        return [self.client, str(self.table)]


@dataclass(frozen=True)
class ErrorEvent(Event):
    code: ErrorCode

    KIND: ClassVar[EventKind] = EventKind.ERROR

    def fields(self) -> List[str]:
        return [self.code.value]


COMMAND_TYPES: Dict[EventKind, Type[Command]] = {
    EventKind.ARRIVE: ArriveCommand,
    EventKind.SIT: SitCommand,
    EventKind.WAIT: WaitCommand,
    EventKind.LEAVE: LeaveCommand,
}


def build_command(time: ClockValue, kind_id: int, args: Sequence[str]) -> Command:
    """Build an incoming command from its numeric kind and raw arguments.

    Raises ValueError for kinds that are not incoming commands or for an
    argument count that does not match the kind.
    """
    try:
        kind = EventKind(kind_id)
        command_cls = COMMAND_TYPES[kind]
    except (ValueError, KeyError):
        raise ValueError(f"Unknown event kind {kind_id}") from None

    expected = 2 if command_cls is SitCommand else 1
    if len(args) != expected:
        raise ValueError(f"Event kind {kind_id} expects {expected} argument(s), got {len(args)}")
    if command_cls is SitCommand:
        return SitCommand(time, args[0], int(args[1]))
    return command_cls(time, args[0])


class EventLog:
    """Append-only sequence of accepted commands and synthesized events."""

    def __init__(self):
        self._events: List[Event] = []

    def append(self, event: Event) -> None:
        self._events.append(event)
        logging.debug("Event logged: %s", event)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def lines(self) -> List[str]:
        return [str(event) for event in self._events]
