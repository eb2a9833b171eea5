# v2
# file: club/parser.py

"""
Reads the line-oriented description of a club day.
The first three lines configure the club; every following non-empty line is
a timestamped command. Any malformed line aborts parsing with InputFormatError.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from .clock import ClockValue
from .config import ClubConfig
from .events import Command, build_command


class InputFormatError(ValueError):
    """Malformed configuration or command line."""

    def __init__(self, message: str, line_number: int, line: str):
        super().__init__(f"line {line_number}: {message}: {line!r}")
        self.line_number = line_number
        self.line = line


def _positive_int(text: str, label: str) -> int:
    value = int(text.strip())
    if value <= 0:
        raise ValueError(f"{label} must be positive")
    return value


def _parse_header(lines: List[str]) -> ClubConfig:
    labels = ["number of tables", "working hours", "hour cost"]
    for idx, label in enumerate(labels):
        if idx >= len(lines):
            raise InputFormatError(f"missing {label}", idx + 1, "")

    try:
        table_count = _positive_int(lines[0], "number of tables")
    except ValueError as exc:
        raise InputFormatError(str(exc), 1, lines[0]) from exc

    tokens = lines[1].split()
    try:
        if len(tokens) != 2:
            raise ValueError("expected open and close times")
        open_time, close_time = ClockValue.parse(tokens[0]), ClockValue.parse(tokens[1])
        if close_time <= open_time:
            raise ValueError("close time must be after open time")
    except ValueError as exc:
        raise InputFormatError(str(exc), 2, lines[1]) from exc

    try:
        hourly_rate = _positive_int(lines[2], "hour cost")
    except ValueError as exc:
        raise InputFormatError(str(exc), 3, lines[2]) from exc

    return ClubConfig(table_count, open_time, close_time, hourly_rate).validate()


def parse_command_line(line: str) -> Command:
    """Parse ``HH:MM <kind> <client> [<table>]`` into a command."""
    tokens = line.split()
    if len(tokens) < 3:
        raise ValueError("expected time, event id and client")
    time = ClockValue.parse(tokens[0])
    if not tokens[1].isdigit():
        raise ValueError(f"bad event id {tokens[1]!r}")
    return build_command(time, int(tokens[1]), tokens[2:])


def parse_input(lines: Iterable[str]) -> Tuple[ClubConfig, List[Command]]:
    """Parse the whole input; return the club configuration and its commands in order."""
    raw = [line.rstrip("\r\n") for line in lines]
    config = _parse_header(raw)

    commands: List[Command] = []
    for line_number, line in enumerate(raw[3:], start=4):
        if line.strip() == "":
            continue
        try:
            commands.append(parse_command_line(line))
        except ValueError as exc:
            raise InputFormatError(str(exc), line_number, line) from exc

    logging.info(
        "Parsed configuration: tables=%d hours=%s-%s rate=%d; %d command(s)",
        config.table_count,
        config.open_time,
        config.close_time,
        config.hourly_rate,
        len(commands),
    )
    return config, commands


def read_input_file(path: str) -> Tuple[ClubConfig, List[Command]]:
    logging.info("Reading club day description from %s", path)
    with open(path, "r", encoding="utf-8") as handle:
        return parse_input(handle)
