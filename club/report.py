# v1
# file: club/report.py

"""Renders the day report: opening time, event log, closing time, per-table totals."""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional, TextIO

from .config import ClubConfig
from .entities import Table
from .events import Event


def table_summary_lines(tables: Iterable[Table]) -> List[str]:
    return [f"{table.table_id} {table.revenue} {table.busy_time}" for table in tables]


def render_report(config: ClubConfig, log: Iterable[Event], tables: Iterable[Table]) -> List[str]:
    lines = [str(config.open_time)]
    lines.extend(str(event) for event in log)
    lines.append(str(config.close_time))
    lines.extend(table_summary_lines(tables))
    return lines


def write_report(lines: Iterable[str], stream: Optional[TextIO] = None) -> None:
    stream = stream or sys.stdout
    for line in lines:
        stream.write(line + "\n")
