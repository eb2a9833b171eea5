# v2
# file: club/config.py

"""
Central configuration for a club day.
The per-day parameters (tables, working hours, hourly rate) come from the
input file and are held by ClubConfig; runtime paths and the log level are
module constants that environment variables can override.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .clock import ClockValue

# ----------------------------- Logging ----------------------------- #
LOG_FILE = os.getenv("CLUB_LOG_FILE", "logs/club.log")
LOG_LEVEL = os.getenv("CLUB_LOG_LEVEL", "INFO").upper()

# ----------------------------- Outputs ----------------------------- #
OUTPUT_DIR = os.getenv("CLUB_OUTPUT_DIR", "output")
TABLES_FILENAME = "tables_stats.csv"
SUMMARY_FILENAME = "summary_stats.csv"


@dataclass(frozen=True)
class ClubConfig:
    """Parameters fixed for the whole day."""

    table_count: int
    open_time: ClockValue
    close_time: ClockValue
    hourly_rate: int

    @property
    def working_minutes(self) -> int:
        return (self.close_time - self.open_time).total_minutes

    def is_open_at(self, time: ClockValue) -> bool:
        return self.open_time <= time < self.close_time

    def validate(self) -> "ClubConfig":
        if self.table_count <= 0:
            raise ValueError(f"Invalid number of tables: {self.table_count}")
        if self.close_time <= self.open_time:
            raise ValueError(f"Close time {self.close_time} must be after open time {self.open_time}")
        if self.hourly_rate <= 0:
            raise ValueError(f"Invalid hour cost: {self.hourly_rate}")
        return self
