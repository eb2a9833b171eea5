# v2
# file: club/clock.py

"""
Wall-clock values for a single club day.
A ClockValue is an hours:minutes pair; the same type doubles as a duration,
where subtraction is clamped at zero and hours may exceed 23.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

MINUTES_PER_HOUR = 60


@dataclass(frozen=True, order=True)
class ClockValue:
    """Immutable HH:MM value ordered by (hours, minutes)."""

    hours: int = 0
    minutes: int = 0

    @classmethod
    def from_minutes(cls, total: int) -> "ClockValue":
        total = max(0, total)
        return cls(total // MINUTES_PER_HOUR, total % MINUTES_PER_HOUR)

    @classmethod
    def parse(cls, text: str) -> "ClockValue":
        """Parse a strict ``HH:MM`` token (00..23, 00..59)."""
        if len(text) != 5 or text[2] != ":" or not (text[:2] + text[3:]).isdigit():
            raise ValueError(f"Invalid time format: {text!r}")
        hours, minutes = int(text[:2]), int(text[3:])
        if hours > 23 or minutes > 59:
            raise ValueError(f"Invalid time value: {text!r}")
        return cls(hours, minutes)

    @property
    def total_minutes(self) -> int:
        return self.hours * MINUTES_PER_HOUR + self.minutes

    def __add__(self, other: "ClockValue") -> "ClockValue":
        return ClockValue.from_minutes(self.total_minutes + other.total_minutes)

    def __sub__(self, other: "ClockValue") -> "ClockValue":
        return ClockValue.from_minutes(self.total_minutes - other.total_minutes)

    def __str__(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"


def billed_hours(duration: ClockValue) -> int:
    """Hours charged for an occupancy: ceiling of the minutes, never below one."""
    return max(1, math.ceil(duration.total_minutes / MINUTES_PER_HOUR))
