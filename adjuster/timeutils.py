"""
Clock-time arithmetic for timetable periods.

Time conventions:
- Clock times are naive 24-hour 'HH:MM' strings
- Arithmetic happens in minutes since midnight (0-1439 for a valid time)

The free functions are permissive: they never validate their input, so a
malformed string produces a meaningless minute count instead of an error.
Use ClockTime where a validated value is needed.

Example times:
- "08:00" = 480
- "12:30" = 750
- "15:15" = 915
"""

from __future__ import annotations

import re
from dataclasses import dataclass

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 24 * MINUTES_PER_HOUR

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


class InvalidTimeFormat(ValueError):
    """Raised when a string is not a valid 24-hour HH:MM clock time."""
    pass


# =============================================================================
# Permissive Helpers
# =============================================================================

def _part_to_int(part: str) -> int:
    try:
        return int(part.strip())
    except ValueError:
        return 0


def _split_clock(time_str: str) -> tuple[int, int]:
    parts = time_str.split(":")
    hours = _part_to_int(parts[0])
    minutes = _part_to_int(parts[1]) if len(parts) > 1 else 0
    return hours, minutes


def time_to_minutes(time_str: str | None) -> int:
    """Convert HH:MM format to minutes from midnight. Empty input gives 0."""
    if not time_str:
        return 0
    hours, minutes = _split_clock(time_str)
    return hours * MINUTES_PER_HOUR + minutes


def minutes_to_time(minutes: int) -> str:
    """
    Convert minutes from midnight to HH:MM format.

    No bounds check: 1500 gives "25:00" and -30 gives "-1:30".
    """
    h, m = divmod(minutes, MINUTES_PER_HOUR)
    return f"{h:02d}:{m:02d}"


def format_time_for_display(time_str: str | None) -> str:
    """Format 'HH:MM' as 12-hour 'H:MM AM/PM' (midnight is 12 AM, noon 12 PM)."""
    if not time_str:
        return ""
    hours, minutes = _split_clock(time_str)
    suffix = "PM" if hours >= 12 else "AM"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{minutes:02d} {suffix}"


def format_time_range(start_time: str, end_time: str) -> str:
    """Human-readable range used for a period's display time."""
    return f"{format_time_for_display(start_time)} – {format_time_for_display(end_time)}"


# =============================================================================
# Validated Clock Time
# =============================================================================

@dataclass(frozen=True, order=True)
class ClockTime:
    """A validated wall-clock time within a single day."""
    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise InvalidTimeFormat(f"hour must be 0-23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise InvalidTimeFormat(f"minute must be 0-59, got {self.minute}")

    @classmethod
    def parse(cls, value: str) -> ClockTime:
        """Parse an 'HH:MM' string, raising InvalidTimeFormat if malformed."""
        if not isinstance(value, str):
            raise InvalidTimeFormat(f"expected an 'HH:MM' string, got {value!r}")
        match = _CLOCK_PATTERN.match(value.strip())
        if not match:
            raise InvalidTimeFormat(f"'{value}' is not in HH:MM format")
        return cls(int(match.group(1)), int(match.group(2)))

    @classmethod
    def from_minutes(cls, minutes: int) -> ClockTime:
        if not 0 <= minutes < MINUTES_PER_DAY:
            raise InvalidTimeFormat(
                f"{minutes} minutes is outside a single day (0-{MINUTES_PER_DAY - 1})"
            )
        return cls(*divmod(minutes, MINUTES_PER_HOUR))

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * MINUTES_PER_HOUR + self.minute

    def display(self) -> str:
        return format_time_for_display(str(self))

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"
