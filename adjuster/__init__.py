"""Timetable Adjuster - break-adjusted period times for school timetables."""

from .adjustments import (
    PeriodOverflowsDay,
    adjust_period,
    adjusted_schedule_for_week,
    adjusted_time_slots_for_day,
    applicable_breaks,
    cumulative_offsets,
)
from .data.models import Break, BreakType, Period, TimetableInput
from .timeutils import (
    ClockTime,
    InvalidTimeFormat,
    format_time_for_display,
    minutes_to_time,
    time_to_minutes,
)

__all__ = [
    # Core
    "adjusted_schedule_for_week",
    "adjusted_time_slots_for_day",
    "applicable_breaks",
    "cumulative_offsets",
    "adjust_period",
    "PeriodOverflowsDay",
    # Models
    "Period",
    "Break",
    "BreakType",
    "TimetableInput",
    # Time arithmetic
    "ClockTime",
    "InvalidTimeFormat",
    "time_to_minutes",
    "minutes_to_time",
    "format_time_for_display",
]
