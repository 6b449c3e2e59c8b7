"""
Break-adjusted period times.

A day template lists periods with base start/end times that run back to
back. Breaks are anchored "after period N" on a single day. The adjusted
time of a period is its base time pushed later by the total length of every
break anchored before it on that day:

    offset(p) = sum(b.duration_minutes for b in day_breaks if b.after_period < p.period_number)

A break after period N therefore never moves period N itself, only the
periods that follow it. Everything here is a pure function over immutable
models and is safe to call from any thread.

Usage:
    from adjuster.adjustments import adjusted_schedule_for_week

    schedule = adjusted_schedule_for_week(periods, breaks)
    monday = schedule[1]
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .data.models import DEFAULT_NUM_DAYS, Break, Period
from .timeutils import MINUTES_PER_DAY, format_time_range, minutes_to_time

logger = logging.getLogger(__name__)


class PeriodOverflowsDay(ValueError):
    """Raised when breaks push a period past midnight."""

    def __init__(self, period: Period, offset_minutes: int, adjusted_end_minutes: int):
        self.period = period
        self.offset_minutes = offset_minutes
        self.adjusted_end_minutes = adjusted_end_minutes
        super().__init__(
            f"Period {period.period_number} ({period.id}) would end at "
            f"{minutes_to_time(adjusted_end_minutes)} after a {offset_minutes} minute "
            f"break offset, past the end of the day"
        )


# =============================================================================
# Break Filtering
# =============================================================================

def applicable_breaks(breaks: Iterable[Break], day: int) -> list[Break]:
    """Breaks whose day_of_week is exactly `day`."""
    return [b for b in breaks if b.day_of_week == day]


# =============================================================================
# Offsets
# =============================================================================

def cumulative_offsets(periods: Iterable[Period], breaks: Iterable[Break]) -> dict[int, int]:
    """
    Minutes of break time before each period number.

    Args:
        periods: Periods of one day
        breaks: Breaks already filtered to that day

    Returns:
        Mapping of every distinct period_number to its offset; periods with
        no break before them map to 0
    """
    offsets = {p.period_number: 0 for p in periods}

    for brk in sorted(breaks, key=lambda b: b.after_period):
        for number in offsets:
            if number > brk.after_period:
                offsets[number] += brk.duration_minutes

    return offsets


# =============================================================================
# Adjustment
# =============================================================================

def adjust_period(period: Period, offset_minutes: int) -> Period:
    """
    Shift a period later by `offset_minutes`, keeping its duration.

    A zero offset returns `period` itself.

    Raises:
        PeriodOverflowsDay: If the shifted period would end after 23:59
    """
    if offset_minutes == 0:
        return period

    start = period.start_minutes
    duration = period.end_minutes - start
    adjusted_start = start + offset_minutes
    adjusted_end = adjusted_start + duration

    if adjusted_end >= MINUTES_PER_DAY or adjusted_start < 0:
        raise PeriodOverflowsDay(period, offset_minutes, adjusted_end)

    start_time = minutes_to_time(adjusted_start)
    end_time = minutes_to_time(adjusted_end)

    return period.model_copy(update={
        "start_time": start_time,
        "end_time": end_time,
        "display_time": format_time_range(start_time, end_time),
    })


def adjusted_time_slots_for_day(
    periods: Sequence[Period],
    breaks: Iterable[Break],
    day: int,
) -> list[Period]:
    """
    Adjusted periods for one day, ordered by period number.

    Periods without a day_of_week appear on every day; the others only on
    their own day.

    Args:
        periods: The full period list of the template
        breaks: All breaks of the week; only those on `day` are used
        day: Day of week (1=Monday)
    """
    ordered = sorted((p for p in periods if p.applies_to(day)), key=lambda p: p.period_number)
    day_breaks = applicable_breaks(breaks, day)
    offsets = cumulative_offsets(ordered, day_breaks)

    logger.debug(
        "Day %d: %d periods, %d breaks, %d break minutes",
        day, len(ordered), len(day_breaks), sum(b.duration_minutes for b in day_breaks),
    )

    return [adjust_period(p, offsets[p.period_number]) for p in ordered]


def adjusted_schedule_for_week(
    periods: Sequence[Period],
    breaks: Sequence[Break],
    num_days: int = DEFAULT_NUM_DAYS,
) -> dict[int, list[Period]]:
    """
    Adjusted periods for every day of the week.

    Args:
        periods: The full period list of the template
        breaks: All breaks, one record per day
        num_days: Days in the school week, 1-7 (default 5, Monday-Friday)

    Returns:
        Mapping of day number (1..num_days) to that day's adjusted periods

    Raises:
        ValueError: If num_days is outside 1-7
        PeriodOverflowsDay: If any period would run past midnight
    """
    if not 1 <= num_days <= 7:
        raise ValueError(f"num_days must be between 1 and 7, got {num_days}")

    return {
        day: adjusted_time_slots_for_day(periods, breaks, day)
        for day in range(1, num_days + 1)
    }
