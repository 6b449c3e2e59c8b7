"""
Output schema for adjusted schedules.

This module defines the JSON-serializable output format for a break-adjusted
week, with a per-day view and a summary of break time per day.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from ..data.models import Break, Period, TimetableInput, day_name


# =============================================================================
# Period Output
# =============================================================================

class AdjustedPeriodOutput(BaseModel):
    """A single adjusted period in the output."""
    period_id: str = Field(alias="periodId")
    period_number: int = Field(alias="periodNumber")
    day: int
    start_time: str = Field(alias="startTime")  # 'HH:MM'
    end_time: str = Field(alias="endTime")  # 'HH:MM'
    display_time: str = Field(alias="displayTime")
    base_start_time: str = Field(alias="baseStartTime")
    base_end_time: str = Field(alias="baseEndTime")
    offset_minutes: int = Field(alias="offsetMinutes")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_periods(cls, base: Period, adjusted: Period, day: int) -> AdjustedPeriodOutput:
        """Create from a base period and its adjusted counterpart."""
        return cls(
            periodId=adjusted.id,
            periodNumber=adjusted.period_number,
            day=day,
            startTime=adjusted.start_time,
            endTime=adjusted.end_time,
            displayTime=adjusted.display_time or "",
            baseStartTime=base.start_time,
            baseEndTime=base.end_time,
            offsetMinutes=adjusted.start_minutes - base.start_minutes,
        )


class BreakOutput(BaseModel):
    """A break as shown in a day's schedule."""
    break_id: str = Field(alias="breakId")
    name: str
    type: str
    after_period: int = Field(alias="afterPeriod")
    duration_minutes: int = Field(alias="durationMinutes")
    icon: str
    color: str

    model_config = {"populate_by_name": True}

    @classmethod
    def from_break(cls, brk: Break) -> BreakOutput:
        return cls(
            breakId=brk.id,
            name=brk.name,
            type=brk.type.value,
            afterPeriod=brk.after_period,
            durationMinutes=brk.duration_minutes,
            icon=brk.icon,
            color=brk.color,
        )


# =============================================================================
# Views
# =============================================================================

class DaySchedule(BaseModel):
    """Schedule for a single day."""
    day: int
    day_name: str = Field(alias="dayName")
    periods: list[AdjustedPeriodOutput]
    breaks: list[BreakOutput] = Field(default_factory=list)
    break_minutes: int = Field(default=0, alias="breakMinutes")
    end_of_day: Optional[str] = Field(default=None, alias="endOfDay")

    model_config = {"populate_by_name": True}


class ScheduleSummary(BaseModel):
    """Totals across the week."""
    school_name: Optional[str] = Field(default=None, alias="schoolName")
    num_days: int = Field(alias="numDays")
    periods_per_day: int = Field(alias="periodsPerDay")
    break_minutes_by_day: dict[int, int] = Field(default_factory=dict, alias="breakMinutesByDay")

    model_config = {"populate_by_name": True}


# =============================================================================
# Complete Output
# =============================================================================

class AdjustedScheduleOutput(BaseModel):
    """Complete output for an adjusted week."""
    summary: ScheduleSummary
    by_day: dict[int, DaySchedule] = Field(default_factory=dict, alias="byDay")

    model_config = {"populate_by_name": True}

    def to_json(self, indent: int = 2) -> str:
        """Serialize to JSON string."""
        return self.model_dump_json(by_alias=True, indent=indent)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(by_alias=True)

    @property
    def periods(self) -> list[AdjustedPeriodOutput]:
        """All adjusted periods, ordered by day then period number."""
        return [p for day in sorted(self.by_day) for p in self.by_day[day].periods]


# =============================================================================
# Conversion Functions
# =============================================================================

def create_schedule_output(
    timetable: TimetableInput,
    schedule: dict[int, list[Period]] | None = None,
) -> AdjustedScheduleOutput:
    """
    Create an AdjustedScheduleOutput for a timetable.

    Args:
        timetable: The input periods, breaks and config
        schedule: A schedule already computed by adjusted_schedule_for_week;
            computed from `timetable` when omitted

    Returns:
        AdjustedScheduleOutput with one DaySchedule per day
    """
    if schedule is None:
        schedule = timetable.adjusted_schedule()

    base_by_id = {p.id: p for p in timetable.periods}

    by_day: dict[int, DaySchedule] = {}
    for day, adjusted in sorted(schedule.items()):
        day_breaks = timetable.get_breaks_by_day(day)
        periods = [
            AdjustedPeriodOutput.from_periods(base_by_id.get(p.id, p), p, day)
            for p in adjusted
        ]
        by_day[day] = DaySchedule(
            day=day,
            dayName=day_name(day),
            periods=periods,
            breaks=[BreakOutput.from_break(b) for b in day_breaks],
            breakMinutes=sum(b.duration_minutes for b in day_breaks),
            endOfDay=adjusted[-1].end_time if adjusted else None,
        )

    summary = ScheduleSummary(
        schoolName=timetable.config.school_name,
        numDays=len(by_day),
        periodsPerDay=len(timetable.periods),
        breakMinutesByDay={day: ds.break_minutes for day, ds in by_day.items()},
    )

    return AdjustedScheduleOutput(summary=summary, byDay=by_day)


def schedule_to_json(timetable: TimetableInput, indent: int = 2) -> str:
    """Adjust a timetable and serialize the result to a JSON string."""
    return create_schedule_output(timetable).to_json(indent=indent)
