"""
Day-template generation and break fan-out.

Builds the base period list of a school day from a start time, a lesson
length and a period count, and expands "apply to all days" break
definitions into one Break record per day.

Base periods run back to back; break time is not baked into them. The
adjuster adds it when the weekly schedule is computed.

Usage:
    from adjuster.data.generator import TemplateConfig, generate_day_template

    template = generate_day_template(TemplateConfig(start_time="07:45", number_of_periods=8))
    schedule = template.adjusted_schedule()
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..timeutils import ClockTime, MINUTES_PER_DAY, minutes_to_time
from .models import (
    DEFAULT_NUM_DAYS,
    Break,
    BreakType,
    Period,
    ScheduleConfig,
    TimetableInput,
    break_display_name,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Break Templates
# =============================================================================

@dataclass
class BreakTemplate:
    """A break definition before it is assigned to concrete days."""
    after_period: int
    duration_minutes: int
    type: BreakType = BreakType.SHORT_BREAK
    name: Optional[str] = None
    enabled: bool = True
    id: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or break_display_name(self.type, self.after_period)

    @property
    def base_id(self) -> str:
        return self.id or f"break-{self.after_period}-{self.type.value}"


def default_break_templates() -> list[BreakTemplate]:
    """Morning break, lunch and afternoon break of a standard day."""
    return [
        BreakTemplate(after_period=3, duration_minutes=15, type=BreakType.SHORT_BREAK, name="Morning Break"),
        BreakTemplate(after_period=6, duration_minutes=45, type=BreakType.LUNCH, name="Lunch"),
        BreakTemplate(after_period=8, duration_minutes=15, type=BreakType.AFTERNOON_BREAK, name="Afternoon Break"),
    ]


def fan_out_break(
    template: BreakTemplate,
    apply_to_all_days: bool,
    day_of_week: Optional[int] = None,
    num_days: int = DEFAULT_NUM_DAYS,
) -> list[Break]:
    """
    Turn a break definition into concrete per-day Break records.

    Args:
        template: The break definition
        apply_to_all_days: Create one break for every day 1..num_days
        day_of_week: The single day to use when not applying to all days
        num_days: Days in the school week

    Raises:
        ValueError: If a single-day break has no day
    """
    if apply_to_all_days:
        days = list(range(1, num_days + 1))
    elif day_of_week is None:
        raise ValueError(
            f"Break '{template.display_name}' needs a day_of_week when not applied to all days"
        )
    else:
        days = [day_of_week]

    return [
        Break(
            id=f"{template.base_id}-{day}" if apply_to_all_days else template.base_id,
            name=template.display_name,
            type=template.type,
            after_period=template.after_period,
            duration_minutes=template.duration_minutes,
            day_of_week=day,
            apply_to_all_days=apply_to_all_days,
        )
        for day in days
    ]


# =============================================================================
# Day Template
# =============================================================================

@dataclass
class TemplateConfig:
    """Parameters for generating a day template."""
    start_time: str = "08:00"
    lesson_duration: int = 45
    number_of_periods: int = 10
    breaks: list[BreakTemplate] = field(default_factory=default_break_templates)
    apply_to_all_days: bool = True
    day_of_week: Optional[int] = None
    num_days: int = DEFAULT_NUM_DAYS
    school_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.lesson_duration <= 0:
            raise ValueError("lesson_duration must be positive")
        if self.number_of_periods < 1:
            raise ValueError("number_of_periods must be at least 1")
        if not 1 <= self.num_days <= 7:
            raise ValueError("num_days must be between 1 and 7")


def generate_day_template(config: Optional[TemplateConfig] = None) -> TimetableInput:
    """
    Generate contiguous periods and their breaks.

    Periods are numbered from 1. Disabled break templates and templates
    anchored beyond the last period are skipped.

    Raises:
        InvalidTimeFormat: If start_time is not HH:MM
        ValueError: If the base periods run past midnight
    """
    if config is None:
        config = TemplateConfig()

    current = ClockTime.parse(config.start_time).minutes
    periods: list[Period] = []

    for period_number in range(1, config.number_of_periods + 1):
        end = current + config.lesson_duration
        if end >= MINUTES_PER_DAY:
            raise ValueError(
                f"Period {period_number} would end after midnight; "
                f"reduce the number of periods or the lesson duration"
            )
        periods.append(Period(
            id=f"slot-{period_number}",
            period_number=period_number,
            start_time=minutes_to_time(current),
            end_time=minutes_to_time(end),
        ))
        current = end

    breaks: list[Break] = []
    for template in config.breaks:
        if not template.enabled:
            continue
        if template.after_period > config.number_of_periods:
            logger.debug("Skipping %s: only %d periods", template.display_name, config.number_of_periods)
            continue
        breaks.extend(fan_out_break(
            template,
            apply_to_all_days=config.apply_to_all_days,
            day_of_week=config.day_of_week,
            num_days=config.num_days,
        ))

    logger.debug("Generated %d periods and %d breaks", len(periods), len(breaks))

    return TimetableInput(
        config=ScheduleConfig(school_name=config.school_name, num_days=config.num_days),
        periods=periods,
        breaks=breaks,
    )


def save_generated_template(template: TimetableInput, path: Union[str, Path]) -> None:
    """Write a template as camelCase JSON that load_timetable_from_json reads back."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "config": {
            "schoolName": template.config.school_name,
            "numDays": template.config.num_days,
        },
        "periods": [
            {
                "id": p.id,
                "periodNumber": p.period_number,
                "startTime": p.start_time,
                "endTime": p.end_time,
                "displayTime": p.display_time,
            }
            for p in template.periods
        ],
        "breaks": [
            {
                "id": b.id,
                "name": b.name,
                "type": b.type.value,
                "afterPeriod": b.after_period,
                "durationMinutes": b.duration_minutes,
                "dayOfWeek": b.day_of_week,
                "applyToAllDays": b.apply_to_all_days,
            }
            for b in template.breaks
        ],
    }

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
