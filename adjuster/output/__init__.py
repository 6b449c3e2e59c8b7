"""Output schema and formatters for adjusted schedules."""

from .schema import (
    AdjustedPeriodOutput,
    AdjustedScheduleOutput,
    BreakOutput,
    DaySchedule,
    ScheduleSummary,
    create_schedule_output,
    schedule_to_json,
)
from .formatters import (
    CSVFormatter,
    GridFormatter,
    JSONFormatter,
    format_csv,
    format_grid,
    format_json,
    save_csv,
    save_json,
)

__all__ = [
    # Schema
    "AdjustedPeriodOutput",
    "AdjustedScheduleOutput",
    "BreakOutput",
    "DaySchedule",
    "ScheduleSummary",
    "create_schedule_output",
    "schedule_to_json",
    # Formatters
    "CSVFormatter",
    "GridFormatter",
    "JSONFormatter",
    "format_csv",
    "format_grid",
    "format_json",
    "save_csv",
    "save_json",
]
