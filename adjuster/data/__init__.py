"""Data models, record loading and template generation."""

from .models import (
    Period,
    Break,
    BreakType,
    BreakStyle,
    BREAK_STYLES,
    ScheduleConfig,
    TimetableInput,
    break_display_name,
    break_style,
    load_timetable_from_json,
    timetable_from_dict,
)
from .loader import (
    DataValidationError,
    MalformedBreak,
    MalformedPeriod,
    break_from_record,
    load_breaks,
    load_periods,
    load_schedule_data,
    period_from_record,
    validate_schedule_data,
)
from .generator import (
    BreakTemplate,
    TemplateConfig,
    default_break_templates,
    fan_out_break,
    generate_day_template,
    save_generated_template,
)

__all__ = [
    # Models
    "Period",
    "Break",
    "BreakType",
    "BreakStyle",
    "BREAK_STYLES",
    "ScheduleConfig",
    "TimetableInput",
    "break_display_name",
    "break_style",
    "load_timetable_from_json",
    "timetable_from_dict",
    # Loader
    "DataValidationError",
    "MalformedBreak",
    "MalformedPeriod",
    "break_from_record",
    "load_breaks",
    "load_periods",
    "load_schedule_data",
    "period_from_record",
    "validate_schedule_data",
    # Generator
    "BreakTemplate",
    "TemplateConfig",
    "default_break_templates",
    "fan_out_break",
    "generate_day_template",
    "save_generated_template",
]
