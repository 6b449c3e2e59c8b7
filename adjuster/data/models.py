"""
Pydantic models for timetable periods and breaks.

Mirrors the records served by the school backend (TimeSlot and
TimetableBreak), with snake_case field names.

Day conventions:
- Days are 1-7 (1=Monday, 7=Sunday)
- A Period without a day applies to every day
- A Break always belongs to exactly one day; "all days" breaks are stored
  as one Break per day

Time conventions:
- Clock times are 'HH:MM' strings (see adjuster.timeutils)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from ..timeutils import ClockTime, format_time_range, time_to_minutes


# =============================================================================
# Constants and Enums
# =============================================================================

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

DEFAULT_NUM_DAYS = 5

DayOfWeek = Annotated[int, Field(ge=1, le=7, description="Day of week (1=Monday, 7=Sunday)")]


class BreakType(str, Enum):
    """Kind of break inserted into the school day."""
    ASSEMBLY = "assembly"
    SHORT_BREAK = "short_break"
    TEA_BREAK = "tea_break"
    SNACK_BREAK = "snack_break"
    LONG_BREAK = "long_break"
    RECESS = "recess"
    LUNCH = "lunch"
    AFTERNOON_BREAK = "afternoon_break"
    GAMES_BREAK = "games_break"

    @classmethod
    def _missing_(cls, value: object) -> Optional[BreakType]:
        # Backend enums arrive upper-cased (SHORT_BREAK)
        if isinstance(value, str):
            normalized = value.strip().lower().replace(" ", "_").replace("-", "_")
            for member in cls:
                if member.value == normalized:
                    return member
        return None


@dataclass(frozen=True)
class BreakStyle:
    """Presentation attributes of a break type."""
    label: str
    icon: str
    color: str


BREAK_STYLES: dict[BreakType, BreakStyle] = {
    BreakType.ASSEMBLY: BreakStyle("Assembly", "🏫", "#8B5CF6"),
    BreakType.SHORT_BREAK: BreakStyle("Short Break", "☕", "#3B82F6"),
    BreakType.TEA_BREAK: BreakStyle("Tea Break", "🫖", "#10B981"),
    BreakType.SNACK_BREAK: BreakStyle("Snack Break", "🍪", "#FBBF24"),
    BreakType.LONG_BREAK: BreakStyle("Long Break", "⏰", "#06B6D4"),
    BreakType.RECESS: BreakStyle("Recess", "🏃", "#EC4899"),
    BreakType.LUNCH: BreakStyle("Lunch", "🍽️", "#F59E0B"),
    BreakType.AFTERNOON_BREAK: BreakStyle("Afternoon Break", "🌅", "#F97316"),
    BreakType.GAMES_BREAK: BreakStyle("Games", "🎮", "#EF4444"),
}


def break_style(break_type: BreakType) -> BreakStyle:
    """Look up the label, icon and color for a break type."""
    return BREAK_STYLES[break_type]


def break_display_name(break_type: BreakType, after_period: int) -> str:
    """Default name for a break, e.g. "Lunch (After Period 6)"."""
    label = break_style(break_type).label
    if after_period == 0:
        return f"{label} (Before First Period)"
    return f"{label} (After Period {after_period})"


def day_name(day: int) -> str:
    """Get day name from a 1-based day number."""
    return DAY_NAMES[day - 1] if 1 <= day <= 7 else f"Day {day}"


# =============================================================================
# Core Entity Models
# =============================================================================

class Period(BaseModel):
    """
    One numbered teaching slot in a day template.

    The times are the base (unadjusted) times; display_time is derived and
    is filled in from them when not supplied.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1, description="Unique identifier")
    period_number: int = Field(ge=0, description="Ordering key within a day (0 = before the first period)")
    start_time: str = Field(description="Start time (HH:MM)")
    end_time: str = Field(description="End time (HH:MM)")
    day_of_week: Optional[DayOfWeek] = Field(default=None, description="Day (None = every day)")
    display_time: Optional[str] = Field(default=None, description="Human-readable time range")
    day_template_id: Optional[str] = Field(default=None, description="Owning day template")
    color: Optional[str] = Field(default=None, description="Display color")

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_clock_time(cls, value: str) -> str:
        """Normalize to zero-padded HH:MM, rejecting malformed times."""
        return str(ClockTime.parse(value))

    @model_validator(mode="after")
    def validate_time_range(self) -> "Period":
        """Ensure start time is before end time."""
        if self.start_minutes >= self.end_minutes:
            raise ValueError(
                f"start_time ({self.start_time}) must be earlier than "
                f"end_time ({self.end_time})"
            )
        return self

    @model_validator(mode="before")
    @classmethod
    def fill_display_time(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("display_time"):
            start, end = data.get("start_time"), data.get("end_time")
            if isinstance(start, str) and isinstance(end, str):
                data = {**data, "display_time": format_time_range(start, end)}
        return data

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end_time)

    @property
    def duration_minutes(self) -> int:
        """Calculate period duration."""
        return self.end_minutes - self.start_minutes

    def applies_to(self, day: int) -> bool:
        """Whether this period belongs to the given day's template."""
        return self.day_of_week is None or self.day_of_week == day

    def __str__(self) -> str:
        return f"Period {self.period_number} ({self.start_time}-{self.end_time})"


class Break(BaseModel):
    """A break inserted after a numbered period on one specific day."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1, description="Unique identifier")
    name: str = Field(min_length=1, description="Display name")
    type: BreakType = Field(default=BreakType.SHORT_BREAK, description="Kind of break")
    after_period: int = Field(ge=0, description="Inserted after this period number (0 = before the first)")
    duration_minutes: int = Field(gt=0, le=600, description="Length of the break")
    day_of_week: DayOfWeek = Field(description="The single day this break applies to")
    apply_to_all_days: bool = Field(default=False, description="Creation-time fan-out flag")
    day_template_id: Optional[str] = Field(default=None, description="Owning day template")

    @model_validator(mode="before")
    @classmethod
    def fill_name(cls, data: Any) -> Any:
        """Derive the name from type and anchor when none is given."""
        if isinstance(data, dict) and not data.get("name"):
            try:
                break_type = BreakType(data.get("type", BreakType.SHORT_BREAK))
                after_period = int(data["after_period"])
            except (KeyError, TypeError, ValueError):
                return data
            data = {**data, "name": break_display_name(break_type, after_period)}
        return data

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            return BreakType(value)
        return value

    @property
    def style(self) -> BreakStyle:
        return break_style(self.type)

    @property
    def icon(self) -> str:
        return self.style.icon

    @property
    def color(self) -> str:
        return self.style.color

    def __str__(self) -> str:
        return f"{self.name} ({day_name(self.day_of_week)}, {self.duration_minutes} min)"


# =============================================================================
# Configuration Models
# =============================================================================

class ScheduleConfig(BaseModel):
    """School-wide schedule settings."""
    model_config = ConfigDict(extra="forbid")

    school_name: Optional[str] = Field(default=None, description="School name")
    num_days: int = Field(default=DEFAULT_NUM_DAYS, ge=1, le=7, description="Days per week")
    backend_day_index: int = Field(
        default=1,
        ge=0,
        le=1,
        description="Numbering of incoming dayOfWeek values (0 = Monday is 0)",
    )


# =============================================================================
# Main Input Model
# =============================================================================

class TimetableInput(BaseModel):
    """
    Complete input for one adjustment run: configuration, the day template's
    periods and the per-day breaks.
    """
    model_config = ConfigDict(extra="forbid")

    config: ScheduleConfig = Field(default_factory=ScheduleConfig, description="Schedule configuration")
    periods: list[Period] = Field(default_factory=list, description="Base periods")
    breaks: list[Break] = Field(default_factory=list, description="Breaks, one record per day")

    @model_validator(mode="after")
    def validate_no_duplicate_ids(self) -> "TimetableInput":
        """Ensure no duplicate IDs within each entity type."""
        errors: list[str] = []

        def check_duplicates(items: list, entity_name: str) -> None:
            seen: set[str] = set()
            for item in items:
                if item.id in seen:
                    errors.append(f"Duplicate {entity_name} ID: '{item.id}'")
                seen.add(item.id)

        check_duplicates(self.periods, "period")
        check_duplicates(self.breaks, "break")

        if errors:
            raise ValueError(f"Duplicate ID validation failed:\n" + "\n".join(f"  - {e}" for e in errors))

        return self

    @model_validator(mode="after")
    def validate_unique_period_numbers(self) -> "TimetableInput":
        """Within one day, period numbers must be unique."""
        errors: list[str] = []

        for day in range(1, 8):
            seen: dict[int, str] = {}
            for period in self.periods:
                if not period.applies_to(day):
                    continue
                if period.period_number in seen:
                    errors.append(
                        f"{day_name(day)}: periods '{seen[period.period_number]}' and "
                        f"'{period.id}' share period number {period.period_number}"
                    )
                else:
                    seen[period.period_number] = period.id

        if errors:
            raise ValueError(f"Period numbering validation failed:\n" + "\n".join(f"  - {e}" for e in sorted(set(errors))))

        return self

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    def get_breaks_by_day(self, day: int) -> list[Break]:
        """Get all breaks for a specific day, in anchor order."""
        return sorted(
            [b for b in self.breaks if b.day_of_week == day],
            key=lambda b: b.after_period,
        )

    @property
    def last_period_number(self) -> int:
        return max((p.period_number for p in self.periods), default=0)

    def adjusted_schedule(self, num_days: Optional[int] = None) -> dict[int, list[Period]]:
        """Compute the break-adjusted schedule for every configured day."""
        from ..adjustments import adjusted_schedule_for_week

        return adjusted_schedule_for_week(
            self.periods,
            self.breaks,
            num_days=num_days or self.config.num_days,
        )

    def consistency_warnings(self) -> list[str]:
        """Problems that do not make the input invalid but are likely mistakes."""
        warnings: list[str] = []
        last = self.last_period_number

        for brk in self.breaks:
            if self.periods and brk.after_period >= last:
                warnings.append(
                    f"Break '{brk.name}' on {day_name(brk.day_of_week)} is anchored after "
                    f"period {brk.after_period} and shifts no period"
                )
            if brk.day_of_week > self.config.num_days:
                warnings.append(
                    f"Break '{brk.name}' is on {day_name(brk.day_of_week)}, outside the "
                    f"{self.config.num_days}-day week"
                )

        return warnings

    def summary(self) -> dict[str, Any]:
        """Get a summary of the input data."""
        return {
            "school_name": self.config.school_name,
            "num_days": self.config.num_days,
            "periods": len(self.periods),
            "breaks": len(self.breaks),
            "break_minutes_by_day": {
                day: sum(b.duration_minutes for b in self.get_breaks_by_day(day))
                for day in range(1, self.config.num_days + 1)
            },
        }


# =============================================================================
# JSON Loading Helper
# =============================================================================

def load_timetable_from_json(path: str) -> TimetableInput:
    """
    Load and validate timetable data from a JSON file.

    The JSON may use the backend's camelCase keys or snake_case keys.
    Period and break records go through the record loader, so a missing
    periodNumber or dayOfWeek is reported as such instead of as a generic
    validation failure.

    Args:
        path: Path to the JSON file

    Returns:
        Validated TimetableInput model

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If invalid JSON
        MalformedPeriod / MalformedBreak: If a record lacks its ordering keys
        pydantic.ValidationError: If validation fails
    """
    import json
    from pathlib import Path

    json_path = Path(path)
    with open(json_path, encoding="utf-8") as f:
        data = json.load(f)

    return timetable_from_dict(data)


def timetable_from_dict(data: dict[str, Any]) -> TimetableInput:
    """Build a TimetableInput from a decoded JSON document."""
    from .loader import load_breaks, load_periods

    converted_data = _convert_keys_to_snake_case(data)

    # Move top-level config fields into config object
    config_fields = ["school_name", "num_days", "backend_day_index"]
    config_data = dict(converted_data.pop("config", None) or {})
    for field in config_fields:
        if field in converted_data:
            config_data[field] = converted_data.pop(field)

    config = ScheduleConfig.model_validate(config_data)

    return TimetableInput(
        config=config,
        periods=load_periods(converted_data.pop("periods", None) or converted_data.pop("time_slots", None) or []),
        breaks=load_breaks(converted_data.pop("breaks", None) or [], day_index_base=config.backend_day_index),
        **converted_data,
    )


def _convert_keys_to_snake_case(obj: Any) -> Any:
    """Recursively convert dictionary keys from camelCase to snake_case."""
    import re

    def to_snake_case(name: str) -> str:
        # Handle common patterns
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
        name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)
        return name.lower()

    if isinstance(obj, dict):
        return {to_snake_case(k): _convert_keys_to_snake_case(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_convert_keys_to_snake_case(item) for item in obj]
    else:
        return obj
