"""Load and validate period and break records."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Union

from .models import Break, Period, _convert_keys_to_snake_case

logger = logging.getLogger(__name__)

PERIOD_FIELDS = set(Period.model_fields)
BREAK_FIELDS = set(Break.model_fields)


class DataValidationError(Exception):
    """Raised when schedule data fails validation."""
    pass


class MalformedPeriod(ValueError):
    """Raised when a period record has no period number."""
    pass


class MalformedBreak(ValueError):
    """Raised when a break record has no day of week."""
    pass


# =============================================================================
# Record Conversion
# =============================================================================

def period_from_record(record: Mapping[str, Any]) -> Period:
    """
    Build a Period from a camelCase or snake_case record.

    Keys the model does not know about (GraphQL __typename and the like) are
    dropped. A legacy 'time' key is read as the display time.

    Raises:
        MalformedPeriod: If the record has no period number
        pydantic.ValidationError: If any field is invalid
    """
    data = _convert_keys_to_snake_case(dict(record))
    if data.get("period_number") is None:
        raise MalformedPeriod(f"Period {data.get('id', '?')!r} has no periodNumber")

    if "time" in data and "display_time" not in data:
        data["display_time"] = data["time"]

    return Period.model_validate({k: v for k, v in data.items() if k in PERIOD_FIELDS})


def break_from_record(record: Mapping[str, Any], day_index_base: int = 1) -> Break:
    """
    Build a Break from a camelCase or snake_case record.

    Args:
        record: The raw break record
        day_index_base: 1 when dayOfWeek is already 1-based (Monday=1),
            0 when the backend numbers days from 0 (Monday=0)

    Raises:
        MalformedBreak: If the record has no day of week
        pydantic.ValidationError: If any field is invalid
    """
    data = _convert_keys_to_snake_case(dict(record))
    day = data.get("day_of_week")
    if day is None:
        raise MalformedBreak(f"Break {data.get('id', '?')!r} has no dayOfWeek")

    if day_index_base == 0 and isinstance(day, int):
        data["day_of_week"] = day + 1

    return Break.model_validate({k: v for k, v in data.items() if k in BREAK_FIELDS})


def load_periods(records: Iterable[Mapping[str, Any]]) -> list[Period]:
    """Convert period records, failing on the first malformed one."""
    periods = [period_from_record(r) for r in records]
    logger.debug("Loaded %d periods", len(periods))
    return periods


def load_breaks(records: Iterable[Mapping[str, Any]], day_index_base: int = 1) -> list[Break]:
    """Convert break records, failing on the first malformed one."""
    breaks = [break_from_record(r, day_index_base=day_index_base) for r in records]
    logger.debug("Loaded %d breaks (day index base %d)", len(breaks), day_index_base)
    return breaks


# =============================================================================
# Raw Document Validation
# =============================================================================

def load_schedule_data(path: Union[str, Path]) -> dict:
    """
    Load raw schedule data from a JSON file.

    Args:
        path: Path to the JSON file

    Returns:
        Validated schedule data dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file isn't valid JSON
        DataValidationError: If the data fails validation
    """
    path = Path(path)

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    validate_schedule_data(data)
    return data


def validate_schedule_data(data: dict) -> None:
    """
    Validate schedule data structure before model conversion.

    Args:
        data: Schedule data dictionary (camelCase or snake_case keys)

    Raises:
        DataValidationError: If validation fails
    """
    errors = []

    if not isinstance(data, dict):
        raise DataValidationError("Schedule data must be a JSON object")

    data = _convert_keys_to_snake_case(data)

    # Required top-level fields
    if "periods" not in data and "time_slots" not in data:
        errors.append("Missing required field: periods")
    if "breaks" not in data:
        errors.append("Missing required field: breaks")

    if errors:
        raise DataValidationError("; ".join(errors))

    periods = data.get("periods", data.get("time_slots")) or []
    breaks = data["breaks"] or []

    if not isinstance(periods, list):
        errors.append("periods must be a list")
        periods = []
    if not isinstance(breaks, list):
        errors.append("breaks must be a list")
        breaks = []

    # Non-object entries are reported and skipped by the field checks
    for name, items in (("Period", periods), ("Break", breaks)):
        for i, item in enumerate(items):
            if not isinstance(item, dict):
                errors.append(f"{name} {i} must be an object, got {type(item).__name__}")
    periods = [p for p in periods if isinstance(p, dict)]
    breaks = [b for b in breaks if isinstance(b, dict)]

    for i, period in enumerate(periods):
        if "id" not in period:
            errors.append(f"Period {i} missing 'id'")
        if period.get("period_number") is None:
            errors.append(f"Period {period.get('id', i)} missing 'periodNumber'")

    for i, brk in enumerate(breaks):
        if "id" not in brk:
            errors.append(f"Break {i} missing 'id'")
        if brk.get("day_of_week") is None:
            errors.append(f"Break {brk.get('id', i)} missing 'dayOfWeek'")
        if brk.get("after_period") is None:
            errors.append(f"Break {brk.get('id', i)} missing 'afterPeriod'")

    # Check for duplicate IDs
    def check_duplicates(items: list, name: str):
        ids = [item["id"] for item in items if "id" in item]
        seen = set()
        for id_ in ids:
            if id_ in seen:
                errors.append(f"Duplicate {name} ID: {id_}")
            seen.add(id_)

    check_duplicates(periods, "period")
    check_duplicates(breaks, "break")

    if errors:
        raise DataValidationError("; ".join(errors))
