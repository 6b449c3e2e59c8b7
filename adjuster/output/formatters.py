"""
Output formatters for adjusted schedules.

This module provides formatters for different output formats:
- JSON: Complete output with per-day views
- CSV: One row per day and period, for spreadsheets
- Grid: Periods by days, rendered with rich for the console
"""

from __future__ import annotations

import csv
import json
import sys
from io import StringIO
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.table import Table

from .schema import AdjustedPeriodOutput, AdjustedScheduleOutput, DaySchedule


# =============================================================================
# Constants
# =============================================================================

DAY_ABBREV = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


# =============================================================================
# JSON Formatter
# =============================================================================

class JSONFormatter:
    """Formats adjusted schedules as JSON."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def format(self, output: AdjustedScheduleOutput) -> str:
        return output.to_json(indent=self.indent)

    def format_periods_only(self, output: AdjustedScheduleOutput) -> str:
        """Format only the adjusted periods, as a flat JSON array."""
        periods_data = [p.model_dump(by_alias=True) for p in output.periods]
        return json.dumps(periods_data, indent=self.indent, ensure_ascii=self.ensure_ascii)


def format_json(output: AdjustedScheduleOutput, indent: int = 2) -> str:
    """Convenience function for JSON formatting."""
    return JSONFormatter(indent=indent).format(output)


# =============================================================================
# CSV Formatter
# =============================================================================

class CSVFormatter:
    """Formats adjusted schedules as CSV."""

    DEFAULT_COLUMNS = [
        'day', 'day_name', 'period_number', 'period_id',
        'start_time', 'end_time', 'display_time',
        'base_start_time', 'base_end_time', 'offset_minutes',
    ]

    def __init__(
        self,
        columns: list[str] | None = None,
        include_header: bool = True,
        delimiter: str = ',',
    ):
        self.columns = columns or self.DEFAULT_COLUMNS
        self.include_header = include_header
        self.delimiter = delimiter

    def format(self, output: AdjustedScheduleOutput) -> str:
        buffer = StringIO()
        self.write(output, buffer)
        return buffer.getvalue()

    def write(self, output: AdjustedScheduleOutput, file: TextIO) -> None:
        """
        Write CSV to file-like object.

        Args:
            output: AdjustedScheduleOutput to format
            file: File-like object to write to
        """
        writer = csv.writer(file, delimiter=self.delimiter)

        if self.include_header:
            writer.writerow(self.columns)

        for day in sorted(output.by_day):
            day_schedule = output.by_day[day]
            for period in day_schedule.periods:
                writer.writerow(self._period_to_row(period, day_schedule))

    def _period_to_row(self, period: AdjustedPeriodOutput, day_schedule: DaySchedule) -> list[str]:
        field_map = {
            'day': str(period.day),
            'day_name': day_schedule.day_name,
            'period_number': str(period.period_number),
            'period_id': period.period_id,
            'start_time': period.start_time,
            'end_time': period.end_time,
            'display_time': period.display_time,
            'base_start_time': period.base_start_time,
            'base_end_time': period.base_end_time,
            'offset_minutes': str(period.offset_minutes),
        }

        return [field_map.get(col, '') for col in self.columns]


def format_csv(output: AdjustedScheduleOutput, columns: list[str] | None = None) -> str:
    """Convenience function for CSV formatting."""
    return CSVFormatter(columns=columns).format(output)


# =============================================================================
# Grid Formatter
# =============================================================================

class GridFormatter:
    """Renders a week as a periods-by-days table."""

    def __init__(self, width: int | None = None, show_breaks: bool = True):
        """
        Args:
            width: Console width (None = auto-detect)
            show_breaks: Add a row for each break between periods
        """
        self.width = width
        self.show_breaks = show_breaks

    def build_table(self, output: AdjustedScheduleOutput) -> Table:
        title = "Weekly Schedule"
        if output.summary.school_name:
            title = f"{output.summary.school_name} - {title}"

        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Period", style="dim", justify="right")

        days = sorted(output.by_day)
        for day in days:
            table.add_column(DAY_ABBREV[day - 1] if 1 <= day <= 7 else f"D{day}", justify="center")

        period_numbers = sorted({p.period_number for d in days for p in output.by_day[d].periods})

        for number in period_numbers:
            if self.show_breaks:
                self._add_break_row(table, output, days, period_numbers, number)

            row = [str(number)]
            for day in days:
                match = [p for p in output.by_day[day].periods if p.period_number == number]
                row.append(f"{match[0].start_time}-{match[0].end_time}" if match else "-")
            table.add_row(*row)

        return table

    def _add_break_row(
        self,
        table: Table,
        output: AdjustedScheduleOutput,
        days: list[int],
        period_numbers: list[int],
        before: int,
    ) -> None:
        # A break is drawn above the first period numbered higher than its anchor
        cells = []
        for day in days:
            names = [
                b.name for b in output.by_day[day].breaks
                if min((n for n in period_numbers if n > b.after_period), default=None) == before
            ]
            cells.append(", ".join(names))
        if any(cells):
            table.add_row("", *cells, style="yellow")

    def format(self, output: AdjustedScheduleOutput) -> str:
        """Render to plain text."""
        console = Console(record=True, width=self.width or 100, file=StringIO())
        console.print(self.build_table(output))
        return console.export_text()

    def print(self, output: AdjustedScheduleOutput, file: TextIO | None = None) -> None:
        console = Console(file=file or sys.stdout, width=self.width)
        console.print(self.build_table(output))


def format_grid(output: AdjustedScheduleOutput, width: int | None = None) -> str:
    """Convenience function for grid formatting."""
    return GridFormatter(width=width).format(output)


# =============================================================================
# File Output
# =============================================================================

def save_json(output: AdjustedScheduleOutput, path: str | Path, indent: int = 2) -> None:
    """Save output as a JSON file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_json(output, indent=indent))


def save_csv(output: AdjustedScheduleOutput, path: str | Path) -> None:
    """Save output as a CSV file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        CSVFormatter().write(output, f)
