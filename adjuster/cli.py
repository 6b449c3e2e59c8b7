"""
Command-line interface for the timetable adjuster.

Usage:
    python -m adjuster adjust input.json -o output.json --format json
    python -m adjuster validate input.json
    python -m adjuster view input.json --day tuesday
    python -m adjuster template template.json --start 08:00 --periods 10
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .adjustments import PeriodOverflowsDay
from .data.generator import TemplateConfig, generate_day_template, save_generated_template
from .data.loader import MalformedBreak, MalformedPeriod
from .data.models import DAY_NAMES, TimetableInput, load_timetable_from_json
from .output.formatters import CSVFormatter, GridFormatter, JSONFormatter
from .output.schema import AdjustedScheduleOutput, create_schedule_output
from .timeutils import InvalidTimeFormat

# Create Typer app
app = typer.Typer(
    name="adjuster",
    help="Apply timetable breaks to period times.",
    add_completion=False,
)

# Rich console for pretty output
console = Console()

DAY_MAP = {name.lower(): i for i, name in enumerate(DAY_NAMES, start=1)}

LOAD_ERRORS = (ValidationError, MalformedPeriod, MalformedBreak, InvalidTimeFormat)

FORMATS = ("json", "csv", "grid")


# =============================================================================
# Helper Functions
# =============================================================================

def configure_logging(verbose: bool) -> None:
    """Route library logging through rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def load_input(input_path: Path) -> TimetableInput:
    """Load and validate input data."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(code=1)

    try:
        return load_timetable_from_json(str(input_path))
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON:[/red] {e}")
        raise typer.Exit(code=1)
    except LOAD_ERRORS as e:
        console.print(f"[red]Error loading input:[/red] {e}")
        raise typer.Exit(code=1)


def build_output(input_data: TimetableInput, days: Optional[int]) -> AdjustedScheduleOutput:
    """Adjust the input, reporting periods pushed past midnight."""
    try:
        schedule = input_data.adjusted_schedule(num_days=days)
    except PeriodOverflowsDay as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)
    return create_schedule_output(input_data, schedule)


def parse_day(value: str) -> int:
    """Accept a day name or a 1-7 day number."""
    key = value.strip().lower()
    if key in DAY_MAP:
        return DAY_MAP[key]
    if key.isdigit() and 1 <= int(key) <= 7:
        return int(key)
    console.print(f"[red]Error:[/red] Unknown day '{value}'")
    raise typer.Exit(code=1)


def print_day(output: AdjustedScheduleOutput, day: int) -> None:
    """Print one day's adjusted periods and breaks."""
    schedule = output.by_day.get(day)
    if schedule is None:
        console.print(f"[red]Error:[/red] Day {day} is not in the schedule")
        console.print(f"Available days: {', '.join(str(d) for d in sorted(output.by_day))}")
        raise typer.Exit(code=1)

    console.print(Panel(
        f"[bold]{schedule.day_name}[/bold]",
        title="Day Schedule",
        subtitle=f"{schedule.break_minutes} min of breaks",
    ))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Period", justify="right")
    table.add_column("Time")
    table.add_column("Base", style="dim")
    table.add_column("Shift", justify="right")

    for period in schedule.periods:
        shift = f"+{period.offset_minutes}" if period.offset_minutes else ""
        table.add_row(
            str(period.period_number),
            period.display_time,
            f"{period.base_start_time}-{period.base_end_time}",
            shift,
        )

    console.print(table)

    for brk in schedule.breaks:
        console.print(f"  {brk.icon} {brk.name}: {brk.duration_minutes} min after period {brk.after_period}")


# =============================================================================
# Commands
# =============================================================================

@app.command()
def adjust(
    input_file: Path = typer.Argument(
        ...,
        help="Path to input JSON file with periods and breaks",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Path to write the adjusted schedule",
    ),
    days: Optional[int] = typer.Option(
        None,
        "--days", "-d",
        help="Days per week (overrides the input config)",
        min=1,
        max=7,
    ),
    output_format: str = typer.Option(
        "json",
        "--format", "-f",
        help="Output format: json, csv or grid",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging",
    ),
) -> None:
    """
    Compute break-adjusted period times for every day of the week.

    Example:
        python -m adjuster adjust input.json -o adjusted.json
    """
    configure_logging(verbose)

    if output_format not in FORMATS:
        console.print(f"[red]Error:[/red] Unknown format '{output_format}' (choose from {', '.join(FORMATS)})")
        raise typer.Exit(code=1)

    input_data = load_input(input_file)
    schedule_output = build_output(input_data, days)

    if output_format == "grid":
        rendered = GridFormatter().format(schedule_output)
    elif output_format == "csv":
        rendered = CSVFormatter().format(schedule_output)
    else:
        rendered = JSONFormatter().format(schedule_output)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", newline="", encoding="utf-8") as f:
            f.write(rendered)
        console.print(f"[green]Adjusted schedule saved to:[/green] {output}")
    elif output_format == "grid":
        GridFormatter().print(schedule_output, file=console.file)
    else:
        typer.echo(rendered)


@app.command()
def validate(
    input_file: Path = typer.Argument(
        ...,
        help="Path to input JSON file to validate",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show detailed validation results",
    ),
) -> None:
    """
    Validate input data.

    Checks for:
    - Valid JSON structure
    - Schema compliance (times, period numbers, break days)
    - Logical consistency (breaks that shift nothing, days outside the week)
    - Periods pushed past midnight by breaks

    Example:
        python -m adjuster validate input.json
    """
    configure_logging(verbose)
    console.print(f"\n[bold]Validating:[/bold] {input_file}\n")

    if not input_file.exists():
        console.print(f"[red]Error:[/red] File not found: {input_file}")
        raise typer.Exit(code=1)

    # Step 1: JSON parsing
    console.print("[cyan]1. Checking JSON syntax...[/cyan]")
    try:
        with open(input_file, encoding="utf-8") as f:
            json.load(f)
        console.print("   [green]JSON syntax is valid[/green]")
    except json.JSONDecodeError as e:
        console.print(f"   [red]Invalid JSON:[/red] {e}")
        raise typer.Exit(code=1)

    # Step 2: Schema validation
    console.print("[cyan]2. Validating against schema...[/cyan]")
    try:
        input_data = load_timetable_from_json(str(input_file))
        console.print("   [green]Schema validation passed[/green]")
    except LOAD_ERRORS as e:
        console.print("   [red]Schema validation failed:[/red]")
        for line in str(e).split("\n"):
            console.print(f"   {line}")
        raise typer.Exit(code=1)

    # Step 3: Logical consistency
    console.print("[cyan]3. Checking logical consistency...[/cyan]")
    warnings = input_data.consistency_warnings()
    if warnings:
        console.print("   [yellow]Warnings found:[/yellow]")
        for w in warnings:
            console.print(f"   - {w}")
    else:
        console.print("   [green]No logical consistency issues[/green]")

    # Step 4: Adjustment
    console.print("[cyan]4. Applying breaks...[/cyan]")
    try:
        input_data.adjusted_schedule()
        console.print("   [green]All periods fit within the day[/green]")
    except PeriodOverflowsDay as e:
        console.print(f"   [red]{e}[/red]")
        raise typer.Exit(code=1)

    # Summary
    summary = input_data.summary()
    console.print("\n[bold]Summary:[/bold]")
    table = Table(show_header=False, box=None)
    table.add_column("Entity", style="cyan")
    table.add_column("Count", style="white")

    table.add_row("Periods", str(summary["periods"]))
    table.add_row("Breaks", str(summary["breaks"]))
    table.add_row("Days per week", str(summary["num_days"]))

    console.print(table)

    if verbose:
        console.print("\n[bold]Break minutes per day:[/bold]")
        for day, minutes in summary["break_minutes_by_day"].items():
            console.print(f"  {DAY_NAMES[day - 1]}: {minutes}")

    console.print("\n[green]Validation complete.[/green]\n")


@app.command()
def view(
    input_file: Path = typer.Argument(
        ...,
        help="Path to input JSON file",
    ),
    day: Optional[str] = typer.Option(
        None,
        "--day", "-D",
        help="Show a single day (monday, tuesday, ... or 1-7)",
    ),
    days: Optional[int] = typer.Option(
        None,
        "--days", "-d",
        help="Days per week (overrides the input config)",
        min=1,
        max=7,
    ),
) -> None:
    """
    Display the adjusted schedule.

    Examples:
        python -m adjuster view input.json
        python -m adjuster view input.json --day wednesday
    """
    input_data = load_input(input_file)
    schedule_output = build_output(input_data, days)

    if day:
        print_day(schedule_output, parse_day(day))
    else:
        console.print(GridFormatter().build_table(schedule_output))


@app.command()
def template(
    output_file: Path = typer.Argument(
        ...,
        help="Path to write the generated template JSON",
    ),
    start: str = typer.Option(
        "08:00",
        "--start", "-s",
        help="Start time of the first period (HH:MM)",
    ),
    duration: int = typer.Option(
        45,
        "--duration",
        help="Lesson length in minutes",
        min=5,
        max=240,
    ),
    periods: int = typer.Option(
        10,
        "--periods", "-p",
        help="Number of periods per day",
        min=1,
        max=20,
    ),
    days: int = typer.Option(
        5,
        "--days", "-d",
        help="Days per week",
        min=1,
        max=7,
    ),
    default_breaks: bool = typer.Option(
        True,
        "--default-breaks/--no-default-breaks",
        help="Include morning break, lunch and afternoon break",
    ),
) -> None:
    """
    Generate a day template with contiguous periods and default breaks.

    Example:
        python -m adjuster template template.json --start 07:45 --periods 8
    """
    try:
        config = TemplateConfig(
            start_time=start,
            lesson_duration=duration,
            number_of_periods=periods,
            num_days=days,
        )
        if not default_breaks:
            config.breaks = []
        generated = generate_day_template(config)
        schedule_output = create_schedule_output(generated)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    save_generated_template(generated, output_file)

    console.print(f"[green]Template saved to:[/green] {output_file}")
    console.print(
        f"  {len(generated.periods)} periods, {len(generated.breaks)} breaks, "
        f"day ends at {schedule_output.by_day[1].end_of_day}"
    )


# =============================================================================
# Main Entry Point
# =============================================================================

def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
