"""Tests for CLI module."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from adjuster.cli import app, parse_day


runner = CliRunner()


@pytest.fixture
def minimal_input_data() -> dict:
    """Create minimal input data as a dictionary."""
    return {
        "schoolName": "Hillside",
        "periods": [
            {"id": "p1", "periodNumber": 1, "startTime": "08:00", "endTime": "08:40"},
            {"id": "p2", "periodNumber": 2, "startTime": "08:40", "endTime": "09:20"},
        ],
        "breaks": [
            {"id": "b1", "name": "Tea", "type": "TEA_BREAK", "afterPeriod": 1, "durationMinutes": 15, "dayOfWeek": 1},
        ],
    }


def write_json(tmp_path: Path, data, name: str = "input.json") -> Path:
    filepath = tmp_path / name
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f)
    return filepath


@pytest.fixture
def input_file(minimal_input_data, tmp_path) -> Path:
    """Create a temporary input file."""
    return write_json(tmp_path, minimal_input_data)


class TestAdjustCommand:
    """Tests for the adjust command."""

    def test_json_to_stdout(self, input_file):
        result = runner.invoke(app, ["adjust", str(input_file)])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["byDay"]["1"]["periods"][1]["startTime"] == "08:55"
        assert data["byDay"]["2"]["periods"][1]["startTime"] == "08:40"

    def test_writes_output_file(self, input_file, tmp_path):
        output = tmp_path / "out" / "adjusted.json"
        result = runner.invoke(app, ["adjust", str(input_file), "-o", str(output)])
        assert result.exit_code == 0
        assert "Adjusted schedule saved to" in result.stdout
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["summary"]["numDays"] == 5

    def test_days_option(self, input_file):
        result = runner.invoke(app, ["adjust", str(input_file), "--days", "3"])
        assert result.exit_code == 0
        assert sorted(json.loads(result.stdout)["byDay"]) == ["1", "2", "3"]

    def test_days_out_of_range(self, input_file):
        result = runner.invoke(app, ["adjust", str(input_file), "--days", "8"])
        assert result.exit_code != 0

    def test_csv_format(self, input_file):
        result = runner.invoke(app, ["adjust", str(input_file), "--format", "csv"])
        assert result.exit_code == 0
        lines = result.stdout.strip().splitlines()
        assert lines[0].startswith("day,day_name,period_number")
        assert len(lines) == 11

    def test_grid_format(self, input_file):
        result = runner.invoke(app, ["adjust", str(input_file), "--format", "grid"])
        assert result.exit_code == 0
        assert "Weekly Schedule" in result.stdout

    def test_unknown_format(self, input_file):
        result = runner.invoke(app, ["adjust", str(input_file), "--format", "xml"])
        assert result.exit_code == 1
        assert "Unknown format" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["adjust", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "not found" in result.stdout

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(app, ["adjust", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout

    def test_malformed_break(self, minimal_input_data, tmp_path):
        del minimal_input_data["breaks"][0]["dayOfWeek"]
        result = runner.invoke(app, ["adjust", str(write_json(tmp_path, minimal_input_data))])
        assert result.exit_code == 1
        assert "Error loading input" in result.stdout

    def test_overflow_past_midnight(self, tmp_path):
        data = {
            "periods": [
                {"id": "p1", "periodNumber": 1, "startTime": "22:00", "endTime": "23:00"},
                {"id": "p2", "periodNumber": 2, "startTime": "23:00", "endTime": "23:50"},
            ],
            "breaks": [{"id": "b1", "afterPeriod": 1, "durationMinutes": 30, "dayOfWeek": 2}],
        }
        result = runner.invoke(app, ["adjust", str(write_json(tmp_path, data))])
        assert result.exit_code == 1
        assert "Error" in result.stdout


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_input(self, input_file):
        result = runner.invoke(app, ["validate", str(input_file)])
        assert result.exit_code == 0
        assert "JSON syntax is valid" in result.stdout
        assert "Schema validation passed" in result.stdout
        assert "No logical consistency issues" in result.stdout
        assert "All periods fit within the day" in result.stdout
        assert "Validation complete" in result.stdout

    def test_verbose_lists_break_minutes(self, input_file):
        result = runner.invoke(app, ["validate", str(input_file), "--verbose"])
        assert result.exit_code == 0
        assert "Monday: 15" in result.stdout

    def test_warnings(self, minimal_input_data, tmp_path):
        minimal_input_data["breaks"][0]["dayOfWeek"] = 6
        result = runner.invoke(app, ["validate", str(write_json(tmp_path, minimal_input_data))])
        assert result.exit_code == 0
        assert "Warnings found" in result.stdout

    def test_schema_failure(self, minimal_input_data, tmp_path):
        minimal_input_data["periods"][0]["endTime"] = "07:00"
        result = runner.invoke(app, ["validate", str(write_json(tmp_path, minimal_input_data))])
        assert result.exit_code == 1
        assert "Schema validation failed" in result.stdout

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("[1, 2", encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.stdout

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1


class TestViewCommand:
    """Tests for the view command."""

    def test_week_grid(self, input_file):
        result = runner.invoke(app, ["view", str(input_file)])
        assert result.exit_code == 0
        assert "Weekly Schedule" in result.stdout

    def test_single_day_by_name(self, input_file):
        result = runner.invoke(app, ["view", str(input_file), "--day", "monday"])
        assert result.exit_code == 0
        assert "Monday" in result.stdout
        assert "+15" in result.stdout
        assert "Tea" in result.stdout

    def test_single_day_by_number(self, input_file):
        result = runner.invoke(app, ["view", str(input_file), "--day", "2"])
        assert result.exit_code == 0
        assert "Tuesday" in result.stdout

    def test_day_outside_week(self, input_file):
        result = runner.invoke(app, ["view", str(input_file), "--day", "saturday"])
        assert result.exit_code == 1
        assert "not in the schedule" in result.stdout

    def test_unknown_day(self, input_file):
        result = runner.invoke(app, ["view", str(input_file), "--day", "someday"])
        assert result.exit_code == 1
        assert "Unknown day" in result.stdout


class TestTemplateCommand:
    """Tests for the template command."""

    def test_generates_loadable_template(self, tmp_path):
        output = tmp_path / "template.json"
        result = runner.invoke(app, ["template", str(output), "--periods", "8"])
        assert result.exit_code == 0
        assert "Template saved to" in result.stdout
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["periods"]) == 8
        assert len(data["breaks"]) == 15

        check = runner.invoke(app, ["validate", str(output)])
        assert check.exit_code == 0

    def test_day_end_reported(self, tmp_path):
        result = runner.invoke(app, ["template", str(tmp_path / "t.json")])
        assert result.exit_code == 0
        assert "day ends at 16:45" in result.stdout

    def test_no_default_breaks(self, tmp_path):
        output = tmp_path / "template.json"
        result = runner.invoke(app, ["template", str(output), "--no-default-breaks", "--days", "3"])
        assert result.exit_code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["breaks"] == []
        assert data["config"]["numDays"] == 3

    def test_invalid_start(self, tmp_path):
        result = runner.invoke(app, ["template", str(tmp_path / "t.json"), "--start", "8am"])
        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_runs_past_midnight(self, tmp_path):
        result = runner.invoke(app, ["template", str(tmp_path / "t.json"), "--start", "22:00", "--periods", "5"])
        assert result.exit_code == 1
        assert "midnight" in result.stdout


class TestParseDay:

    @pytest.mark.parametrize("value,expected", [
        ("monday", 1),
        ("Friday", 5),
        (" sunday ", 7),
        ("3", 3),
    ])
    def test_valid(self, value, expected):
        assert parse_day(value) == expected


class TestHelp:

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("adjust", "validate", "view", "template"):
            assert command in result.stdout
