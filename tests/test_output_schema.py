"""Tests for the adjusted schedule output schema."""

from __future__ import annotations

import json

import pytest

from adjuster.data.models import Break, BreakType, Period, ScheduleConfig, TimetableInput
from adjuster.output.schema import (
    AdjustedPeriodOutput,
    AdjustedScheduleOutput,
    BreakOutput,
    create_schedule_output,
    schedule_to_json,
)


@pytest.fixture
def timetable() -> TimetableInput:
    return TimetableInput(
        config=ScheduleConfig(school_name="Hillside", num_days=3),
        periods=[
            Period(id="p1", period_number=1, start_time="08:00", end_time="08:40"),
            Period(id="p2", period_number=2, start_time="08:40", end_time="09:20"),
            Period(id="p3", period_number=3, start_time="09:20", end_time="10:00"),
        ],
        breaks=[
            Break(id="b1", after_period=1, duration_minutes=15, day_of_week=1),
            Break(id="b2", type=BreakType.LUNCH, after_period=2, duration_minutes=30, day_of_week=1),
            Break(id="b3", type=BreakType.ASSEMBLY, after_period=0, duration_minutes=20, day_of_week=2),
        ],
    )


class TestAdjustedPeriodOutput:
    """Tests for AdjustedPeriodOutput."""

    def test_from_periods(self):
        base = Period(id="p2", period_number=2, start_time="08:40", end_time="09:20")
        adjusted = Period(id="p2", period_number=2, start_time="08:55", end_time="09:35")
        out = AdjustedPeriodOutput.from_periods(base, adjusted, day=1)
        assert out.start_time == "08:55"
        assert out.base_start_time == "08:40"
        assert out.offset_minutes == 15
        assert out.display_time == "8:55 AM – 9:35 AM"

    def test_serializes_camel_case(self):
        period = Period(id="p1", period_number=1, start_time="08:00", end_time="08:40")
        data = AdjustedPeriodOutput.from_periods(period, period, day=2).model_dump(by_alias=True)
        assert data["periodId"] == "p1"
        assert data["periodNumber"] == 1
        assert data["offsetMinutes"] == 0
        assert data["day"] == 2


class TestBreakOutput:

    def test_from_break(self):
        brk = Break(id="b1", type="lunch", after_period=6, duration_minutes=45, day_of_week=3)
        out = BreakOutput.from_break(brk)
        data = out.model_dump(by_alias=True)
        assert data["breakId"] == "b1"
        assert data["type"] == "lunch"
        assert data["afterPeriod"] == 6
        assert data["durationMinutes"] == 45
        assert data["color"] == "#F59E0B"
        assert data["name"] == "Lunch (After Period 6)"


class TestCreateScheduleOutput:
    """Tests for create_schedule_output."""

    def test_days_from_config(self, timetable):
        output = create_schedule_output(timetable)
        assert sorted(output.by_day) == [1, 2, 3]
        assert output.summary.num_days == 3
        assert output.summary.periods_per_day == 3
        assert output.summary.school_name == "Hillside"

    def test_monday_offsets(self, timetable):
        monday = create_schedule_output(timetable).by_day[1]
        assert monday.day_name == "Monday"
        assert [p.offset_minutes for p in monday.periods] == [0, 15, 45]
        assert monday.periods[2].start_time == "10:05"
        assert monday.end_of_day == "10:45"
        assert monday.break_minutes == 45
        assert [b.break_id for b in monday.breaks] == ["b1", "b2"]

    def test_tuesday_assembly_shifts_everything(self, timetable):
        tuesday = create_schedule_output(timetable).by_day[2]
        assert [p.offset_minutes for p in tuesday.periods] == [20, 20, 20]
        assert tuesday.periods[0].start_time == "08:20"

    def test_day_without_breaks(self, timetable):
        wednesday = create_schedule_output(timetable).by_day[3]
        assert wednesday.breaks == []
        assert wednesday.break_minutes == 0
        assert all(p.offset_minutes == 0 for p in wednesday.periods)

    def test_summary_break_minutes(self, timetable):
        output = create_schedule_output(timetable)
        assert output.summary.break_minutes_by_day == {1: 45, 2: 20, 3: 0}

    def test_precomputed_schedule(self, timetable):
        schedule = timetable.adjusted_schedule(num_days=2)
        output = create_schedule_output(timetable, schedule)
        assert sorted(output.by_day) == [1, 2]

    def test_empty_periods(self):
        output = create_schedule_output(TimetableInput())
        assert output.by_day[1].periods == []
        assert output.by_day[1].end_of_day is None

    def test_flat_periods_ordered(self, timetable):
        output = create_schedule_output(timetable)
        assert [(p.day, p.period_number) for p in output.periods][:4] == [(1, 1), (1, 2), (1, 3), (2, 1)]
        assert len(output.periods) == 9


class TestSerialization:
    """Tests for JSON serialization."""

    def test_to_json(self, timetable):
        data = json.loads(create_schedule_output(timetable).to_json())
        assert "summary" in data
        assert "byDay" in data
        assert data["summary"]["schoolName"] == "Hillside"
        monday = data["byDay"]["1"]
        assert monday["dayName"] == "Monday"
        assert monday["periods"][1]["startTime"] == "08:55"

    def test_to_dict(self, timetable):
        data = create_schedule_output(timetable).to_dict()
        assert data["byDay"][2]["breaks"][0]["type"] == "assembly"

    def test_display_time_keeps_en_dash(self, timetable):
        text = schedule_to_json(timetable)
        assert "8:00 AM – 8:40 AM" in text

    def test_parse_back(self, timetable):
        output = create_schedule_output(timetable)
        parsed = AdjustedScheduleOutput.model_validate_json(output.to_json())
        assert parsed == output
