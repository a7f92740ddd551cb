"""Tests for building named output files."""

import datetime

import pytest

from ics_splitter.model import Calendar
from ics_splitter.options import SplitOptions
from ics_splitter.outputs import (
    SplitFile,
    base_name_for,
    files_by_date_range,
    files_by_size,
    files_by_year,
)
from ics_splitter.parser import parse


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("work.ics", "work"),
        ("Work.ICS", "Work"),
        ("holidays.ical", "holidays"),
        ("archive.ics.bak", "archive.ics.bak"),
        ("calendar", "calendar"),
    ],
)
def test_base_name_for(filename: str, expected: str) -> None:
    """Test the calendar suffix is removed from a filename."""
    assert base_name_for(filename) == expected


def test_files_by_date_range(sample_calendar: Calendar) -> None:
    """Test a date range produces a single file named after the range."""
    options = SplitOptions(
        start_date=datetime.date(2023, 1, 1), end_date=datetime.date(2023, 12, 31)
    )
    (result,) = files_by_date_range(sample_calendar, "work", options)
    assert result.name == "work_from-20230101_to-20231231.ics"
    assert result.event_count == 3
    assert result.size == len(result.content.encode("utf-8"))
    assert "UID:event-3@example.com" not in result.content
    assert result.start_date is None


@pytest.mark.parametrize(
    ("options", "name"),
    [
        (SplitOptions(), "work.ics"),
        (SplitOptions(start_date=datetime.date(2023, 6, 1)), "work_from-20230601.ics"),
        (SplitOptions(end_date=datetime.date(2023, 6, 1)), "work_to-20230601.ics"),
    ],
)
def test_files_by_date_range_names(
    sample_calendar: Calendar, options: SplitOptions, name: str
) -> None:
    """Test the name only includes the bounds that were set."""
    (result,) = files_by_date_range(sample_calendar, "work", options)
    assert result.name == name


def test_files_by_year(sample_calendar: Calendar) -> None:
    """Test one file per year with undated events last."""
    results = files_by_year(sample_calendar, "work", SplitOptions())
    assert [(result.name, result.event_count) for result in results] == [
        ("work_2023.ics", 2),
        ("work_2024.ics", 1),
        ("work_unknown.ics", 1),
    ]
    assert "UID:event-4@example.com" in results[2].content


def test_files_by_size(sample_calendar: Calendar) -> None:
    """Test numbered files carry the date range of their events."""
    results = files_by_size(sample_calendar, "work", SplitOptions(max_size_bytes=1))
    assert [result.name for result in results] == [
        "work_part1.ics",
        "work_part2.ics",
        "work_part3.ics",
        "work_part4.ics",
    ]
    assert results[0].start_date == results[0].end_date == datetime.datetime(2024, 1, 1)
    assert results[3].start_date is None
    assert sum(result.event_count for result in results) == 4


def test_files_respect_clean_mode() -> None:
    """Test the clean mode option is used for every builder."""
    calendar = parse("BEGIN:VEVENT\nDTSTART:20240101\nATTACH:https://example.com/a\nEND:VEVENT")
    for builder in (files_by_date_range, files_by_year, files_by_size):
        (clean,) = builder(calendar, "cal", SplitOptions(clean_mode=True))
        (raw,) = builder(calendar, "cal", SplitOptions(clean_mode=False))
        assert "ATTACH" not in clean.content
        assert "ATTACH" in raw.content
        assert raw.size > clean.size


def test_split_file_aliases() -> None:
    """Test the file record can be dumped with camel case names."""
    result = SplitFile(name="a.ics", content="x", size=1, event_count=0)
    assert result.model_dump(by_alias=True) == {
        "name": "a.ics",
        "content": "x",
        "size": 1,
        "eventCount": 0,
        "startDate": None,
        "endDate": None,
    }
