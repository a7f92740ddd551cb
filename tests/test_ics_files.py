"""Tests that exercise every operation against real world calendar files."""

import pathlib

import pytest

from ics_splitter.parser import parse, parse_ics_file
from ics_splitter.parsing.contentline import property_name
from ics_splitter.parsing.folding import unfolded_lines
from ics_splitter.split import UNDATED, split_by_size, split_by_year
from ics_splitter.statistics import get_statistics
from ics_splitter.writer import CLEAN_MODE_DENYLIST, write

TESTDATA_PATH = pathlib.Path("tests/testdata/")
TESTDATA_FILES = sorted(TESTDATA_PATH.glob("*.ics"))
TESTDATA_IDS = [x.stem for x in TESTDATA_FILES]


def _source_lines(filename: pathlib.Path) -> list[str]:
    """Return the unfolded lines of the file up to the last event."""
    content = filename.read_text(encoding="utf-8")
    lines = [line for line in unfolded_lines(content) if line.strip()]
    last_event = max(i for i, line in enumerate(lines) if line == "END:VEVENT")
    return lines[: last_event + 1]


def _is_alarm_line(lines: list[str], index: int) -> bool:
    begin = max(
        (i for i, line in enumerate(lines[: index + 1]) if line == "BEGIN:VALARM"),
        default=-1,
    )
    end = max(
        (i for i, line in enumerate(lines[:index]) if line == "END:VALARM"),
        default=-1,
    )
    return begin > end


@pytest.mark.parametrize("filename", TESTDATA_FILES, ids=TESTDATA_IDS)
def test_round_trip(filename: pathlib.Path) -> None:
    """Test all non-alarm lines are written back in order with clean mode off."""
    calendar = parse_ics_file(filename)
    ics = write(calendar, calendar.events, clean_mode=False)

    source = _source_lines(filename)
    expected = [
        line for i, line in enumerate(source) if not _is_alarm_line(source, i)
    ] + ["END:VCALENDAR"]
    assert list(unfolded_lines(ics.rstrip("\r\n"))) == expected

    # Parsing the output again is stable
    reparsed = parse(ics)
    assert reparsed.header_lines == calendar.header_lines
    assert [event.raw_lines for event in reparsed.events] == [
        event.raw_lines for event in calendar.events
    ]


@pytest.mark.parametrize("filename", TESTDATA_FILES, ids=TESTDATA_IDS)
def test_line_length(filename: pathlib.Path) -> None:
    """Test no written line is longer than 75 octets."""
    calendar = parse_ics_file(filename)
    ics = write(calendar, calendar.events, clean_mode=False)
    assert ics.endswith("\r\n")
    for line in ics[:-2].split("\r\n"):
        assert len(line.encode("utf-8")) <= 75


@pytest.mark.parametrize("filename", TESTDATA_FILES, ids=TESTDATA_IDS)
def test_clean_mode(filename: pathlib.Path) -> None:
    """Test no denied property is written in clean mode."""
    calendar = parse_ics_file(filename)
    ics = write(calendar, calendar.events, clean_mode=True)
    for line in unfolded_lines(ics):
        name = (property_name(line) or "").upper()
        assert not name.startswith(CLEAN_MODE_DENYLIST)
        assert "VALARM" not in line


@pytest.mark.parametrize("filename", TESTDATA_FILES, ids=TESTDATA_IDS)
def test_split_by_year_complete(filename: pathlib.Path) -> None:
    """Test every event lands in exactly one year bucket."""
    calendar = parse_ics_file(filename)
    buckets = split_by_year(calendar.events)
    stats = get_statistics(calendar)
    split_ids = sorted(id(event) for events in buckets.values() for event in events)
    assert split_ids == sorted(id(event) for event in calendar.events)
    assert {
        int(str(key)): len(events) for key, events in buckets.items() if key != UNDATED
    } == stats.events_by_year


@pytest.mark.parametrize("filename", TESTDATA_FILES, ids=TESTDATA_IDS)
@pytest.mark.parametrize("max_size_bytes", [1, 500, 1024, 1024 * 1024])
def test_split_by_size_complete(filename: pathlib.Path, max_size_bytes: int) -> None:
    """Test the chunks account for every event."""
    calendar = parse_ics_file(filename)
    chunks = split_by_size(calendar, calendar.events, max_size_bytes)
    assert chunks
    assert all(chunk.event_count for chunk in chunks)
    assert sum(chunk.event_count for chunk in chunks) == len(calendar.events)
    assert sum(len(parse(chunk.content).events) for chunk in chunks) == len(
        calendar.events
    )
