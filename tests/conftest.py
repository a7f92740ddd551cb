"""Test fixtures."""

from collections.abc import Generator
import textwrap
from unittest.mock import patch

import pytest

from ics_splitter.model import Calendar
from ics_splitter.parser import parse

PRODID = "-//example//1.2.3"

SAMPLE_ICS = textwrap.dedent(
    """\
    BEGIN:VCALENDAR
    VERSION:2.0
    PRODID:-//Example Corp//Calendar 1.0//EN
    X-WR-CALNAME:Work
    BEGIN:VEVENT
    UID:event-1@example.com
    DTSTART:20230101T090000
    SUMMARY:New year
    END:VEVENT
    BEGIN:VEVENT
    UID:event-2@example.com
    DTSTART;VALUE=DATE:20230615
    SUMMARY:Midsummer
    END:VEVENT
    BEGIN:VEVENT
    UID:event-3@example.com
    DTSTART:20240101T000000
    SUMMARY:Next year
    END:VEVENT
    BEGIN:VEVENT
    UID:event-4@example.com
    SUMMARY:No start date
    END:VEVENT
    END:VCALENDAR
    """
)


@pytest.fixture(autouse=True)
def mock_prodid() -> Generator[None, None, None]:
    """Mock out the prodid used in tests."""
    with patch("ics_splitter.writer.prodid_factory", return_value=PRODID):
        yield


@pytest.fixture(name="sample_calendar")
def mock_sample_calendar() -> Calendar:
    """Fixture for a calendar with dated and undated events."""
    return parse(SAMPLE_ICS)
