"""Parse rfc5545 iCalendar content into a `Calendar`.

This is a deliberately shallow parser. It finds event boundaries and keeps
every content line it sees so the document can be written back out exactly,
rather than interpreting the contents of each component.

Lines are read with a small state machine:

  OUTSIDE_EVENT --BEGIN:VEVENT--> IN_EVENT --BEGIN:VALARM--> IN_ALARM
       ^                             |  ^                       |
       +---------END:VEVENT----------+  +------END:VALARM-------+

Lines before the first event are the calendar header (VERSION, PRODID,
VTIMEZONE blocks and so on). Alarm blocks are dropped, and anything after
the last event is ignored. The END:VCALENDAR line is never kept since it
is always written back by the writer.

Example:
```python
from ics_splitter.parser import parse

calendar = parse(ics_content)
print("File contains %s event(s)" % len(calendar.events))
```
"""

from __future__ import annotations

import enum
import logging
import pathlib

from .model import Calendar, CalendarProperty, Event, EventProperty
from .parsing.const import (
    BEGIN_PREFIX,
    BEGIN_VALARM,
    BEGIN_VEVENT,
    END_VALARM,
    END_VCALENDAR,
    END_VEVENT,
)
from .parsing.contentline import split_contentline
from .parsing.folding import unfolded_lines

__all__ = [
    "ParserState",
    "CalendarParser",
    "parse",
    "parse_ics_file",
]

_LOGGER = logging.getLogger(__name__)


class ParserState(enum.Enum):
    """Position of the parser relative to event and alarm blocks."""

    OUTSIDE_EVENT = "outside_event"
    IN_EVENT = "in_event"
    IN_ALARM = "in_alarm"


def _marker(line: str) -> str:
    """Return the line in a form used to compare against BEGIN/END markers."""
    return line.strip().upper()


class CalendarParser:
    """Accumulates unfolded content lines into a `Calendar`.

    Lines are fed one at a time with `feed` and each state has its own
    transition handler that returns the next state.
    """

    def __init__(self) -> None:
        """Initialize CalendarParser."""
        self.state = ParserState.OUTSIDE_EVENT
        self._header_lines: list[str] = []
        self._calendar_properties: dict[str, CalendarProperty] = {}
        self._events: list[Event] = []
        self._event_lines: list[str] = []
        self._event_properties: dict[str, EventProperty] = {}
        self._dropped_alarm_lines = 0
        self._ignored_lines = 0

    def feed(self, line: str) -> None:
        """Consume a single unfolded content line.

        Surrounding whitespace is removed so a stored line never starts with
        a space, which a reader would take as a folded continuation.
        """
        line = line.strip()
        if _marker(line) == END_VCALENDAR:
            return
        if self.state == ParserState.OUTSIDE_EVENT:
            self.state = self.outside_event(line)
        elif self.state == ParserState.IN_EVENT:
            self.state = self.in_event(line)
        else:
            self.state = self.in_alarm(line)

    def outside_event(self, line: str) -> ParserState:
        """Handle a line while not inside any event."""
        marker = _marker(line)
        if marker == BEGIN_VEVENT:
            self._start_event()
            return ParserState.IN_EVENT
        if self._events or marker in (END_VEVENT, BEGIN_VALARM, END_VALARM):
            # Trailing content and stray markers are not kept
            self._ignored_lines += 1
            return ParserState.OUTSIDE_EVENT
        self._header_lines.append(line)
        if not marker.startswith(BEGIN_PREFIX) and (
            contentline := split_contentline(line)
        ):
            self._calendar_properties[contentline.name.upper()] = CalendarProperty(
                value=contentline.value, raw=line
            )
        return ParserState.OUTSIDE_EVENT

    def in_event(self, line: str) -> ParserState:
        """Handle a line inside an event but outside an alarm."""
        marker = _marker(line)
        if marker == END_VEVENT:
            self._finish_event()
            return ParserState.OUTSIDE_EVENT
        if marker == BEGIN_VALARM:
            self._dropped_alarm_lines += 1
            return ParserState.IN_ALARM
        if marker == BEGIN_VEVENT:
            _LOGGER.debug("Event was not closed before the next event started")
            self._finish_event()
            self._start_event()
            return ParserState.IN_EVENT
        self._event_lines.append(line)
        if contentline := split_contentline(line):
            self._event_properties[contentline.name.upper()] = EventProperty(
                value=contentline.value, params=contentline.params, raw=line
            )
        return ParserState.IN_EVENT

    def in_alarm(self, line: str) -> ParserState:
        """Handle a line inside an alarm, which is always dropped."""
        marker = _marker(line)
        if marker == BEGIN_VEVENT:
            _LOGGER.debug("Event was not closed before the next event started")
            self._finish_event()
            self._start_event()
            return ParserState.IN_EVENT
        self._dropped_alarm_lines += 1
        if marker == END_VALARM:
            return ParserState.IN_EVENT
        if marker == END_VEVENT:
            self._dropped_alarm_lines -= 1
            self._finish_event()
            return ParserState.OUTSIDE_EVENT
        return ParserState.IN_ALARM

    def _start_event(self) -> None:
        self._event_lines = []
        self._event_properties = {}

    def _finish_event(self) -> None:
        self._events.append(
            Event(properties=self._event_properties, raw_lines=tuple(self._event_lines))
        )
        self._event_lines = []
        self._event_properties = {}

    def calendar(self) -> Calendar:
        """Return the calendar built from all lines fed so far."""
        if self.state != ParserState.OUTSIDE_EVENT:
            _LOGGER.debug("Content ended inside an event; keeping the open event")
            self._finish_event()
            self.state = ParserState.OUTSIDE_EVENT
        _LOGGER.debug(
            "Parsed %d header lines and %d events (dropped %d alarm lines, "
            "ignored %d lines)",
            len(self._header_lines),
            len(self._events),
            self._dropped_alarm_lines,
            self._ignored_lines,
        )
        return Calendar(
            header_lines=tuple(self._header_lines),
            events=tuple(self._events),
            properties=self._calendar_properties,
        )


def parse(content: str) -> Calendar:
    """Parse rfc5545 iCalendar content into a Calendar.

    This never fails: malformed lines are kept as raw text.
    """
    parser = CalendarParser()
    for line in unfolded_lines(content):
        if line.strip():
            parser.feed(line)
    return parser.calendar()


def parse_ics_file(path: str | pathlib.Path) -> Calendar:
    """Read an ics file as UTF-8 text and parse it."""
    content = pathlib.Path(path).read_text(encoding="utf-8-sig")
    return parse(content)
