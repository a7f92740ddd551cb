"""Data model for a parsed iCalendar document.

The model keeps the content lines of the source document rather than
interpreting them. An `Event` exposes both the ordered list of its raw
content lines, which is what gets written back out, and a property map
used for lookups such as finding the start date. The property map keeps
only the last occurrence of a repeated property name while the raw lines
keep all of them.

All objects are immutable once created by the parser.
"""

from __future__ import annotations

import datetime
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = [
    "Calendar",
    "CalendarProperty",
    "Chunk",
    "Event",
    "EventProperty",
]


def _freeze(values: Mapping[str, object]) -> Mapping[str, object]:
    """Return a read-only view over a copy of the mapping."""
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class EventProperty:
    """A property of an event, keyed by name in `Event.properties`."""

    value: str
    """Everything after the name and parameters, e.g. '20240115T090000'."""

    params: str = ""
    """Raw parameter block including the leading ';', or empty."""

    raw: str = ""
    """The full unfolded content line."""


@dataclass(frozen=True)
class CalendarProperty:
    """A calendar level property such as VERSION or PRODID."""

    value: str
    raw: str


@dataclass(frozen=True)
class Event:
    """A single VEVENT component."""

    properties: Mapping[str, EventProperty] = field(default_factory=dict)
    """Properties by upper case name, the last occurrence wins."""

    raw_lines: tuple[str, ...] = ()
    """Unfolded content lines in document order, excluding alarm blocks."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", _freeze(self.properties))
        object.__setattr__(self, "raw_lines", tuple(self.raw_lines))

    def get(self, name: str) -> EventProperty | None:
        """Return the property with the specified name, if present."""
        return self.properties.get(name.upper())

    @property
    def contentlines(self) -> tuple[str, ...]:
        """Lines to serialize, falling back to the property map.

        Events built by the parser always have raw lines. Events built by
        hand with only properties are written from each property's raw line.
        """
        if self.raw_lines:
            return self.raw_lines
        return tuple(prop.raw for prop in self.properties.values())


@dataclass(frozen=True)
class Calendar:
    """A parsed VCALENDAR document."""

    header_lines: tuple[str, ...] = ()
    """Unfolded lines before the first event, e.g. VERSION and VTIMEZONE."""

    events: tuple[Event, ...] = ()
    """Events in document order."""

    properties: Mapping[str, CalendarProperty] = field(default_factory=dict)
    """Calendar properties from the header lines, the last occurrence wins."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "header_lines", tuple(self.header_lines))
        object.__setattr__(self, "events", tuple(self.events))
        object.__setattr__(self, "properties", _freeze(self.properties))


@dataclass(frozen=True)
class Chunk:
    """A serialized calendar holding a subset of events."""

    content: str
    event_count: int
    start_date: datetime.datetime | None = None
    end_date: datetime.datetime | None = None
