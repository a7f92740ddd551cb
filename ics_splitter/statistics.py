"""Summary statistics about the events in a calendar."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field

from .dates import get_event_date, normalize_date
from .model import Calendar

__all__ = [
    "CalendarStatistics",
    "get_statistics",
]


@dataclass(frozen=True)
class CalendarStatistics:
    """Event counts and the span of dates in a calendar."""

    total_events: int = 0
    """Number of events, including events without a start date."""

    earliest_date: datetime.datetime | None = None
    latest_date: datetime.datetime | None = None

    events_by_year: dict[int, int] = field(default_factory=dict)
    """Number of dated events per calendar year."""


def get_statistics(calendar: Calendar) -> CalendarStatistics:
    """Compute statistics over all events in a single pass."""
    earliest: datetime.datetime | None = None
    latest: datetime.datetime | None = None
    events_by_year: dict[int, int] = {}
    for event in calendar.events:
        if (date := get_event_date(event)) is None:
            continue
        if earliest is None or normalize_date(date) < normalize_date(earliest):
            earliest = date
        if latest is None or normalize_date(date) > normalize_date(latest):
            latest = date
        events_by_year[date.year] = events_by_year.get(date.year, 0) + 1
    return CalendarStatistics(
        total_events=len(calendar.events),
        earliest_date=earliest,
        latest_date=latest,
        events_by_year=events_by_year,
    )
