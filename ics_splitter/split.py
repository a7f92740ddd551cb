"""Algorithms for selecting and grouping the events of a calendar.

These functions return new lists of the same `Event` objects and never
modify their inputs. Events without a usable DTSTART are never dropped:
they pass every date filter, land in their own year bucket, and are placed
after all dated events when splitting by size.
"""

from __future__ import annotations

import abc
import datetime
import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .dates import get_event_date, normalize_date
from .model import Calendar, Chunk, Event
from .writer import event_size, header_footer_size, write

__all__ = [
    "YearKey",
    "Year",
    "Undated",
    "UNDATED",
    "filter_by_date_range",
    "split_by_year",
    "sorted_buckets",
    "split_by_size",
]

_LOGGER = logging.getLogger(__name__)


class YearKey(abc.ABC):
    """Key for a bucket of events returned by `split_by_year`.

    Keys sort with years ascending followed by the undated bucket.
    """

    @abc.abstractmethod
    def _sort_key(self) -> tuple[int, int]:
        """Return a tuple ordering years before the undated bucket."""

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, YearKey):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, YearKey):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, YearKey):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, YearKey):
            return NotImplemented
        return self._sort_key() >= other._sort_key()


@dataclass(frozen=True, eq=True)
class Year(YearKey):
    """Events that start in a calendar year."""

    value: int

    def _sort_key(self) -> tuple[int, int]:
        return (0, self.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, eq=True)
class Undated(YearKey):
    """Events without a usable start date."""

    def _sort_key(self) -> tuple[int, int]:
        return (1, 0)

    def __str__(self) -> str:
        return "unknown"


UNDATED = Undated()


def filter_by_date_range(
    events: Iterable[Event],
    start: datetime.date | datetime.datetime | None = None,
    end: datetime.date | datetime.datetime | None = None,
) -> list[Event]:
    """Return the events that start within the range, inclusive.

    A missing bound leaves that side of the range open. A plain date as the
    end bound includes the whole day. Undated events are always included.
    """
    lower = normalize_date(start) if start is not None else None
    upper = normalize_date(end, end_of_day=True) if end is not None else None
    result = []
    for event in events:
        if (date := get_event_date(event)) is not None:
            value = normalize_date(date)
            if lower is not None and value < lower:
                continue
            if upper is not None and value > upper:
                continue
        result.append(event)
    return result


def split_by_year(events: Iterable[Event]) -> dict[YearKey, list[Event]]:
    """Group events by the calendar year of their start date."""
    buckets: dict[YearKey, list[Event]] = {}
    for event in events:
        date = get_event_date(event)
        key: YearKey = Year(date.year) if date is not None else UNDATED
        buckets.setdefault(key, []).append(event)
    return buckets


def sorted_buckets(
    buckets: Mapping[YearKey, list[Event]]
) -> list[tuple[YearKey, list[Event]]]:
    """Return the buckets ordered by year with undated events last."""
    return sorted(buckets.items(), key=lambda item: item[0])


def _sort_newest_first(events: Iterable[Event]) -> list[Event]:
    """Sort events by start date descending, undated events last.

    The sort is stable so events with equal dates, and all undated events,
    keep their relative order.
    """
    dated: list[tuple[datetime.datetime, Event]] = []
    undated: list[Event] = []
    for event in events:
        if (date := get_event_date(event)) is None:
            undated.append(event)
        else:
            dated.append((normalize_date(date), event))
    dated.sort(key=lambda item: item[0], reverse=True)
    return [event for _, event in dated] + undated


def _create_chunk(
    calendar: Calendar, events: Sequence[Event], clean_mode: bool
) -> Chunk:
    dates = [date for event in events if (date := get_event_date(event)) is not None]
    return Chunk(
        content=write(calendar, events, clean_mode),
        event_count=len(events),
        start_date=min(dates, key=normalize_date) if dates else None,
        end_date=max(dates, key=normalize_date) if dates else None,
    )


def split_by_size(
    calendar: Calendar,
    events: Iterable[Event],
    max_size_bytes: int,
    clean_mode: bool = True,
) -> list[Chunk]:
    """Split events into calendars with an estimated size under the limit.

    Events are packed newest first. A chunk is closed when the next event
    would push its estimated size over `max_size_bytes`. An event that is
    larger than the limit on its own gets a chunk to itself.
    """
    overhead = header_footer_size(calendar)
    chunks: list[Chunk] = []
    current: list[Event] = []
    current_size = overhead
    for event in _sort_newest_first(events):
        size = event_size(event)
        if current and current_size + size > max_size_bytes:
            _LOGGER.debug(
                "Closing chunk %d with %d events (~%d bytes)",
                len(chunks) + 1,
                len(current),
                current_size,
            )
            chunks.append(_create_chunk(calendar, current, clean_mode))
            current = []
            current_size = overhead
        current.append(event)
        current_size += size
    if current:
        chunks.append(_create_chunk(calendar, current, clean_mode))
    return chunks
