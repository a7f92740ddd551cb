"""Library for extracting event dates.

Only the basic rfc5545 DATE and DATE-TIME forms are understood:

  20240115            DATE, treated as midnight
  20240115T090000     DATE-TIME, naive local time
  20240115T090000Z    DATE-TIME in UTC

A TZID parameter is not resolved against a timezone database; such values
are treated as naive local time. Anything else is treated as undated.
"""

from __future__ import annotations

import datetime
import logging
import re

from .model import Event
from .parsing.const import DTSTART

__all__ = [
    "parse_ical_date",
    "get_event_date",
    "normalize_date",
]

_LOGGER = logging.getLogger(__name__)

DATE_REGEX = re.compile(
    r"([0-9]{4})([0-9]{2})([0-9]{2})(?:T([0-9]{2})([0-9]{2})([0-9]{2})(Z)?)?"
)
MIDNIGHT = datetime.time()
END_OF_DAY = datetime.time.max


def parse_ical_date(value: str | None) -> datetime.datetime | None:
    """Parse a rfc5545 DATE or DATE-TIME value, returning None if invalid."""
    if not value:
        return None
    if not (match := DATE_REGEX.fullmatch(value)):
        return None
    year, month, day, hour, minute, second, utc = match.groups()
    try:
        return datetime.datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            tzinfo=datetime.timezone.utc if utc else None,
        )
    except ValueError:
        _LOGGER.debug("Ignoring out of range date value %s", value)
        return None


def get_event_date(event: Event) -> datetime.datetime | None:
    """Return the start date of the event, or None if it has no usable DTSTART."""
    if not (prop := event.get(DTSTART)):
        return None
    # Example: TZID=America/New_York:19980119T020000
    return parse_ical_date(prop.value.rpartition(":")[2])


def _local_timezone() -> datetime.tzinfo:
    return datetime.datetime.now().astimezone().tzinfo or datetime.timezone.utc


def normalize_date(
    value: datetime.date | datetime.datetime, *, end_of_day: bool = False
) -> datetime.datetime:
    """Return a timezone aware value so naive and UTC dates can be compared.

    Naive values are interpreted in the local timezone. A plain date means
    its first moment, or its last moment when `end_of_day` is set so that a
    date used as the end of a range covers the entire day.
    """
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, END_OF_DAY if end_of_day else MIDNIGHT)
    if value.tzinfo is None:
        value = value.replace(tzinfo=_local_timezone())
    return value
