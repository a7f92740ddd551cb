"""Build named output files from a parsed calendar.

This composes the filter and split algorithms with the writer and names
each result after the source file, e.g. for a source file `work.ics`:

  work_from-20230101_to-20231231.ics   (date range)
  work_2023.ics, work_unknown.ics      (by year)
  work_part1.ics, work_part2.ics       (by size)

Saving the files or bundling them into an archive is left to the caller.
"""

from __future__ import annotations

import datetime
import logging
import re
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .model import Calendar
from .options import SplitOptions
from .split import filter_by_date_range, sorted_buckets, split_by_size, split_by_year
from .writer import get_byte_size, write

__all__ = [
    "SplitFile",
    "base_name_for",
    "files_by_date_range",
    "files_by_year",
    "files_by_size",
]

_LOGGER = logging.getLogger(__name__)

ICS_SUFFIX = ".ics"
_SUFFIX_RE = re.compile(r"\.(ics|ical)$", re.IGNORECASE)


class SplitFile(BaseModel):
    """A generated calendar file."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    content: str
    size: int
    """Actual size of the content in UTF-8 octets."""

    event_count: int = Field(alias="eventCount")
    start_date: Optional[Union[datetime.datetime, datetime.date]] = Field(
        default=None, alias="startDate"
    )
    end_date: Optional[Union[datetime.datetime, datetime.date]] = Field(
        default=None, alias="endDate"
    )


def base_name_for(filename: str) -> str:
    """Return the filename without an .ics or .ical suffix."""
    return _SUFFIX_RE.sub("", filename)


def _new_file(name: str, content: str, event_count: int, **kwargs: object) -> SplitFile:
    return SplitFile(
        name=name,
        content=content,
        size=get_byte_size(content),
        event_count=event_count,
        **kwargs,
    )


def files_by_date_range(
    calendar: Calendar, base_name: str, options: SplitOptions
) -> list[SplitFile]:
    """Return a single file with the events in the options date range."""
    events = filter_by_date_range(
        calendar.events, options.start_date, options.end_date
    )
    name = base_name
    if options.start_date is not None:
        name += f"_from-{options.start_date:%Y%m%d}"
    if options.end_date is not None:
        name += f"_to-{options.end_date:%Y%m%d}"
    _LOGGER.debug("Date range kept %d of %d events", len(events), len(calendar.events))
    content = write(calendar, events, options.clean_mode)
    return [_new_file(f"{name}{ICS_SUFFIX}", content, len(events))]


def files_by_year(
    calendar: Calendar, base_name: str, options: SplitOptions
) -> list[SplitFile]:
    """Return one file per year, ordered by year with undated events last."""
    return [
        _new_file(
            f"{base_name}_{key}{ICS_SUFFIX}",
            write(calendar, events, options.clean_mode),
            len(events),
        )
        for key, events in sorted_buckets(split_by_year(calendar.events))
    ]


def files_by_size(
    calendar: Calendar, base_name: str, options: SplitOptions
) -> list[SplitFile]:
    """Return numbered files each under the options size limit where possible."""
    chunks = split_by_size(
        calendar, calendar.events, options.max_size_bytes, options.clean_mode
    )
    return [
        _new_file(
            f"{base_name}_part{index}{ICS_SUFFIX}",
            chunk.content,
            chunk.event_count,
            start_date=chunk.start_date,
            end_date=chunk.end_date,
        )
        for index, chunk in enumerate(chunks, start=1)
    ]
