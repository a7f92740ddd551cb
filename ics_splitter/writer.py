"""Encode a `Calendar` and a selection of its events as rfc5545 text.

The header lines of the source calendar are written back verbatim, followed
by each selected event and a closing END:VCALENDAR. Every line is folded to
75 octets and terminated with CRLF:

```python
from ics_splitter.parser import parse
from ics_splitter.writer import write

calendar = parse(ics_content)
ics = write(calendar, calendar.events[:10], clean_mode=False)
```

In clean mode, properties that are vendor specific or that carry large
binary payloads are left out, since they commonly break imports into other
calendar applications.
"""

from __future__ import annotations

from collections.abc import Iterable

from .model import Calendar, Event
from .parsing.const import (
    BEGIN_VCALENDAR,
    BEGIN_VEVENT,
    CRLF,
    END_VCALENDAR,
    END_VEVENT,
)
from .parsing.contentline import property_name
from .parsing.folding import encoded_length, fold_line
from .util import prodid_factory

__all__ = [
    "CLEAN_MODE_DENYLIST",
    "fold_line",
    "is_allowed_property",
    "write",
    "header_footer_size",
    "event_size",
    "get_byte_size",
]

# Property names removed in clean mode, matched by prefix
CLEAN_MODE_DENYLIST = (
    "X-APPLE-",
    "X-WR-ALARMUID",
    "ACKNOWLEDGED",
    "ATTACH",
)
VERSION_LINE = "VERSION:2.0"


def default_header_lines() -> list[str]:
    """Header used when the source calendar had no header lines."""
    return [BEGIN_VCALENDAR, VERSION_LINE, f"PRODID:{prodid_factory()}"]


def is_allowed_property(line: str, clean_mode: bool = True) -> bool:
    """Return true if the content line should be written.

    With clean mode off every line is allowed. In clean mode a line without
    a property name or with a name on the denylist is not.
    """
    if not clean_mode:
        return True
    if (name := property_name(line)) is None:
        return False
    name = name.upper()
    return not any(name.startswith(denied) for denied in CLEAN_MODE_DENYLIST)


def _header_lines(calendar: Calendar) -> Iterable[str]:
    if calendar.header_lines:
        return calendar.header_lines
    return default_header_lines()


def _encode_event(event: Event, clean_mode: bool) -> list[str]:
    contentlines = [BEGIN_VEVENT]
    for line in event.contentlines:
        if not line.strip() or not is_allowed_property(line, clean_mode):
            continue
        contentlines.append(fold_line(line))
    contentlines.append(END_VEVENT)
    return contentlines


def write(
    calendar: Calendar, events: Iterable[Event], clean_mode: bool = True
) -> str:
    """Encode the calendar header and the given events as an ics document."""
    contentlines = [fold_line(line) for line in _header_lines(calendar)]
    for event in events:
        contentlines.extend(_encode_event(event, clean_mode))
    contentlines.append(END_VCALENDAR)
    return CRLF.join(contentlines) + CRLF


def header_footer_size(calendar: Calendar) -> int:
    """Estimate the size of the calendar header and footer.

    Sizes are counted in characters before folding, so this undercounts
    folded lines and non-ASCII text.
    """
    size = len(END_VCALENDAR) + len(CRLF)
    for line in _header_lines(calendar):
        size += len(line) + len(CRLF)
    return size


def event_size(event: Event) -> int:
    """Estimate the size of a single encoded event, see `header_footer_size`."""
    size = len(BEGIN_VEVENT) + len(CRLF) + len(END_VEVENT) + len(CRLF)
    for line in event.contentlines:
        size += len(line) + len(CRLF)
    return size


def get_byte_size(text: str) -> int:
    """Return the actual size of the text in UTF-8 octets."""
    return encoded_length(text)
