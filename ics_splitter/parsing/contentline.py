"""Library for splitting a single rfc5545 content line.

A content line has the form:

  NAME;PARAM=VALUE;PARAM="QUOTED:VALUE":PROPERTY-VALUE

This module only finds the boundaries between the name, the parameter block
and the value. It does not validate names, interpret parameters or decode
values, and it never raises: a line without a ':' simply has no value.

For example, given a content line of:

  DTSTART;TZID=Asia/Tokyo:20240115T090000

This library would return:

  ContentLine(
    name='DTSTART',
    params=';TZID=Asia/Tokyo',
    value='20240115T090000',
  )
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

_NAME_DELIMITERS = (";", ":")
_VALUE_DELIMITER = ":"
_QUOTE = '"'


def _find_first(
    line: str, chars: Sequence[str], start: int | None = None
) -> int | None:
    """Find the earliest occurrence of any of the given characters in the line."""
    if not chars:
        raise ValueError("At least one character must be provided to search for.")
    earliest: int | None = None
    for char in chars:
        pos = line.find(char, start)
        if pos != -1 and (earliest is None or pos < earliest):
            earliest = pos
    return earliest


def _find_value_separator(line: str, start: int) -> int | None:
    """Return the index of the ':' that ends the parameter block.

    A ':' inside a double quoted parameter value (e.g. an ALTREP uri) does not
    end the parameter block. When the quotes are unbalanced the first ':'
    after the name is used instead.
    """
    quoted = False
    for pos in range(start, len(line)):
        char = line[pos]
        if char == _QUOTE:
            quoted = not quoted
        elif char == _VALUE_DELIMITER and not quoted:
            return pos
    pos = line.find(_VALUE_DELIMITER, start)
    return pos if pos != -1 else None


@dataclass(frozen=True)
class ContentLine:
    """The name, parameter block and value of a content line."""

    name: str
    """Property name exactly as written, e.g. 'DTSTART'."""

    params: str
    """Raw parameter block including the leading ';', or empty."""

    value: str
    """Everything after the separator between parameters and value."""


def property_name(line: str) -> str | None:
    """Return the property name of the line, or None if it has no name.

    The name is the text before the first ';' or ':', whichever comes first.
    """
    if (pos := _find_first(line, _NAME_DELIMITERS)) is None:
        return None
    return line[0:pos]


def split_contentline(line: str) -> ContentLine | None:
    """Split a content line into its name, parameters and value.

    Returns None when the line does not contain a ':' and so carries no
    property value.
    """
    if (name_end := _find_first(line, _NAME_DELIMITERS)) is None:
        return None
    if line[name_end] == _VALUE_DELIMITER:
        return ContentLine(
            name=line[0:name_end], params="", value=line[name_end + 1 :]
        )
    if (value_start := _find_value_separator(line, name_end)) is None:
        return None
    return ContentLine(
        name=line[0:name_end],
        params=line[name_end:value_start],
        value=line[value_start + 1 :],
    )
