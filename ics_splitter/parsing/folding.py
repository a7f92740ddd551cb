"""Library for folding and unfolding rfc5545 content lines.

Lines of text in an iCalendar object should not be longer than 75 octets,
excluding the line break. Long content lines are split into multiple lines
by inserting a CRLF immediately followed by a single linear white-space
character. Unfolding removes the CRLF and the single white-space character
that follows it.

Folding here counts octets of the UTF-8 encoding and never places a fold
inside a multi-octet character.
"""

from __future__ import annotations

import re
from collections.abc import Generator

from .const import CRLF, FOLD_INDENT, FOLD_LEN

__all__ = [
    "normalize_line_endings",
    "unfold",
    "unfolded_lines",
    "fold_line",
    "encoded_length",
]

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
FOLD_RE = re.compile(r"\n[ \t]")
LF = "\n"

# Lone surrogates are carried through rather than rejected.
_ENCODING = "utf-8"
_ERRORS = "surrogatepass"


def normalize_line_endings(content: str) -> str:
    """Convert CRLF, bare CR and bare LF line endings to LF."""
    return LINE_BREAK_RE.sub(LF, content)


def unfold(content: str) -> str:
    """Return content with line endings normalized and folded lines joined."""
    return FOLD_RE.sub("", normalize_line_endings(content))


def unfolded_lines(content: str) -> Generator[str, None, None]:
    """Read content and unfold lines."""
    yield from unfold(content).split(LF)


def encoded_length(text: str) -> int:
    """Return the length of the text in UTF-8 octets."""
    return len(text.encode(_ENCODING, _ERRORS))


def _is_continuation_byte(value: int) -> bool:
    """Return true if the octet is in the middle of a multi-octet character."""
    return value & 0xC0 == 0x80


def fold_line(line: str) -> str:
    """Fold a single unfolded content line, joining segments with CRLF.

    The first segment holds up to 75 octets and each continuation segment
    holds up to 74 octets after its leading space.
    """
    encoded = line.encode(_ENCODING, _ERRORS)
    if len(encoded) <= FOLD_LEN:
        return line

    segments: list[bytes] = []
    limit = FOLD_LEN
    while len(encoded) > limit:
        cut = limit
        while cut > 0 and _is_continuation_byte(encoded[cut]):
            cut -= 1
        segments.append(encoded[0:cut])
        encoded = encoded[cut:]
        limit = FOLD_LEN - len(FOLD_INDENT)
    segments.append(encoded)

    folded = [segments[0].decode(_ENCODING, _ERRORS)]
    folded.extend(
        FOLD_INDENT + segment.decode(_ENCODING, _ERRORS) for segment in segments[1:]
    )
    return CRLF.join(folded)
