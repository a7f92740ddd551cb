"""Constants for rfc5545 content line handling."""

# Related to rfc5545 text parsing
FOLD_LEN = 75
FOLD_INDENT = " "
WSP = (" ", "\t")
CRLF = "\r\n"
ATTR_BEGIN = "BEGIN"
ATTR_END = "END"

BEGIN_PREFIX = f"{ATTR_BEGIN}:"
BEGIN_VCALENDAR = f"{ATTR_BEGIN}:VCALENDAR"
END_VCALENDAR = f"{ATTR_END}:VCALENDAR"
BEGIN_VEVENT = f"{ATTR_BEGIN}:VEVENT"
END_VEVENT = f"{ATTR_END}:VEVENT"
BEGIN_VALARM = f"{ATTR_BEGIN}:VALARM"
END_VALARM = f"{ATTR_END}:VALARM"

DTSTART = "DTSTART"
