"""Exceptions for the ics_splitter library.

The parse, write and split operations never raise on malformed calendar
content: bad lines are carried as inert raw text and unparsable dates are
treated as undated. The exceptions here belong to the surfaces around
that core, such as validating caller supplied split options.
"""


class CalendarError(Exception):
    """Base exception for all ics_splitter errors."""


class SplitOptionsError(CalendarError):
    """Exception raised when split options fail validation.

    The 'message' attribute contains a human-readable message about the
    error that occurred. The 'detailed_error' attribute holds the
    underlying validation details, useful for debugging purposes.
    """

    def __init__(self, message: str, *, detailed_error: str | None = None) -> None:
        """Initialize the SplitOptionsError with a message."""
        super().__init__(message)
        self.message = message
        self.detailed_error = detailed_error
