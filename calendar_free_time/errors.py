"""Errors raised when a search cannot be computed."""


class CalendarError(Exception):
    """Base class for errors raised by calendar_free_time."""


class InvalidWindow(CalendarError, ValueError):
    """The search window has an empty or inverted date or hour range."""


class InvalidInterval(CalendarError, ValueError):
    """A busy interval does not end after it starts."""
