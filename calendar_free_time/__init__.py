"""Find free (or busy) hours in a calendar and print them as a compact report."""

from calendar_free_time.config import SearchWindow, default_window
from calendar_free_time.errors import CalendarError, InvalidInterval, InvalidWindow
from calendar_free_time.grid import build
from calendar_free_time.intervals import BusyInterval, normalize
from calendar_free_time.report import format_events, format_spans

__all__ = [
    "BusyInterval",
    "CalendarError",
    "InvalidInterval",
    "InvalidWindow",
    "SearchWindow",
    "build",
    "default_window",
    "format_events",
    "format_spans",
    "normalize",
]
