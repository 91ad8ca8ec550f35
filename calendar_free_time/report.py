"""Render availability grids and events as text."""

import datetime
from typing import Sequence

from dateutil import parser

from calendar_free_time.config import DEFAULT_TZ
from calendar_free_time.grid import AvailabilityGrid
from calendar_free_time.intervals import is_all_day, parse_timestamp

# Indexed by date.weekday(), Monday first.
WEEKDAYS = ("月", "火", "水", "木", "金", "土", "日")

ALL_DAY = "終日"


def format_clock(time):
    """Format a time as '9:00' or '13:30'."""
    return f"{time.hour}:{time.minute:02d}"


def format_date(date, weekdays=WEEKDAYS):
    """Format a date as '2024/01/01(月)'."""
    return f"{date.strftime('%Y/%m/%d')}({weekdays[date.weekday()]})"


def _day_spans(slots, want_free):
    spans = []
    min_time = max_time = None

    def flush():
        if min_time is not None and max_time is not None and min_time < max_time:
            spans.append(f"{format_clock(min_time)}-{format_clock(max_time)}")

    for key, info in slots.items():
        time = parser.parse(key)
        if min_time is None:
            min_time = time
        max_time = time
        if info["free"] == want_free:
            continue
        # A slot of the other kind closes the run at its own start time.
        flush()
        min_time = max_time = None

    # The trailing run ends at the start of its last slot.
    flush()
    return spans


def format_spans(
    grid: AvailabilityGrid,
    want_free: bool = True,
    weekdays: Sequence[str] = WEEKDAYS,
) -> str:
    """Render one line per day listing the free (or busy) time spans.

    Example line: '2024/01/01(月) 9:00-11:00, 14:00-16:00'
    """
    lines = []
    for day, slots in grid.items():
        spans = _day_spans(slots, want_free)
        line = format_date(datetime.date.fromisoformat(day), weekdays)
        if spans:
            line += " " + ", ".join(spans)
        lines.append(line)
    return "\n".join(lines)


def describe_event(event, tz=DEFAULT_TZ):
    """Describe one calendar event as '- [2024/01/01 9:00-10:00] Summary'."""
    summary = event.get("summary", "")
    if is_all_day(event):
        start = datetime.date.fromisoformat(event["start"]["date"])
        return f"- [{start.strftime('%Y/%m/%d')} {ALL_DAY}] {summary}"

    start = parse_timestamp(
        event["start"].get("dateTime", event["start"].get("date")), tz
    ).astimezone(tz)
    end = parse_timestamp(
        event["end"].get("dateTime", event["end"].get("date")), tz
    ).astimezone(tz)
    if start.date() == end.date():
        description = f"{start.strftime('%Y/%m/%d')} {format_clock(start)}-{format_clock(end)}"
    else:
        description = (
            f"{start.strftime('%Y/%m/%d')} {format_clock(start)}-"
            f"{end.strftime('%Y/%m/%d')} {format_clock(end)}"
        )
    return f"- [{description}] {summary}"


def format_events(events, tz=DEFAULT_TZ):
    """List events one per line."""
    return "\n".join(describe_event(event, tz) for event in events)
