"""Classify each hourly slot of the search window as free or busy."""

import datetime
import logging
from typing import Dict, Sequence

from calendar_free_time.config import SearchWindow
from calendar_free_time.errors import InvalidInterval
from calendar_free_time.intervals import BusyInterval

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DATE_TIME_FORMAT = "%Y-%m-%d %H:%M"

# {"2024-01-01": {"2024-01-01 09:00": {"free": True}, ...}, ...}
AvailabilityGrid = Dict[str, Dict[str, Dict[str, bool]]]


def iter_slots(day, window):
    """Yield (start, end) for each one-hour slot of the day within the window."""
    midnight = datetime.datetime.combine(day, datetime.time(), tzinfo=window.tz)
    for hour in range(window.start_hour, window.end_hour):
        yield (
            midnight + datetime.timedelta(hours=hour),
            midnight + datetime.timedelta(hours=hour + 1),
        )


def overlaps(slot_start, slot_end, busy):
    """True if the slot and the busy interval share time; touching does not count."""
    return slot_start < busy.end and busy.start < slot_end


def _check_intervals(intervals):
    for busy in intervals:
        if not busy.start < busy.end:
            raise InvalidInterval(
                f"Busy interval must end after it starts: {busy.start} - {busy.end}"
            )


def build(
    intervals: Sequence[BusyInterval],
    window: SearchWindow,
    now: datetime.datetime,
) -> AvailabilityGrid:
    """Build the per-day, per-slot free/busy grid.

    Slots starting before `now` are left out. A slot is busy when it overlaps
    any of the busy intervals. A naive `now` is read in the window's zone.
    """
    window.validate()
    _check_intervals(intervals)
    if now.tzinfo is None:
        now = now.replace(tzinfo=window.tz)

    grid: AvailabilityGrid = {}
    for day in window.days():
        slots = grid.setdefault(day.strftime(DATE_FORMAT), {})
        for slot_start, slot_end in iter_slots(day, window):
            if slot_start < now:
                continue
            free = not any(overlaps(slot_start, slot_end, busy) for busy in intervals)
            slots[slot_start.strftime(DATE_TIME_FORMAT)] = {"free": free}

    logger.debug(
        f"Built grid for {len(grid)} days from {window.start_date} to {window.last_date}"
    )
    return grid
