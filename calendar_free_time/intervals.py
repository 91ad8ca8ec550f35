"""Reduce calendar events to the busy intervals they occupy."""

import datetime
import logging
from typing import Any, Dict, Iterable, List, NamedTuple

from dateutil import parser

from calendar_free_time.config import DEFAULT_TZ

logger = logging.getLogger(__name__)


class BusyInterval(NamedTuple):
    """A half-open [start, end) range of busy time."""

    start: datetime.datetime
    end: datetime.datetime


def is_all_day(event):
    """An event is all-day when both its start and end carry only a date."""
    return "date" in event["start"] and "date" in event["end"]


def parse_timestamp(value, tz=DEFAULT_TZ):
    """Parse an RFC 3339 timestamp or a bare date into an aware datetime.

    Bare dates are read as midnight and naive timestamps are assumed to be in
    `tz`.
    """
    if isinstance(value, str):
        value = parser.isoparse(value)
    if not isinstance(value, datetime.datetime):
        value = datetime.datetime.combine(value, datetime.time())
    if value.tzinfo is None:
        value = value.replace(tzinfo=tz)
    return value


def _endpoint(boundary):
    # Timed endpoints win over date-only ones when both are present.
    if "dateTime" in boundary:
        return boundary["dateTime"]
    return boundary["date"]


def normalize(
    events: Iterable[Dict[str, Any]], tz: datetime.tzinfo = DEFAULT_TZ
) -> List[BusyInterval]:
    """Convert raw calendar events to busy intervals, dropping all-day events."""
    busy = []
    skipped = 0
    for event in events:
        if is_all_day(event):
            skipped += 1
            continue
        busy.append(
            BusyInterval(
                start=parse_timestamp(_endpoint(event["start"]), tz),
                end=parse_timestamp(_endpoint(event["end"]), tz),
            )
        )
    logger.debug(f"Kept {len(busy)} busy intervals, skipped {skipped} all-day events")
    return busy
