"""Search window settings and their defaults."""

import datetime
import re
import zoneinfo
from dataclasses import dataclass, field

from calendar_free_time.errors import InvalidWindow

# Slots are built in this zone unless told otherwise.
DEFAULT_TZ = datetime.timezone(datetime.timedelta(hours=9))

START_HOUR = 9
END_HOUR = 19
MAX_DAYS = 100

# Days between today and the default end of the search.
DEFAULT_SPAN_DAYS = 30

_OFFSET_RE = re.compile(r"^([+-])(\d{1,2}):?(\d{2})$")


@dataclass(frozen=True)
class SearchWindow:
    """Dates and daily hours to look for free time in."""

    start_date: datetime.date
    end_date: datetime.date
    start_hour: int = START_HOUR
    end_hour: int = END_HOUR
    max_days: int = MAX_DAYS
    tz: datetime.tzinfo = field(default=DEFAULT_TZ)

    @property
    def last_date(self):
        """The last day examined, capped at max_days days from the start."""
        capped = self.start_date + datetime.timedelta(days=self.max_days - 1)
        return min(self.end_date, capped)

    def days(self):
        """Iterate over every examined day, in order."""
        day = self.start_date
        while day <= self.last_date:
            yield day
            day += datetime.timedelta(days=1)

    def validate(self):
        for name in ("start_hour", "end_hour"):
            hour = getattr(self, name)
            if isinstance(hour, bool) or not isinstance(hour, int):
                raise InvalidWindow(f"{name} must be an integer, got {hour!r}")
            if not 0 <= hour <= 24:
                raise InvalidWindow(f"{name} must be within 0..24, got {hour}")
        if self.end_hour <= self.start_hour:
            raise InvalidWindow(
                f"end_hour ({self.end_hour}) must be after start_hour ({self.start_hour})"
            )
        if self.max_days < 1:
            raise InvalidWindow(f"max_days must be at least 1, got {self.max_days}")
        if self.end_date < self.start_date:
            raise InvalidWindow(
                f"end_date {self.end_date} is before start_date {self.start_date}"
            )


def resolve_timezone(name):
    """Turn a '+09:00' style offset or an IANA zone name into a tzinfo."""
    if not name:
        return DEFAULT_TZ
    match = _OFFSET_RE.match(name.strip())
    if match:
        sign, hours, minutes = match.groups()
        offset = datetime.timedelta(hours=int(hours), minutes=int(minutes))
        if offset >= datetime.timedelta(hours=24):
            raise InvalidWindow(f"UTC offset out of range: {name}")
        return datetime.timezone(-offset if sign == "-" else offset)
    try:
        return zoneinfo.ZoneInfo(name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidWindow(f"Unknown timezone: {name}") from exc


def default_window(
    today: datetime.date,
    include_today: bool = False,
    tz: datetime.tzinfo = DEFAULT_TZ,
    **overrides,
) -> SearchWindow:
    """Build the usual window: tomorrow (or today) through 30 days from today."""
    start_date = today if include_today else today + datetime.timedelta(days=1)
    end_date = today + datetime.timedelta(days=DEFAULT_SPAN_DAYS)
    params = dict(start_date=start_date, end_date=end_date, tz=tz)
    params.update({key: value for key, value in overrides.items() if value is not None})
    return SearchWindow(**params)
