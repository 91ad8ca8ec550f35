"""Command-line entry point: print free (or busy) hours from Google Calendar.

Setup:
1. Enable the Google Calendar API and download credentials.json from the Google Cloud Console
2. Point GOOGLE_APPLICATION_CREDENTIALS at it (or pass --credentials)
3. Run once to authenticate; the token is cached next to the credentials file

Output is one line per day, e.g. "2024/01/01(月) 9:00-11:00, 14:00-16:00".
"""

import argparse
import datetime
import logging
import sys

from googleapiclient.errors import HttpError

from calendar_free_time import google_calendar
from calendar_free_time.config import SearchWindow, default_window, resolve_timezone
from calendar_free_time.errors import CalendarError
from calendar_free_time.grid import build
from calendar_free_time.intervals import normalize
from calendar_free_time.report import format_events, format_spans

logger = logging.getLogger(__name__)


def render_report(events, window: SearchWindow, now, want_free=True) -> str:
    """Run raw events through normalization, the grid and the span formatter."""
    busy = []
    for interval in normalize(events, window.tz):
        if interval.start < interval.end:
            busy.append(interval)
        else:
            logger.warning(
                f"Ignoring event with no duration: {interval.start} - {interval.end}"
            )
    grid = build(busy, window, now)
    return format_spans(grid, want_free)


def fetch_range(window):
    """The [time_min, time_max) range to ask the calendar for."""
    time_min = datetime.datetime.combine(
        window.start_date, datetime.time(), tzinfo=window.tz
    )
    time_max = datetime.datetime.combine(
        window.last_date + datetime.timedelta(days=1), datetime.time(), tzinfo=window.tz
    )
    return time_min, time_max


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Find free time slots in Google Calendar"
    )
    parser.add_argument(
        "--start-date",
        type=datetime.date.fromisoformat,
        help="First day to search, YYYY-MM-DD (default: tomorrow)",
    )
    parser.add_argument(
        "--end-date",
        type=datetime.date.fromisoformat,
        help="Last day to search, YYYY-MM-DD (default: 30 days from today)",
    )
    parser.add_argument(
        "--start-hour", type=int, help="First hour of each day (default: 9)"
    )
    parser.add_argument(
        "--end-hour", type=int, help="Hour each day ends at (default: 19)"
    )
    parser.add_argument(
        "--max-days",
        type=int,
        help="Maximum number of days to examine (default: 100)",
    )
    parser.add_argument(
        "--busy",
        "-b",
        dest="want_free",
        default=True,
        action="store_false",
        help="Report busy spans instead of free ones.",
    )
    parser.add_argument(
        "--today",
        "-t",
        action="store_true",
        help="Include today in the output (default: False)",
    )
    parser.add_argument(
        "--timezone",
        "-z",
        help="Zone name or UTC offset to build slots in (default: +09:00)",
    )
    parser.add_argument(
        "--calendar", default="primary", help="Calendar id (default: primary)"
    )
    parser.add_argument(
        "--credentials",
        help=f"OAuth client secrets file (default: ${google_calendar.CREDENTIALS_ENV})",
    )
    parser.add_argument(
        "--list-events",
        "-l",
        action="store_true",
        help="Also list the events found in the window.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress; repeat for debug output.",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")

    try:
        tz = resolve_timezone(args.timezone)
        now = datetime.datetime.now(tz)
        window = default_window(
            now.date(),
            include_today=args.today,
            tz=tz,
            start_date=args.start_date,
            end_date=args.end_date,
            start_hour=args.start_hour,
            end_hour=args.end_hour,
            max_days=args.max_days,
        )
        window.validate()

        creds = google_calendar.authenticate(secrets_filename=args.credentials)
        service = google_calendar.build_service(creds)
        time_min, time_max = fetch_range(window)
        events = google_calendar.fetch_events(
            service, time_min, time_max, calendar_id=args.calendar
        )

        if args.list_events:
            print(format_events(events, tz))
            print()
        print(render_report(events, window, now, args.want_free))
    except (CalendarError, HttpError) as exc:
        logger.error(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
