import datetime
from unittest import mock

import pytest

from calendar_free_time import cli
from calendar_free_time.config import SearchWindow
from calendar_free_time.report import format_date

from tests.helpers import JST, jst

DAY = datetime.date(2099, 1, 5)

EVENTS = [
    {
        "summary": "Review",
        "start": {"dateTime": "2099-01-05T10:00:00+09:00"},
        "end": {"dateTime": "2099-01-05T11:00:00+09:00"},
    },
    {"summary": "Holiday", "start": {"date": "2099-01-05"}, "end": {"date": "2099-01-06"}},
]

ARGS = ["--start-date", "2099-01-05", "--end-date", "2099-01-05",
        "--start-hour", "9", "--end-hour", "12"]


@pytest.fixture
def calendar():
    with mock.patch.object(cli, "google_calendar") as google:
        google.CREDENTIALS_ENV = "GOOGLE_APPLICATION_CREDENTIALS"
        google.fetch_events.return_value = EVENTS
        yield google


def test_main_prints_free_spans(calendar, capsys):
    assert cli.main(ARGS) == 0
    assert capsys.readouterr().out == f"{format_date(DAY)} 9:00-10:00\n"

    calendar.authenticate.assert_called_once_with(secrets_filename=None)
    service = calendar.build_service.return_value
    calendar.fetch_events.assert_called_once_with(
        service, jst(2099, 1, 5, 0, 0), jst(2099, 1, 6, 0, 0), calendar_id="primary"
    )


def test_main_prints_busy_spans_and_events(calendar, capsys):
    assert cli.main(ARGS + ["--busy", "--list-events", "--calendar", "work"]) == 0
    out = capsys.readouterr().out
    assert out == (
        "- [2099/01/05 10:00-11:00] Review\n"
        "- [2099/01/05 終日] Holiday\n"
        "\n"
        f"{format_date(DAY)} 10:00-11:00\n"
    )
    assert calendar.fetch_events.call_args.kwargs["calendar_id"] == "work"


def test_main_rejects_bad_window_before_fetching(calendar, capsys):
    assert cli.main(["--start-hour", "12", "--end-hour", "9"]) == 1
    calendar.authenticate.assert_not_called()
    assert capsys.readouterr().out == ""


def test_main_rejects_unknown_timezone(calendar):
    assert cli.main(ARGS + ["--timezone", "Nowhere/Special"]) == 1
    calendar.authenticate.assert_not_called()


def test_fetch_range_covers_whole_days():
    window = SearchWindow(
        start_date=datetime.date(2024, 1, 1),
        end_date=datetime.date(2024, 1, 31),
        max_days=3,
        tz=JST,
    )
    assert cli.fetch_range(window) == (jst(2024, 1, 1, 0, 0), jst(2024, 1, 4, 0, 0))


def test_render_report():
    window = SearchWindow(start_date=DAY, end_date=DAY, start_hour=9, end_hour=12)
    now = jst(2099, 1, 5, 9, 30)
    assert cli.render_report(EVENTS, window, now) == format_date(DAY)
    assert cli.render_report(EVENTS, window, now, want_free=False) == (
        f"{format_date(DAY)} 10:00-11:00"
    )


def test_events_without_duration_are_ignored(calendar, capsys, caplog):
    calendar.fetch_events.return_value = [
        {
            "summary": "Reminder",
            "start": {"dateTime": "2099-01-05T10:00:00+09:00"},
            "end": {"dateTime": "2099-01-05T10:00:00+09:00"},
        }
    ]
    assert cli.main(ARGS) == 0
    assert capsys.readouterr().out == f"{format_date(DAY)} 9:00-11:00\n"
    assert "Ignoring event with no duration" in caplog.text


def test_render_report_accepts_naive_now():
    window = SearchWindow(start_date=DAY, end_date=DAY, start_hour=9, end_hour=12)
    assert cli.render_report([], window, datetime.datetime(2023, 12, 31)) == (
        f"{format_date(DAY)} 9:00-11:00"
    )


def test_main_without_credentials(monkeypatch, capsys):
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)
    assert cli.main(ARGS) == 1
    assert capsys.readouterr().out == ""
