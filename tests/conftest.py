import datetime

import pytest

from calendar_free_time.config import SearchWindow

from tests.helpers import jst


@pytest.fixture
def before_window():
    """A clock reading that is earlier than every slot in the tests."""
    return jst(2023, 12, 31, 0, 0)


@pytest.fixture
def morning_window():
    return SearchWindow(
        start_date=datetime.date(2024, 1, 1),
        end_date=datetime.date(2024, 1, 1),
        start_hour=9,
        end_hour=12,
    )
