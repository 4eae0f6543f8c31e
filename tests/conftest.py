import os
import sys
from datetime import datetime, timezone, timedelta

import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from atrtrail.models.series import BarSeries
from atrtrail.utils.numeric import D

START = datetime(2024, 1, 1, tzinfo=timezone.utc)

BASE_BARS = [
    (10, 12, 8, 11),
    (11, 13, 9, 12),
    (12, 14, 10, 13),
    (13, 15, 11, 14),
    (14, 16, 12, 15),
]


def add_daily_bar(series: BarSeries, open_price, high, low, close, volume=1000):
    """Append a bar one day after the last one (or at START for an empty series)."""
    last = series.last_bar
    end_time = START if last is None else last.end_time + timedelta(days=1)
    return series.add_bar(end_time, open_price, high, low, close, volume)


@pytest.fixture
def base_series() -> BarSeries:
    """Five-bar uptrend with a constant true range of 4."""
    series = BarSeries(name="Test Series", num_factory=D)
    for row in BASE_BARS:
        add_daily_bar(series, *row)
    return series


@pytest.fixture
def add_bar():
    """The add_daily_bar helper, for tests that grow a series."""
    return add_daily_bar
