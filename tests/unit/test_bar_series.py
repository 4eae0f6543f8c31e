"""
Unit tests for Bar and BarSeries.
"""

import logging
from datetime import datetime, timezone, timedelta
from decimal import Decimal

import pandas as pd
import pytest

from atrtrail.errors import ConfigurationError, IndexRangeError
from atrtrail.models.bar import Bar
from atrtrail.models.series import BarSeries
from atrtrail.utils.numeric import D, F


class TestBar:
    """Test Bar model."""

    def test_bar_creation(self):
        """Test bar creation and derived properties."""
        end_time = datetime.now(timezone.utc)
        bar = Bar(
            open=Decimal('1.1000'),
            high=Decimal('1.1010'),
            low=Decimal('1.0990'),
            close=Decimal('1.1005'),
            volume=Decimal('1000000'),
            end_time=end_time,
        )

        assert bar.open == Decimal('1.1000')
        assert bar.is_bullish
        assert not bar.is_bearish
        assert bar.range == Decimal('0.0020')

    @pytest.mark.parametrize("o,h,l,c", [
        ('1.1000', '1.0990', '1.1010', '1.1005'),  # high < low
        ('1.1020', '1.1010', '1.0990', '1.1005'),  # open above high
        ('1.1000', '1.1010', '1.0990', '1.0980'),  # close below low
    ])
    def test_bar_validation(self, o, h, l, c):
        """Invalid OHLC relationships are rejected."""
        with pytest.raises(ValueError):
            Bar(open=D(o), high=D(h), low=D(l), close=D(c), volume=D(0),
                end_time=datetime.now(timezone.utc))


class TestBarSeries:
    """Test BarSeries indexing and growth."""

    def test_empty_series(self):
        series = BarSeries(name="empty")
        assert series.is_empty
        assert series.begin_index == 0
        assert series.end_index == -1
        assert series.first_bar is None
        assert series.last_bar is None
        with pytest.raises(IndexRangeError):
            series.bar(0)

    def test_indices(self, base_series):
        assert base_series.begin_index == 0
        assert base_series.end_index == 4
        assert base_series.bar_count == len(base_series) == 5
        assert base_series.bar(3).close == D(14)
        assert base_series.first_bar is base_series.bar(0)
        assert base_series.last_bar is base_series.bar(4)

    def test_add_bar_converts_with_num_factory(self):
        series = BarSeries(num_factory=F)
        bar = series.add_bar(datetime(2024, 1, 1, tzinfo=timezone.utc), 1, 2, 0.5, 1.5, 10)
        assert isinstance(bar.close, float)
        assert series.num_of(3) == 3.0
        assert series.zero() == 0.0

        decimal_series = BarSeries()
        assert decimal_series.num_of(1.1) == Decimal('1.1')

    def test_end_times_must_increase(self, base_series):
        with pytest.raises(ValueError):
            base_series.add_bar(base_series.last_bar.end_time, 15, 16, 14, 15)

    def test_out_of_range(self, base_series):
        with pytest.raises(IndexRangeError) as excinfo:
            base_series.bar(5)
        assert excinfo.value.begin_index == 0
        assert excinfo.value.end_index == 4
        with pytest.raises(IndexError):
            base_series.bar(-1)

    def test_maximum_bar_count_keeps_indices_stable(self, base_series, add_bar):
        bar4 = base_series.bar(4)
        base_series.set_maximum_bar_count(3)

        assert base_series.begin_index == 2
        assert base_series.end_index == 4
        assert base_series.removed_bars_count == 2
        assert base_series.bar(4) is bar4
        with pytest.raises(IndexRangeError):
            base_series.bar(1)

        add_bar(base_series, 15, 17, 14, 16)
        assert base_series.begin_index == 3
        assert base_series.end_index == 5
        assert base_series.bar(5).close == D(16)

    def test_eviction_is_logged(self, base_series, caplog):
        caplog.set_level(logging.DEBUG, logger="atrtrail.models.series")
        base_series.set_maximum_bar_count(4)

        records = [r for r in caplog.records if r.getMessage() == "bars_evicted"]
        assert len(records) == 1
        assert records[0].evicted == 1

    @pytest.mark.parametrize("max_bar_count", [0, -1, 2.5, True])
    def test_invalid_maximum_bar_count(self, max_bar_count):
        with pytest.raises(ConfigurationError):
            BarSeries(max_bar_count=max_bar_count)


class TestFromDataFrame:
    """Test DataFrame conversion."""

    def _frame(self) -> pd.DataFrame:
        return pd.DataFrame({
            "Timestamp": ["2024-01-02T00:00:00Z", "2024-01-01T00:00:00Z", "2024-01-03T00:00:00Z"],
            "Open": [11.5, 10.0, 12.25],
            "High": [13.0, 12.0, 14.0],
            "Low": [9.5, 8.0, 10.0],
            "Close": [12.0, 11.0, 13.5],
            "Volume": [1000, 1200, 900],
        })

    def test_sorted_and_converted(self):
        series = BarSeries.from_dataframe(self._frame(), name="df")

        assert series.bar_count == 3
        assert series.bar(0).close == Decimal('11.0')
        assert series.bar(1).open == Decimal('11.5')
        assert series.bar(2).open == Decimal('12.25')
        assert series.bar(0).end_time == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert series.bar(0).volume == Decimal(1200)

    def test_float_backing_and_window(self):
        series = BarSeries.from_dataframe(self._frame(), num_factory=F, max_bar_count=2)

        assert series.begin_index == 1
        assert series.bar(2).close == 13.5
        assert isinstance(series.bar(1).high, float)

    def test_volume_optional(self):
        series = BarSeries.from_dataframe(self._frame().drop(columns=["Volume"]))
        assert series.bar(0).volume == D(0)

    def test_missing_time_column(self):
        with pytest.raises(ValueError):
            BarSeries.from_dataframe(self._frame().drop(columns=["Timestamp"]))

    def test_missing_price_column(self):
        with pytest.raises(ValueError):
            BarSeries.from_dataframe(self._frame().drop(columns=["Low"]))
