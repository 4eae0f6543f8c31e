"""
Append-only bar series with stable indices and an optional rolling window.
"""

import logging
from datetime import datetime
from typing import List, Optional

from ..errors import ConfigurationError, IndexRangeError
from ..utils.numeric import D, NumFactory
from .bar import Bar

logger = logging.getLogger(__name__)

TIME_COLUMNS = ("timestamp_utc", "timestamp", "datetime", "date", "time")


class BarSeries:
    """
    Ordered sequence of bars indexed by absolute position.

    Indices are stable across appends. When a maximum bar count is set the
    oldest bars are evicted and begin_index advances; evicted indices are no
    longer addressable.
    """

    def __init__(self, name: str = "", num_factory: NumFactory = D,
                 max_bar_count: Optional[int] = None):
        """
        Initialize an empty series.

        Args:
            name: Series name (e.g., 'EURUSD_M15')
            num_factory: Conversion used for every number the series hands out (D or F)
            max_bar_count: Retain at most this many bars (None = unbounded)
        """
        if num_factory is None:
            raise ConfigurationError("num_factory is required")
        self.name = name
        self._num_factory = num_factory
        self._bars: List[Bar] = []
        self._removed = 0
        self._max_bar_count = None
        if max_bar_count is not None:
            self.set_maximum_bar_count(max_bar_count)

    def __len__(self) -> int:
        return len(self._bars)

    def __repr__(self) -> str:
        return (f"BarSeries(name={self.name!r}, begin_index={self.begin_index}, "
                f"end_index={self.end_index})")

    @property
    def num_factory(self) -> NumFactory:
        return self._num_factory

    def num_of(self, value):
        """Convert a literal into this series' Num backing."""
        return self._num_factory(value)

    def zero(self):
        return self._num_factory(0)

    @property
    def begin_index(self) -> int:
        """Index of the first retained bar (0 for an empty series)."""
        return self._removed

    @property
    def end_index(self) -> int:
        """Index of the last bar (begin_index - 1 for an empty series)."""
        return self._removed + len(self._bars) - 1

    @property
    def bar_count(self) -> int:
        return len(self._bars)

    @property
    def removed_bars_count(self) -> int:
        return self._removed

    @property
    def is_empty(self) -> bool:
        return not self._bars

    @property
    def max_bar_count(self) -> Optional[int]:
        return self._max_bar_count

    @property
    def first_bar(self) -> Optional[Bar]:
        return self._bars[0] if self._bars else None

    @property
    def last_bar(self) -> Optional[Bar]:
        return self._bars[-1] if self._bars else None

    def check_index(self, index: int) -> None:
        """Raise IndexRangeError unless begin_index <= index <= end_index."""
        if not self.begin_index <= index <= self.end_index:
            raise IndexRangeError(index, self.begin_index, self.end_index)

    def bar(self, index: int) -> Bar:
        """Get the bar at an absolute index."""
        self.check_index(index)
        return self._bars[index - self._removed]

    def set_maximum_bar_count(self, max_bar_count: int) -> None:
        """Bound the number of retained bars, evicting the oldest ones now."""
        if isinstance(max_bar_count, bool) or not isinstance(max_bar_count, int) or max_bar_count < 1:
            raise ConfigurationError(f"max_bar_count must be a positive int, got {max_bar_count!r}")
        self._max_bar_count = max_bar_count
        self._evict()

    def add_bar(self, end_time: datetime, open_price, high, low, close, volume=0) -> Bar:
        """
        Build a bar from literals (converted with num_of) and append it.

        Returns:
            The appended Bar
        """
        bar = Bar(
            open=self.num_of(open_price),
            high=self.num_of(high),
            low=self.num_of(low),
            close=self.num_of(close),
            volume=self.num_of(volume),
            end_time=end_time,
        )
        self.append(bar)
        return bar

    def append(self, bar: Bar) -> None:
        """Append a prepared bar; its end time must be after the last bar's."""
        last = self.last_bar
        if last is not None and bar.end_time <= last.end_time:
            raise ValueError(
                f"Bar end time {bar.end_time} must be after last end time {last.end_time}"
            )
        self._bars.append(bar)
        self._evict()

    def _evict(self) -> None:
        if self._max_bar_count is None:
            return
        excess = len(self._bars) - self._max_bar_count
        if excess > 0:
            del self._bars[:excess]
            self._removed += excess
            logger.debug("bars_evicted", extra={
                "series": self.name,
                "evicted": excess,
                "begin_index": self.begin_index,
            })

    @classmethod
    def from_dataframe(cls, df, name: str = "", num_factory: NumFactory = D,
                       max_bar_count: Optional[int] = None) -> "BarSeries":
        """
        Build a series from a pandas DataFrame of OHLC(V) rows.

        Column names are matched case-insensitively; the timestamp column is
        the first of timestamp_utc/timestamp/datetime/date/time present.
        Rows are parsed to UTC and sorted ascending.

        Raises:
            ValueError: If the timestamp or any OHLC column is missing
        """
        import pandas as pd

        frame = df.copy()
        frame.columns = [str(c).strip().lower() for c in frame.columns]

        time_col = next((c for c in TIME_COLUMNS if c in frame.columns), None)
        if time_col is None:
            raise ValueError(f"No timestamp column found (looked for {', '.join(TIME_COLUMNS)})")
        missing = [c for c in ("open", "high", "low", "close") if c not in frame.columns]
        if missing:
            raise ValueError(f"Missing price columns: {missing}")

        frame[time_col] = pd.to_datetime(frame[time_col], utc=True)
        frame = frame.sort_values(time_col)
        has_volume = "volume" in frame.columns

        series = cls(name=name, num_factory=num_factory, max_bar_count=max_bar_count)
        for row in frame.itertuples(index=False):
            values = row._asdict()
            series.add_bar(
                values[time_col].to_pydatetime(),
                _literal(values["open"]),
                _literal(values["high"]),
                _literal(values["low"]),
                _literal(values["close"]),
                _literal(values["volume"]) if has_volume else 0,
            )

        logger.info("series_loaded", extra={
            "series": name,
            "bars": series.bar_count,
            "begin_index": series.begin_index,
        })
        return series


def _literal(value):
    # numpy scalars are not accepted by D(); go through str for exactness
    return str(value)
