"""
Average True Range (ATR) indicator.
"""

from ..errors import ConfigurationError
from .base import CachedIndicator
from .true_range import TrueRangeIndicator


def _check_bar_count(bar_count) -> None:
    if isinstance(bar_count, bool) or not isinstance(bar_count, int) or bar_count < 1:
        raise ConfigurationError(f"ATR bar count must be a positive int, got {bar_count!r}")


class ATRIndicator(CachedIndicator):
    """
    Wilder-smoothed true range over bar_count bars.

    ATR(begin) = TR(begin)
    ATR(i) = ((n - 1) * ATR(i - 1) + TR(i)) / n

    Smoothing starts at the first retained bar; there is no SMA warmup.
    """

    def __init__(self, series, bar_count: int = 14):
        """
        Initialize ATR.

        Args:
            series: Bar series
            bar_count: Lookback n (>= 1)

        Raises:
            ConfigurationError: If bar_count is not a positive int
        """
        _check_bar_count(bar_count)
        super().__init__(series)
        self.bar_count = bar_count
        self._tr = TrueRangeIndicator(series)
        self._n = series.num_of(bar_count)
        self._n_minus_one = series.num_of(bar_count - 1)

    def __repr__(self) -> str:
        return f"ATRIndicator(series={self.series.name!r}, bar_count={self.bar_count})"

    def _smooth(self, prev_atr, tr):
        return (self._n_minus_one * prev_atr + tr) / self._n

    def calculate(self, index: int):
        begin = self.series.begin_index
        if index == begin:
            return self._tr.value(index)

        # Walk back to the nearest cached value (or the seed) and fill forward
        k = index - 1
        while k > begin and k not in self._cache:
            k -= 1
        atr = self._cache.get(k)
        if atr is None:
            atr = self._tr.value(k)
            self._cache[k] = atr

        for i in range(k + 1, index):
            atr = self._smooth(atr, self._tr.value(i))
            self._cache[i] = atr

        return self._smooth(atr, self._tr.value(index))

