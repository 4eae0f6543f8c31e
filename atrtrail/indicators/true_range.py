"""
True Range (TR) indicator.
"""

from .base import Indicator


class TrueRangeIndicator(Indicator):
    """
    Per-bar true range.

    At the first retained bar there is no previous close, so TR is
    high - low. Afterwards TR is the largest of high - low,
    |high - prev_close| and |low - prev_close|.
    """

    def value(self, index: int):
        bar = self.series.bar(index)
        tr1 = bar.high - bar.low
        if index == self.series.begin_index:
            return tr1

        prev_close = self.series.bar(index - 1).close
        tr2 = abs(bar.high - prev_close)
        tr3 = abs(bar.low - prev_close)

        return max(tr1, tr2, tr3)
