"""
ATR trailing stop-loss rule.

The stop for a bar k sits m * ATR(k) away from the reference price, below it
for longs and above it for shorts. Since the position's entry bar the stop
only trails in the position's favor: the watermark is the running maximum of
the per-bar stops for a long and the running minimum for a short. The rule is
satisfied once the reference price touches or crosses the watermark.
"""

from typing import Optional

from ..errors import ConfigurationError
from ..indicators.atr import ATRIndicator
from ..indicators.base import Indicator
from ..indicators.price import ClosePriceIndicator
from ..models.trade import Side, TradingRecord
from ..utils.numeric import is_finite, is_number
from .base import Rule


class AverageTrueRangeTrailingStopLossRule(Rule):
    """
    Exit rule for an open position based on an ATR trailing stop.

    Stateless across calls: the watermark is recomputed from the open
    position's entry index on every evaluation, so one instance can serve
    any number of trading records.
    """

    def __init__(self, series, bar_count: int, multiplier, reference_price: Optional[Indicator] = None):
        """
        Initialize the rule.

        Args:
            series: Bar series the ATR is computed over
            bar_count: ATR lookback n (>= 1)
            multiplier: ATR multiple m (>= 0)
            reference_price: Price compared to the stop (defaults to close price)

        Raises:
            ConfigurationError: On a missing series, bad lookback or a negative or non-finite multiplier
        """
        if series is None:
            raise ConfigurationError("series is required")
        if not is_number(multiplier) or not is_finite(multiplier) or multiplier < 0:
            raise ConfigurationError(f"multiplier must be a finite number >= 0, got {multiplier!r}")
        if reference_price is None:
            reference_price = ClosePriceIndicator(series)
        elif getattr(reference_price, "series", series) is not series:
            raise ConfigurationError("reference_price must be computed over the same series")

        self.series = series
        self.reference_price = reference_price
        self.atr = ATRIndicator(series, bar_count)
        self.bar_count = bar_count
        self.multiplier = series.num_of(multiplier)

    def __repr__(self) -> str:
        return (f"{self.name}(bar_count={self.bar_count}, multiplier={self.multiplier}, "
                f"reference_price={self.reference_price!r})")

    def stop_level(self, index: int, side: Side):
        """Per-bar stop: reference price -/+ multiplier * ATR for long/short."""
        offset = self.multiplier * self.atr.value(index)
        price = self.reference_price.value(index)
        if side is Side.LONG:
            return price - offset
        return price + offset

    def watermark(self, index: int, trading_record: Optional[TradingRecord]):
        """
        Trailing stop of the open position as of index.

        Returns:
            The running max (long) or min (short) of stop_level from the entry
            index through index, or None when no position is open or index
            precedes the entry.

        Raises:
            IndexRangeError: If a bar in [entry_index, index] is not retained
        """
        if trading_record is None:
            return None
        position = trading_record.current_position
        if position is None or index < position.entry_index:
            return None

        side = position.side
        pick = max if side is Side.LONG else min
        mark = self.stop_level(position.entry_index, side)
        for k in range(position.entry_index + 1, index + 1):
            mark = pick(mark, self.stop_level(k, side))
        return mark

    def is_satisfied(self, index: int, trading_record: Optional[TradingRecord] = None) -> bool:
        mark = self.watermark(index, trading_record)
        if mark is None:
            satisfied = False
        else:
            price = self.reference_price.value(index)
            if trading_record.current_position.side is Side.LONG:
                satisfied = price <= mark
            else:
                satisfied = price >= mark
        self._trace_is_satisfied(index, satisfied)
        return satisfied
