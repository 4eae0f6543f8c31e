"""Price indicators reading a single bar field."""

from ..errors import ConfigurationError
from .base import Indicator


class ClosePriceIndicator(Indicator):
    def value(self, index: int):
        return self.series.bar(index).close


class OpenPriceIndicator(Indicator):
    def value(self, index: int):
        return self.series.bar(index).open


class HighPriceIndicator(Indicator):
    def value(self, index: int):
        return self.series.bar(index).high


class LowPriceIndicator(Indicator):
    def value(self, index: int):
        return self.series.bar(index).low


class MedianPriceIndicator(Indicator):
    """(high + low) / 2"""

    def __init__(self, series):
        super().__init__(series)
        self._two = series.num_of(2)

    def value(self, index: int):
        bar = self.series.bar(index)
        return (bar.high + bar.low) / self._two


PRICE_INDICATORS = {
    "close": ClosePriceIndicator,
    "open": OpenPriceIndicator,
    "high": HighPriceIndicator,
    "low": LowPriceIndicator,
    "median": MedianPriceIndicator,
}


def price_indicator(series, name: str = "close") -> Indicator:
    """Build a price indicator by name (close, open, high, low, median)."""
    try:
        cls = PRICE_INDICATORS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown reference price '{name}', expected one of {sorted(PRICE_INDICATORS)}"
        ) from None
    return cls(series)
