"""
ATR trailing stop-loss evaluation over bar series.
"""

from .errors import ConfigurationError, IndexRangeError
from .models.bar import Bar
from .models.series import BarSeries
from .models.trade import TradeType, Side, Trade, Position, TradingRecord
from .indicators.base import Indicator, CachedIndicator
from .indicators.price import ClosePriceIndicator, price_indicator
from .indicators.true_range import TrueRangeIndicator
from .indicators.atr import ATRIndicator
from .rules.base import Rule
from .rules.atr_trailing_stop import AverageTrueRangeTrailingStopLossRule

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "IndexRangeError",
    "Bar",
    "BarSeries",
    "TradeType",
    "Side",
    "Trade",
    "Position",
    "TradingRecord",
    "Indicator",
    "CachedIndicator",
    "ClosePriceIndicator",
    "price_indicator",
    "TrueRangeIndicator",
    "ATRIndicator",
    "Rule",
    "AverageTrueRangeTrailingStopLossRule",
]
