"""
Price bar model.
"""

from datetime import datetime
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Bar:
    """Single OHLCV bar (immutable), stamped with its close time."""
    open: Any
    high: Any
    low: Any
    close: Any
    volume: Any
    end_time: datetime
    
    def __post_init__(self):
        if self.high < self.low:
            raise ValueError("High must be >= Low")
        if self.high < self.open or self.high < self.close:
            raise ValueError("High must be >= Open and Close")
        if self.low > self.open or self.low > self.close:
            raise ValueError("Low must be <= Open and Close")
    
    @property
    def is_bullish(self) -> bool:
        """Close above open."""
        return self.close > self.open
    
    @property
    def is_bearish(self) -> bool:
        """Close below open."""
        return self.close < self.open
    
    @property
    def range(self):
        """High minus low."""
        return self.high - self.low
