"""
Trade and position bookkeeping for a single instrument.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

logger = logging.getLogger(__name__)


class TradeType(Enum):
    """Order direction of a single trade."""
    BUY = "BUY"
    SELL = "SELL"

    @property
    def complement(self) -> "TradeType":
        return TradeType.SELL if self is TradeType.BUY else TradeType.BUY


class Side(Enum):
    """Side of a position."""
    LONG = "LONG"
    SHORT = "SHORT"


@dataclass(frozen=True)
class Trade:
    """Single executed trade (immutable)."""
    type: TradeType
    index: int
    price: Any
    amount: Any


class Position:
    """A pair of entry and exit trades; open until the exit is recorded."""

    def __init__(self, entry: Trade):
        self.entry = entry
        self.exit: Optional[Trade] = None

    def __repr__(self) -> str:
        return f"Position(entry={self.entry!r}, exit={self.exit!r})"

    @property
    def entry_index(self) -> int:
        return self.entry.index

    @property
    def entry_price(self):
        return self.entry.price

    @property
    def side(self) -> Side:
        return Side.LONG if self.entry.type is TradeType.BUY else Side.SHORT

    @property
    def is_open(self) -> bool:
        return self.exit is None

    @property
    def is_closed(self) -> bool:
        return self.exit is not None


class TradingRecord:
    """
    History of entries and exits for one instrument.

    Holds closed positions plus at most one open position. Every entry uses
    the record's starting type: BUY opens long positions, SELL opens shorts.
    """

    def __init__(self, starting_type: TradeType = TradeType.BUY, name: str = ""):
        """
        Initialize an empty record.

        Args:
            starting_type: Trade type of every entry (BUY for long, SELL for short)
            name: Record name, used in log output
        """
        if not isinstance(starting_type, TradeType):
            raise ValueError(f"starting_type must be a TradeType, got {starting_type!r}")
        self.starting_type = starting_type
        self.name = name
        self._positions: List[Position] = []
        self._current: Optional[Position] = None
        self._trades: List[Trade] = []

    def __repr__(self) -> str:
        return (f"TradingRecord(name={self.name!r}, starting_type={self.starting_type.value}, "
                f"closed={len(self._positions)}, open={self.is_open()})")

    @property
    def current_position(self) -> Optional[Position]:
        """The open position, or None."""
        return self._current

    @property
    def positions(self) -> List[Position]:
        """Closed positions, oldest first."""
        return list(self._positions)

    @property
    def position_count(self) -> int:
        return len(self._positions)

    @property
    def trades(self) -> List[Trade]:
        return list(self._trades)

    @property
    def last_trade(self) -> Optional[Trade]:
        return self._trades[-1] if self._trades else None

    @property
    def last_entry(self) -> Optional[Trade]:
        for trade in reversed(self._trades):
            if trade.type is self.starting_type:
                return trade
        return None

    @property
    def last_exit(self) -> Optional[Trade]:
        for trade in reversed(self._trades):
            if trade.type is not self.starting_type:
                return trade
        return None

    def is_open(self) -> bool:
        return self._current is not None

    def is_closed(self) -> bool:
        return self._current is None

    def _check_index(self, index: int) -> None:
        last = self.last_trade
        if last is not None and index <= last.index:
            raise ValueError(f"Trade index {index} must be after last trade index {last.index}")

    def enter(self, index: int, price, amount=1) -> Trade:
        """
        Open a position.

        Raises:
            ValueError: If a position is already open or index is not after the last trade
        """
        if self.is_open():
            raise ValueError("Cannot enter: a position is already open")
        self._check_index(index)
        trade = Trade(type=self.starting_type, index=index, price=price, amount=amount)
        self._trades.append(trade)
        self._current = Position(trade)
        logger.debug("position_opened", extra={
            "record": self.name,
            "side": self._current.side.value,
            "index": index,
            "price": str(price),
        })
        return trade

    def exit(self, index: int, price, amount=None) -> Trade:
        """
        Close the open position (amount defaults to the entry amount).

        Raises:
            ValueError: If no position is open or index is not after the last trade
        """
        if self._current is None:
            raise ValueError("Cannot exit: no open position")
        self._check_index(index)
        if amount is None:
            amount = self._current.entry.amount
        trade = Trade(type=self.starting_type.complement, index=index, price=price, amount=amount)
        self._trades.append(trade)
        position = self._current
        position.exit = trade
        self._positions.append(position)
        self._current = None
        logger.debug("position_closed", extra={
            "record": self.name,
            "side": position.side.value,
            "entry_index": position.entry_index,
            "exit_index": index,
            "price": str(price),
        })
        return trade

    def operate(self, index: int, price, amount=1) -> Trade:
        """Enter when flat, exit when a position is open."""
        if self.is_open():
            return self.exit(index, price, amount)
        return self.enter(index, price, amount)
