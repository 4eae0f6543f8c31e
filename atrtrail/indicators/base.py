"""
Base indicator classes.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from ..errors import ConfigurationError


class Indicator(ABC):
    """A per-index value computed over a bar series."""

    def __init__(self, series):
        if series is None:
            raise ConfigurationError("series is required")
        self.series = series

    @abstractmethod
    def value(self, index: int) -> Any:
        """
        Value at a bar index.

        Raises:
            IndexRangeError: If index is outside the series' retained range
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(series={self.series.name!r})"


class CachedIndicator(Indicator):
    """
    Indicator memoizing computed values per index.

    The cache is guarded by a lock, so concurrent readers see either a fully
    computed entry or none. It is dropped whenever the series' begin_index
    moves, since seeded recurrences restart at the first retained bar.
    """

    def __init__(self, series):
        super().__init__(series)
        self._cache: Dict[int, Any] = {}
        self._seed_index: Optional[int] = None
        self._lock = threading.RLock()

    def value(self, index: int) -> Any:
        self.series.check_index(index)
        with self._lock:
            begin = self.series.begin_index
            if self._seed_index != begin:
                self._cache.clear()
                self._seed_index = begin
            if index in self._cache:
                return self._cache[index]
            result = self.calculate(index)
            self._cache[index] = result
            return result

    @abstractmethod
    def calculate(self, index: int) -> Any:
        """Compute the value at index; called with the cache lock held."""
