from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List

DEFAULT_CAPACITY = 50


class HistoryBuffer:
    """
    Rolling per-symbol price history.

    Each symbol keeps at most `capacity` prices, oldest evicted first.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._prices: Dict[str, Deque[float]] = {}

    def push(self, symbol: str, price: float) -> None:
        buf = self._prices.get(symbol)
        if buf is None:
            buf = self._prices[symbol] = deque(maxlen=self.capacity)
        buf.append(price)

    def snapshot(self, symbol: str) -> tuple[float, ...]:
        return tuple(self._prices.get(symbol, ()))

    def symbols(self) -> List[str]:
        return list(self._prices)
