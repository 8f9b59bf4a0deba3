from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    NONE = "none"


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class Tick:
    """
    Tick = a single normalized price update.

    symbol: instrument identifier as the feed sends it (e.g., BTC/USD)
    price: last traded/quoted price, always finite
    """
    symbol: str
    price: float


@dataclass(frozen=True)
class PriceState:
    """
    Latest price for one symbol plus its change versus the previous price.

    direction: up/down vs the previous price, none when equal or first tick
    highlighted: True right after a change, cleared by the tracker after a delay
    """
    last_price: float
    direction: Direction = Direction.NONE
    highlighted: bool = False

    @property
    def display_price(self) -> str:
        return f"{self.last_price:.2f}"


@dataclass
class Candle:
    """
    Candle (OHLC) covering a fixed number of ticks.

    tick_count: how many ticks went into this candle (1..bucket_size)
    """
    open: float
    high: float
    low: float
    close: float
    tick_count: int = 1

    @classmethod
    def from_price(cls, price: float) -> "Candle":
        return cls(open=price, high=price, low=price, close=price, tick_count=1)

    def update(self, price: float) -> None:
        """Update this candle with a new tick."""
        self.high = max(self.high, price)
        self.low = min(self.low, price)
        self.close = price
        self.tick_count += 1

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open


@dataclass(frozen=True)
class SymbolSnapshot:
    """Everything the engine knows about one symbol, copied at one point in time."""
    symbol: str
    price: Optional[PriceState]
    history: tuple[float, ...]
    candles: tuple[Candle, ...]
