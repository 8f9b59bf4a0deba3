from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from pricefeed.models.market import Candle


@dataclass
class CandleStore:
    """
    In-memory candle series, one per symbol.

    series[symbol] -> candles in the order they were started.
      Only the last candle is ever mutated (by the builder); everything
      before it is frozen history.
    """
    series: Dict[str, List[Candle]] = field(default_factory=dict)

    def get_current(self, symbol: str) -> Optional[Candle]:
        candles = self.series.get(symbol)
        return candles[-1] if candles else None

    def append(self, symbol: str, candle: Candle) -> None:
        self.series.setdefault(symbol, []).append(candle)

    def snapshot(self, symbol: str) -> tuple[Candle, ...]:
        """Copies, so callers can never reach into the live series."""
        return tuple(replace(c) for c in self.series.get(symbol, []))
