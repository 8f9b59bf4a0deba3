from __future__ import annotations

from typing import Optional

from pricefeed.candles.store import CandleStore
from pricefeed.models.market import Candle

DEFAULT_BUCKET_SIZE = 30


class CandleBuilder:
    """
    Builds candles from ticks.

    Bucketing is by tick count, not wall-clock time:
    - every candle holds exactly `bucket_size` ticks
    - except the newest one, which is still filling (1..bucket_size)
    """

    def __init__(self, store: CandleStore, bucket_size: int = DEFAULT_BUCKET_SIZE):
        if bucket_size <= 0:
            raise ValueError(f"candle bucket size must be positive, got {bucket_size}")
        self.store = store
        self.bucket_size = bucket_size

    def ingest(self, symbol: str, price: float) -> Optional[Candle]:
        """
        Process one tick.
        Returns the full candle that this tick closed off, if it started a new one.
        """
        current = self.store.get_current(symbol)

        # Still filling -> update in place.
        if current is not None and current.tick_count < self.bucket_size:
            current.update(price)
            return None

        # First tick for the symbol, or the last candle is full -> start a new one.
        self.store.append(symbol, Candle.from_price(price))
        return current

    def snapshot(self, symbol: str) -> tuple[Candle, ...]:
        return self.store.snapshot(symbol)
