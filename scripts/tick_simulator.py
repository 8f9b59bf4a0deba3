from __future__ import annotations

import asyncio
import random

from pricefeed.candles.builder import CandleBuilder
from pricefeed.candles.store import CandleStore
from pricefeed.flash.tracker import PriceTracker
from pricefeed.history.buffer import HistoryBuffer


async def run(symbol: str = "BTC/USD", ticks: int = 120, bucket_size: int = 30) -> None:
    """
    Generates fake ticks and feeds them into the three derived views.

    - Price does a random walk (moves up/down a bit each tick).
    - CandleBuilder returns the candle a tick closed off (if any); we print it.
    - Every 10th tick we print the current direction/highlight.
    """
    history = HistoryBuffer(capacity=50)
    builder = CandleBuilder(CandleStore(), bucket_size=bucket_size)
    tracker = PriceTracker(clear_delay=0.5)

    price = 100.0

    print(f"Simulating {ticks} ticks for {symbol} (bucket={bucket_size})...\n")

    for i in range(ticks):
        price += random.choice([-0.2, 0.0, 0.2])
        price = round(price, 2)

        history.push(symbol, price)
        closed = builder.ingest(symbol, price)
        state = tracker.ingest(symbol, price)

        if closed is not None:
            print(
                f"[CLOSED] {symbol} O={closed.open} H={closed.high} "
                f"L={closed.low} C={closed.close} N={closed.tick_count}"
            )
        if i % 10 == 0:
            print(f"tick {i}: {state.display_price} {state.direction.value} flash={state.highlighted}")

        await asyncio.sleep(0.01)

    print("\nDone.")
    print(f"History length: {len(history.snapshot(symbol))}")
    print(f"Candles: {len(builder.snapshot(symbol))}")


if __name__ == "__main__":
    asyncio.run(run())
