from __future__ import annotations

from typing import Optional, Union

from pricefeed.candles.builder import CandleBuilder
from pricefeed.candles.store import CandleStore
from pricefeed.config import Settings
from pricefeed.flash.tracker import PriceTracker, Scheduler
from pricefeed.history.buffer import HistoryBuffer
from pricefeed.jobs.ws_ingest import FeedSupervisor
from pricefeed.models.market import Candle, PriceState, SymbolSnapshot
from pricefeed.providers.base import FeedTransport


class MarketEngine:
    """
    One self-contained feed engine: supervisor + the three derived views.

    Consumers only read through the accessors below; each returns a copy
    or an immutable value.
    """

    def __init__(self, settings: Settings, transport: FeedTransport, schedule: Optional[Scheduler] = None) -> None:
        self.settings = settings

        self.history_buffer = HistoryBuffer(capacity=settings.history_capacity)
        self.candle_builder = CandleBuilder(CandleStore(), bucket_size=settings.candle_bucket_size)
        self.tracker = PriceTracker(clear_delay=settings.highlight_clear_seconds, schedule=schedule)

        self.supervisor = FeedSupervisor(
            transport=transport,
            symbols=settings.symbols,
            sinks=[self.history_buffer.push, self.candle_builder.ingest, self.tracker.ingest],
            reconnect_delay=settings.reconnect_delay_seconds,
        )

    @property
    def symbols(self) -> tuple[str, ...]:
        return self.settings.symbols

    @property
    def is_live(self) -> bool:
        return self.supervisor.is_live

    def start(self) -> None:
        self.supervisor.start()

    async def stop(self) -> None:
        await self.supervisor.stop()

    def ingest_raw(self, raw: Union[str, bytes]) -> bool:
        return self.supervisor.dispatch(raw)

    def price_state(self, symbol: str) -> Optional[PriceState]:
        return self.tracker.snapshot(symbol)

    def history(self, symbol: str) -> tuple[float, ...]:
        return self.history_buffer.snapshot(symbol)

    def candles(self, symbol: str) -> tuple[Candle, ...]:
        return self.candle_builder.snapshot(symbol)

    def snapshot(self, symbol: str) -> SymbolSnapshot:
        return SymbolSnapshot(
            symbol=symbol,
            price=self.price_state(symbol),
            history=self.history(symbol),
            candles=self.candles(symbol),
        )
