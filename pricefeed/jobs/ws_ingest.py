from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Callable, Optional, Sequence, Union

from pricefeed.models.market import ConnectionState
from pricefeed.providers.base import FeedConnection, FeedTransport
from pricefeed.ticks.codec import MalformedTickError, encode_subscribe, normalize

TickSink = Callable[[str, float], object]

DEFAULT_RECONNECT_DELAY = 3.0

log = logging.getLogger("feed_supervisor")


class FeedSupervisor:
    """
    Owns the feed connection and keeps it alive.

    State machine:
      CONNECTING -> OPEN      connection established, subscription sent
      any        -> CLOSED    error or close (remote or local); handle released
      CLOSED     -> CONNECTING after `reconnect_delay`, forever, fixed interval

    While OPEN every inbound message is normalized and, if it is a tick,
    handed to each sink in order.
    """

    def __init__(
        self,
        transport: FeedTransport,
        symbols: Sequence[str],
        sinks: Sequence[TickSink],
        reconnect_delay: float = DEFAULT_RECONNECT_DELAY,
    ) -> None:
        if not symbols:
            raise ValueError("symbols must not be empty")
        if reconnect_delay <= 0:
            raise ValueError(f"reconnect delay must be positive, got {reconnect_delay}")

        self.transport = transport
        self.symbols = tuple(symbols)
        self.sinks = tuple(sinks)
        self.reconnect_delay = reconnect_delay

        self.state = ConnectionState.CONNECTING
        self.connect_attempts = 0
        self._conn: Optional[FeedConnection] = None
        self._task: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def is_live(self) -> bool:
        return self.state is ConnectionState.OPEN

    # -------------------------
    # Lifecycle
    # -------------------------
    def start(self) -> asyncio.Task:
        if self._stopped:
            raise RuntimeError("supervisor was stopped; create a new one")
        if self._task is None:
            self._task = asyncio.create_task(self.run(), name="feed-supervisor")
        return self._task

    async def stop(self) -> None:
        """Close the feed and end the reconnect loop for good."""
        self._stopped = True
        task, self._task = self._task, None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        await self._release()
        self.state = ConnectionState.CLOSED

    async def run(self) -> None:
        while not self._stopped:
            await self._connect_once()
            if self._stopped:
                break
            log.info("Feed reconnect in %.1fs (attempts so far=%d)", self.reconnect_delay, self.connect_attempts)
            await asyncio.sleep(self.reconnect_delay)

    async def _connect_once(self) -> None:
        self.state = ConnectionState.CONNECTING
        self.connect_attempts += 1
        try:
            self._conn = await self.transport.connect()
            self.state = ConnectionState.OPEN
            await self._conn.send(encode_subscribe(self.symbols))
            log.info("Feed open, subscribed symbols=%s", ",".join(self.symbols))

            async for raw in self._conn:
                self.dispatch(raw)

            log.warning("Feed closed by remote")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            log.warning("Feed error: %r", e)
        finally:
            self.state = ConnectionState.CLOSED
            await self._release()

    async def _release(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            await conn.close()
        except Exception as e:
            log.debug("Ignoring error while closing feed connection: %r", e)

    # -------------------------
    # Message routing
    # -------------------------
    def dispatch(self, raw: Union[str, bytes]) -> bool:
        """
        Route one inbound message. Returns True if it produced a tick.
        Malformed payloads are dropped; they never affect the connection.
        """
        try:
            tick = normalize(raw)
        except MalformedTickError as e:
            log.debug("Dropping malformed message: %s", e)
            return False

        if tick is None:
            return False

        for sink in self.sinks:
            sink(tick.symbol, tick.price)
        return True
