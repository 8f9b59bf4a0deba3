from __future__ import annotations

import logging
from typing import AsyncIterator, Union

import websockets

from pricefeed.providers.base import FeedConnection, FeedTransport

log = logging.getLogger("twelvedata_transport")


class WebsocketFeedConnection(FeedConnection):
    def __init__(self, ws) -> None:
        self._ws = ws

    async def send(self, message: str) -> None:
        await self._ws.send(message)

    async def __aiter__(self) -> AsyncIterator[Union[str, bytes]]:
        # Ends on a normal close; ConnectionClosedError propagates otherwise.
        async for raw in self._ws:
            yield raw

    async def close(self) -> None:
        await self._ws.close()


class TwelveDataTransport(FeedTransport):
    """
    Twelve Data quotes WebSocket.

    The api key travels on the URL query string (apikey=...).
    """

    def __init__(self, ws_url: str, api_key: str, ping_interval: float = 20.0) -> None:
        self.ws_url = ws_url
        self.api_key = api_key
        self.ping_interval = ping_interval

    def ws_url_with_key(self) -> str:
        raw = self.ws_url.strip()
        if "apikey=" in raw:
            return raw
        sep = "&" if "?" in raw else "?"
        return f"{raw}{sep}apikey={self.api_key}"

    async def connect(self) -> FeedConnection:
        ws = await websockets.connect(
            self.ws_url_with_key(),
            ping_interval=self.ping_interval,
            ping_timeout=self.ping_interval,
        )
        log.info("Twelve Data WS connected url=%s", self.ws_url)
        return WebsocketFeedConnection(ws)
