from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AsyncIterator, Union


class FeedConnection(ABC):
    """
    One live duplex connection to the price feed.

    - send(): write one text message
    - async iteration: inbound messages; ends on a clean close,
      raises on a transport error
    - close(): release the connection (safe to call more than once)
    """

    @abstractmethod
    async def send(self, message: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def __aiter__(self) -> AsyncIterator[Union[str, bytes]]:
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        raise NotImplementedError


class FeedTransport(ABC):
    """
    Transport contract (interface).

    Any transport must implement connect(), returning a brand-new
    FeedConnection on every call.
    """

    @abstractmethod
    async def connect(self) -> FeedConnection:
        raise NotImplementedError
