from __future__ import annotations

import json
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, Field, FiniteFloat, ValidationError, field_validator

from pricefeed.models.market import Tick

PRICE_EVENT = "price"


class MalformedTickError(ValueError):
    """Raised when an inbound payload cannot be turned into a Tick."""


class PriceEvent(BaseModel):
    """
    Wire shape of a price update:
      {"event": "price", "symbol": "BTC/USD", "price": "64000.5", ...}

    price may be a number or a numeric string; anything that does not
    parse to a finite float is rejected. Extra fields are ignored.
    """

    event: str
    symbol: str = Field(min_length=1)
    price: FiniteFloat

    @field_validator("price", mode="before")
    @classmethod
    def _no_bools(cls, v: Any) -> Any:
        # bool is an int subclass; a flag is never a price
        if isinstance(v, bool):
            raise ValueError("price must be a number or numeric string")
        return v


def normalize(raw: Union[str, bytes]) -> Optional[Tick]:
    """
    Parse one inbound message.

    Returns:
      - Tick for a valid price event
      - None for any other event kind (subscribe acks, heartbeats, errors)

    Raises MalformedTickError if the payload is not a JSON object or the
    price event is missing a symbol / finite price.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        raise MalformedTickError(f"undecodable payload: {e}") from e

    if not isinstance(data, dict):
        raise MalformedTickError(f"expected JSON object, got {type(data).__name__}")

    if data.get("event") != PRICE_EVENT:
        return None

    try:
        event = PriceEvent.model_validate(data)
    except ValidationError as e:
        raise MalformedTickError(f"invalid price event: {e.errors()}") from e

    return Tick(symbol=event.symbol, price=float(event.price))


def encode_subscribe(symbols: Iterable[str]) -> str:
    """Subscription message sent once per successful connection."""
    return json.dumps({"action": "subscribe", "params": {"symbols": ",".join(symbols)}})
