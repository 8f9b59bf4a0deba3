from __future__ import annotations

import json
from typing import Optional

from fastapi import APIRouter, Query, Request

from pricefeed.engine import MarketEngine
from pricefeed.models.market import Candle, PriceState

router = APIRouter()


def get_engine(request: Request) -> MarketEngine:
    return request.app.state.engine


def price_row(symbol: str, state: Optional[PriceState]) -> dict:
    if state is None:
        # No tick yet for this symbol.
        return {"symbol": symbol, "price": None, "direction": "none", "highlighted": False}
    return {
        "symbol": symbol,
        "price": state.display_price,
        "direction": state.direction.value,
        "highlighted": state.highlighted,
    }


def candle_row(c: Candle) -> dict:
    return {
        "open": c.open,
        "high": c.high,
        "low": c.low,
        "close": c.close,
        "tick_count": c.tick_count,
        "bullish": c.is_bullish,
    }


@router.get("/prices")
async def prices(request: Request):
    """
    Latest price per configured symbol, plus whether the feed is live.
    feed_live=False means prices may be stale while the engine reconnects.
    """
    engine = get_engine(request)
    return {
        "feed_live": engine.is_live,
        "prices": [price_row(s, engine.price_state(s)) for s in engine.symbols],
    }


@router.get("/snapshot")
async def snapshot(request: Request, ticker: str = Query(..., description="Feed symbol, e.g., BTC/USD")):
    """
    Snapshot for one symbol:
    - latest price / direction / highlight
    - rolling price history (oldest first)
    - tick-count candles (oldest first, last one may still be filling)
    """
    engine = get_engine(request)
    snap = engine.snapshot(ticker)
    return {
        "ticker": ticker,
        "feed_live": engine.is_live,
        "price": price_row(ticker, snap.price),
        "history": list(snap.history),
        "candles": [candle_row(c) for c in snap.candles],
    }


@router.post("/dev/simulate_tick")
async def dev_simulate_tick(
    request: Request,
    ticker: str = Query(..., description="Feed symbol, e.g., BTC/USD"),
    price: float = Query(..., description="Tick price"),
):
    """
    Dev-only helper:
    Feeds ONE price event through the same dispatch path as the live feed.
    """
    engine = get_engine(request)
    accepted = engine.ingest_raw(json.dumps({"event": "price", "symbol": ticker, "price": price}))
    return {"ok": accepted, "price": price_row(ticker, engine.price_state(ticker))}
