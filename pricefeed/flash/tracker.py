from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from pricefeed.models.market import Direction, PriceState

DEFAULT_CLEAR_DELAY = 0.5

Scheduler = Callable[[float, Callable[[], None]], Any]

log = logging.getLogger("price_tracker")


def _loop_call_later(delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
    return asyncio.get_running_loop().call_later(delay, callback)


def direction_of(previous: Optional[float], price: float) -> Direction:
    if previous is None:
        return Direction.NONE
    if price > previous:
        return Direction.UP
    if price < previous:
        return Direction.DOWN
    return Direction.NONE


class PriceTracker:
    """
    Latest price + direction + transient highlight, per symbol.

    A change (up/down) turns the highlight on and schedules a clear
    `clear_delay` seconds later. Each update bumps the symbol's
    generation; a scheduled clear only applies if no newer update has
    happened since it was scheduled, so a fresh change restarts the
    highlight window instead of being cut short by an older timer.

    `schedule(delay, callback)` defaults to the running asyncio loop's
    call_later, so ingest() must be called from inside the loop unless a
    scheduler is injected.
    """

    def __init__(self, clear_delay: float = DEFAULT_CLEAR_DELAY, schedule: Optional[Scheduler] = None):
        if clear_delay <= 0:
            raise ValueError(f"highlight clear delay must be positive, got {clear_delay}")
        self.clear_delay = clear_delay
        self._schedule = schedule or _loop_call_later
        self._states: Dict[str, PriceState] = {}
        self._generations: Dict[str, int] = {}

    def ingest(self, symbol: str, price: float) -> PriceState:
        prev = self._states.get(symbol)
        direction = direction_of(prev.last_price if prev else None, price)

        state = PriceState(
            last_price=price,
            direction=direction,
            highlighted=direction is not Direction.NONE,
        )
        self._states[symbol] = state

        generation = self._generations.get(symbol, 0) + 1
        self._generations[symbol] = generation

        if state.highlighted:
            self._schedule(self.clear_delay, lambda: self._clear(symbol, generation))

        return state

    def _clear(self, symbol: str, generation: int) -> None:
        if self._generations.get(symbol) != generation:
            return  # superseded
        state = self._states.get(symbol)
        if state is None or not state.highlighted:
            return
        self._states[symbol] = PriceState(
            last_price=state.last_price,
            direction=state.direction,
            highlighted=False,
        )
        log.debug("highlight cleared symbol=%s", symbol)

    def snapshot(self, symbol: str) -> Optional[PriceState]:
        return self._states.get(symbol)
