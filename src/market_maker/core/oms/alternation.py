# src/market_maker/core/oms/alternation.py
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

from src.market_maker.core.errors import TransportError
from src.market_maker.core.models.enums import OrderSide
from src.market_maker.core.models.market import MarketSnapshot
from src.market_maker.core.models.order import Order, OrderIntent
from src.market_maker.core.oms.state_machine import EngineState, can_place, classify
from src.market_maker.exchanges.base.exchange import ExchangeAdapter

log = logging.getLogger("market_maker.oms.alternation")

DEFAULT_TICK = 1.0
DEFAULT_VOLUME = 0.0005


@dataclass(frozen=True, slots=True)
class SessionState:
    """
    Everything the engine carries between rounds.
    Each step takes one and returns the next; nothing is mutated in place.
    """

    pair: str
    last_order: Optional[Order] = None
    orders_placed: int = 0


class StepAction(str, Enum):
    WAIT = "WAIT"
    PLACED = "PLACED"


@dataclass(frozen=True, slots=True)
class StepResult:
    action: StepAction
    state: SessionState
    order: Optional[Order]
    engine_state: EngineState


def next_intent(
    last_order: Optional[Order],
    snapshot: MarketSnapshot,
    *,
    pair: str,
    volume: float,
    tick: float = DEFAULT_TICK,
) -> OrderIntent:
    """
    Flip the side of the last order and price one tick inside the book.

    BID -> ASK at ask - tick; ASK or nothing -> BID at bid + tick.
    """
    side = last_order.side.opposite() if last_order is not None else OrderSide.BID
    if side is OrderSide.ASK:
        return OrderIntent(pair=pair, side=side, price=snapshot.ask - tick, volume=volume)
    return OrderIntent(pair=pair, side=side, price=snapshot.bid + tick, volume=volume)


class AlternationEngine:
    """
    Alternates BID/ASK limit orders, one at a time.

    Assumes at most one managed order per pair: on a fresh session the first
    order listed by the exchange is adopted as the last order.
    """

    def __init__(
        self,
        exchange: ExchangeAdapter,
        *,
        volume: float = DEFAULT_VOLUME,
        tick: float = DEFAULT_TICK,
    ):
        if volume <= 0:
            raise ValueError(f"volume must be > 0, got {volume}")
        if tick < 0:
            raise ValueError(f"tick must be >= 0, got {tick}")
        self.exchange = exchange
        self.volume = float(volume)
        self.tick = float(tick)

    # ------------------------------------------------------------------
    # fetch / refresh
    # ------------------------------------------------------------------

    def _current_order(self, state: SessionState) -> Optional[Order]:
        if state.last_order is None:
            log.info("[ENGINE] fetching existing orders for %s", state.pair)
            orders = self.exchange.list_orders(state.pair)
            if not orders:
                return None
            if len(orders) > 1:
                log.warning(
                    "[ENGINE] %d orders listed for %s, adopting the first (%s)",
                    len(orders), state.pair, orders[0].order_id,
                )
            return orders[0]

        log.info("[ENGINE] refreshing last order (%s)", state.last_order.order_id)
        return self.exchange.get_order(state.last_order.order_id)

    # ------------------------------------------------------------------
    # placement
    # ------------------------------------------------------------------

    def place(self, intent: OrderIntent) -> Order:
        log.info(
            "[ENGINE] placing %s price=%f volume=%f",
            intent.side.value, intent.price, intent.volume,
        )
        order_id = self.exchange.post_order(intent.pair, intent.side, intent.volume, intent.price)
        log.info("[ENGINE] order placed, fetching details: %s", order_id)
        try:
            return self.exchange.get_order(order_id)
        except TransportError as e:
            # the order is live but untracked; the next start adopts it via list_orders
            raise TransportError(
                f"order {order_id} was placed but could not be fetched: {e}",
                operation=e.operation or "get_order",
            ) from e

    # ------------------------------------------------------------------
    # one round
    # ------------------------------------------------------------------

    def step(self, state: SessionState, snapshot: MarketSnapshot) -> StepResult:
        current = self._current_order(state)
        engine_state = classify(current)
        log.info("[ENGINE] state=%s last_order=%s", engine_state.value, current)

        if not can_place(engine_state):
            log.info("[ENGINE] order %s has not completed yet", current.order_id)
            return StepResult(
                action=StepAction.WAIT,
                state=replace(state, last_order=current),
                order=current,
                engine_state=engine_state,
            )

        intent = next_intent(current, snapshot, pair=state.pair, volume=self.volume, tick=self.tick)
        placed = self.place(intent)
        return StepResult(
            action=StepAction.PLACED,
            state=replace(state, last_order=placed, orders_placed=state.orders_placed + 1),
            order=placed,
            engine_state=engine_state,
        )
