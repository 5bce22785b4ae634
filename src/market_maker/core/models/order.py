# src/market_maker/core/models/order.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from src.market_maker.core.models.enums import OrderSide, OrderState


@dataclass(frozen=True, slots=True)
class Order:
    """
    Order — read-only view of an exchange order.

    This object is:
      • owned by the exchange
      • fetched via list_orders / get_order
      • never mutated locally (stale as soon as the exchange moves it)
    """

    # --- identity ---
    order_id: str
    pair: str
    side: OrderSide

    # --- lifecycle ---
    state: OrderState

    # --- execution ---
    price: float
    volume: float

    # --- fills / metadata ---
    base: float = 0.0
    counter: float = 0.0
    created_at: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return self.state is OrderState.COMPLETE


@dataclass(frozen=True, slots=True)
class OrderIntent:
    """Limit order the engine wants the exchange to place."""

    pair: str
    side: OrderSide
    price: float
    volume: float
