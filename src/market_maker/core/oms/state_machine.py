# src/market_maker/core/oms/state_machine.py
from __future__ import annotations

from enum import Enum
from typing import Optional

from src.market_maker.core.models.order import Order


class EngineState(str, Enum):
    NO_PRIOR_ORDER = "NO_PRIOR_ORDER"
    ORDER_OPEN = "ORDER_OPEN"
    ORDER_COMPLETE = "ORDER_COMPLETE"


def classify(order: Optional[Order]) -> EngineState:
    """
    Where the alternation engine stands given the last known order.
    Anything not COMPLETE (OPEN, OTHER) counts as still open.
    """
    if order is None:
        return EngineState.NO_PRIOR_ORDER
    if order.is_complete:
        return EngineState.ORDER_COMPLETE
    return EngineState.ORDER_OPEN


def can_place(state: EngineState) -> bool:
    return state is not EngineState.ORDER_OPEN
