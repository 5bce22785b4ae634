from __future__ import annotations
from enum import Enum


class OrderSide(str, Enum):
    BID = "BID"
    ASK = "ASK"

    def opposite(self) -> "OrderSide":
        return OrderSide.ASK if self is OrderSide.BID else OrderSide.BID


class OrderState(str, Enum):
    OPEN = "OPEN"
    COMPLETE = "COMPLETE"
    OTHER = "OTHER"
