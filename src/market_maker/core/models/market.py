# src/market_maker/core/models/market.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Balance:
    asset: str
    available: float
    reserved: float = 0.0


@dataclass(frozen=True, slots=True)
class BookEntry:
    price: float
    volume: float


@dataclass(frozen=True, slots=True)
class OrderBook:
    """Bids and asks as returned by the exchange, best price first."""

    pair: str
    bids: tuple[BookEntry, ...] = field(default_factory=tuple)
    asks: tuple[BookEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class MarketSnapshot:
    bid: float
    ask: float
    spread: float

    @classmethod
    def from_prices(cls, bid: float, ask: float) -> "MarketSnapshot":
        # bid <= ask is not enforced, the feed is trusted
        return cls(bid=float(bid), ask=float(ask), spread=float(ask) - float(bid))
