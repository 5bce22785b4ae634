# src/market_maker/exchanges/base/exchange.py
from __future__ import annotations

from abc import ABC, abstractmethod

from src.market_maker.core.models.enums import OrderSide
from src.market_maker.core.models.market import Balance, OrderBook
from src.market_maker.core.models.order import Order


class ExchangeAdapter(ABC):
    """
    Base exchange adapter.

    Implementations are blocking and stateless wrt session logic.
    Every failure MUST surface as TransportError (src.market_maker.core.errors).
    """

    name: str

    # ---- account ----

    @abstractmethod
    def balance(self, asset: str) -> Balance:
        ...

    # ---- market data ----

    @abstractmethod
    def order_book(self, pair: str) -> OrderBook:
        """Bids and asks, best price first."""
        ...

    # ---- orders ----

    @abstractmethod
    def list_orders(self, pair: str) -> list[Order]:
        ...

    @abstractmethod
    def get_order(self, order_id: str) -> Order:
        ...

    @abstractmethod
    def post_order(self, pair: str, side: OrderSide, volume: float, price: float) -> str:
        """
        Submit a limit order. Returns the exchange order id.
        """
        ...
