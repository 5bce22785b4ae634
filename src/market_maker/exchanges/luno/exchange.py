# src/market_maker/exchanges/luno/exchange.py
from __future__ import annotations

import logging

from src.market_maker.exchanges.base.exchange import ExchangeAdapter
from src.market_maker.core.models.enums import OrderSide
from src.market_maker.core.models.market import Balance, OrderBook
from src.market_maker.core.models.order import Order

from src.market_maker.exchanges.luno.rest import BASE_URL, LunoREST
from src.market_maker.exchanges.luno.normalize import (
    norm_balance,
    norm_order,
    norm_order_book,
    norm_order_id,
    norm_orders,
)


class LunoExchange(ExchangeAdapter):
    """
    Luno spot exchange adapter (REST only).
    """

    name = "luno"

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        *,
        base_url: str = BASE_URL,
        timeout: float = 20.0,
        rest: LunoREST | None = None,
    ):
        self.logger = logging.getLogger("market_maker.exchanges.luno")
        self.rest = rest if rest is not None else LunoREST(
            api_key, api_secret, base_url=base_url, timeout=timeout
        )

    # ---------------- account ----------------

    def balance(self, asset: str) -> Balance:
        return norm_balance(self.rest.balance(asset), asset)

    # ---------------- market data ----------------

    def order_book(self, pair: str) -> OrderBook:
        return norm_order_book(self.rest.orderbook_top(pair), pair)

    # ---------------- orders ----------------

    def list_orders(self, pair: str) -> list[Order]:
        return norm_orders(self.rest.list_orders(pair))

    def get_order(self, order_id: str) -> Order:
        return norm_order(self.rest.get_order(order_id))

    def post_order(self, pair: str, side: OrderSide, volume: float, price: float) -> str:
        self.logger.info(
            "[LUNO] POST order pair=%s type=%s volume=%s price=%s",
            pair, side.value, volume, price,
        )
        resp = self.rest.post_order(pair=pair, order_type=side.value, volume=volume, price=price)
        return norm_order_id(resp)
