"""In-memory exchange double for testing.

Records every call in ``calls`` as ``(method, args)`` tuples so tests can
assert which exchange operations a component performed and in what order.
Orders posted through ``post_order`` are stored with state ``OPEN``;
tests flip them with ``complete(order_id)``.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from src.market_maker.core.errors import TransportError
from src.market_maker.core.models.enums import OrderSide, OrderState
from src.market_maker.core.models.market import Balance, BookEntry, OrderBook
from src.market_maker.core.models.order import Order
from src.market_maker.exchanges.base.exchange import ExchangeAdapter


class FakeExchange(ExchangeAdapter):
    """A scripted exchange used in place of the Luno adapter."""

    name = "fake"

    def __init__(
        self,
        *,
        balance: float = 1.0,
        reserved: float = 0.0,
        bids: Optional[List[float]] = None,
        asks: Optional[List[float]] = None,
    ) -> None:
        self.calls: List[Tuple[str, tuple]] = []
        self.available = balance
        self.reserved = reserved
        self.bids = [100.0] if bids is None else bids
        self.asks = [102.0] if asks is None else asks
        self.orders: Dict[str, Order] = {}
        self.listed: List[Order] = []
        self.fail_on: Dict[str, Exception] = {}
        self._seq = 0

    # ---- helpers ----

    def _call(self, method: str, *args) -> None:
        self.calls.append((method, args))
        err = self.fail_on.get(method)
        if err is not None:
            raise err

    def methods(self) -> List[str]:
        return [m for m, _ in self.calls]

    def add_order(self, order: Order, *, listed: bool = True) -> Order:
        self.orders[order.order_id] = order
        if listed:
            self.listed.append(order)
        return order

    def set_state(self, order_id: str, state: OrderState) -> None:
        o = self.orders[order_id]
        self.orders[order_id] = Order(
            order_id=o.order_id, pair=o.pair, side=o.side, state=state,
            price=o.price, volume=o.volume,
        )

    def complete(self, order_id: str) -> None:
        self.set_state(order_id, OrderState.COMPLETE)

    def posted(self) -> List[tuple]:
        return [args for m, args in self.calls if m == "post_order"]

    # ---- ExchangeAdapter ----

    def balance(self, asset: str) -> Balance:
        self._call("balance", asset)
        return Balance(asset=asset, available=self.available, reserved=self.reserved)

    def order_book(self, pair: str) -> OrderBook:
        self._call("order_book", pair)
        return OrderBook(
            pair=pair,
            bids=tuple(BookEntry(price=p, volume=1.0) for p in self.bids),
            asks=tuple(BookEntry(price=p, volume=1.0) for p in self.asks),
        )

    def list_orders(self, pair: str) -> List[Order]:
        self._call("list_orders", pair)
        return [self.orders[o.order_id] for o in self.listed]

    def get_order(self, order_id: str) -> Order:
        self._call("get_order", order_id)
        try:
            return self.orders[order_id]
        except KeyError:
            raise TransportError(f"HTTP 404 order {order_id}", operation="get_order")

    def post_order(self, pair: str, side: OrderSide, volume: float, price: float) -> str:
        self._call("post_order", pair, side, volume, price)
        self._seq += 1
        oid = f"BX{self._seq:04d}"
        self.orders[oid] = Order(
            order_id=oid, pair=pair, side=side, state=OrderState.OPEN,
            price=price, volume=volume,
        )
        return oid
