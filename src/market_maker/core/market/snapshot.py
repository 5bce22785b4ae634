# src/market_maker/core/market/snapshot.py
from __future__ import annotations

import logging

from src.market_maker.core.errors import InsufficientLiquidity
from src.market_maker.core.models.market import MarketSnapshot
from src.market_maker.exchanges.base.exchange import ExchangeAdapter

log = logging.getLogger("market_maker.market.snapshot")


def read_snapshot(exchange: ExchangeAdapter, pair: str) -> MarketSnapshot:
    """
    Best bid / best ask / spread from the current order book.

    Raises InsufficientLiquidity if either side is empty.
    TransportError from the exchange propagates as is.
    """
    book = exchange.order_book(pair)

    if not book.bids or not book.asks:
        raise InsufficientLiquidity(
            f"not enough liquidity on market {pair} (bids={len(book.bids)} asks={len(book.asks)})",
            operation="order_book",
        )

    snap = MarketSnapshot.from_prices(book.bids[0].price, book.asks[0].price)
    log.debug("[MARKET] %s bid=%s ask=%s spread=%s", pair, snap.bid, snap.ask, snap.spread)
    return snap


def format_snapshot(snap: MarketSnapshot) -> str:
    return (
        "Current market\n"
        f"\tspread: {snap.spread:f}\n"
        f"\tbid: {snap.bid:f}\n"
        f"\task: {snap.ask:f}"
    )
