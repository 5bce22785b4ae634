from __future__ import annotations
from datetime import datetime, timezone
from typing import Any

from src.market_maker.core.errors import TransportError
from src.market_maker.core.models.enums import OrderSide, OrderState
from src.market_maker.core.models.market import Balance, BookEntry, OrderBook
from src.market_maker.core.models.order import Order

_STATES = {
    "PENDING": OrderState.OPEN,
    "COMPLETE": OrderState.COMPLETE,
}

# market orders report BUY/SELL instead of BID/ASK
_SIDES = {
    "BID": OrderSide.BID,
    "BUY": OrderSide.BID,
    "ASK": OrderSide.ASK,
    "SELL": OrderSide.ASK,
}


def ts_ms_to_dt(ts_ms: int) -> datetime:
    return datetime.fromtimestamp(ts_ms / 1000.0, tz=timezone.utc)


def _num(raw: dict, key: str, *, operation: str, required: bool = False) -> float:
    v = raw.get(key)
    if v is None or v == "":
        if required:
            raise TransportError(f"missing numeric field {key}", operation=operation)
        return 0.0
    try:
        return float(v)
    except (TypeError, ValueError):
        raise TransportError(f"bad numeric field {key}={v!r}", operation=operation)


def norm_balance(raw: Any, asset: str) -> Balance:
    items = raw.get("balance") if isinstance(raw, dict) else None
    for it in items or []:
        if str(it.get("asset", "")).upper() == asset.upper():
            return Balance(
                asset=asset.upper(),
                available=_num(it, "balance", operation="balance", required=True),
                reserved=_num(it, "reserved", operation="balance"),
            )
    raise TransportError(f"no {asset} account in balance response", operation="balance")


def _norm_entries(items: Any) -> tuple[BookEntry, ...]:
    out = []
    for it in items or []:
        out.append(
            BookEntry(
                price=_num(it, "price", operation="order_book", required=True),
                volume=_num(it, "volume", operation="order_book", required=True),
            )
        )
    return tuple(out)


def norm_order_book(raw: Any, pair: str) -> OrderBook:
    if not isinstance(raw, dict):
        raise TransportError("order book response is not an object", operation="order_book")
    return OrderBook(
        pair=pair,
        bids=_norm_entries(raw.get("bids")),
        asks=_norm_entries(raw.get("asks")),
    )


def norm_order(raw: Any, *, operation: str = "get_order") -> Order:
    if not isinstance(raw, dict) or not raw.get("order_id"):
        raise TransportError(f"malformed order payload: {raw!r}", operation=operation)

    side = _SIDES.get(str(raw.get("type", "")).upper())
    if side is None:
        raise TransportError(f"unknown order type {raw.get('type')!r}", operation=operation)

    created = raw.get("creation_timestamp")
    return Order(
        order_id=str(raw["order_id"]),
        pair=str(raw.get("pair", "")).upper(),
        side=side,
        state=_STATES.get(str(raw.get("state", "")).upper(), OrderState.OTHER),
        price=_num(raw, "limit_price", operation=operation),
        volume=_num(raw, "limit_volume", operation=operation),
        base=_num(raw, "base", operation=operation),
        counter=_num(raw, "counter", operation=operation),
        created_at=ts_ms_to_dt(int(created)) if created else None,
    )


def norm_orders(raw: Any) -> list[Order]:
    items = raw.get("orders") if isinstance(raw, dict) else None
    return [norm_order(it, operation="list_orders") for it in items or []]


def norm_order_id(raw: Any) -> str:
    oid = raw.get("order_id") if isinstance(raw, dict) else None
    if not oid:
        raise TransportError(f"post_order returned no order_id: {raw!r}", operation="post_order")
    return str(oid)
