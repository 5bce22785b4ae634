from __future__ import annotations
from src.market_maker.exchanges.base.exchange import ExchangeAdapter
from src.market_maker.exchanges.luno.exchange import LunoExchange


def build_exchange(name: str, *, api_key: str, api_secret: str, **kwargs) -> ExchangeAdapter:
    name = name.lower()
    if name in ("luno", "bitx"):
        return LunoExchange(api_key, api_secret, **kwargs)
    raise ValueError(f"Unknown exchange: {name}")
