"""Tests for the market snapshot reader."""

import pytest

from src.market_maker.core.errors import InsufficientLiquidity, TransportError
from src.market_maker.core.market.snapshot import format_snapshot, read_snapshot
from src.market_maker.core.models.market import MarketSnapshot
from tests.helpers.fake_exchange import FakeExchange


@pytest.mark.parametrize(
    "bids,asks,spread",
    [
        ([100.0, 99.0], [102.0, 103.0], 2.0),
        ([250000.0], [250010.5], 10.5),
        ([101.0], [101.0], 0.0),
    ],
)
def test_spread_is_best_ask_minus_best_bid(bids, asks, spread) -> None:
    ex = FakeExchange(bids=bids, asks=asks)
    snap = read_snapshot(ex, "XBTZAR")
    assert snap.bid == bids[0]
    assert snap.ask == asks[0]
    assert snap.spread == asks[0] - bids[0] == spread


def test_crossed_book_is_trusted() -> None:
    ex = FakeExchange(bids=[105.0], asks=[100.0])
    snap = read_snapshot(ex, "XBTZAR")
    assert snap.spread == -5.0


@pytest.mark.parametrize("bids,asks", [([], [102.0]), ([100.0], []), ([], [])])
def test_empty_side_raises_insufficient_liquidity(bids, asks) -> None:
    ex = FakeExchange(bids=bids, asks=asks)
    with pytest.raises(InsufficientLiquidity) as exc:
        read_snapshot(ex, "XBTZAR")
    assert exc.value.operation == "order_book"
    # no order action follows a failed read
    assert ex.methods() == ["order_book"]


def test_transport_error_propagates() -> None:
    ex = FakeExchange()
    ex.fail_on["order_book"] = TransportError("timeout", operation="order_book")
    with pytest.raises(TransportError):
        read_snapshot(ex, "XBTZAR")


def test_format_snapshot() -> None:
    text = format_snapshot(MarketSnapshot.from_prices(100, 102))
    assert text.splitlines() == [
        "Current market",
        "\tspread: 2.000000",
        "\tbid: 100.000000",
        "\task: 102.000000",
    ]
