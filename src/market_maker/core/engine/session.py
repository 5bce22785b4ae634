# src/market_maker/core/engine/session.py
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from src.market_maker.core.engine.confirm import ConfirmationGate
from src.market_maker.core.errors import InsufficientBalance, MarketMakerError
from src.market_maker.core.market.snapshot import format_snapshot, read_snapshot
from src.market_maker.core.models.market import MarketSnapshot
from src.market_maker.core.models.order import Order
from src.market_maker.core.oms.alternation import AlternationEngine, SessionState, StepAction
from src.market_maker.exchanges.base.exchange import ExchangeAdapter
from src.market_maker.settings import Settings

log = logging.getLogger("market_maker.engine.session")


@dataclass
class SessionReport:
    rounds: int = 0
    orders_placed: int = 0
    last_order: Optional[Order] = None


class MarketMakingSession:
    """
    balance check -> snapshot -> confirm -> (step -> confirm -> snapshot)*

    Single place where a failure stops the session: the failing stage is
    logged and the error re-raised to the caller.
    """

    def __init__(
        self,
        exchange: ExchangeAdapter,
        gate: ConfirmationGate,
        settings: Settings,
        *,
        out: TextIO | None = None,
    ):
        self.exchange = exchange
        self.gate = gate
        self.settings = settings
        self.out = out if out is not None else sys.stdout
        self.engine = AlternationEngine(exchange, volume=settings.volume, tick=settings.tick)

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def _stage(self, name: str, fn, *args):
        try:
            return fn(*args)
        except MarketMakerError as e:
            log.error("[SESSION] %s failed: %s", name, e.describe())
            raise

    # ------------------------------------------------------------------
    # stages
    # ------------------------------------------------------------------

    def check_balance(self) -> None:
        bal = self.exchange.balance(self.settings.balance_asset)
        self._print(f"Current balance: {bal.available:f} (Reserved: {bal.reserved:f})")
        if bal.available <= self.settings.min_balance:
            raise InsufficientBalance(bal.available, self.settings.min_balance, asset=bal.asset)

    def snapshot(self) -> MarketSnapshot:
        snap = read_snapshot(self.exchange, self.settings.pair)
        self._print(format_snapshot(snap))
        return snap

    # ------------------------------------------------------------------
    # loop
    # ------------------------------------------------------------------

    def run(self) -> SessionReport:
        report = SessionReport()
        log.info("[SESSION] start pair=%s volume=%s tick=%s", self.settings.pair, self.settings.volume, self.settings.tick)

        self._stage("balance", self.check_balance)
        snap = self._stage("market", self.snapshot)

        proceed = self._stage("confirm", self.gate.ask, "Place trade?")
        state = SessionState(pair=self.settings.pair)

        while proceed:
            result = self._stage("place", self.engine.step, state, snap)
            state = result.state
            report.rounds += 1
            report.orders_placed = state.orders_placed
            report.last_order = state.last_order

            self._print(f"Last order: {result.order}")
            if result.action is StepAction.WAIT:
                self._print("Order has not completed yet.")

            proceed = self._stage("confirm", self.gate.ask, "Place another trade if ready?")
            if not proceed:
                break
            snap = self._stage("market", self.snapshot)

        log.info("[SESSION] done rounds=%d placed=%d", report.rounds, report.orders_placed)
        self._print("\nBot finished working. Bye.")
        return report
