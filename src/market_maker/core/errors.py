# src/market_maker/core/errors.py
from __future__ import annotations


class MarketMakerError(RuntimeError):
    """
    Base error. Every failure is fatal to the session.

    `operation` names what was being done when it failed, so the operator
    sees e.g. "get_order: HTTP 404 ..." instead of a bare message.
    """

    def __init__(self, message: str, *, operation: str = "") -> None:
        super().__init__(message)
        self.operation = operation

    def describe(self) -> str:
        msg = str(self)
        return f"{self.operation}: {msg}" if self.operation else msg


class AuthConfigMissing(MarketMakerError):
    """API key or secret not supplied."""


class TransportError(MarketMakerError):
    """Exchange call failed (network, HTTP status, malformed payload)."""


class InsufficientLiquidity(MarketMakerError):
    """Order book has an empty bid or ask side."""


class InsufficientBalance(MarketMakerError):
    def __init__(self, available: float, minimum: float, *, asset: str = "") -> None:
        amount = f"{available:f} {asset}" if asset else f"{available:f}"
        super().__init__(
            f"insufficient balance to place an order: {amount} <= {minimum:f}",
            operation="balance",
        )
        self.available = available
        self.minimum = minimum
        self.asset = asset


class InputReadError(MarketMakerError):
    """Confirmation prompt could not read an answer."""
