# src/market_maker/exchanges/luno/rest.py
from __future__ import annotations

import logging
from typing import Any

import requests

from src.market_maker.core.errors import TransportError

BASE_URL = "https://api.luno.com"

log = logging.getLogger("market_maker.exchanges.luno.rest")


def format_decimal(x: float) -> str:
    """
    Shortest plain decimal string (no exponent), as Luno expects for
    price/volume form fields: 101.0 -> "101", 0.0005 -> "0.0005".
    """
    s = f"{float(x):.8f}".rstrip("0").rstrip(".")
    return s or "0"


class LunoREST:
    """
    Luno (ex-BitX) REST client, HTTP basic auth with API key id + secret.

    No retries: every failure is reported to the caller as TransportError.
    """

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        *,
        base_url: str = BASE_URL,
        timeout: float = 20.0,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = float(timeout)

        self.sess = session if session is not None else requests.Session()
        if api_key and api_secret:
            self.sess.auth = (api_key, api_secret)

    # ---------------------------------------------------------------------
    # CORE REQUEST
    # ---------------------------------------------------------------------

    def _request(
        self,
        method: str,
        path: str,
        *,
        operation: str,
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self.base_url}{path}"

        try:
            r = self.sess.request(
                method=method,
                url=url,
                params=params,
                data=data,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.warning("[LUNO] request error (%s %s) | %r", method, path, e)
            raise TransportError(f"request failed: {method} {path} | {e!r}", operation=operation) from e

        # --- ERRORS ---
        if r.status_code >= 400:
            # Luno returns {"error": "...", "error_code": "..."}
            try:
                payload = r.json()
            except ValueError:
                raise TransportError(
                    f"HTTP {r.status_code} {method} {path}: {r.text[:500]}",
                    operation=operation,
                )
            if isinstance(payload, dict):
                code = payload.get("error_code")
                msg = payload.get("error")
                raise TransportError(
                    f"HTTP {r.status_code} {method} {path}: code={code} msg={msg}",
                    operation=operation,
                )
            raise TransportError(f"HTTP {r.status_code} {method} {path}", operation=operation)

        # --- OK ---
        if not r.text:
            return {}
        try:
            return r.json()
        except ValueError:
            raise TransportError(
                f"non-JSON response {method} {path}: {r.text[:200]}",
                operation=operation,
            )

    # ---------------------------------------------------------------------
    # API METHODS
    # ---------------------------------------------------------------------

    def balance(self, assets: str | None = None) -> dict:
        params: dict[str, Any] = {}
        if assets:
            params["assets"] = assets
        return self._request("GET", "/api/1/balance", params=params, operation="balance")

    def orderbook_top(self, pair: str) -> dict:
        return self._request("GET", "/api/1/orderbook_top", params={"pair": pair}, operation="order_book")

    def list_orders(self, pair: str, state: str | None = None) -> dict:
        params: dict[str, Any] = {"pair": pair}
        if state:
            params["state"] = state
        return self._request("GET", "/api/1/listorders", params=params, operation="list_orders")

    def get_order(self, order_id: str) -> dict:
        return self._request("GET", f"/api/1/orders/{order_id}", operation="get_order")

    def post_order(self, *, pair: str, order_type: str, volume: float, price: float) -> dict:
        data = {
            "pair": pair,
            "type": order_type,
            "volume": format_decimal(volume),
            "price": format_decimal(price),
        }
        return self._request("POST", "/api/1/postorder", data=data, operation="post_order")
