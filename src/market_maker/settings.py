# src/market_maker/settings.py
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from src.market_maker.core.errors import AuthConfigMissing
from src.market_maker.core.oms.alternation import DEFAULT_TICK, DEFAULT_VOLUME
from src.market_maker.exchanges.luno.rest import BASE_URL

log = logging.getLogger("market_maker.settings")

DEFAULT_PAIR = "XBTZAR"
MIN_BALANCE = 0.005


def default_balance_asset(pair: str) -> str:
    """
    Balance asset guessed by dropping "XBT" once from the pair (XBTZAR -> ZAR).
    A heuristic carried over from the original tool; set balance_asset for
    pairs where it does not name the right currency (e.g. ETHXBT -> ETH).
    """
    return pair.upper().replace("XBT", "", 1)


@dataclass(frozen=True)
class Settings:
    api_key: str = field(repr=False)
    api_secret: str = field(repr=False)
    pair: str = DEFAULT_PAIR

    volume: float = DEFAULT_VOLUME
    tick: float = DEFAULT_TICK
    min_balance: float = MIN_BALANCE
    balance_asset: str = ""

    exchange: str = "luno"
    base_url: str = BASE_URL
    timeout_sec: float = 20.0

    def __post_init__(self) -> None:
        if not self.balance_asset:
            object.__setattr__(self, "balance_asset", default_balance_asset(self.pair))


def _get_env(env: Mapping[str, str], name: str) -> Optional[str]:
    v = env.get(name)
    if v is None:
        return None
    v = v.strip()
    return v or None


def _coerce_float(raw: Dict[str, Any], key: str, default: float) -> float:
    v = raw.get(key)
    if v is None:
        return default
    try:
        return float(v)
    except (TypeError, ValueError):
        raise ValueError(f"config: {key} must be a number, got {v!r}")


def load_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping (dict).")
    return data


def build_settings(
    *,
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Settings:
    """
    Merge YAML config, environment and CLI overrides (in that order of
    precedence, lowest first). Missing API key/secret -> AuthConfigMissing.
    """
    env = os.environ if env is None else env
    raw: Dict[str, Any] = load_yaml(config_path) if config_path else {}
    if config_path:
        log.info("Config: %s", config_path)

    env_values = {
        "api_key": _get_env(env, "LUNO_API_KEY_ID"),
        "api_secret": _get_env(env, "LUNO_API_SECRET"),
        "pair": _get_env(env, "MM_PAIR"),
        "base_url": _get_env(env, "LUNO_BASE_URL"),
    }
    for k, v in env_values.items():
        if v is not None:
            raw[k] = v

    for k, v in (overrides or {}).items():
        if v is not None:
            raw[k] = v

    api_key = str(raw.get("api_key") or "").strip()
    api_secret = str(raw.get("api_secret") or "").strip()
    if not api_key or not api_secret:
        raise AuthConfigMissing(
            "please supply API key and secret (--api_key/--api_secret or LUNO_API_KEY_ID/LUNO_API_SECRET)",
            operation="settings",
        )

    pair = str(raw.get("pair") or DEFAULT_PAIR).strip().upper()
    return Settings(
        api_key=api_key,
        api_secret=api_secret,
        pair=pair,
        volume=_coerce_float(raw, "volume", DEFAULT_VOLUME),
        tick=_coerce_float(raw, "tick", DEFAULT_TICK),
        min_balance=_coerce_float(raw, "min_balance", MIN_BALANCE),
        balance_asset=str(raw.get("balance_asset") or "").strip().upper(),
        exchange=str(raw.get("exchange") or "luno").strip().lower(),
        base_url=str(raw.get("base_url") or BASE_URL).strip(),
        timeout_sec=_coerce_float(raw, "timeout_sec", 20.0),
    )
