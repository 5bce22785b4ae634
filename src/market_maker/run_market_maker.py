# src/market_maker/run_market_maker.py
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from dotenv import load_dotenv

from src.market_maker.core.engine.confirm import ConfirmationGate
from src.market_maker.core.engine.session import MarketMakingSession
from src.market_maker.core.errors import MarketMakerError
from src.market_maker.exchanges.registry import build_exchange
from src.market_maker.settings import DEFAULT_PAIR, build_settings

log = logging.getLogger("market_maker.run_market_maker")


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="market-maker",
        description="Interactive market-making bot: alternates BID/ASK limit orders inside the spread.",
    )
    ap.add_argument("--api_key", "--api-key", dest="api_key", default=None, help="API key id")
    ap.add_argument("--api_secret", "--api-secret", dest="api_secret", default=None, help="API secret")
    ap.add_argument(
        "--currency_pair", "--pair", dest="pair", default=None,
        help=f"Currency pair to trade (default {DEFAULT_PAIR})",
    )
    ap.add_argument("--volume", type=float, default=None, help="Volume per order")
    ap.add_argument("--tick", type=float, default=None, help="Price offset inside best bid/ask")
    ap.add_argument("--config", type=Path, default=None, help="Optional YAML config file")
    ap.add_argument("--env-file", type=Path, default=None, help="Optional .env file")
    return ap


def main(
    argv: Optional[List[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    args = _build_parser().parse_args(argv)
    out = stdout if stdout is not None else sys.stdout

    print("Welcome to the market-making trading bot!", file=out)

    if args.env_file:
        load_dotenv(args.env_file, override=False)
    else:
        load_dotenv(override=False)

    try:
        settings = build_settings(
            config_path=args.config,
            overrides={
                "api_key": args.api_key,
                "api_secret": args.api_secret,
                "pair": args.pair,
                "volume": args.volume,
                "tick": args.tick,
            },
        )
        log.info("Settings: %s", settings)

        exchange = build_exchange(
            settings.exchange,
            api_key=settings.api_key,
            api_secret=settings.api_secret,
            base_url=settings.base_url,
            timeout=settings.timeout_sec,
        )
        gate = ConfirmationGate(stdin=stdin, stdout=out)
        MarketMakingSession(exchange, gate, settings, out=out).run()
    except MarketMakerError as e:
        log.error("Error: %s", e.describe())
        return 1
    except (ValueError, OSError) as e:
        log.error("Error: %s", e)
        return 1
    except KeyboardInterrupt:
        log.warning("Interrupted")
        return 130
    return 0


def cli() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    sys.exit(main())


if __name__ == "__main__":
    cli()
