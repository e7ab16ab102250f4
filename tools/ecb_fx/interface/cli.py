# Methodology: Clean Architecture – CLI interface
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import List, Optional

from ..application.converter import Converter
from ..application.use_case import load_feed, refresh
from ..domain.errors import FeedReadError, FetchError, OutOfRangeError
from ..infrastructure.fetcher import DEFAULT_FEED_PATH, DEFAULT_FEED_URL, fetch_feed
from ..infrastructure.rate_store import DEFAULT_STORE_PATH, RateStore

logger = logging.getLogger("ecb_fx.interface.cli")


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date (expected YYYY-MM-DD): {value!r}")


def _amount(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    if not amount.is_finite():
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    return amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convierte montos USD a EUR con la tasa diaria del BCE")
    parser.add_argument("--store", default=str(DEFAULT_STORE_PATH), help="Archivo SQLite con las tasas")
    parser.add_argument("--debug", action="store_true", help="Habilita logging DEBUG detallado")
    sub = parser.add_subparsers(dest="command", required=True)

    p_fetch = sub.add_parser("fetch", help="Descarga el CSV de tasas")
    p_fetch.add_argument("--url", default=DEFAULT_FEED_URL)
    p_fetch.add_argument("--feed", default=str(DEFAULT_FEED_PATH), help="Destino del CSV")

    p_load = sub.add_parser("load", help="Carga el CSV de tasas en el store")
    p_load.add_argument("--feed", default=str(DEFAULT_FEED_PATH), help="CSV de tasas USD-EUR")
    p_load.add_argument("--delimiter", default=",")

    p_refresh = sub.add_parser("refresh", help="Descarga y carga el CSV de tasas")
    p_refresh.add_argument("--url", default=DEFAULT_FEED_URL)
    p_refresh.add_argument("--feed", default=str(DEFAULT_FEED_PATH))
    p_refresh.add_argument("--delimiter", default=",")

    p_rate = sub.add_parser("rate", help="Muestra la tasa vigente en una fecha")
    p_rate.add_argument("date", type=_iso_date)

    p_convert = sub.add_parser("convert", help="Convierte un monto USD a EUR")
    p_convert.add_argument("amount", type=_amount)
    p_convert.add_argument("date", type=_iso_date)

    sub.add_parser("status", help="Resumen del store")
    return parser


def _run(args: argparse.Namespace) -> int:
    if args.command == "fetch":
        fetch_feed(Path(args.feed), url=args.url)
        return 0

    store = RateStore(Path(args.store))
    try:
        if args.command == "load":
            feed_path = Path(args.feed)
            if not feed_path.exists():
                logger.error("No existe archivo de tasas: %s", feed_path)
                return 2
            written = load_feed(feed_path, store, delimiter=args.delimiter)
            sys.stdout.write(f"{written}\n")
        elif args.command == "refresh":
            written = refresh(Path(args.feed), store, url=args.url, delimiter=args.delimiter)
            sys.stdout.write(f"{written}\n")
        elif args.command == "rate":
            sys.stdout.write(f"{Converter(store).rate(args.date)}\n")
        elif args.command == "convert":
            sys.stdout.write(f"{Converter(store).convert(args.amount, args.date)}\n")
        elif args.command == "status":
            latest = store.latest_date()
            sys.stdout.write(f"rates={store.count()} latest={latest.isoformat() if latest else '-'}\n")
        return 0
    finally:
        store.dispose()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # Configure logging after parsing so we can honor --debug
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
    )
    if args.debug:
        logger.debug("Debug ENABLED. Args: %s", vars(args))

    try:
        return _run(args)
    except (OutOfRangeError, FeedReadError, FetchError) as e:
        logger.error("%s", e)
        return 2
