"""Pipeline entry point for running as a module: python -m pipeline."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from typing import Any

from cosmicops.config import get_settings
from cosmicops.services.position_store import InMemoryPositionStore, PositionStore, SqlPositionStore
from ephemeris.horizons import HorizonsClient

from pipeline.orchestrator import check_connectivity, fetch_bulk, generate_horoscope, get_ephemeris

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    stream=sys.stderr,
)

logger = logging.getLogger("pipeline")


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}'. Expected YYYY-MM-DD.") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pipeline", description="Planetary incident horoscope pipeline")
    parser.add_argument(
        "--memory",
        action="store_true",
        help="Use an in-process store instead of the database",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    eph = sub.add_parser("ephemeris", help="Fetch (or read cached) positions for a date")
    eph.add_argument("--date", type=_parse_date, required=True)
    eph.add_argument("--location")

    horo = sub.add_parser("horoscope", help="Generate a horoscope for a date")
    horo.add_argument("--date", type=_parse_date, required=True)
    horo.add_argument("--birth-date", type=_parse_date)
    horo.add_argument("--location")

    bulk = sub.add_parser("bulk", help="Fetch several dates sequentially")
    bulk.add_argument("dates", type=_parse_date, nargs="+")
    bulk.add_argument("--location")

    sub.add_parser("test-connection", help="Check that the ephemeris source answers")
    return parser


def _dump(payload: Any) -> None:
    if hasattr(payload, "model_dump"):
        payload = payload.model_dump(mode="json")
    elif isinstance(payload, list):
        payload = [item.model_dump(mode="json") for item in payload]
    print(json.dumps(payload, indent=2, ensure_ascii=False))


async def _run(args: argparse.Namespace) -> None:
    settings = get_settings()
    dispose = None
    async with HorizonsClient(
        settings.horizons_api_base,
        timeout=settings.horizons_timeout_seconds,
        user_agent=settings.horizons_user_agent,
    ) as client:
        try:
            store: PositionStore
            if args.memory or args.command == "test-connection":
                store = InMemoryPositionStore()
            else:
                from cosmicops.database import dispose_engine, get_session_factory, init_db

                dispose = dispose_engine
                await init_db()
                store = SqlPositionStore(get_session_factory())

            if args.command == "ephemeris":
                _dump(await get_ephemeris(args.date, store=store, client=client, location=args.location))
            elif args.command == "horoscope":
                _dump(
                    await generate_horoscope(
                        args.date,
                        store=store,
                        client=client,
                        location=args.location,
                        birth_date=args.birth_date,
                    )
                )
            elif args.command == "bulk":
                _dump(await fetch_bulk(args.dates, store=store, client=client, location=args.location))
            elif args.command == "test-connection":
                _dump(await check_connectivity(client, settings=settings))
        finally:
            if dispose is not None:
                await dispose()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        asyncio.run(_run(args))
    except Exception as exc:
        logger.error("Command %s failed: %s", args.command, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
