"""Command line front-end: ``python -m auto_api_client <command> ...``."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import Any, Optional, Sequence

import httpx

from auto_api_client.client import AutoApiClient
from auto_api_client.config import Settings
from auto_api_client.errors import AutoApiError
from auto_api_client.models import OFFER_FILTERS, OffersQuery

logger = logging.getLogger("auto_api_client")

INT_FILTERS = {
    "year_from",
    "year_to",
    "mileage_from",
    "mileage_to",
    "price_from",
    "price_to",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="auto-api", description="Query the auto-api.com car listings API."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    filters = commands.add_parser("filters", help="list filters of a source")
    filters.add_argument("source")

    offers = commands.add_parser("offers", help="list offers of a source")
    offers.add_argument("source")
    offers.add_argument("--page", type=int, default=1)
    for name in OFFER_FILTERS:
        offers.add_argument(
            f"--{name.replace('_', '-')}",
            dest=name,
            type=int if name in INT_FILTERS else str,
        )

    offer = commands.add_parser("offer", help="get one offer by inner id")
    offer.add_argument("source")
    offer.add_argument("inner_id")

    change_id = commands.add_parser("change-id", help="get the change cursor for a date")
    change_id.add_argument("source")
    change_id.add_argument("date", help="yyyy-mm-dd")

    changes = commands.add_parser("changes", help="list changes from a cursor")
    changes.add_argument("source")
    changes.add_argument("change_id", type=int)

    by_url = commands.add_parser("offer-by-url", help="get offer data by listing URL")
    by_url.add_argument("url")

    return parser


async def run_command(client: AutoApiClient, args: argparse.Namespace) -> Any:
    if args.command == "filters":
        return await client.list_filters(args.source)
    if args.command == "offers":
        query = OffersQuery(
            page=args.page, **{name: getattr(args, name) for name in OFFER_FILTERS}
        )
        return await client.list_offers(args.source, query)
    if args.command == "offer":
        return await client.get_offer(args.source, args.inner_id)
    if args.command == "change-id":
        return {"change_id": await client.get_change_cursor(args.source, args.date)}
    if args.command == "changes":
        return await client.list_changes(args.source, args.change_id)
    if args.command == "offer-by-url":
        return await client.get_offer_by_url(args.url)
    raise ValueError(f"Unknown command: {args.command}")


def _to_json(result: Any) -> str:
    if dataclasses.is_dataclass(result):
        result = dataclasses.asdict(result)
    return json.dumps(result, indent=2, ensure_ascii=False)


async def _run(
    settings: Settings,
    args: argparse.Namespace,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Any:
    async with AutoApiClient.from_settings(settings, http_client=http_client) as client:
        return await run_command(client, args)


def main(
    argv: Optional[Sequence[str]] = None,
    settings: Optional[Settings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    settings = settings or Settings()
    errors = settings.validate_settings()
    if errors:
        for error in errors:
            logger.error(f"Config error: {error}")
        return 1

    try:
        result = asyncio.run(_run(settings, args, http_client))
    except AutoApiError as e:
        logger.error(str(e))
        return 2

    print(_to_json(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
