import argparse
import asyncio
import json
import logging
import sys

import aiohttp

from chains import registery
from clients.errors import AggregatorError
from clients.explorer import ExplorerClient
from clients.selectors import SelectorRegistry
from config import settings
from services.assets import AssetAggregator
from services.transactions import TransactionReconciler
from utils.utils import format_amount, from_base_units

module_logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Account assets and transaction history from a Blockscout explorer",
    )
    parser.add_argument("--log-level", default=settings.LOG_LEVEL)

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("assets", "native and token balances"),
        ("transactions", "reconciled transaction timeline"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("address")
        sub.add_argument("--chain-id", type=int, default=1)

    subparsers.add_parser("chains", help="list supported chains")
    return parser


async def fetch_assets(address: str, chain_id: int) -> list[dict]:
    async with aiohttp.ClientSession(headers=ExplorerClient.HEADERS) as session:
        explorer = ExplorerClient(session=session)
        assets = await AssetAggregator(explorer).get_assets(address, chain_id)

    rows = []
    for asset in assets:
        row = asset.to_dict()
        row["amount"] = format_amount(from_base_units(asset.balance, asset.decimals))
        rows.append(row)
    return rows


async def fetch_transactions(address: str, chain_id: int) -> list[dict]:
    async with aiohttp.ClientSession(headers=ExplorerClient.HEADERS) as session:
        explorer = ExplorerClient(session=session)
        selectors = SelectorRegistry(session=session)
        transactions = await TransactionReconciler(explorer, selectors).get_transactions(
            address,
            chain_id
        )

    return [tx.to_dict() for tx in transactions]


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "chains":
        result = [
            {"chainId": c.chain_id, "name": c.display_name, "path": f"{c.name}/{c.network}"}
            for c in registery.list()
        ]
    else:
        handler = fetch_assets if args.command == "assets" else fetch_transactions
        try:
            result = asyncio.run(handler(args.address, args.chain_id))
        except AggregatorError as e:
            module_logger.error(f"{args.command} failed: {e}")
            print(f"error: {e}", file=sys.stderr)
            return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
