import argparse
import asyncio
import logging
from decimal import Decimal, InvalidOperation

from pydantic import ValidationError

from igra_store.db import create_tables
from igra_store.domain.errors import StoreError
from igra_store.load_secrets import log_level
from igra_store.models.dc_models import GameModel
from igra_store.services import store_db

logging.basicConfig(level=log_level)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def money(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Igra store administration")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("create-tables", help="Create every table if not exists")

    add_game = subparsers.add_parser("add-game", help="Add a game to the catalog")
    add_game.add_argument("--name", type=str, help="Game name", required=True)
    add_game.add_argument("--cost", type=money, help="Price of one key", required=True)
    add_game.add_argument(
        "--key", dest="keys", action="append", help="License key, repeat for more", required=True
    )
    return parser


async def main(args: argparse.Namespace) -> int:
    await create_tables()
    if args.command == "create-tables":
        return 0

    try:
        game = await store_db.create_game(GameModel(name=args.name, cost=args.cost, keys=args.keys))
    except (StoreError, ValidationError) as e:
        logging.error(f"Could not add game: {e}")
        return 1
    print(game.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    parser = get_parser()
    args = parser.parse_args()
    raise SystemExit(asyncio.run(main(args)))
