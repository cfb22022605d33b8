import json

import pytest

from igra_store import cli
from igra_store.services import store_db

pytestmark = pytest.mark.usefixtures("database")


async def test_add_game_prints_created_game(capsys):
    args = cli.get_parser().parse_args(
        ["add-game", "--name", "Game1", "--cost", "19.99", "--key", "k1", "--key", "k2"]
    )

    assert await cli.main(args) == 0

    printed = json.loads(capsys.readouterr().out)
    assert printed["name"] == "Game1"
    assert printed["keys"] == ["k1", "k2"]
    assert [game.name for game in await store_db.list_games()] == ["Game1"]


async def test_add_game_with_used_key_fails(make_game):
    await make_game(keys=["k1"])
    args = cli.get_parser().parse_args(["add-game", "--name", "Game2", "--cost", "5", "--key", "k1"])

    assert await cli.main(args) == 1
    assert len(await store_db.list_games()) == 1


async def test_create_tables_command():
    args = cli.get_parser().parse_args(["create-tables"])

    assert await cli.main(args) == 0
