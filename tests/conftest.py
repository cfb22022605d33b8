"""Fixtures backed by a throwaway SQLite database."""

import os
import tempfile
from decimal import Decimal

# Must be set before igra_store is imported: the engine is built at import time.
_db_dir = tempfile.mkdtemp(prefix="igra-store-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'store.sqlite3')}"

import httpx
import pytest

from igra_store.db import create_tables, drop_tables
from igra_store.main import app
from igra_store.models.dc_models import ClientModel, GameModel
from igra_store.services import store_db


@pytest.fixture
async def database():
    await create_tables()
    yield
    await drop_tables()


@pytest.fixture
async def api(database):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_client(database):
    async def _make_client(login="user1", nickname="nickname1", balance=Decimal("0")):
        client = await store_db.create_client(
            ClientModel(login=login, password="secret", nickname=nickname)
        )
        if balance > 0:
            await store_db.add_balance(client.client_id, balance)
        return await store_db.read_client(client.client_id)

    return _make_client


@pytest.fixture
def make_game(database):
    async def _make_game(name="Game1", cost=Decimal("50.00"), keys=("key1", "key2")):
        return await store_db.create_game(GameModel(name=name, cost=cost, keys=list(keys)))

    return _make_game
