"""DB service layer for the store use cases.

- Routers should not touch DB sessions directly; they call this module.
- This layer owns session/transaction boundaries.
- Every workflow step runs in one transaction and locks the client and
  game rows it changes, so concurrent purchases cannot hand out the same
  key or debit the same balance twice.
"""

import hashlib
import logging
import secrets
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from igra_store.crud import CreateData, ReadData, UpdateData
from igra_store.db import Session
from igra_store.domain.errors import ConflictError, NotFoundError, OutOfStockError
from igra_store.domain.purchase_rules import (
    cart_total,
    ensure_funds,
    ensure_in_cart,
    status_after_add,
    status_after_leaving_cart,
    validate_amount,
    validate_new_game,
)
from igra_store.load_secrets import pepper_data
from igra_store.models.dc_models import CartStatusModel, ClientModel, GameModel
from igra_store.models.schema_models import ClientSchema, GameSchema


def hash_credential(password: str, salt: str) -> str:
    return hashlib.sha256((password + salt + pepper_data).encode()).hexdigest()


async def _require_client(client_id: UUID, session, for_update: bool = True):
    client = await ReadData.read_client(client_id, session, for_update=for_update)
    if client is None:
        logging.info(f"Client not found: {client_id}")
        raise NotFoundError("Client not found")
    return client


async def _require_game(game_id: UUID, session, for_update: bool = True):
    game = await ReadData.read_game(game_id, session, for_update=for_update)
    if game is None:
        logging.info(f"Game not found: {game_id}")
        raise NotFoundError("Game not found")
    return game


# ---- Game store ----------------------------------------------------------


async def create_game(game: GameModel) -> GameSchema:
    """Store a new catalog game. Whatever ``sold`` the caller sent, it is unsold.

    Raises:
        InvalidInputError: name, cost or keys missing
        ConflictError: a key is already used by another game or receipt
    """
    keys = validate_new_game(game.name, game.cost, game.keys)

    async with Session() as session:
        try:
            async with session.begin():
                if await ReadData.exists_any_key(keys, session):
                    logging.info(f"Rejected game {game.name!r}: duplicate key")
                    raise ConflictError("One or more keys already exist in another game")
                new_game = await CreateData.add_game(game.name, game.cost, keys, session)
                game_data = await ReadData.read_game_data(new_game, session)
        except IntegrityError as e:
            logging.warning(f"Key conflict while creating game {game.name!r}: {e.orig}")
            raise ConflictError("One or more keys already exist in another game") from e

    logging.info(f"Created game {game_data.game_id} ({game_data.name}) with {len(keys)} keys")
    return game_data


async def read_game(game_id: UUID) -> GameSchema:
    async with Session() as session:
        game = await _require_game(game_id, session, for_update=False)
        return await ReadData.read_game_data(game, session)


async def list_games() -> List[GameSchema]:
    async with Session() as session:
        return await ReadData.read_all_games(session)


# ---- Client store --------------------------------------------------------


async def create_client(client: ClientModel) -> ClientSchema:
    """Store a new client with a zero balance.

    Raises:
        ConflictError: login or nickname already taken
    """
    if client.balance:
        logging.debug(f"Ignoring initial balance {client.balance} for {client.login!r}")

    salt = secrets.token_hex(8)
    async with Session() as session:
        try:
            async with session.begin():
                if await ReadData.exists_login(client.login, session) or await ReadData.exists_nickname(
                    client.nickname, session
                ):
                    logging.info(f"Rejected client {client.login!r}: login or nickname taken")
                    raise ConflictError("Login or nickname already exists")
                new_client = await CreateData.add_client(
                    client.login,
                    client.nickname,
                    hash_credential(client.password, salt),
                    salt,
                    session,
                )
                client_data = await ReadData.read_client_data(new_client, session)
        except IntegrityError as e:
            logging.warning(f"Unique violation while creating client {client.login!r}: {e.orig}")
            raise ConflictError("Login or nickname already exists") from e

    logging.info(f"Created client {client_data.client_id} ({client_data.login})")
    return client_data


async def read_client(client_id: UUID) -> ClientSchema:
    async with Session() as session:
        client = await _require_client(client_id, session, for_update=False)
        return await ReadData.read_client_data(client, session)


# ---- Purchase workflow ---------------------------------------------------


async def add_to_cart(client_id: UUID, game_id: UUID) -> None:
    async with Session() as session:
        async with session.begin():
            await _require_client(client_id, session)
            await _require_game(game_id, session, for_update=False)

            current = await ReadData.read_status(client_id, game_id, session)
            new_status = status_after_add(current)
            if new_status is None:
                return
            await UpdateData.set_status(client_id, game_id, new_status, session)

    logging.info(f"Client {client_id} added game {game_id} to cart")


async def remove_from_cart(client_id: UUID, game_id: UUID) -> None:
    """Take a game out of the cart.

    Raises:
        NotFoundError: client or game missing
        NotInCartError: the game is not in the cart
    """
    async with Session() as session:
        async with session.begin():
            await _require_client(client_id, session)
            await _require_game(game_id, session, for_update=False)

            current = await ReadData.read_status(client_id, game_id, session)
            has_receipt = await ReadData.exists_receipt(client_id, game_id, session)
            new_status = status_after_leaving_cart(current, has_receipt)
            await UpdateData.set_status(client_id, game_id, new_status, session)

    logging.info(f"Client {client_id} removed game {game_id} from cart")


async def _sell_one_key(client, game, session) -> str | None:
    """Move one key from the game's pool to a new receipt for the client."""
    license_key = await UpdateData.pop_game_key(game.game_id, session)
    if license_key is None:
        return None
    receipt = await CreateData.add_receipt(client.client_id, game, license_key, session)
    await UpdateData.set_status(client.client_id, game.game_id, CartStatusModel.purchased, session)
    logging.info(f"Client {client.client_id} bought game {game.game_id}, receipt {receipt.receipt_id}")
    return license_key


async def purchase_game(client_id: UUID, game_id: UUID) -> None:
    """Buy one game from the cart.

    Raises:
        NotFoundError: client or game missing, or game not in the cart
        InsufficientFundsError: balance below the game cost
        OutOfStockError: no key left for the game
    """
    async with Session() as session:
        async with session.begin():
            client = await _require_client(client_id, session)
            game = await _require_game(game_id, session)

            ensure_in_cart(await ReadData.read_status(client_id, game_id, session))
            ensure_funds(client.balance, game.cost)

            if await _sell_one_key(client, game, session) is None:
                logging.info(f"Game {game_id} is out of stock")
                raise OutOfStockError("No keys available")

            await UpdateData.change_balance(client, -game.cost, session)


async def purchase_all(client_id: UUID) -> None:
    """Buy every game in the cart.

    The funds check covers the whole cart. Games without keys left are
    skipped, but the full total is still debited and the cart is emptied.

    Raises:
        NotFoundError: client missing
        InsufficientFundsError: balance below the cart total
    """
    async with Session() as session:
        async with session.begin():
            client = await _require_client(client_id, session)
            cart_games = await ReadData.read_cart_games(client_id, session, for_update=True)

            total = cart_total(game.cost for game in cart_games)
            ensure_funds(client.balance, total)

            for game in cart_games:
                if await _sell_one_key(client, game, session) is not None:
                    continue
                logging.warning(f"Skipping game {game.game_id} for client {client_id}: no keys left")
                has_receipt = await ReadData.exists_receipt(client_id, game.game_id, session)
                new_status = status_after_leaving_cart(CartStatusModel.in_cart, has_receipt)
                await UpdateData.set_status(client_id, game.game_id, new_status, session)

            await UpdateData.change_balance(client, -total, session)

    logging.info(f"Client {client_id} checked out {len(cart_games)} games for {total}")


async def add_balance(client_id: UUID, amount: Decimal) -> None:
    """Credit a client's balance.

    Raises:
        InvalidInputError: amount is zero or negative
        NotFoundError: client missing
    """
    validate_amount(amount)

    async with Session() as session:
        async with session.begin():
            client = await _require_client(client_id, session)
            balance = await UpdateData.change_balance(client, amount, session)

    logging.info(f"Client {client_id} balance credited by {amount}, now {balance}")
