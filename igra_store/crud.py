"""CRUD helpers for the store tables.

None of these commit: callers run them inside ``session.begin()`` so a
workflow step is one transaction.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, exists
from decimal import Decimal
from typing import List
from uuid import UUID
import logging

from igra_store.models.dc_models import CartStatusModel
from igra_store.models.schema_models import ClientSchema, GameSchema, ReceiptSchema
from igra_store.models.schemas import Client, ClientGame, Game, GameKey, Receipt


class ReadData:
    @staticmethod
    async def read_client(client_id: UUID, session: AsyncSession, for_update: bool = False) -> Client | None:
        """Read one client row

        Args:
            client_id (UUID): To identify the client
            for_update (bool, optional): Lock the row until the transaction ends. Defaults to False.
        """
        stmt = select(Client).where(Client.client_id == client_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_game(game_id: UUID, session: AsyncSession, for_update: bool = False) -> Game | None:
        stmt = select(Game).where(Game.game_id == game_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await session.execute(stmt)
        return result.scalars().first()

    @staticmethod
    async def read_game_keys(game_id: UUID, session: AsyncSession) -> List[str]:
        """Read the remaining license keys of a catalog game in hand-out order"""
        stmt = (
            select(GameKey.license_key)
            .where(GameKey.game_id == game_id)
            .order_by(GameKey.position)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def read_game_data(game: Game, session: AsyncSession) -> GameSchema:
        keys = await ReadData.read_game_keys(game.game_id, session)
        return GameSchema(
            game_id=game.game_id,
            name=game.name,
            cost=game.cost,
            keys=keys,
            sold=False,
        )

    @staticmethod
    async def read_all_games(session: AsyncSession) -> List[GameSchema]:
        """Read every catalog game with its key pool

        Returns:
            List[GameSchema]: Catalog games, oldest first
        """
        result = await session.execute(select(Game).order_by(Game.created_at, Game.game_id))
        games = result.scalars().all()
        return [await ReadData.read_game_data(game, session) for game in games]

    @staticmethod
    async def read_status(client_id: UUID, game_id: UUID, session: AsyncSession) -> CartStatusModel | None:
        """Read the status of a game for a client

        Returns:
            CartStatusModel | None: None when the game is absent for this client
        """
        stmt = select(ClientGame.status).where(
            ClientGame.client_id == client_id, ClientGame.game_id == game_id
        )
        result = await session.execute(stmt)
        status = result.scalars().first()
        if status is None:
            return None
        return CartStatusModel(status)

    @staticmethod
    async def read_cart_games(client_id: UUID, session: AsyncSession, for_update: bool = False) -> List[Game]:
        """Read the catalog games currently in the client's cart

        Args:
            client_id (UUID): To identify the client
            for_update (bool, optional): Lock the game rows. Defaults to False.
        """
        stmt = (
            select(Game)
            .join(ClientGame, ClientGame.game_id == Game.game_id)
            .where(
                ClientGame.client_id == client_id,
                ClientGame.status == CartStatusModel.in_cart.value,
            )
        )
        if for_update:
            # Lock game rows in primary key order so concurrent checkouts of
            # overlapping carts cannot deadlock.
            stmt = stmt.order_by(Game.game_id).with_for_update()
        else:
            stmt = stmt.order_by(ClientGame.updated_at, Game.game_id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def read_receipts(client_id: UUID, session: AsyncSession) -> List[ReceiptSchema]:
        stmt = (
            select(Receipt)
            .where(Receipt.client_id == client_id)
            .order_by(Receipt.purchased_at, Receipt.receipt_id)
        )
        result = await session.execute(stmt)
        return [ReceiptSchema.model_validate(receipt) for receipt in result.scalars().all()]

    @staticmethod
    async def read_client_data(client: Client, session: AsyncSession) -> ClientSchema:
        """Read client data with cart and purchased games

        Args:
            client (Client): Client row already loaded in this session

        Returns:
            ClientSchema: Client data without the credential
        """
        cart_games = await ReadData.read_cart_games(client.client_id, session)
        cart = [await ReadData.read_game_data(game, session) for game in cart_games]
        purchased = await ReadData.read_receipts(client.client_id, session)
        return ClientSchema(
            client_id=client.client_id,
            login=client.login,
            nickname=client.nickname,
            balance=client.balance,
            cart=cart,
            purchased=purchased,
        )

    @staticmethod
    async def exists_login(login: str, session: AsyncSession) -> bool:
        result = await session.execute(select(exists().where(Client.login == login)))
        return bool(result.scalar())

    @staticmethod
    async def exists_nickname(nickname: str, session: AsyncSession) -> bool:
        result = await session.execute(select(exists().where(Client.nickname == nickname)))
        return bool(result.scalar())

    @staticmethod
    async def exists_any_key(keys: List[str], session: AsyncSession) -> bool:
        """Check whether any of the keys is already used

        Keys are unique across every key pool and every receipt.
        """
        in_pool = await session.execute(
            select(exists().where(GameKey.license_key.in_(keys)))
        )
        if in_pool.scalar():
            return True
        sold = await session.execute(
            select(exists().where(Receipt.license_key.in_(keys)))
        )
        return bool(sold.scalar())

    @staticmethod
    async def exists_receipt(client_id: UUID, game_id: UUID, session: AsyncSession) -> bool:
        result = await session.execute(
            select(
                exists().where(Receipt.client_id == client_id, Receipt.game_id == game_id)
            )
        )
        return bool(result.scalar())


class CreateData:
    @staticmethod
    async def add_client(login: str, nickname: str, hash_password: str, salt: str, session: AsyncSession) -> Client:
        """Add a client row with zero balance

        Args:
            login (str): Unique login
            nickname (str): Unique display name
            hash_password (str): Salted and peppered credential hash
            salt (str): Salt used for the hash
        """
        new_client = Client(
            login=login,
            nickname=nickname,
            hash_password=hash_password,
            salt=salt,
            balance=Decimal("0"),
        )
        session.add(new_client)
        await session.flush()
        return new_client

    @staticmethod
    async def add_game(name: str, cost: Decimal, keys: List[str], session: AsyncSession) -> Game:
        """Add a catalog game and its key pool

        Args:
            name (str): Game name
            cost (Decimal): Price of one key
            keys (List[str]): License keys, handed out in this order
        """
        new_game = Game(name=name, cost=cost)
        session.add(new_game)
        await session.flush()
        session.add_all(
            [
                GameKey(game_id=new_game.game_id, license_key=key, position=position)
                for position, key in enumerate(keys)
            ]
        )
        await session.flush()
        return new_game

    @staticmethod
    async def add_receipt(client_id: UUID, game: Game, license_key: str, session: AsyncSession) -> Receipt:
        """Add a receipt holding exactly one license key

        Args:
            client_id (UUID): Buyer
            game (Game): Catalog game the key was taken from
            license_key (str): The key handed to the buyer
        """
        new_receipt = Receipt(
            client_id=client_id,
            game_id=game.game_id,
            name=game.name,
            cost=game.cost,
            license_key=license_key,
        )
        session.add(new_receipt)
        await session.flush()
        return new_receipt


class UpdateData:
    @staticmethod
    async def set_status(client_id: UUID, game_id: UUID, status: CartStatusModel | None, session: AsyncSession) -> None:
        """Set the status of a game for a client

        Args:
            status (CartStatusModel | None): New status, None deletes the row (absent)
        """
        stmt = select(ClientGame).where(
            ClientGame.client_id == client_id, ClientGame.game_id == game_id
        )
        result = await session.execute(stmt)
        row = result.scalars().first()

        if status is None:
            if row is not None:
                await session.delete(row)
        elif row is None:
            session.add(ClientGame(client_id=client_id, game_id=game_id, status=status.value))
        else:
            row.status = status.value
        await session.flush()

    @staticmethod
    async def pop_game_key(game_id: UUID, session: AsyncSession) -> str | None:
        """Take the first key out of a catalog game's pool

        Returns:
            str | None: The removed key, None if the pool is empty
        """
        stmt = (
            select(GameKey)
            .where(GameKey.game_id == game_id)
            .order_by(GameKey.position)
            .limit(1)
            .with_for_update()
        )
        result = await session.execute(stmt)
        game_key = result.scalars().first()

        if game_key is None:
            return None

        license_key, position = game_key.license_key, game_key.position
        await session.delete(game_key)
        await session.flush()
        logging.debug(f"Popped key at position {position} from game {game_id}")
        return license_key

    @staticmethod
    async def change_balance(client: Client, delta: Decimal, session: AsyncSession) -> Decimal:
        client.balance = client.balance + delta
        await session.flush()
        return client.balance

