from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from igra_store.domain.errors import StoreError
from igra_store.models.dc_models import GameModel
from igra_store.models.schema_models import GameSchema
from igra_store.routers.errors import to_http_exception
from igra_store.services import store_db

game_router = APIRouter(prefix="/api/games", tags=["Game"])


class GameAPI:
    @staticmethod
    @game_router.get("", response_model=List[GameSchema])
    async def get_all_games():
        """All catalog games, i.e. every game that is not a sold copy"""
        return await store_db.list_games()

    @staticmethod
    @game_router.post("", response_model=GameSchema, status_code=status.HTTP_201_CREATED)
    async def create_game(game: GameModel):
        """Create a catalog game. Name, cost and at least one key are required."""
        try:
            return await store_db.create_game(game)
        except StoreError as e:
            raise to_http_exception(e)

    @staticmethod
    @game_router.get("/{game_id}", response_model=GameSchema)
    async def get_game(game_id: UUID):
        try:
            return await store_db.read_game(game_id)
        except StoreError as e:
            raise to_http_exception(e)
