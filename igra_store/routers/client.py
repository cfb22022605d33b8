from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from igra_store.domain.errors import StoreError
from igra_store.models.dc_models import ClientModel
from igra_store.models.schema_models import ClientSchema
from igra_store.routers.errors import to_http_exception
from igra_store.services import store_db

client_router = APIRouter(prefix="/api/clients", tags=["Client"])


class ClientAPI:
    @staticmethod
    @client_router.get("/{client_id}", response_model=ClientSchema)
    async def get_client(client_id: UUID):
        try:
            return await store_db.read_client(client_id)
        except StoreError as e:
            raise to_http_exception(e)

    @staticmethod
    @client_router.post("", response_model=ClientSchema)
    async def create_client(client: ClientModel):
        """Create a client. The balance always starts at 0."""
        try:
            return await store_db.create_client(client)
        except StoreError as e:
            raise to_http_exception(e)


class CartAPI:
    @staticmethod
    @client_router.post("/{client_id}/cart/{game_id}")
    async def add_game_to_cart(client_id: UUID, game_id: UUID) -> Response:
        try:
            await store_db.add_to_cart(client_id, game_id)
        except StoreError as e:
            raise to_http_exception(e)
        return Response(status_code=status.HTTP_200_OK)

    @staticmethod
    @client_router.delete("/{client_id}/cart/{game_id}")
    async def remove_game_from_cart(client_id: UUID, game_id: UUID) -> Response:
        """Remove a game from the cart

        404 if the client or game does not exist, 400 if the game is not in the cart.
        """
        try:
            await store_db.remove_from_cart(client_id, game_id)
        except StoreError as e:
            raise to_http_exception(e)
        return Response(status_code=status.HTTP_200_OK)


class PurchaseAPI:
    @staticmethod
    @client_router.post("/{client_id}/purchase/{game_id}")
    async def purchase_game(client_id: UUID, game_id: UUID) -> Response:
        """Buy one game from the cart

        404 if the client or game does not exist, the game is not in the cart or
        no key is left. 400 if the balance is too low.
        """
        try:
            await store_db.purchase_game(client_id, game_id)
        except StoreError as e:
            raise to_http_exception(e)
        return Response(status_code=status.HTTP_200_OK)

    @staticmethod
    @client_router.post("/{client_id}/purchase-all")
    async def purchase_all_games(client_id: UUID) -> Response:
        try:
            await store_db.purchase_all(client_id)
        except StoreError as e:
            raise to_http_exception(e)
        return Response(status_code=status.HTTP_200_OK)

    @staticmethod
    @client_router.post("/{client_id}/add-balance")
    async def add_balance(
        client_id: UUID,
        amount: Decimal = Query(..., max_digits=12, decimal_places=2),
    ) -> Response:
        try:
            await store_db.add_balance(client_id, amount)
        except StoreError as e:
            raise to_http_exception(e)
        return Response(status_code=status.HTTP_200_OK)
