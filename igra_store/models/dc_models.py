from pydantic import BaseModel, condecimal
from enum import Enum
from decimal import Decimal
from typing import Optional, List

# Costs and balances are kept to the cent; more digits are rejected, not rounded.
Money = condecimal(max_digits=12, decimal_places=2)


class CartStatusModel(str, Enum):
    in_cart = "in_cart"  # selected, not yet bought
    purchased = "purchased"  # at least one copy bought and not back in the cart


class ClientModel(BaseModel):
    login: str
    password: str
    nickname: str
    balance: Optional[Decimal] = None  # ignored, a new client always starts at 0


class GameModel(BaseModel):
    """Catalog game sent by the caller.

    Every field is optional here so that missing ones are reported as a
    400 by the game store instead of a generic 422.
    """
    name: Optional[str] = None
    cost: Optional[Money] = None
    keys: Optional[List[str]] = None
    sold: Optional[bool] = None  # ignored, catalog games are never sold
