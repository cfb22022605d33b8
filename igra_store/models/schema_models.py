from pydantic import BaseModel
from typing import List
from uuid import UUID
from decimal import Decimal
from datetime import datetime


class GameSchema(BaseModel):
    game_id: UUID
    name: str
    cost: Decimal
    keys: List[str]
    sold: bool = False

    class Config:
        from_attributes = True


class ReceiptSchema(BaseModel):
    receipt_id: UUID
    client_id: UUID
    game_id: UUID
    name: str
    cost: Decimal
    license_key: str
    purchased_at: datetime
    sold: bool = True

    class Config:
        from_attributes = True


class ClientSchema(BaseModel):
    client_id: UUID
    login: str
    nickname: str
    balance: Decimal
    cart: List[GameSchema] = []
    purchased: List[ReceiptSchema] = []

    class Config:
        from_attributes = True
