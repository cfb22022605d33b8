from sqlalchemy import ForeignKey
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import Integer, String, Uuid, Numeric, DateTime
from uuid6 import uuid7
from datetime import datetime


class Base(DeclarativeBase):
    pass


class Client(Base):
    __tablename__ = "client"
    client_id = Column(Uuid, primary_key=True, default=uuid7)
    login = Column(String, nullable=False, unique=True)
    nickname = Column(String, nullable=False, unique=True)
    hash_password = Column(String, nullable=False)
    salt = Column(String, nullable=False)
    balance = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.now)


class Game(Base):
    """Catalog entry. Sold copies live in the receipt table."""

    __tablename__ = "game"
    game_id = Column(Uuid, primary_key=True, default=uuid7)
    name = Column(String, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.now)


class GameKey(Base):
    __tablename__ = "game_key"
    key_id = Column(Integer, primary_key=True, autoincrement=True)
    game_id = Column(Uuid, ForeignKey("game.game_id"), nullable=False, index=True)
    license_key = Column(String, nullable=False, unique=True)
    position = Column(Integer, nullable=False)


class Receipt(Base):
    __tablename__ = "receipt"
    receipt_id = Column(Uuid, primary_key=True, default=uuid7)
    client_id = Column(Uuid, ForeignKey("client.client_id"), nullable=False, index=True)
    game_id = Column(Uuid, ForeignKey("game.game_id"), nullable=False)
    name = Column(String, nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    license_key = Column(String, nullable=False, unique=True)
    purchased_at = Column(DateTime, default=datetime.now)


class ClientGame(Base):
    """Status of one catalog game for one client. No row means absent."""

    __tablename__ = "client_game"
    client_id = Column(Uuid, ForeignKey("client.client_id"), primary_key=True)
    game_id = Column(Uuid, ForeignKey("game.game_id"), primary_key=True)
    status = Column(String, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)
