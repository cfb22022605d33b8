from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from igra_store.create_engine import engine
from igra_store.models.schemas import Base

# Centralized session factory to avoid creating it in router modules.
Session = async_sessionmaker(
    autocommit=False,
    class_=AsyncSession,
    autoflush=True,
    expire_on_commit=False,
    bind=engine,
)


async def create_tables() -> None:
    """Create every table if not exists"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
