from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from igra_store.load_secrets import database_url, sql_echo

if database_url.startswith("sqlite"):
    # aiosqlite connections are bound to the event loop that opened them
    engine = create_async_engine(database_url, echo=sql_echo, poolclass=NullPool)
else:
    engine = create_async_engine(
        database_url, echo=sql_echo, pool_size=20, max_overflow=20
    )
