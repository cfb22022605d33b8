import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from igra_store.db import create_tables
from igra_store.load_secrets import log_level
from igra_store.routers import client, game

logging.basicConfig(level=log_level)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app):
    """Create the store tables.
    This function is called to start the server.
    """
    await create_tables()
    logging.info("Start Server")
    try:
        yield
    finally:
        logging.info("Stop Server")


app = FastAPI(lifespan=lifespan, title="Igra Store")
app.include_router(client.client_router)
app.include_router(game.game_router)


# if __name__ == "__main__":
#     uvicorn.run("igra_store.main:app", host="0.0.0.0", port=8080, reload=True)
