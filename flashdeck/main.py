from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from loguru import logger

from flashdeck.core.config import settings
from flashdeck.core.database import init_db
from flashdeck.core.errors import register_error_handlers
from flashdeck.core.logging import configure_logging
from flashdeck.routers import auth, cards, decks, locale


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting Flashdeck backend...")
    await init_db()
    yield
    logger.info("Shutting down Flashdeck backend...")


app = FastAPI(title="Flashdeck Backend", lifespan=lifespan)
register_error_handlers(app)

app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(decks.router, prefix="/decks", tags=["decks"])
app.include_router(cards.router, prefix="/cards", tags=["cards"])
app.include_router(locale.router, prefix="/locale", tags=["locale"])


@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok"}


def run() -> None:
    uvicorn.run("flashdeck.main:app", host="0.0.0.0", port=8000, reload=True)


if __name__ == "__main__":
    run()
