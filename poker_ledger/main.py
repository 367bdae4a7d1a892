from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from poker_ledger.api.export import router as export_router
from poker_ledger.api.games import router as games_router
from poker_ledger.api.players import router as players_router
from poker_ledger.api.stats import router as stats_router
from poker_ledger.api.transactions import router as transactions_router
from poker_ledger.config import settings
from poker_ledger.storage.database import init_db

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    init_db()
    logger.info("Ledger store ready at %s", settings.database_url)
    yield


app = FastAPI(title="Poker Ledger API", lifespan=lifespan)
app.include_router(players_router)
app.include_router(games_router)
app.include_router(transactions_router)
app.include_router(stats_router)
app.include_router(export_router)


@app.get("/health", tags=["meta"])
def health() -> dict[str, str]:
    return {"status": "ok"}
