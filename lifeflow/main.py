from __future__ import annotations
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import FastAPI
from loguru import logger

from .config import settings
from .db import init_db
from .api import auth as auth_api
from .api import views as views_api


def setup_logging() -> None:
    logger.remove()
    logger.add(sys.stdout, level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # --- startup ---
    setup_logging()
    await init_db()
    logger.info("LifeFlow started ({})", settings.ENV)

    yield

    # --- shutdown ---
    logger.info("LifeFlow shut down")


app = FastAPI(title="LifeFlow", lifespan=lifespan)
app.include_router(auth_api.router)
app.include_router(views_api.router)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "env": settings.ENV,
    }
