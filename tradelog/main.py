"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tradelog.api import dashboard, system, trades
from tradelog.config import settings
from tradelog.errors import IngestionError
from tradelog.services.trade_store import store
from tradelog.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the trade export before serving; no dashboard without data."""
    setup_logging()
    try:
        store.load(settings.trades_file)
    except IngestionError:
        logger.critical(f"Cannot start without trade data from {settings.trades_file}")
        raise
    yield


app = FastAPI(
    title="Trade Log Dashboard",
    description="Trading performance analytics over broker trade activity exports",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Mount routers
app.include_router(dashboard.router)
app.include_router(trades.router)
app.include_router(system.router)
