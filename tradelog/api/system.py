"""System API — health check, loaded dataset info, re-ingestion."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from tradelog.api.deps import get_snapshot
from tradelog.config import settings
from tradelog.errors import IngestionError
from tradelog.schemas.trade import DatasetInfo
from tradelog.services.trade_store import TradeSnapshot, TradeStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/system", tags=["system"])


def _dataset_info(snapshot: TradeSnapshot) -> DatasetInfo:
    entry_dates = snapshot.trades["entry_date"]
    return DatasetInfo(
        source=str(snapshot.source),
        loaded_at=snapshot.loaded_at,
        trade_count=snapshot.trade_count,
        symbols=snapshot.symbols,
        first_entry_date=entry_dates.min() if not entry_dates.empty else None,
        last_entry_date=entry_dates.max() if not entry_dates.empty else None,
    )


@router.get("/health")
def health_check():
    return {"status": "ok"}


@router.get("/dataset", response_model=DatasetInfo)
def dataset_info(snapshot: TradeSnapshot = Depends(get_snapshot)):
    """Where the current trades came from and what they cover."""
    return _dataset_info(snapshot)


@router.post("/reload", response_model=DatasetInfo)
def reload_trades(store: TradeStore = Depends(get_store)):
    """Re-ingest the configured export. The previous trades stay on failure."""
    try:
        snapshot = store.load(settings.trades_file)
    except IngestionError as e:
        logger.warning(f"Reload rejected, keeping previous trades: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    return _dataset_info(snapshot)
