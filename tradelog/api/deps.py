"""Shared API dependencies."""

from datetime import date

from fastapi import Depends, HTTPException, Query, status

from tradelog.errors import DatasetNotLoadedError
from tradelog.schemas.dashboard import FilterCriteria
from tradelog.services.trade_store import TradeSnapshot, TradeStore, get_store
from tradelog.utils.constants import DEFAULT_RANGE_START


def get_snapshot(store: TradeStore = Depends(get_store)) -> TradeSnapshot:
    """Current trade snapshot, pinned for the whole request."""
    try:
        return store.snapshot()
    except DatasetNotLoadedError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def get_criteria(
    start: date | None = None,
    end: date | None = None,
    symbols: list[str] | None = Query(default=None),
    snapshot: TradeSnapshot = Depends(get_snapshot),
) -> FilterCriteria:
    """Filter criteria from query params.

    Omitting ``symbols`` selects every loaded symbol; ``?symbols=`` selects none.
    """
    selected = snapshot.symbols if symbols is None else [s for s in symbols if s]
    return FilterCriteria(
        start=start or DEFAULT_RANGE_START,
        end=end or date.today(),
        symbols=frozenset(selected),
    )
