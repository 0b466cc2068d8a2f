"""Trade detail table API."""

from fastapi import APIRouter, Depends, HTTPException, Query

from tradelog.api.deps import get_criteria, get_snapshot
from tradelog.models.trade import trade_records
from tradelog.schemas.dashboard import FilterCriteria
from tradelog.schemas.trade import TradeRead
from tradelog.services.trade_filter import filter_trades
from tradelog.services.trade_store import TradeSnapshot

router = APIRouter(prefix="/api/trades", tags=["trades"])

SORTABLE_COLUMNS = [name for name in TradeRead.model_fields if name != "extra"]

# Secondary keys so date sorts keep intraday order
_SORT_KEYS = {
    "entry_date": ["entry_date", "entry_time"],
    "exit_date": ["exit_date", "exit_time"],
}


@router.get("", response_model=list[TradeRead])
def list_trades(
    sort_by: str = "entry_date",
    descending: bool = False,
    limit: int = Query(default=500, ge=1),
    offset: int = Query(default=0, ge=0),
    criteria: FilterCriteria = Depends(get_criteria),
    snapshot: TradeSnapshot = Depends(get_snapshot),
):
    if sort_by not in SORTABLE_COLUMNS:
        raise HTTPException(
            status_code=422,
            detail=f"sort_by must be one of: {', '.join(SORTABLE_COLUMNS)}",
        )

    selected = filter_trades(snapshot.trades, criteria)
    ordered = selected.sort_values(
        _SORT_KEYS.get(sort_by, [sort_by]),
        ascending=not descending,
        kind="stable",
        na_position="last",
    )
    page = ordered.iloc[offset:offset + limit]
    return [TradeRead(**record) for record in trade_records(page)]
