"""Dashboard API — summary stats, cumulative P&L and per-trade series."""

from fastapi import APIRouter, Depends

from tradelog.api.deps import get_criteria, get_snapshot
from tradelog.schemas.dashboard import (
    CumulativePoint,
    DashboardView,
    FilterCriteria,
    SummaryMetrics,
    TradeSeriesPoint,
)
from tradelog.services import metrics
from tradelog.services.trade_filter import filter_trades
from tradelog.services.trade_store import TradeSnapshot

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardView)
def dashboard_view(
    criteria: FilterCriteria = Depends(get_criteria),
    snapshot: TradeSnapshot = Depends(get_snapshot),
):
    """Summary and both series for one filter selection."""
    return metrics.build_dashboard(snapshot.trades, criteria)


@router.get("/summary", response_model=SummaryMetrics)
def dashboard_summary(
    criteria: FilterCriteria = Depends(get_criteria),
    snapshot: TradeSnapshot = Depends(get_snapshot),
):
    return metrics.summarize(filter_trades(snapshot.trades, criteria))


@router.get("/cumulative", response_model=list[CumulativePoint])
def cumulative_pl(
    criteria: FilterCriteria = Depends(get_criteria),
    snapshot: TradeSnapshot = Depends(get_snapshot),
):
    """Running P&L by entry date."""
    return metrics.cumulative_series(filter_trades(snapshot.trades, criteria))


@router.get("/chronological", response_model=list[TradeSeriesPoint])
def chronological_pl(
    criteria: FilterCriteria = Depends(get_criteria),
    snapshot: TradeSnapshot = Depends(get_snapshot),
):
    """Per-trade P&L in entry order."""
    return metrics.chronological_series(filter_trades(snapshot.trades, criteria))


@router.get("/symbols", response_model=list[str])
def symbol_choices(snapshot: TradeSnapshot = Depends(get_snapshot)):
    """Distinct symbols of the full loaded set (initial symbol selection)."""
    return snapshot.symbols
