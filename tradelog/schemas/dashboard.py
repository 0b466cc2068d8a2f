"""Pydantic schemas for filter criteria, summary metrics and chart series."""

from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from tradelog.utils.constants import DEFAULT_RANGE_START


class FilterCriteria(BaseModel):
    """Inclusive entry-date range plus the selected symbols.

    An empty symbol set selects nothing. A range with start after end is
    allowed and matches no trades.
    """

    model_config = ConfigDict(frozen=True)

    start: date = DEFAULT_RANGE_START
    end: date = Field(default_factory=date.today)
    symbols: frozenset[str]

    @field_serializer("symbols")
    def _sorted_symbols(self, symbols: frozenset[str]) -> list[str]:
        return sorted(symbols)


class SummaryMetrics(BaseModel):
    total_wins: int = 0
    total_losses: int = 0
    total_trades: int = 0  # wins + losses, breakeven and missing P&L excluded
    win_rate: float = 0.0
    loss_rate: float = 0.0
    avg_win: float | None = None
    avg_loss: float | None = None
    win_multiple: float | None = None
    total_pl: float = 0.0  # every row, breakeven included
    trade_count: int = 0  # raw row count


class CumulativePoint(BaseModel):
    entry_date: date
    daily_pl: float
    cumulative_pl: float


class TradeSeriesPoint(BaseModel):
    index: int  # 1-based, chronological
    profit_loss: float | None
    symbol: str
    entry_date: date
    entry_time: time
    duration: float


class DashboardView(BaseModel):
    """Everything the dashboard renders for one filter selection."""

    criteria: FilterCriteria
    summary: SummaryMetrics
    cumulative: list[CumulativePoint]
    chronological: list[TradeSeriesPoint]
