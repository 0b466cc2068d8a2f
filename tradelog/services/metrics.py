"""Stateless performance metrics over a (filtered) trade frame.

All functions are pure computation — no I/O, no shared state. Ratios that
have no meaningful value (no winners, no losers, zero denominators) come back
as None instead of NaN or inf.
"""

import math

import numpy as np
import pandas as pd

from tradelog.schemas.dashboard import (
    CumulativePoint,
    DashboardView,
    FilterCriteria,
    SummaryMetrics,
    TradeSeriesPoint,
)
from tradelog.services.trade_filter import filter_trades


def _mean_or_none(values: pd.Series) -> float | None:
    if values.empty:
        return None
    return float(values.mean())


def _ratio_or_none(numerator: float | None, denominator: float | None) -> float | None:
    if numerator is None or denominator is None or denominator == 0:
        return None
    ratio = numerator / denominator
    return ratio if math.isfinite(ratio) else None


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def summarize(trades: pd.DataFrame) -> SummaryMetrics:
    """Win/loss statistics for a trade frame.

    Breakeven and missing P&L rows are left out of the win/loss counts and
    rates but still count toward total_pl and trade_count.
    """
    pnl = trades["profit_loss"]
    winners = pnl[pnl > 0]
    losers = pnl[pnl < 0]

    total_wins = int(len(winners))
    total_losses = int(len(losers))
    total_trades = total_wins + total_losses

    avg_win = _mean_or_none(winners)
    avg_loss = _mean_or_none(losers)
    multiple = _ratio_or_none(avg_win, avg_loss)

    # NaN (missing P&L) is skipped; an empty frame sums to 0
    total_pl = float(pnl.sum())

    return SummaryMetrics(
        total_wins=total_wins,
        total_losses=total_losses,
        total_trades=total_trades,
        win_rate=total_wins / total_trades if total_trades > 0 else 0.0,
        loss_rate=total_losses / total_trades if total_trades > 0 else 0.0,
        avg_win=avg_win,
        avg_loss=avg_loss,
        win_multiple=abs(multiple) if multiple is not None else None,
        total_pl=total_pl,
        trade_count=int(len(trades)),
    )


# ---------------------------------------------------------------------------
# Series
# ---------------------------------------------------------------------------

def cumulative_series(trades: pd.DataFrame) -> list[CumulativePoint]:
    """Running P&L per entry date, ascending. Days without trades are skipped."""
    if trades.empty:
        return []
    daily = trades.groupby("entry_date", sort=True)["profit_loss"].sum()
    running = daily.cumsum()
    return [
        CumulativePoint(entry_date=day, daily_pl=float(pnl), cumulative_pl=float(total))
        for day, pnl, total in zip(daily.index, daily, running)
    ]


def _entry_timestamps(trades: pd.DataFrame) -> pd.Series:
    return pd.to_datetime(
        trades["entry_date"].astype(str) + " " + trades["entry_time"].astype(str),
        format="%Y-%m-%d %H:%M:%S",
    )


def chronological_series(trades: pd.DataFrame) -> list[TradeSeriesPoint]:
    """Trades ordered by entry date and time with a 1-based sequence number.

    Trades entered at the same second keep their ingestion order.
    """
    if trades.empty:
        return []
    order = np.argsort(_entry_timestamps(trades).to_numpy(), kind="stable")
    ordered = trades.iloc[order]
    points = []
    for seq, row in enumerate(ordered.itertuples(index=False), start=1):
        pnl = row.profit_loss
        points.append(
            TradeSeriesPoint(
                index=seq,
                profit_loss=None if pd.isna(pnl) else float(pnl),
                symbol=row.symbol,
                entry_date=row.entry_date,
                entry_time=row.entry_time,
                duration=float(row.duration),
            )
        )
    return points


def build_dashboard(trades: pd.DataFrame, criteria: FilterCriteria) -> DashboardView:
    """One full recompute pass: filter, summarize, derive both series."""
    selected = filter_trades(trades, criteria)
    return DashboardView(
        criteria=criteria,
        summary=summarize(selected),
        cumulative=cumulative_series(selected),
        chronological=chronological_series(selected),
    )
