"""Tests for filtering, summary metrics and the P&L series."""

from datetime import date, time

import pytest

from tradelog.models.trade import empty_trade_frame
from tradelog.schemas.dashboard import FilterCriteria
from tradelog.services.metrics import (
    build_dashboard,
    chronological_series,
    cumulative_series,
    summarize,
)
from tradelog.services.trade_filter import filter_trades

D1, D2, D3 = date(2024, 3, 4), date(2024, 3, 5), date(2024, 3, 6)


# ---------------------------------------------------------------------------
# 1. Filter
# ---------------------------------------------------------------------------

class TestFilterTrades:
    def _trades(self, make_trades):
        return make_trades(
            [10, 20, 30, 40, 50],
            entry_dates=[D1, D2, D3, D2, D1],
            symbols=["ESH4", "NQH4", "ESH4", "ESH4", "CLJ4"],
        )

    def test_range_is_inclusive(self, make_trades):
        trades = self._trades(make_trades)
        criteria = FilterCriteria(start=D2, end=D3, symbols={"ESH4", "NQH4", "CLJ4"})
        result = filter_trades(trades, criteria)
        assert result["profit_loss"].tolist() == [20, 30, 40]
        assert all(D2 <= d <= D3 for d in result["entry_date"])

    def test_symbol_selection(self, make_trades):
        trades = self._trades(make_trades)
        criteria = FilterCriteria(start=D1, end=D3, symbols={"ESH4"})
        result = filter_trades(trades, criteria)
        assert result["profit_loss"].tolist() == [10, 30, 40]
        assert set(result["symbol"]) == {"ESH4"}

    def test_preserves_input_order(self, make_trades):
        trades = self._trades(make_trades)
        criteria = FilterCriteria(start=D1, end=D3, symbols={"ESH4", "CLJ4"})
        result = filter_trades(trades, criteria)
        assert result["profit_loss"].tolist() == [10, 30, 40, 50]

    def test_empty_symbol_set_selects_nothing(self, make_trades):
        trades = self._trades(make_trades)
        result = filter_trades(trades, FilterCriteria(start=D1, end=D3, symbols=set()))
        assert result.empty
        assert list(result.columns) == list(trades.columns)

    def test_start_after_end_selects_nothing(self, make_trades):
        trades = self._trades(make_trades)
        result = filter_trades(trades, FilterCriteria(start=D3, end=D1, symbols={"ESH4"}))
        assert result.empty

    def test_input_is_not_modified(self, make_trades):
        trades = self._trades(make_trades)
        before = trades.copy()
        filter_trades(trades, FilterCriteria(start=D2, end=D2, symbols={"NQH4"}))
        assert trades.equals(before)

    def test_default_range_covers_everything(self, make_trades):
        trades = self._trades(make_trades)
        criteria = FilterCriteria(symbols={"ESH4", "NQH4", "CLJ4"})
        assert criteria.start == date(1900, 1, 1)
        assert len(filter_trades(trades, criteria)) == 5

    def test_criteria_dump_symbols_sorted(self):
        criteria = FilterCriteria(symbols={"NQH4", "CLJ4", "ESH4"})
        assert criteria.model_dump(mode="json")["symbols"] == ["CLJ4", "ESH4", "NQH4"]


# ---------------------------------------------------------------------------
# 2. Summary
# ---------------------------------------------------------------------------

class TestSummarize:
    def test_reference_example(self, make_trades):
        metrics = summarize(make_trades([100, -50, 200, -75, 0]))
        assert metrics.total_wins == 2
        assert metrics.total_losses == 2
        assert metrics.total_trades == 4
        assert metrics.win_rate == 0.5
        assert metrics.loss_rate == 0.5
        assert metrics.avg_win == pytest.approx(150)
        assert metrics.avg_loss == pytest.approx(-62.5)
        assert metrics.win_multiple == pytest.approx(2.4)
        assert metrics.total_pl == pytest.approx(175)
        assert metrics.trade_count == 5

    def test_empty_input(self):
        metrics = summarize(empty_trade_frame())
        assert metrics.win_rate == 0
        assert metrics.loss_rate == 0
        assert metrics.avg_win is None
        assert metrics.avg_loss is None
        assert metrics.win_multiple is None
        assert metrics.total_pl == 0
        assert metrics.trade_count == 0
        assert metrics.total_trades == 0

    def test_missing_pnl_counts_only_as_a_row(self, make_trades):
        metrics = summarize(make_trades([100, None]))
        assert metrics.total_wins == 1
        assert metrics.total_trades == 1
        assert metrics.win_rate == 1.0
        assert metrics.total_pl == 100
        assert metrics.trade_count == 2

    def test_no_losers_leaves_loss_side_missing(self, make_trades):
        metrics = summarize(make_trades([10, 30]))
        assert metrics.avg_win == pytest.approx(20)
        assert metrics.avg_loss is None
        assert metrics.win_multiple is None

    def test_no_winners_leaves_win_side_missing(self, make_trades):
        metrics = summarize(make_trades([-10, 0]))
        assert metrics.avg_win is None
        assert metrics.avg_loss == pytest.approx(-10)
        assert metrics.win_rate == 0.0
        assert metrics.loss_rate == 1.0
        assert metrics.win_multiple is None

    def test_only_breakeven_trades(self, make_trades):
        metrics = summarize(make_trades([0, 0, 0]))
        assert metrics.total_trades == 0
        assert metrics.win_rate == 0.0
        assert metrics.trade_count == 3
        assert metrics.total_pl == 0


# ---------------------------------------------------------------------------
# 3. Series
# ---------------------------------------------------------------------------

class TestCumulativeSeries:
    def test_running_total_by_day(self, make_trades):
        trades = make_trades([200, 100, -50], entry_dates=[D3, D1, D2])
        points = cumulative_series(trades)
        assert [p.entry_date for p in points] == [D1, D2, D3]
        assert [p.cumulative_pl for p in points] == [100, 50, 250]
        assert [p.daily_pl for p in points] == [100, -50, 200]

    def test_same_day_trades_are_summed(self, make_trades):
        trades = make_trades([100, -30, 5, None], entry_dates=[D1, D1, D3, D3])
        points = cumulative_series(trades)
        # No point for D2: days without trades are not filled in
        assert [p.entry_date for p in points] == [D1, D3]
        assert [p.cumulative_pl for p in points] == [70, 75]

    def test_empty(self):
        assert cumulative_series(empty_trade_frame()) == []


class TestChronologicalSeries:
    def test_sorted_by_entry_with_one_based_index(self, make_trades):
        trades = make_trades(
            [1, 2, 3],
            entry_dates=[D2, D1, D1],
            entry_times=[time(9, 0), time(14, 0), time(10, 0)],
            symbols=["A", "B", "C"],
        )
        points = chronological_series(trades)
        assert [p.index for p in points] == [1, 2, 3]
        assert [p.symbol for p in points] == ["C", "B", "A"]
        assert [p.profit_loss for p in points] == [3, 2, 1]

    def test_ties_keep_ingestion_order(self, make_trades):
        trades = make_trades(
            [10, 20, 30],
            entry_dates=[D1, D1, D1],
            entry_times=[time(10, 0), time(9, 0), time(10, 0)],
            symbols=["first", "early", "second"],
        )
        points = chronological_series(trades)
        assert [p.symbol for p in points] == ["early", "first", "second"]

    def test_missing_pnl_is_none(self, make_trades):
        points = chronological_series(make_trades([None]))
        assert points[0].profit_loss is None

    def test_empty(self):
        assert chronological_series(empty_trade_frame()) == []


def test_build_dashboard_runs_full_pass(make_trades):
    trades = make_trades(
        [100, -50, 200, -75, 0, 999],
        entry_dates=[D1, D1, D2, D2, D3, D3],
        symbols=["ESH4"] * 5 + ["NQH4"],
    )
    view = build_dashboard(trades, FilterCriteria(start=D1, end=D3, symbols={"ESH4"}))
    assert view.summary.trade_count == 5
    assert view.summary.total_pl == pytest.approx(175)
    assert [p.cumulative_pl for p in view.cumulative] == [50, 175, 175]
    assert len(view.chronological) == 5
