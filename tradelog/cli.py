"""CLI tool for checking exports and printing summaries.

Usage:
    python -m tradelog.cli check <path>
    python -m tradelog.cli summary <path> [from_date] [to_date]
"""

import sys
from datetime import date

from tradelog.errors import IngestionError
from tradelog.schemas.dashboard import FilterCriteria, SummaryMetrics
from tradelog.services.ingestion import ingest
from tradelog.services.metrics import summarize
from tradelog.services.trade_filter import filter_trades
from tradelog.utils.constants import DEFAULT_RANGE_START
from tradelog.utils.logging import setup_logging


def _load(path: str):
    try:
        return ingest(path)
    except IngestionError as e:
        print(f"Could not read {path}: {e}")
        sys.exit(1)


def _parse_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        print(f"Invalid date '{text}', expected YYYY-MM-DD.")
        sys.exit(1)


def _money(value: float | None) -> str:
    return "n/a" if value is None else f"{value:,.2f}"


def format_summary(summary: SummaryMetrics) -> str:
    """Human-readable summary block. Rounding happens here only."""
    multiple = "n/a" if summary.win_multiple is None else f"{summary.win_multiple:.2f}"
    lines = [
        f"Trades:        {summary.trade_count} ({summary.total_trades} wins/losses)",
        f"Wins / Losses: {summary.total_wins} / {summary.total_losses}",
        f"Win rate:      {summary.win_rate * 100:.1f}%",
        f"Loss rate:     {summary.loss_rate * 100:.1f}%",
        f"Average win:   {_money(summary.avg_win)}",
        f"Average loss:  {_money(summary.avg_loss)}",
        f"Win multiple:  {multiple}",
        f"Total P&L:     {_money(summary.total_pl)}",
    ]
    return "\n".join(lines)


def check(path: str):
    """Ingest an export and report what it contains."""
    trades = _load(path)
    symbols = sorted(trades["symbol"].unique().tolist())
    print(f"{len(trades)} trades")
    print(f"Symbols: {', '.join(symbols) if symbols else '-'}")
    if len(trades):
        print(f"Entry dates: {trades['entry_date'].min()} .. {trades['entry_date'].max()}")


def summary(path: str, from_date: str | None = None, to_date: str | None = None):
    """Print summary metrics for every symbol within a date range."""
    trades = _load(path)
    criteria = FilterCriteria(
        start=_parse_date(from_date) if from_date else DEFAULT_RANGE_START,
        end=_parse_date(to_date) if to_date else date.today(),
        symbols=frozenset(trades["symbol"].unique().tolist()),
    )
    print(f"{criteria.start} .. {criteria.end}")
    print(format_summary(summarize(filter_trades(trades, criteria))))


def main():
    if len(sys.argv) < 3:
        print("Usage: python -m tradelog.cli <command> <path> [from_date] [to_date]")
        print("Commands: check, summary")
        sys.exit(1)

    setup_logging("WARNING")
    command, path, *rest = sys.argv[1:]
    if command == "check":
        check(path)
    elif command == "summary":
        summary(path, *rest[:2])
    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
