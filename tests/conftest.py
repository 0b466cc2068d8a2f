"""Shared fixtures: sample exports on disk and in-memory trade frames."""

from datetime import date, time
from pathlib import Path

import pandas as pd
import pytest

HEADER = [
    "Symbol",
    "Trade Type",
    "Entry DateTime",
    "Exit DateTime",
    "Entry Price",
    "Exit Price",
    "Trade Quantity",
    "Profit/Loss (C)",
    "Account",
]

SAMPLE_ROWS = [
    ["ESH4 FUT CME", "Long", "2024-03-04 09:31:12.418", "2024-03-04 09:47:40.002", "5112.25", "5114.25", "1", "$100.00", "SIM1234567"],
    ["NQH4 FUT CME", "Short", "2024-03-04 10:02:05.110", "2024-03-04 10:20:35.900", "18210.50", "18213.00", "1", "-$50.00", "SIM1234567"],
    ["ESH4 FUT CME", "Long", "2024-03-05 09:35:00.000", "2024-03-05 10:05:30.500", "5120.00", "5124.00", "1", "$200.00", "SIM1234567"],
    ["ESH4 FUT CME", "Short", "2024-03-05 13:12:44.250", "2024-03-05 13:20:14.250", "5131.50", "5133.00", "1", "-$75.00", "SIM1234567"],
    ["CLJ4 FUT NYM", "Long", "2024-03-06 08:45:10.000", "2024-03-06 09:02:10.000", "78.12", "78.12", "1", "$0.00", "SIM1234567"],
    ["NQH4 FUT CME", "Long", "2024-03-07 11:15:00.731", "2024-03-07 11:58:20.731", "18302.25", "18318.75", "2", "$1,320.00", "SIM1234567"],
]

TRAILER = ["Totals", "", "", "", "", "", "6", "$1,495.00"]


def _write(path: Path, header: list[str], rows: list[list[str]], trailer: list[str] | None, newline: str) -> Path:
    lines = ["\t".join(header)] + ["\t".join(r) for r in rows]
    if trailer is not None:
        lines.append("\t".join(trailer))
    path.write_text(newline.join(lines) + newline, encoding="utf-8")
    return path


@pytest.fixture
def write_export(tmp_path):
    """Factory writing a tab-delimited export; the trailer row is appended by default."""
    def _factory(rows=None, header=None, trailer=TRAILER, name="TradesList.txt", newline="\n"):
        return _write(
            tmp_path / name,
            HEADER if header is None else header,
            SAMPLE_ROWS if rows is None else rows,
            trailer,
            newline,
        )
    return _factory


@pytest.fixture
def sample_export(write_export) -> Path:
    return write_export()


@pytest.fixture
def make_trades():
    """Factory building a cleaned trade frame directly, bypassing ingestion."""
    def _factory(pnls, entry_dates=None, symbols=None, entry_times=None):
        n = len(pnls)
        entry_dates = entry_dates or [date(2024, 3, 4)] * n
        entry_times = entry_times or [time(9, 30)] * n
        return pd.DataFrame({
            "entry_date": entry_dates,
            "entry_time": entry_times,
            "exit_date": entry_dates,
            "exit_time": entry_times,
            "duration": [0.0] * n,
            "symbol": symbols or ["ESH4"] * n,
            "account": ["SIM123****"] * n,
            "profit_loss": pd.Series(pnls, dtype="float64"),
        })
    return _factory
