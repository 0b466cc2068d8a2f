"""Trade model — column layout of the cleaned trade frame.

One row per closed trade. Frames built here are treated as read-only once
ingestion returns them; filtering always produces a new frame.
"""

import math
from datetime import date, time
from typing import Any

import pandas as pd

TRADE_COLUMNS = [
    "entry_date",    # datetime.date
    "entry_time",    # datetime.time
    "exit_date",     # datetime.date
    "exit_time",     # datetime.time
    "duration",      # float minutes, exit minus entry, may be negative
    "symbol",        # leading instrument code, e.g. "ESZ5"
    "account",       # masked, e.g. "ABC12345****"
    "profit_loss",   # float, NaN when the export value had no number in it
]


def empty_trade_frame(extra_columns: list[str] | None = None) -> pd.DataFrame:
    """Frame with the trade layout and no rows."""
    columns = TRADE_COLUMNS + list(extra_columns or [])
    frame = pd.DataFrame({col: pd.Series(dtype=object) for col in columns})
    frame["duration"] = frame["duration"].astype("float64")
    frame["profit_loss"] = frame["profit_loss"].astype("float64")
    return frame


def passthrough_columns(trades: pd.DataFrame) -> list[str]:
    """Columns outside the trade layout: export passthroughs and split extra date-times."""
    return [c for c in trades.columns if c not in TRADE_COLUMNS]


def _clean_value(value: Any) -> Any:
    if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
        return None
    return value


def _extra_value(value: Any) -> Any:
    # Split extra date-times (e.g. order_date, order_time) travel as ISO text
    if isinstance(value, (date, time)):
        return value.isoformat()
    return _clean_value(value)


def trade_records(trades: pd.DataFrame) -> list[dict[str, Any]]:
    """Rows as plain dicts with NaN replaced by None.

    Every column outside the trade layout is grouped under ``extra`` as text
    (or None) so callers can rely on a fixed set of top-level keys.
    """
    extras = passthrough_columns(trades)
    records = []
    for row in trades.to_dict("records"):
        record = {col: _clean_value(row[col]) for col in TRADE_COLUMNS}
        record["extra"] = {col: _extra_value(row[col]) for col in extras}
        records.append(record)
    return records
