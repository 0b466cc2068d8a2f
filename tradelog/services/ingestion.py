"""Trade export ingestion.

Reads a Sierra Chart style trade activity export (tab-delimited, header row,
one trailing summary row written by the exporter) and returns the cleaned
trade frame described in ``tradelog.models.trade``.

Any malformed row or field fails the whole ingestion; rows are never skipped.
"""

import csv
import logging
import math
import re
from pathlib import Path

import numpy as np
import pandas as pd

from tradelog.errors import (
    DuplicateColumnError,
    IngestionError,
    MissingColumnError,
    ParseError,
    TradeFileNotFoundError,
)
from tradelog.models.trade import TRADE_COLUMNS, empty_trade_frame
from tradelog.utils.constants import (
    ACCOUNT,
    ACCOUNT_MASK,
    ACCOUNT_MASK_WIDTH,
    DATE_FORMAT,
    DATE_TIME_SUFFIX,
    ENTRY_DATE_TIME,
    EXIT_DATE_TIME,
    PROFIT_LOSS,
    PROFIT_LOSS_ALIASES,
    REQUIRED_COLUMNS,
    SYMBOL,
    TIME_FORMAT,
)

logger = logging.getLogger(__name__)

_CAMEL_ACRONYM = re.compile(r"(?<=[A-Z])(?=[A-Z][a-z])")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_NON_ALNUM = re.compile(r"[^0-9a-zA-Z]+")

_FRACTIONAL_SECONDS = r"\..*"
_DATE_TIME_PARTS = r"^(\S+)\s+(\S+)"
_SYMBOL_SUFFIX = r"\s+.*"

# Optional sign, then anything that is not a digit/sign/point (currency
# symbols, spaces, codes), then the number itself.
_NUMBER = re.compile(r"(?P<sign>[-+])?[^\d\-+.]*?(?P<number>\d+(?:\.\d*)?|\.\d+)")


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def normalize_column_name(name: str) -> str:
    """Canonical snake_case header name.

    "Entry DateTime" -> "entry_date_time", "Profit/Loss (C)" -> "profit_loss_c".
    """
    text = str(name).replace("%", "_percent_").replace("#", "_number_")
    text = _CAMEL_ACRONYM.sub("_", text)
    text = _CAMEL_BOUNDARY.sub("_", text)
    text = _NON_ALNUM.sub("_", text.lower()).strip("_")
    return text or "x"


def mask_account(account: str) -> str:
    """Replace the last four characters of an account id with the mask.

    Ids shorter than the mask are masked entirely.
    """
    if len(account) < ACCOUNT_MASK_WIDTH:
        return ACCOUNT_MASK
    return account[:-ACCOUNT_MASK_WIDTH] + ACCOUNT_MASK


def normalize_symbol(symbol: str) -> str:
    """Leading instrument code: "ESZ5 FUT" -> "ESZ5"."""
    return re.sub(_SYMBOL_SUFFIX, "", symbol.strip())


def parse_currency(text: str | None) -> float | None:
    """Parse a formatted amount such as "-$1,234.50" or "(12.00)".

    Returns None when the text holds no number.
    """
    if text is None or (isinstance(text, float) and math.isnan(text)):
        return None
    value = str(text).strip()
    accounting_negative = value.startswith("(") and value.endswith(")")
    match = _NUMBER.search(value.replace(",", ""))
    if match is None:
        return None
    number = float(match["number"])
    if not math.isfinite(number):
        return None
    if match["sign"] == "-" or accounting_negative:
        number = -number
    return number


def _first_line(mask: pd.Series) -> int:
    """File line number of the first flagged row (frames are indexed by line)."""
    return int(mask.index[np.flatnonzero(mask.to_numpy())[0]])


def _parse_with_format(values: pd.Series, fmt: str, column: str) -> pd.Series:
    parsed = pd.to_datetime(values, format=fmt, errors="coerce")
    bad = parsed.isna()
    if bad.any():
        line = _first_line(bad)
        value = values.loc[line]
        try:
            pd.to_datetime(value, format=fmt)
        except pd.errors.OutOfBoundsDatetime:
            reason = (
                f"is outside the supported date range "
                f"({pd.Timestamp.min.date()} to {pd.Timestamp.max.date()})"
            )
        except ValueError:
            reason = f"does not match format {fmt}"
        else:
            reason = f"could not be parsed with format {fmt}"
        raise ParseError(f"'{value}' {reason}", line=line, column=column)
    return parsed


# ---------------------------------------------------------------------------
# Pipeline steps
# ---------------------------------------------------------------------------

def _normalize_headers(headers: list[str]) -> list[str]:
    names = []
    seen: dict[str, str] = {}
    for header in headers:
        name = normalize_column_name(header)
        if name in seen:
            raise DuplicateColumnError(
                f"Columns '{seen[name]}' and '{header}' both normalize to '{name}'"
            )
        seen[name] = header
        names.append(name)
    return names


def _field_count(overflow: str | None) -> int:
    return 0 if pd.isna(overflow) else overflow.count("\t") + 1


def _read_export(path: Path) -> tuple[pd.DataFrame, pd.Series]:
    """Split the export into string cells.

    Returns the row frame (indexed by file line number, normalized column
    names, short rows padded with NaN) and the raw field count of each row.
    Field counts are validated later, once the trailer row is gone.
    """
    options = dict(
        sep="\t",
        header=None,
        dtype=object,
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
        encoding="utf-8-sig",
        engine="python",
    )
    try:
        headers = pd.read_csv(path, nrows=1, **options).iloc[0].tolist()
        width = len(headers)

        # The spare last column collects every field past the header width
        def _overflow(fields: list[str]) -> list[str]:
            return fields[:width] + ["\t".join(fields[width:])]

        raw = pd.read_csv(
            path,
            names=list(range(width + 1)),
            skip_blank_lines=False,
            on_bad_lines=_overflow,
            **options,
        )
    except pd.errors.EmptyDataError as e:
        raise ParseError("Trade export is empty, a header row is required") from e
    except UnicodeDecodeError as e:
        raise ParseError(f"Trade export is not valid UTF-8: {e}") from e

    # Index by file line; blank lines read as a lone empty (or NaN) field
    raw.index = raw.index + 1
    blank = raw.iloc[:, 1:].isna().all(axis=1) & raw[0].fillna("").str.strip().eq("")
    raw = raw[~blank]

    names = _normalize_headers([h.strip() for h in headers])
    rows = raw.iloc[1:]
    counts = rows.iloc[:, :width].notna().sum(axis=1) + rows[width].map(_field_count)
    frame = rows.iloc[:, :width].astype(object)
    frame.columns = names
    for col in frame.columns:
        frame[col] = frame[col].str.strip()
    return frame, counts


def _resolve_profit_column(frame: pd.DataFrame) -> str:
    profit_column = next((c for c in PROFIT_LOSS_ALIASES if c in frame.columns), None)
    missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
    if profit_column is None:
        missing.append(PROFIT_LOSS)
    if missing:
        raise MissingColumnError(f"Trade export is missing required columns: {', '.join(missing)}")
    return profit_column


def _split_names(date_time_column: str) -> tuple[str, str]:
    prefix = date_time_column[: -len(DATE_TIME_SUFFIX)]
    return f"{prefix}date", f"{prefix}time"


def _shadowed_columns(frame: pd.DataFrame, date_time_columns: list[str]) -> set[str]:
    """Export columns replaced by a derived field of the same name."""
    derived = ["duration"]
    for col in date_time_columns:
        derived.extend(_split_names(col))
    shadowed = {name for name in derived if name in frame.columns}
    if shadowed:
        logger.warning(f"Export columns replaced by derived fields: {', '.join(sorted(shadowed))}")
    return shadowed


def _split_date_time(frame: pd.DataFrame, column: str) -> tuple[pd.Series, pd.Series]:
    """Split "<date> <time>" into parsed day and time-of-day timestamps."""
    parts = frame[column].str.extract(_DATE_TIME_PARTS)
    bad = parts[0].isna() | parts[1].isna()
    if bad.any():
        line = _first_line(bad)
        raise ParseError(
            f"'{frame[column].loc[line]}' is not '<date> <time>'",
            line=line,
            column=column,
        )
    days = _parse_with_format(parts[0], DATE_FORMAT, column)
    clock = _parse_with_format(parts[1], TIME_FORMAT, column)
    return days, clock


def _clean(frame: pd.DataFrame, counts: pd.Series) -> pd.DataFrame:
    profit_column = _resolve_profit_column(frame)
    date_time_columns = [c for c in frame.columns if c.endswith(DATE_TIME_SUFFIX)]
    shadowed = _shadowed_columns(frame, date_time_columns)

    # Sub-second precision is dropped before anything else reads the stamps
    for col in date_time_columns:
        frame[col] = frame[col].str.replace(_FRACTIONAL_SECONDS, "", regex=True)

    # Exporter always appends a summary row
    frame = frame.iloc[:-1]

    consumed = set(date_time_columns) | shadowed | {SYMBOL, ACCOUNT, profit_column}
    passthrough = [c for c in frame.columns if c not in consumed]
    split_extras = [
        name
        for col in date_time_columns
        if col not in (ENTRY_DATE_TIME, EXIT_DATE_TIME)
        for name in _split_names(col)
    ]

    if frame.empty:
        return empty_trade_frame(split_extras + passthrough)

    misshapen = counts.loc[frame.index] != len(frame.columns)
    if misshapen.any():
        line = _first_line(misshapen)
        raise ParseError(
            f"Expected {len(frame.columns)} tab-separated fields, found {counts.loc[line]}",
            line=line,
        )

    cleaned = pd.DataFrame(index=frame.index)
    stamps: dict[str, pd.Series] = {}
    for col in date_time_columns:
        days, clock = _split_date_time(frame, col)
        date_name, time_name = _split_names(col)
        cleaned[date_name] = days.dt.date
        cleaned[time_name] = clock.dt.time
        stamps[col] = days + (clock - clock.dt.normalize())

    elapsed = stamps[EXIT_DATE_TIME] - stamps[ENTRY_DATE_TIME]
    cleaned["duration"] = elapsed.dt.total_seconds() / 60.0
    cleaned["symbol"] = frame[SYMBOL].map(normalize_symbol)
    cleaned["account"] = frame[ACCOUNT].map(mask_account)
    cleaned["profit_loss"] = frame[profit_column].map(parse_currency).astype("float64")
    for col in passthrough:
        cleaned[col] = frame[col]

    return cleaned[TRADE_COLUMNS + split_extras + passthrough].reset_index(drop=True)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def ingest(path: str | Path) -> pd.DataFrame:
    """Read and clean a trade export.

    Args:
        path: Tab-delimited export with a header row and a trailing summary row.

    Returns:
        Trade frame in file order, one row per trade.

    Raises:
        TradeFileNotFoundError: ``path`` is not a file.
        ParseError: a row or date/time field is malformed.
        DuplicateColumnError, MissingColumnError: the header is unusable.
    """
    path = Path(path)
    if not path.is_file():
        logger.error(f"Trade export not found: {path}")
        raise TradeFileNotFoundError(f"Trade export not found: {path}")

    try:
        trades = _clean(*_read_export(path))
    except IngestionError as e:
        logger.error(f"Failed to ingest {path}: {e}")
        raise

    missing_pl = int(trades["profit_loss"].isna().sum())
    if missing_pl:
        logger.warning(f"{missing_pl} trades in {path} have no numeric profit/loss")
    logger.info(
        f"Ingested {len(trades)} trades from {path} "
        f"({trades['symbol'].nunique()} symbols)"
    )
    return trades
