"""Shared constants for the trade export format."""

from datetime import date

# Replaces the last four characters of every account identifier
ACCOUNT_MASK = "****"
ACCOUNT_MASK_WIDTH = 4

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"

# Header suffix (after normalization) of combined date/time fields
DATE_TIME_SUFFIX = "date_time"

ENTRY_DATE_TIME = "entry_date_time"
EXIT_DATE_TIME = "exit_date_time"
SYMBOL = "symbol"
ACCOUNT = "account"
PROFIT_LOSS = "profit_loss"

# Sierra Chart exports "Profit/Loss (C)", which normalizes to profit_loss_c
PROFIT_LOSS_ALIASES = ("profit_loss", "profit_loss_c")

REQUIRED_COLUMNS = [ENTRY_DATE_TIME, EXIT_DATE_TIME, SYMBOL, ACCOUNT]

# Lower bound used when a date range has no explicit start
DEFAULT_RANGE_START = date(1900, 1, 1)
