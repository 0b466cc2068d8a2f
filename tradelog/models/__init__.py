"""Trade frame models."""

from tradelog.models.trade import TRADE_COLUMNS, empty_trade_frame, trade_records

__all__ = [
    "TRADE_COLUMNS",
    "empty_trade_frame",
    "trade_records",
]
