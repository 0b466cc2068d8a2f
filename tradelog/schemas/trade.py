"""Pydantic schemas for the trade detail table and dataset info."""

from datetime import date, datetime, time

from pydantic import BaseModel, Field


class TradeRead(BaseModel):
    entry_date: date
    entry_time: time
    exit_date: date
    exit_time: time
    duration: float  # minutes
    symbol: str
    account: str  # masked
    profit_loss: float | None = None
    extra: dict[str, str | None] = Field(default_factory=dict)


class DatasetInfo(BaseModel):
    source: str
    loaded_at: datetime
    trade_count: int
    symbols: list[str]
    first_entry_date: date | None = None
    last_entry_date: date | None = None
