"""In-memory holder of the loaded trade set.

The store owns exactly one snapshot at a time. Loading ingests the whole file
first and only then swaps the snapshot reference, so readers always see a
complete trade set and a failed reload keeps the previous one.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from tradelog.errors import DatasetNotLoadedError
from tradelog.services.ingestion import ingest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class TradeSnapshot:
    """One ingestion pass worth of trades. Never mutated after creation."""
    trades: pd.DataFrame
    source: Path
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def symbols(self) -> list[str]:
        """Distinct symbols of the full set, sorted."""
        return sorted(self.trades["symbol"].unique().tolist())

    @property
    def trade_count(self) -> int:
        return len(self.trades)


class TradeStore:
    def __init__(self):
        self._snapshot: TradeSnapshot | None = None
        self._load_lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    def snapshot(self) -> TradeSnapshot:
        """Current snapshot. Raises DatasetNotLoadedError before the first load."""
        current = self._snapshot
        if current is None:
            raise DatasetNotLoadedError("No trade export has been loaded")
        return current

    def load(self, path: str | Path) -> TradeSnapshot:
        """Ingest ``path`` and make it the current snapshot.

        Ingestion errors propagate and leave the current snapshot untouched.
        """
        with self._load_lock:
            trades = ingest(path)
            snapshot = TradeSnapshot(trades=trades, source=Path(path))
            self._snapshot = snapshot
        logger.info(f"Trade store now holds {snapshot.trade_count} trades from {snapshot.source}")
        return snapshot


# Process-wide store used by the API
store = TradeStore()


def get_store() -> TradeStore:
    """Dependency that returns the shared trade store."""
    return store
