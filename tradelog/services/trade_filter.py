"""Date-range and symbol filtering of the trade frame."""

import pandas as pd

from tradelog.schemas.dashboard import FilterCriteria


def filter_trades(trades: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """Trades with start <= entry_date <= end and a selected symbol.

    Returns a new frame in the input's row order. An empty symbol selection
    returns no trades rather than all of them.
    """
    if not criteria.symbols or trades.empty:
        return trades.iloc[0:0].copy()

    entry_dates = trades["entry_date"]
    mask = (
        (entry_dates >= criteria.start)
        & (entry_dates <= criteria.end)
        & trades["symbol"].isin(list(criteria.symbols))
    )
    return trades.loc[mask].reset_index(drop=True)
