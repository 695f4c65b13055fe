from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from .config import MONTHS_PER_YEAR


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def pct_to_fraction(pct: float) -> float:
    return pct / 100.0


def monthly_rate(annual_pct: float) -> float:
    """Annual percentage -> monthly fraction via plain division (not the geometric equivalent)."""
    return annual_pct / 100.0 / MONTHS_PER_YEAR


def real_rate(nominal_pct: float, comparison_pct: float) -> float:
    """
    Exact Fisher equation, in percent: (1 + nominal) / (1 + comparison) - 1.

    `comparison_pct` is usually inflation, but the goal solver passes
    post-retirement spending growth to get a return net of that growth.
    """
    nominal = pct_to_fraction(nominal_pct)
    comparison = pct_to_fraction(comparison_pct)
    return ((1.0 + nominal) / (1.0 + comparison) - 1.0) * 100.0


def inflation_factor(inflation_pct: float, year: int) -> float:
    return (1.0 + pct_to_fraction(inflation_pct)) ** year


def adjust_for_inflation(records: pd.DataFrame, inflation_pct: float) -> pd.DataFrame:
    """
    Express closing balances and withdrawals in today's money.
    Works on the output of any engine's to_dataframe().
    """
    require_columns(records, ["year", "closing_balance", "withdrawal"])
    out = records.copy()
    factor = np.power(1.0 + pct_to_fraction(inflation_pct), out["year"].to_numpy(dtype=float))
    out["adjusted_closing_balance"] = out["closing_balance"].to_numpy(dtype=float) / factor
    out["adjusted_withdrawal"] = out["withdrawal"].to_numpy(dtype=float) / factor
    return out
