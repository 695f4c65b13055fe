"""
Per-run Monte Carlo metrics, one row per run.
Used by the aggregator and handy for histograms of corpus / survival.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

import numpy as np
import pandas as pd

if TYPE_CHECKING:
    from engine.montecarlo import MonteCarloRun

RUN_METRIC_COLUMNS = [
    "run_id",
    "corpus_at_transition",
    "final_balance",
    "survival_years",
    "survived",
    "mean_return_pct",
    "worst_return_pct",
]


def compute_run_metrics(runs: Sequence["MonteCarloRun"]) -> pd.DataFrame:
    """
    Returns
    -------
    DataFrame with one row per run:
        run_id, corpus_at_transition, final_balance, survival_years, survived,
        mean_return_pct, worst_return_pct (over the years actually simulated)
    """
    rows = []
    for run_id, run in enumerate(runs):
        returns = np.array([y.annual_return_pct for y in run.yearly_balances], dtype=float)
        rows.append({
            "run_id": run_id,
            "corpus_at_transition": float(run.corpus_at_transition),
            "final_balance": float(run.final_balance),
            "survival_years": int(run.survival_years),
            "survived": bool(run.survived),
            "mean_return_pct": float(np.mean(returns)) if len(returns) else 0.0,
            "worst_return_pct": float(np.min(returns)) if len(returns) else 0.0,
        })
    return pd.DataFrame(rows, columns=RUN_METRIC_COLUMNS)
