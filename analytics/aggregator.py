"""
Aggregate N Monte Carlo runs into percentile bands and a success rate.

Instead of: "corpus at year 25 = 4.2 Cr" (one deterministic number)
The caller gets: "year 25: p10=2.1 Cr, median=3.9 Cr, p90=6.8 Cr"

Percentiles are plain order statistics: sort the values ascending and read
index floor(n * q). No interpolation, so results line up exactly with the
individual runs that produced them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Tuple

import numpy as np
import pandas as pd

from core.config import PERCENTILE_LEVELS
from core.schema import BAND_COLUMNS, Phase

from .metrics import compute_run_metrics

if TYPE_CHECKING:
    from engine.montecarlo import MonteCarloRun


@dataclass(frozen=True)
class PercentileBand:
    year: int
    phase: Phase
    p10: float
    p25: float
    p50: float
    p75: float
    p90: float
    min: float
    max: float


@dataclass(frozen=True)
class MonteCarloAggregate:
    success_rate: float  # 0-100
    run_count: int
    successful_runs: int
    failed_runs: int
    target_survival_years: int
    avg_failed_survival: float
    bands: Tuple[PercentileBand, ...]
    corpus_stats: PercentileBand  # corpus at the accumulation -> distribution transition
    volatility_pct: float
    run_metrics: pd.DataFrame

    def to_dataframe(self) -> pd.DataFrame:
        rows = [
            {
                "year": b.year,
                "phase": b.phase.value,
                "p10": b.p10,
                "p25": b.p25,
                "p50": b.p50,
                "p75": b.p75,
                "p90": b.p90,
                "min": b.min,
                "max": b.max,
            }
            for b in self.bands
        ]
        return pd.DataFrame(rows, columns=list(BAND_COLUMNS))


def order_statistic_band(values: np.ndarray, *, year: int, phase: Phase) -> PercentileBand:
    """Read p10..p90, min and max from an ascending-sorted array."""
    n = len(values)
    picks = [float(values[int(math.floor(n * q))]) for q in PERCENTILE_LEVELS]
    return PercentileBand(
        year=year,
        phase=phase,
        p10=picks[0],
        p25=picks[1],
        p50=picks[2],
        p75=picks[3],
        p90=picks[4],
        min=float(values[0]),
        max=float(values[n - 1]),
    )


def aggregate_runs(
    runs: Sequence["MonteCarloRun"],
    *,
    duration_years: int,
    target_survival_years: int,
    volatility: float,
) -> MonteCarloAggregate:
    """
    Build per-year percentile bands, corpus stats and the success rate.

    Runs that failed early have fewer yearly snapshots; their missing years
    count as a zero balance.
    """
    n_runs = len(runs)
    if n_runs == 0:
        raise ValueError("No Monte Carlo runs to aggregate.")

    total_years = duration_years + target_survival_years
    balances = np.zeros((n_runs, total_years), dtype=float)
    for i, run in enumerate(runs):
        for j, snap in enumerate(run.yearly_balances[:total_years]):
            balances[i, j] = snap.balance
    balances = np.sort(balances, axis=0)

    bands = tuple(
        order_statistic_band(
            balances[:, idx],
            year=idx + 1,
            phase=Phase.ACCUMULATION if idx + 1 <= duration_years else Phase.DISTRIBUTION,
        )
        for idx in range(total_years)
    )

    corpus = np.sort(np.array([r.corpus_at_transition for r in runs], dtype=float))
    corpus_stats = order_statistic_band(corpus, year=duration_years, phase=Phase.ACCUMULATION)

    successes = sum(1 for r in runs if r.survived)
    failed = [r.survival_years for r in runs if not r.survived]
    avg_failed = float(np.mean(failed)) if failed else float(target_survival_years)

    return MonteCarloAggregate(
        success_rate=successes / n_runs * 100,
        run_count=n_runs,
        successful_runs=successes,
        failed_runs=n_runs - successes,
        target_survival_years=target_survival_years,
        avg_failed_survival=round(avg_failed, 1),
        bands=bands,
        corpus_stats=corpus_stats,
        volatility_pct=volatility * 100,
        run_metrics=compute_run_metrics(runs),
    )
