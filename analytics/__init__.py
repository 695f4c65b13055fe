"""
Monte Carlo analytics — per-run metrics and percentile aggregation.
"""

from .metrics import compute_run_metrics
from .aggregator import MonteCarloAggregate, PercentileBand, aggregate_runs

__all__ = [
    "compute_run_metrics",
    "MonteCarloAggregate",
    "PercentileBand",
    "aggregate_runs",
]
