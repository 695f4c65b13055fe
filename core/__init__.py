"""
Core package — input schema, configuration, and rate math.
No simulation logic lives here.
"""

from .schema import (
    AccumulationParameters,
    CashEvent,
    CashEventKind,
    DistributionParameters,
    GoalInputs,
    Phase,
)
from .config import MonteCarloConfig, SolverConfig
from .utils import real_rate, monthly_rate, pct_to_fraction, inflation_factor, adjust_for_inflation

__all__ = [
    "AccumulationParameters",
    "CashEvent",
    "CashEventKind",
    "DistributionParameters",
    "GoalInputs",
    "Phase",
    "MonteCarloConfig",
    "SolverConfig",
    "real_rate",
    "monthly_rate",
    "pct_to_fraction",
    "inflation_factor",
    "adjust_for_inflation",
]
