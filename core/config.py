"""
Engine configuration.
Input parameters live in core/schema.py (AccumulationParameters, DistributionParameters, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

MONTHS_PER_YEAR = 12

# bisection limits for the goal solver; golden-value tests depend on these
BISECTION_MAX_ITERATIONS = 100
BISECTION_TOLERANCE = 100.0

# below this |real rate| the growing annuity collapses to straight-line
NEAR_ZERO_REAL_RATE = 0.0001

# distribution horizon used when a goal is sustained indefinitely
DEFAULT_MAX_YEARS = 50

PERCENTILE_LEVELS: Tuple[float, ...] = (0.10, 0.25, 0.50, 0.75, 0.90)


@dataclass(frozen=True)
class MonteCarloConfig:
    run_count: int = 100
    volatility: float = 0.05  # std dev of annual return, as a fraction
    target_survival_years: int = 30
    seed: int = 7

    def __post_init__(self) -> None:
        if self.run_count <= 0:
            raise ValueError(f"run_count must be positive, got {self.run_count}")
        if self.target_survival_years < 0:
            raise ValueError(
                f"target_survival_years must be non-negative, got {self.target_survival_years}"
            )


@dataclass(frozen=True)
class SolverConfig:
    max_iterations: int = BISECTION_MAX_ITERATIONS
    tolerance: float = BISECTION_TOLERANCE
    near_zero_rate: float = NEAR_ZERO_REAL_RATE
    default_max_years: int = DEFAULT_MAX_YEARS
