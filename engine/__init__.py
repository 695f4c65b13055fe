"""
Projection engine — deterministic phase simulators, full-lifecycle runner, and Monte Carlo runner.
"""

from .accumulation import simulate_accumulation, project_growth
from .distribution import simulate_distribution
from .runner import run_full_simulation, cached_full_simulation
from .montecarlo import run_monte_carlo

__all__ = [
    "simulate_accumulation",
    "project_growth",
    "simulate_distribution",
    "run_full_simulation",
    "cached_full_simulation",
    "run_monte_carlo",
]
