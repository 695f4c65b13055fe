"""
Monte Carlo runner — re-runs a simplified two-phase recurrence under random yearly returns.

Each run draws ONE annual return per year from the sampler and applies it to
all 12 months of that year:
  Accumulation: monthly rate = max(0, r) / 12   (floored, a bad year only stalls growth)
  Distribution: monthly rate = r / 12           (unfloored, losses compound)

A run succeeds only if the balance stays above zero for every one of the
target survival years. Cash events and the distribution max_years cap are not
used here; the horizon is MonteCarloConfig.target_survival_years.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from analytics.aggregator import MonteCarloAggregate, aggregate_runs
from core.config import MONTHS_PER_YEAR, MonteCarloConfig
from core.schema import AccumulationParameters, DistributionParameters, Phase
from core.utils import pct_to_fraction
from distributions.sampler import NormalSampler, ReturnSampler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class YearBalance:
    year: int
    phase: Phase
    balance: float
    annual_return_pct: float


@dataclass(frozen=True)
class MonteCarloRun:
    """One accumulation + distribution trajectory."""
    yearly_balances: Tuple[YearBalance, ...]
    corpus_at_transition: float
    final_balance: float
    survival_years: int
    survived: bool
    target_years: int


def simulate_run(
    acc_params: AccumulationParameters,
    dist_params: DistributionParameters,
    *,
    volatility: float,
    target_survival_years: int,
    sampler: ReturnSampler,
) -> MonteCarloRun:
    step_up = pct_to_fraction(acc_params.annual_step_up_pct)
    withdrawal_growth = pct_to_fraction(dist_params.withdrawal_growth_pct)
    dist_step_up = pct_to_fraction(dist_params.contribution_step_up_pct)
    acc_mean = pct_to_fraction(acc_params.annual_growth_pct)
    dist_mean = pct_to_fraction(dist_params.annual_growth_pct)

    yearly: List[YearBalance] = []
    balance = float(acc_params.initial_lump_sum)
    sip = float(acc_params.base_monthly_contribution)

    for year in range(1, acc_params.duration_years + 1):
        annual_return = sampler(acc_mean, volatility)
        m = max(0.0, annual_return) / MONTHS_PER_YEAR

        for _ in range(MONTHS_PER_YEAR):
            balance = balance * (1 + m) + sip

        yearly.append(YearBalance(year, Phase.ACCUMULATION, balance, annual_return * 100))
        sip = sip * (1 + step_up)

    corpus_at_transition = balance

    withdrawal = float(dist_params.initial_monthly_withdrawal)
    dist_sip = float(dist_params.ongoing_monthly_contribution)
    survival_years = 0
    survived = True

    for y in range(1, target_survival_years + 1):
        annual_return = sampler(dist_mean, volatility)
        m = annual_return / MONTHS_PER_YEAR

        for _ in range(MONTHS_PER_YEAR):
            if balance <= 0:
                survived = False
                break

            balance = balance * (1 + m)
            balance += dist_sip
            balance -= withdrawal

            if balance <= 0:
                balance = 0.0
                survived = False
                break

        yearly.append(
            YearBalance(acc_params.duration_years + y, Phase.DISTRIBUTION, max(0.0, balance), annual_return * 100)
        )

        if not survived:
            survival_years = y - 1
            break

        survival_years = y
        withdrawal = withdrawal * (1 + withdrawal_growth)
        dist_sip = dist_sip * (1 + dist_step_up)

    return MonteCarloRun(
        yearly_balances=tuple(yearly),
        corpus_at_transition=corpus_at_transition,
        final_balance=balance,
        survival_years=survival_years,
        survived=survived and balance > 0,
        target_years=target_survival_years,
    )


def run_monte_carlo(
    acc_params: AccumulationParameters,
    dist_params: DistributionParameters,
    config: MonteCarloConfig = MonteCarloConfig(),
    *,
    sampler: Optional[ReturnSampler] = None,
) -> MonteCarloAggregate:
    """
    Run config.run_count independent trajectories and aggregate them.

    Parameters
    ----------
    acc_params, dist_params
        Same shapes the deterministic runner consumes
    config : MonteCarloConfig
        run_count, volatility (fraction), target_survival_years, seed
    sampler : callable (mean, std_dev) -> float, optional
        Defaults to NormalSampler(seed=config.seed). Pass a deterministic
        callable for reproducible tests.
    """
    draw = sampler if sampler is not None else NormalSampler(seed=config.seed)

    runs = [
        simulate_run(
            acc_params,
            dist_params,
            volatility=config.volatility,
            target_survival_years=config.target_survival_years,
            sampler=draw,
        )
        for _ in range(config.run_count)
    ]

    result = aggregate_runs(
        runs,
        duration_years=acc_params.duration_years,
        target_survival_years=config.target_survival_years,
        volatility=config.volatility,
    )
    logger.info(
        "Monte Carlo: %d runs, success rate %.1f%%, median corpus %.2f",
        result.run_count, result.success_rate, result.corpus_stats.p50,
    )
    return result
