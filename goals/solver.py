"""
Goal solver — works backwards from a retirement lifestyle to the SIP that funds it.

Answers three questions in order:
  Q1: "How big must the corpus be?"  → perpetuity / growing-annuity PV of the spend
  Q2: "What SIP gets me there?"      → bisection on the accumulation recurrence
  Q3: "How does that look per year?" → lump-sum-only vs with-SIP trajectories

The spend is entered in today's money and inflated to the retirement year with
pre-retirement inflation. After retirement it grows at spend_growth_pct, so the
discount rate is the Fisher real rate of growth vs spend growth.

export_params hands the solved plan straight to engine.run_full_simulation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import pandas as pd

from core.config import MONTHS_PER_YEAR, SolverConfig
from core.schema import AccumulationParameters, DistributionParameters, GoalInputs
from core.utils import pct_to_fraction, real_rate
from engine.accumulation import project_growth, project_growth_path

logger = logging.getLogger(__name__)

PERPETUITY_IMPOSSIBLE = "Real rate is zero or negative. Perpetual income not possible."
LUMP_SUM_SUFFICIENT = "Your current lump sum is sufficient! No additional SIP needed."
SOLVED = "SIP calculated successfully"
NOT_CONVERGED = "Target corpus cannot be reached within the contribution search range."


@dataclass(frozen=True)
class TargetCorpus:
    target_corpus: float  # math.inf when a perpetuity is impossible
    real_rate_pct: float
    withdrawal_at_retirement: float  # monthly, in retirement-year money
    annual_withdrawal: float
    spend_growth_pct: float
    sustain_forever: bool
    sustain_years: int


@dataclass(frozen=True)
class ContributionSolution:
    required_contribution: float  # exact bisection result; math.inf if unachievable
    rounded_contribution: float  # whole-currency SIP used for export and trajectory
    is_achievable: bool
    message: str
    lump_sum_projection: float = 0.0
    projected_corpus: Optional[float] = None
    surplus: float = 0.0
    gap: float = 0.0
    iterations: int = 0


@dataclass(frozen=True)
class TrajectoryPoint:
    year: int
    lump_sum_only: float
    with_contribution: float
    target: float


@dataclass(frozen=True)
class ExportParams:
    accumulation: AccumulationParameters
    distribution: DistributionParameters


@dataclass(frozen=True)
class GoalResult:
    inputs: GoalInputs
    corpus: TargetCorpus
    contribution: ContributionSolution
    trajectory: Tuple[TrajectoryPoint, ...]
    export_params: ExportParams

    def trajectory_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [
                {
                    "year": p.year,
                    "lump_sum_only": p.lump_sum_only,
                    "with_contribution": p.with_contribution,
                    "target": p.target,
                }
                for p in self.trajectory
            ],
            columns=["year", "lump_sum_only", "with_contribution", "target"],
        )


def calculate_target_corpus(
    inputs: GoalInputs,
    config: SolverConfig = SolverConfig(),
) -> TargetCorpus:
    r_pct = real_rate(inputs.annual_growth_pct, inputs.spend_growth_pct)
    r = pct_to_fraction(r_pct)

    inflation = pct_to_fraction(inputs.inflation_pct)
    withdrawal_at_retirement = inputs.monthly_spend_today * (1 + inflation) ** inputs.years_to_retirement
    annual_withdrawal = withdrawal_at_retirement * MONTHS_PER_YEAR

    if inputs.sustain_forever:
        target = annual_withdrawal / r if r > 0 else math.inf
    elif abs(r) < config.near_zero_rate:
        target = annual_withdrawal * inputs.sustain_years
    else:
        target = annual_withdrawal * (1 - (1 + r) ** (-inputs.sustain_years)) / r

    return TargetCorpus(
        target_corpus=target,
        real_rate_pct=r_pct,
        withdrawal_at_retirement=withdrawal_at_retirement,
        annual_withdrawal=annual_withdrawal,
        spend_growth_pct=inputs.spend_growth_pct,
        sustain_forever=inputs.sustain_forever,
        sustain_years=inputs.sustain_years,
    )


def solve_required_contribution(
    lump_sum: float,
    target_corpus: float,
    growth_pct: float,
    step_up_pct: float,
    years: int,
    config: SolverConfig = SolverConfig(),
) -> ContributionSolution:
    """
    Smallest starting SIP (stepped up yearly) whose projected corpus hits the target.

    Bisection over [0, target / 12]. Projected corpus is increasing in the SIP
    whenever growth and step-up are non-negative, which bisection relies on.
    """
    if math.isinf(target_corpus):
        return ContributionSolution(
            required_contribution=math.inf,
            rounded_contribution=math.inf,
            is_achievable=False,
            message=PERPETUITY_IMPOSSIBLE,
        )

    lump_fv = project_growth(lump_sum, 0.0, 0.0, growth_pct, years)
    if lump_fv >= target_corpus:
        return ContributionSolution(
            required_contribution=0.0,
            rounded_contribution=0.0,
            is_achievable=True,
            message=LUMP_SUM_SUFFICIENT,
            lump_sum_projection=lump_fv,
            projected_corpus=lump_fv,
            surplus=lump_fv - target_corpus,
        )

    low = 0.0
    high = target_corpus / MONTHS_PER_YEAR
    required = 0.0
    iterations = 0
    for iterations in range(1, config.max_iterations + 1):
        mid = (low + high) / 2
        fv = project_growth(lump_sum, mid, step_up_pct, growth_pct, years)
        required = mid

        if abs(fv - target_corpus) < config.tolerance:
            break
        if fv < target_corpus:
            low = mid
        else:
            high = mid

    projected = project_growth(lump_sum, required, step_up_pct, growth_pct, years)
    achievable = projected >= target_corpus - config.tolerance
    logger.debug(
        "Bisection stopped after %d iterations: sip=%.2f projected=%.2f target=%.2f",
        iterations, required, projected, target_corpus,
    )

    return ContributionSolution(
        required_contribution=required,
        rounded_contribution=float(math.ceil(required)),
        is_achievable=achievable,
        message=SOLVED if achievable else NOT_CONVERGED,
        lump_sum_projection=lump_fv,
        projected_corpus=projected,
        gap=target_corpus - lump_fv,
        iterations=iterations,
    )


def build_trajectory(
    inputs: GoalInputs,
    contribution: float,
    target_corpus: float,
) -> Tuple[TrajectoryPoint, ...]:
    lump_only = project_growth_path(
        inputs.current_lump_sum, 0.0, 0.0, inputs.annual_growth_pct, inputs.years_to_retirement
    )
    with_sip = project_growth_path(
        inputs.current_lump_sum,
        contribution,
        inputs.step_up_pct,
        inputs.annual_growth_pct,
        inputs.years_to_retirement,
    )
    points: List[TrajectoryPoint] = [
        TrajectoryPoint(year=year, lump_sum_only=a, with_contribution=b, target=target_corpus)
        for year, (a, b) in enumerate(zip(lump_only, with_sip))
    ]
    return tuple(points)


def solve_retirement_goal(
    inputs: GoalInputs,
    config: SolverConfig = SolverConfig(),
) -> GoalResult:
    """
    Parameters
    ----------
    inputs : GoalInputs
        Spend in today's money, horizon, growth/inflation/spend-growth (percent),
        SIP step-up and the sustainability mode
    config : SolverConfig
        Bisection limits and the near-zero real-rate threshold

    Returns
    -------
    GoalResult with target corpus, required SIP, trajectories and export params.
    """
    corpus = calculate_target_corpus(inputs, config)
    contribution = solve_required_contribution(
        inputs.current_lump_sum,
        corpus.target_corpus,
        inputs.annual_growth_pct,
        inputs.step_up_pct,
        inputs.years_to_retirement,
        config,
    )
    trajectory = build_trajectory(inputs, contribution.rounded_contribution, corpus.target_corpus)

    export = ExportParams(
        accumulation=AccumulationParameters(
            initial_lump_sum=inputs.current_lump_sum,
            base_monthly_contribution=contribution.rounded_contribution,
            annual_step_up_pct=inputs.step_up_pct,
            annual_growth_pct=inputs.annual_growth_pct,
            duration_years=inputs.years_to_retirement,
            inflation_pct=inputs.inflation_pct,
        ),
        distribution=DistributionParameters(
            initial_monthly_withdrawal=corpus.withdrawal_at_retirement,
            withdrawal_growth_pct=max(0.0, inputs.spend_growth_pct),
            ongoing_monthly_contribution=0.0,
            contribution_step_up_pct=0.0,
            annual_growth_pct=inputs.annual_growth_pct,
            max_years=config.default_max_years if inputs.sustain_forever else inputs.sustain_years,
        ),
    )

    return GoalResult(
        inputs=inputs,
        corpus=corpus,
        contribution=contribution,
        trajectory=trajectory,
        export_params=export,
    )
