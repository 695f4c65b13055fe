"""
Distribution phase — monthly SWP drawn from the corpus, optionally offset by an ongoing SIP.

Month order: interest -> ongoing SIP -> withdrawal (clamped to the balance).
Depletion is terminal: once the balance reaches zero the run stops, and no
later cash event can revive it.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from core.config import MONTHS_PER_YEAR
from core.schema import CashEvent, DistributionParameters, Phase
from core.utils import inflation_factor, monthly_rate, pct_to_fraction

from .events import apply_year_events
from .records import DistributionResult, DistributionSummary, SurvivalOutcome, YearRecord

logger = logging.getLogger(__name__)


def simulate_distribution(
    params: DistributionParameters,
    starting_corpus: float,
    year_offset: int = 0,
    inflation_pct: float = 6.0,
    events: Sequence[CashEvent] = (),
) -> DistributionResult:
    """
    Simulate Phase 2 until the corpus is depleted or max_years is reached.

    Parameters
    ----------
    params : DistributionParameters
        SWP, SWP growth, ongoing SIP, SIP step-up, growth and horizon
    starting_corpus : float
        Corpus handed over from accumulation
    year_offset : int
        Years already elapsed; record years and event lookup are absolute
    inflation_pct : float
        Inflation used for real values (timeline-wide, from year 0)
    events : sequence of CashEvent
        Keyed by absolute year

    A non-positive corpus or withdrawal target returns an empty result.
    """
    if starting_corpus <= 0 or params.initial_monthly_withdrawal <= 0:
        logger.debug(
            "Distribution skipped: corpus=%.2f withdrawal=%.2f",
            starting_corpus, params.initial_monthly_withdrawal,
        )
        return DistributionResult(records=(), survival=SurvivalOutcome(), summary=DistributionSummary())

    m = monthly_rate(params.annual_growth_pct)
    withdrawal_growth = pct_to_fraction(params.withdrawal_growth_pct)
    sip_step_up = pct_to_fraction(params.contribution_step_up_pct)

    records: List[YearRecord] = []
    balance = float(starting_corpus)
    withdrawal = float(params.initial_monthly_withdrawal)
    sip = float(params.ongoing_monthly_contribution)
    total_withdrawn = 0.0
    total_contributed = 0.0
    survival_months = 0

    for y in range(1, params.max_years + 1):
        year = year_offset + y
        opening = balance

        outcome = apply_year_events(balance, events, year)
        balance = outcome.balance
        total_contributed += outcome.added

        year_interest = 0.0
        year_contribution = 0.0
        year_withdrawal = 0.0
        months = 0
        for _ in range(MONTHS_PER_YEAR):
            if balance <= 0:
                break

            interest = balance * m
            year_interest += interest
            balance += interest

            balance += sip
            year_contribution += sip

            paid = min(withdrawal, balance)
            balance -= paid
            year_withdrawal += paid

            months += 1
            survival_months += 1

            if balance <= 0:
                balance = 0.0
                break

        total_withdrawn += year_withdrawal
        total_contributed += year_contribution

        factor = inflation_factor(inflation_pct, year)
        records.append(
            YearRecord(
                year=year,
                phase=Phase.DISTRIBUTION,
                opening_balance=opening,
                contribution=year_contribution,
                interest_earned=year_interest,
                withdrawal=year_withdrawal,
                closing_balance=balance,
                cumulative_invested=total_contributed,
                scheduled_amount=withdrawal,
                inflation_factor=factor,
                real_value=balance / factor,
                months_active=months,
                cash_event=outcome.applied,
            )
        )

        if balance <= 0:
            logger.debug("Corpus depleted in year %d after %d months", year, survival_months)
            break

        withdrawal = withdrawal * (1 + withdrawal_growth)
        sip = sip * (1 + sip_step_up)

    survival = SurvivalOutcome(
        total_months=survival_months,
        is_indefinite=balance > 0 and survival_months >= params.max_years * MONTHS_PER_YEAR,
    )
    summary = DistributionSummary(
        total_withdrawn=total_withdrawn,
        total_contributed=total_contributed,
        final_balance=balance,
    )
    return DistributionResult(records=tuple(records), survival=survival, summary=summary)
