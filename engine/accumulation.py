"""
Accumulation phase — lump sum plus a stepped-up monthly SIP, compounded monthly.

Conventions shared by every engine in this package:
  1. Monthly rate = annual % / 100 / 12 (plain division)
  2. Interest accrues on the opening monthly balance, then the SIP is added
  3. Step-up compounds on the current SIP (year 3 SIP = base * (1+s)^2)
  4. Cash events land at the start of the year, before any interest
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from core.config import MONTHS_PER_YEAR
from core.schema import AccumulationParameters, CashEvent, Phase
from core.utils import inflation_factor, monthly_rate, pct_to_fraction

from .events import apply_year_events
from .records import AccumulationResult, AccumulationSummary, YearRecord

logger = logging.getLogger(__name__)


def project_growth_path(
    lump_sum: float,
    monthly_contribution: float,
    step_up_pct: float,
    growth_pct: float,
    years: int,
) -> List[float]:
    """
    Year-end balances for the bare accumulation recurrence (no events).
    Element 0 is the starting lump sum, element k the balance after year k.
    """
    m = monthly_rate(growth_pct)
    step_up = pct_to_fraction(step_up_pct)

    balance = lump_sum
    sip = monthly_contribution
    path = [balance]
    for _ in range(years):
        for _ in range(MONTHS_PER_YEAR):
            balance = balance * (1 + m) + sip
        sip = sip * (1 + step_up)
        path.append(balance)
    return path


def project_growth(
    lump_sum: float,
    monthly_contribution: float,
    step_up_pct: float,
    growth_pct: float,
    years: int,
) -> float:
    """Future value of lump sum + stepped-up SIP after `years`."""
    return project_growth_path(lump_sum, monthly_contribution, step_up_pct, growth_pct, years)[-1]


def simulate_accumulation(
    params: AccumulationParameters,
    events: Sequence[CashEvent] = (),
) -> AccumulationResult:
    """
    Simulate Phase 1 year by year.

    Parameters
    ----------
    params : AccumulationParameters
        Lump sum, SIP, step-up, growth, duration and inflation (percentages)
    events : sequence of CashEvent
        Only events with year <= duration_years have any effect

    Returns
    -------
    AccumulationResult with one YearRecord per year and the phase summary.
    """
    m = monthly_rate(params.annual_growth_pct)
    step_up = pct_to_fraction(params.annual_step_up_pct)

    records: List[YearRecord] = []
    balance = float(params.initial_lump_sum)
    total_invested = float(params.initial_lump_sum)
    sip = float(params.base_monthly_contribution)

    for year in range(1, params.duration_years + 1):
        opening = balance

        outcome = apply_year_events(balance, events, year)
        balance = outcome.balance
        total_invested += outcome.added

        year_interest = 0.0
        year_contribution = 0.0
        for _ in range(MONTHS_PER_YEAR):
            interest = balance * m
            year_interest += interest
            balance += interest
            balance += sip
            year_contribution += sip

        total_invested += year_contribution

        factor = inflation_factor(params.inflation_pct, year)
        records.append(
            YearRecord(
                year=year,
                phase=Phase.ACCUMULATION,
                opening_balance=opening,
                contribution=year_contribution,
                interest_earned=year_interest,
                withdrawal=0.0,
                closing_balance=balance,
                cumulative_invested=total_invested,
                scheduled_amount=sip,
                inflation_factor=factor,
                real_value=balance / factor,
                cash_event=outcome.applied,
            )
        )

        sip = sip * (1 + step_up)

    final_corpus = balance
    summary = AccumulationSummary(
        total_invested=total_invested,
        final_corpus=final_corpus,
        total_gains=final_corpus - total_invested,
        inflation_adjusted_corpus=final_corpus / inflation_factor(params.inflation_pct, params.duration_years),
        wealth_multiplier=final_corpus / total_invested if total_invested > 0 else 0.0,
        duration_years=params.duration_years,
    )
    logger.debug(
        "Accumulation over %d years: invested=%.2f corpus=%.2f",
        params.duration_years, total_invested, final_corpus,
    )
    return AccumulationResult(records=tuple(records), summary=summary)
