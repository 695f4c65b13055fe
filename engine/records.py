"""
Result containers shared by the deterministic engines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import pandas as pd

from core.config import MONTHS_PER_YEAR
from core.schema import CHART_COLUMNS, YEAR_RECORD_COLUMNS, Phase

from .events import AppliedCashEvent


@dataclass(frozen=True)
class YearRecord:
    """One simulated year. closing_balance is never negative."""
    year: int
    phase: Phase
    opening_balance: float
    contribution: float
    interest_earned: float
    withdrawal: float
    closing_balance: float
    cumulative_invested: float
    scheduled_amount: float  # monthly SIP (accumulation) or monthly SWP target (distribution)
    inflation_factor: float
    real_value: float
    months_active: int = MONTHS_PER_YEAR
    cash_event: Optional[AppliedCashEvent] = None

    def as_row(self) -> dict:
        ev = self.cash_event
        return {
            "year": self.year,
            "phase": self.phase.value,
            "opening_balance": self.opening_balance,
            "contribution": self.contribution,
            "interest_earned": self.interest_earned,
            "withdrawal": self.withdrawal,
            "closing_balance": self.closing_balance,
            "cumulative_invested": self.cumulative_invested,
            "scheduled_amount": self.scheduled_amount,
            "months_active": self.months_active,
            "inflation_factor": self.inflation_factor,
            "real_value": self.real_value,
            "cash_event_amount": ev.amount if ev else 0.0,
            "cash_event_label": ev.label if ev else None,
            "cash_event_kind": ev.kind.value if ev else None,
        }


def records_to_dataframe(records: Sequence[YearRecord]) -> pd.DataFrame:
    return pd.DataFrame([r.as_row() for r in records], columns=list(YEAR_RECORD_COLUMNS))


@dataclass(frozen=True)
class AccumulationSummary:
    total_invested: float
    final_corpus: float
    total_gains: float
    inflation_adjusted_corpus: float
    wealth_multiplier: float
    duration_years: int


@dataclass(frozen=True)
class AccumulationResult:
    records: Tuple[YearRecord, ...]
    summary: AccumulationSummary

    def to_dataframe(self) -> pd.DataFrame:
        return records_to_dataframe(self.records)


@dataclass(frozen=True)
class SurvivalOutcome:
    """How long the corpus lasted, in whole months."""
    total_months: int = 0
    is_indefinite: bool = False

    @property
    def years(self) -> int:
        return self.total_months // MONTHS_PER_YEAR

    @property
    def months(self) -> int:
        return self.total_months % MONTHS_PER_YEAR


@dataclass(frozen=True)
class DistributionSummary:
    total_withdrawn: float = 0.0
    total_contributed: float = 0.0
    final_balance: float = 0.0


@dataclass(frozen=True)
class DistributionResult:
    records: Tuple[YearRecord, ...]
    survival: SurvivalOutcome
    summary: DistributionSummary

    def to_dataframe(self) -> pd.DataFrame:
        return records_to_dataframe(self.records)


@dataclass(frozen=True)
class ChartPoint:
    year: int
    phase: Phase
    total_invested: float
    portfolio_value: float
    real_value: float
    cash_event: Optional[AppliedCashEvent] = None


@dataclass(frozen=True)
class SimulationResult:
    """Both phases stitched into one timeline."""
    accumulation: AccumulationResult
    distribution: DistributionResult
    records: Tuple[YearRecord, ...]
    chart_series: Tuple[ChartPoint, ...]
    transition_year: int
    transition_corpus: float

    @property
    def survival(self) -> SurvivalOutcome:
        return self.distribution.survival

    def to_dataframe(self) -> pd.DataFrame:
        return records_to_dataframe(self.records)

    def chart_dataframe(self) -> pd.DataFrame:
        rows = [
            {
                "year": p.year,
                "phase": p.phase.value,
                "total_invested": p.total_invested,
                "portfolio_value": p.portfolio_value,
                "real_value": p.real_value,
                "cash_event_label": p.cash_event.label if p.cash_event else None,
            }
            for p in self.chart_series
        ]
        return pd.DataFrame(rows, columns=list(CHART_COLUMNS))
