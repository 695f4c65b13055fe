from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field


class Phase(str, Enum):
    ACCUMULATION = "accumulation"
    DISTRIBUTION = "distribution"


class CashEventKind(str, Enum):
    ADDITION = "addition"
    WITHDRAWAL = "withdrawal"


class AccumulationParameters(BaseModel):
    """Phase 1 inputs. Rates are whole-number percentages (12 means 12%)."""

    model_config = ConfigDict(frozen=True)

    initial_lump_sum: float = Field(0.0, ge=0, description="Corpus invested at year 0.")
    base_monthly_contribution: float = Field(0.0, ge=0, description="Monthly SIP in year 1.")
    annual_step_up_pct: float = Field(0.0, ge=0, description="Yearly increase of the SIP.")
    annual_growth_pct: float = Field(12.0, description="Expected annual return.")
    duration_years: int = Field(10, ge=0)
    inflation_pct: float = Field(6.0, description="Used for real-value columns.")


class DistributionParameters(BaseModel):
    """Phase 2 inputs. Rates are whole-number percentages."""

    model_config = ConfigDict(frozen=True)

    initial_monthly_withdrawal: float = Field(0.0, ge=0, description="Monthly SWP in year 1.")
    withdrawal_growth_pct: float = Field(0.0, ge=0)
    ongoing_monthly_contribution: float = Field(0.0, ge=0)
    contribution_step_up_pct: float = Field(0.0, ge=0)
    annual_growth_pct: float = Field(8.0)
    max_years: int = Field(50, ge=0, description="Simulation horizon cap.")


class CashEvent(BaseModel):
    """One-off lump addition or withdrawal at the start of an absolute year."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, description="Absolute, 1-based year across both phases.")
    amount: float = Field(..., gt=0)
    kind: CashEventKind
    label: str = ""


class GoalInputs(BaseModel):
    """Inputs for the reverse (required-SIP) solver."""

    model_config = ConfigDict(frozen=True)

    years_to_retirement: int = Field(..., ge=0)
    current_lump_sum: float = Field(0.0, ge=0)
    monthly_spend_today: float = Field(..., ge=0, description="Monthly spend in today's money.")
    annual_growth_pct: float = Field(12.0)
    inflation_pct: float = Field(6.0, description="Pre-retirement inflation.")
    spend_growth_pct: float = Field(6.0, description="Post-retirement spending growth.")
    step_up_pct: float = Field(0.0, ge=0)
    sustain_forever: bool = True
    sustain_years: int = Field(30, ge=1)


# Column order for yearly-record tables (engine output -> DataFrame)
YEAR_RECORD_COLUMNS: Tuple[str, ...] = (
    "year",
    "phase",
    "opening_balance",
    "contribution",
    "interest_earned",
    "withdrawal",
    "closing_balance",
    "cumulative_invested",
    "scheduled_amount",
    "months_active",
    "inflation_factor",
    "real_value",
    "cash_event_amount",
    "cash_event_label",
    "cash_event_kind",
)

CHART_COLUMNS: Tuple[str, ...] = (
    "year",
    "phase",
    "total_invested",
    "portfolio_value",
    "real_value",
    "cash_event_label",
)

BAND_COLUMNS: Tuple[str, ...] = (
    "year",
    "phase",
    "p10",
    "p25",
    "p50",
    "p75",
    "p90",
    "min",
    "max",
)
