import pytest

from core.schema import AccumulationParameters, DistributionParameters


@pytest.fixture
def golden_accumulation():
    """Reference scenario: 5L lump sum, 25k SIP stepped up 10%, 12% growth, 20 years."""
    return AccumulationParameters(
        initial_lump_sum=500_000,
        base_monthly_contribution=25_000,
        annual_step_up_pct=10,
        annual_growth_pct=12,
        duration_years=20,
        inflation_pct=6,
    )


@pytest.fixture
def modest_distribution():
    return DistributionParameters(
        initial_monthly_withdrawal=150_000,
        withdrawal_growth_pct=6,
        annual_growth_pct=8,
        max_years=40,
    )


@pytest.fixture
def mean_sampler():
    """Deterministic stand-in for NormalSampler: always returns the mean."""
    return lambda mean, std_dev: mean
