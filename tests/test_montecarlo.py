import pytest

from core.config import MonteCarloConfig
from core.schema import AccumulationParameters, DistributionParameters, Phase
from engine.accumulation import simulate_accumulation
from engine.montecarlo import run_monte_carlo, simulate_run


def _bands_ordered(band):
    return band.min <= band.p10 <= band.p25 <= band.p50 <= band.p75 <= band.p90 <= band.max


def test_mean_sampler_reproduces_deterministic_accumulation(golden_accumulation, modest_distribution, mean_sampler):
    config = MonteCarloConfig(run_count=5, volatility=0.2, target_survival_years=10)
    result = run_monte_carlo(golden_accumulation, modest_distribution, config, sampler=mean_sampler)

    deterministic = simulate_accumulation(golden_accumulation).records
    for band, rec in zip(result.bands, deterministic):
        assert band.p10 == band.p90
        assert band.p50 == pytest.approx(rec.closing_balance, rel=1e-9)
    assert result.corpus_stats.p50 == pytest.approx(deterministic[-1].closing_balance, rel=1e-9)
    assert result.success_rate == 100
    assert result.avg_failed_survival == 10


def test_seeded_runs_are_reproducible(golden_accumulation, modest_distribution):
    config = MonteCarloConfig(run_count=50, volatility=0.15, target_survival_years=30, seed=11)
    a = run_monte_carlo(golden_accumulation, modest_distribution, config)
    b = run_monte_carlo(golden_accumulation, modest_distribution, config)
    assert a.success_rate == b.success_rate
    assert a.bands == b.bands


def test_percentile_bands_are_ordered(golden_accumulation, modest_distribution):
    config = MonteCarloConfig(run_count=200, volatility=0.18, target_survival_years=35, seed=3)
    result = run_monte_carlo(golden_accumulation, modest_distribution, config)

    assert len(result.bands) == 20 + 35
    assert all(_bands_ordered(b) for b in result.bands)
    assert _bands_ordered(result.corpus_stats)
    assert 0 <= result.success_rate <= 100
    assert result.successful_runs + result.failed_runs == 200
    assert result.volatility_pct == pytest.approx(18)
    assert [b.phase for b in result.bands[19:21]] == [Phase.ACCUMULATION, Phase.DISTRIBUTION]


def test_order_statistic_readoff(golden_accumulation, modest_distribution):
    config = MonteCarloConfig(run_count=100, volatility=0.1, target_survival_years=5, seed=5)
    result = run_monte_carlo(golden_accumulation, modest_distribution, config)
    corpus = sorted(result.run_metrics["corpus_at_transition"])
    assert result.corpus_stats.p10 == corpus[10]
    assert result.corpus_stats.p50 == corpus[50]
    assert result.corpus_stats.p90 == corpus[90]
    assert result.corpus_stats.min == corpus[0]
    assert result.corpus_stats.max == corpus[99]


def test_unsustainable_plan_fails_every_run(mean_sampler):
    acc = AccumulationParameters(initial_lump_sum=100_000, annual_growth_pct=0, duration_years=1)
    dist = DistributionParameters(initial_monthly_withdrawal=50_000, annual_growth_pct=0)
    config = MonteCarloConfig(run_count=10, target_survival_years=30)
    result = run_monte_carlo(acc, dist, config, sampler=mean_sampler)

    assert result.success_rate == 0
    assert result.failed_runs == 10
    assert result.avg_failed_survival == 0
    # depleted runs contribute zero balances to every later year
    assert result.bands[1].max == 0
    assert result.bands[-1].max == 0
    assert result.bands[0].p50 == 100_000


def test_accumulation_returns_floored_distribution_returns_not(mean_sampler):
    acc = AccumulationParameters(initial_lump_sum=1_000, annual_growth_pct=0, duration_years=3)
    dist = DistributionParameters(initial_monthly_withdrawal=1, annual_growth_pct=0)
    crash = lambda mean, std_dev: -0.5

    run = simulate_run(acc, dist, volatility=0.0, target_survival_years=2, sampler=crash)
    acc_years = [y for y in run.yearly_balances if y.phase is Phase.ACCUMULATION]
    dist_years = [y for y in run.yearly_balances if y.phase is Phase.DISTRIBUTION]

    assert [y.balance for y in acc_years] == [1_000, 1_000, 1_000]
    assert run.corpus_at_transition == 1_000
    assert dist_years[0].balance < 1_000 * (1 - 0.5 / 12) ** 12 + 1e-9
    assert dist_years[0].annual_return_pct == -50
    assert run.survived is True
    assert run.survival_years == 2


def test_partial_failure_survival_years(mean_sampler):
    acc = AccumulationParameters(initial_lump_sum=30_000, annual_growth_pct=0, duration_years=0)
    dist = DistributionParameters(initial_monthly_withdrawal=1_000, annual_growth_pct=0)
    run = simulate_run(acc, dist, volatility=0.0, target_survival_years=5, sampler=mean_sampler)

    assert run.survived is False
    assert run.survival_years == 2
    assert len(run.yearly_balances) == 3
    assert run.yearly_balances[-1].balance == 0


def test_run_metrics_table(golden_accumulation, modest_distribution):
    config = MonteCarloConfig(run_count=20, volatility=0.1, target_survival_years=10, seed=8)
    df = run_monte_carlo(golden_accumulation, modest_distribution, config).run_metrics
    assert len(df) == 20
    assert df["run_id"].tolist() == list(range(20))
    assert (df["worst_return_pct"] <= df["mean_return_pct"]).all()


def test_config_rejects_empty_run_count():
    with pytest.raises(ValueError):
        MonteCarloConfig(run_count=0)


def test_aggregate_dataframe(golden_accumulation, modest_distribution, mean_sampler):
    config = MonteCarloConfig(run_count=3, target_survival_years=2)
    df = run_monte_carlo(golden_accumulation, modest_distribution, config, sampler=mean_sampler).to_dataframe()
    assert len(df) == 22
    assert df["year"].tolist() == list(range(1, 23))
