import pytest

from core.schema import AccumulationParameters, CashEvent, CashEventKind, Phase
from engine.accumulation import project_growth, project_growth_path, simulate_accumulation


def _closed_form_corpus(lump, sip, step_up, m, years):
    """Year-end recurrence collapsed: b_k = b_{k-1} * A + sip_k * S."""
    a = (1 + m) ** 12
    s = ((1 + m) ** 12 - 1) / m
    balance = lump
    for k in range(years):
        balance = balance * a + sip * (1 + step_up) ** k * s
    return balance


def test_golden_scenario(golden_accumulation):
    result = simulate_accumulation(golden_accumulation)
    summary = result.summary

    # 5,00,000 + 3,00,000 * (1.1^20 - 1) / 0.1
    assert summary.total_invested == pytest.approx(17_682_499.848, abs=0.01)
    assert summary.final_corpus == pytest.approx(54_675_770.604, abs=0.01)
    assert summary.final_corpus == pytest.approx(
        _closed_form_corpus(500_000, 25_000, 0.10, 0.01, 20), rel=1e-9
    )
    assert summary.total_gains == pytest.approx(summary.final_corpus - summary.total_invested)
    assert summary.inflation_adjusted_corpus == pytest.approx(summary.final_corpus / 1.06 ** 20)
    assert summary.wealth_multiplier == pytest.approx(summary.final_corpus / summary.total_invested)
    assert len(result.records) == 20


def test_zero_duration_keeps_lump_sum():
    params = AccumulationParameters(initial_lump_sum=750_000, base_monthly_contribution=10_000, duration_years=0)
    result = simulate_accumulation(params)
    assert result.records == ()
    assert result.summary.final_corpus == 750_000
    assert result.summary.total_invested == 750_000
    assert result.summary.inflation_adjusted_corpus == 750_000


def test_wealth_multiplier_zero_when_nothing_invested():
    result = simulate_accumulation(AccumulationParameters(duration_years=3))
    assert result.summary.total_invested == 0
    assert result.summary.wealth_multiplier == 0
    assert result.summary.final_corpus == 0


def test_closing_balances_non_decreasing(golden_accumulation):
    closings = [r.closing_balance for r in simulate_accumulation(golden_accumulation).records]
    assert all(b >= a for a, b in zip(closings, closings[1:]))


def test_yearly_conservation(golden_accumulation):
    records = simulate_accumulation(golden_accumulation).records
    for prev, rec in zip(records, records[1:]):
        assert rec.opening_balance == prev.closing_balance
    for rec in records:
        assert rec.closing_balance == pytest.approx(
            rec.opening_balance + rec.interest_earned + rec.contribution, rel=1e-12
        )
        assert rec.withdrawal == 0
        assert rec.phase is Phase.ACCUMULATION


def test_step_up_compounds_on_current_sip(golden_accumulation):
    records = simulate_accumulation(golden_accumulation).records
    assert records[0].scheduled_amount == pytest.approx(25_000)
    assert records[2].scheduled_amount == pytest.approx(25_000 * 1.1 ** 2)
    assert records[2].contribution == pytest.approx(12 * 25_000 * 1.1 ** 2)


def test_real_value_uses_timeline_inflation(golden_accumulation):
    rec = simulate_accumulation(golden_accumulation).records[4]
    assert rec.inflation_factor == pytest.approx(1.06 ** 5)
    assert rec.real_value == pytest.approx(rec.closing_balance / 1.06 ** 5)


def test_addition_lands_before_interest():
    params = AccumulationParameters(initial_lump_sum=1000, annual_growth_pct=12, duration_years=2)
    event = CashEvent(year=2, amount=500, kind=CashEventKind.ADDITION, label="Bonus")
    base = simulate_accumulation(params).records
    with_event = simulate_accumulation(params, [event]).records

    assert with_event[0] == base[0]
    assert with_event[1].opening_balance == base[1].opening_balance
    assert with_event[1].closing_balance == pytest.approx((1000 * 1.01 ** 12 + 500) * 1.01 ** 12)
    assert with_event[1].cumulative_invested == pytest.approx(1500)
    assert with_event[1].cash_event.amount == 500
    assert with_event[1].cash_event.label == "Bonus"


def test_withdrawal_event_floors_at_zero_and_keeps_invested():
    params = AccumulationParameters(initial_lump_sum=1000, annual_growth_pct=0, duration_years=2)
    event = CashEvent(year=1, amount=5000, kind=CashEventKind.WITHDRAWAL, label="House")
    rec = simulate_accumulation(params, [event]).records[0]
    assert rec.closing_balance == 0
    assert rec.cumulative_invested == 1000
    assert rec.cash_event.amount == -5000
    assert rec.cash_event.kind is CashEventKind.WITHDRAWAL


def test_same_year_events_report_net_amount_and_last_label():
    params = AccumulationParameters(initial_lump_sum=0, annual_growth_pct=0, duration_years=1)
    events = [
        CashEvent(year=1, amount=500, kind=CashEventKind.ADDITION, label="Gift"),
        CashEvent(year=1, amount=200, kind=CashEventKind.WITHDRAWAL, label="Repairs"),
    ]
    rec = simulate_accumulation(params, events).records[0]
    assert rec.closing_balance == 300
    assert rec.cash_event.amount == 300
    assert rec.cash_event.label == "Repairs"
    assert rec.cash_event.kind is CashEventKind.WITHDRAWAL


def test_events_netting_to_zero_are_not_reported():
    params = AccumulationParameters(initial_lump_sum=1000, annual_growth_pct=0, duration_years=1)
    events = [
        CashEvent(year=1, amount=200, kind=CashEventKind.ADDITION),
        CashEvent(year=1, amount=200, kind=CashEventKind.WITHDRAWAL),
    ]
    assert simulate_accumulation(params, events).records[0].cash_event is None


def test_project_growth_matches_engine(golden_accumulation):
    p = golden_accumulation
    fv = project_growth(
        p.initial_lump_sum, p.base_monthly_contribution, p.annual_step_up_pct,
        p.annual_growth_pct, p.duration_years,
    )
    assert fv == pytest.approx(simulate_accumulation(p).summary.final_corpus, rel=1e-12)


def test_project_growth_path_starts_at_lump_sum():
    path = project_growth_path(1000, 0, 0, 12, 3)
    assert len(path) == 4
    assert path[0] == 1000
    assert path[3] == pytest.approx(1000 * 1.01 ** 36)


def test_dataframe_columns(golden_accumulation):
    df = simulate_accumulation(golden_accumulation).to_dataframe()
    assert len(df) == 20
    assert df["phase"].unique().tolist() == ["accumulation"]
    assert df["year"].tolist() == list(range(1, 21))
