"""
Full-lifecycle runner — stitches accumulation and distribution into one timeline.

A single list of cash events is split at the accumulation boundary (events in
the final accumulation year stay in accumulation). The accumulation's ending
corpus seeds the distribution phase, and its duration becomes the distribution's
absolute-year offset.

Interactive callers re-run this on every input change; cached_full_simulation
memoizes by the structural hash of the (immutable) inputs.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Tuple

from core.schema import AccumulationParameters, CashEvent, DistributionParameters, Phase

from .accumulation import simulate_accumulation
from .distribution import simulate_distribution
from .events import split_events
from .records import ChartPoint, SimulationResult


def run_full_simulation(
    acc_params: AccumulationParameters,
    dist_params: DistributionParameters,
    events: Sequence[CashEvent] = (),
) -> SimulationResult:
    """
    Run both phases in sequence.

    Returns
    -------
    SimulationResult
        accumulation / distribution results, the concatenated yearly records,
        a chart series anchored at year 0, and the transition year and corpus.
    """
    acc_events, dist_events = split_events(events, acc_params.duration_years)

    accumulation = simulate_accumulation(acc_params, acc_events)
    distribution = simulate_distribution(
        dist_params,
        accumulation.summary.final_corpus,
        year_offset=acc_params.duration_years,
        inflation_pct=acc_params.inflation_pct,
        events=dist_events,
    )

    records = accumulation.records + distribution.records

    lump = float(acc_params.initial_lump_sum)
    invested_at_transition = accumulation.summary.total_invested
    chart: List[ChartPoint] = [
        ChartPoint(
            year=0,
            phase=Phase.ACCUMULATION,
            total_invested=lump,
            portfolio_value=lump,
            real_value=lump,
        )
    ]
    for row in records:
        chart.append(
            ChartPoint(
                year=row.year,
                phase=row.phase,
                total_invested=(
                    row.cumulative_invested
                    if row.phase == Phase.ACCUMULATION
                    else invested_at_transition
                ),
                portfolio_value=row.closing_balance,
                real_value=row.real_value,
                cash_event=row.cash_event,
            )
        )

    return SimulationResult(
        accumulation=accumulation,
        distribution=distribution,
        records=records,
        chart_series=tuple(chart),
        transition_year=acc_params.duration_years,
        transition_corpus=accumulation.summary.final_corpus,
    )


@lru_cache(maxsize=128)
def _cached_run(
    acc_params: AccumulationParameters,
    dist_params: DistributionParameters,
    events: Tuple[CashEvent, ...],
) -> SimulationResult:
    return run_full_simulation(acc_params, dist_params, events)


def cached_full_simulation(
    acc_params: AccumulationParameters,
    dist_params: DistributionParameters,
    events: Sequence[CashEvent] = (),
) -> SimulationResult:
    """Memoized run_full_simulation, keyed on the parameter models and the event tuple."""
    return _cached_run(acc_params, dist_params, tuple(events))


def clear_simulation_cache() -> None:
    _cached_run.cache_clear()
