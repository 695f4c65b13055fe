import math

import numpy as np
import pytest

from distributions.sampler import NormalSampler


def _scripted(values):
    it = iter(values)
    return lambda: next(it)


def test_box_muller_from_scripted_uniforms():
    # u1 = 1 - 0.5, u2 = 0 -> z = sqrt(-2 ln 0.5)
    sampler = NormalSampler(uniform=_scripted([0.5, 0.0]))
    assert sampler(0.10, 0.05) == pytest.approx(0.10 + math.sqrt(-2 * math.log(0.5)) * 0.05)
    assert sampler.n_draws == 1


def test_quarter_turn_gives_the_mean():
    sampler = NormalSampler(uniform=_scripted([0.3, 0.25]))
    assert sampler.sample(0.12, 0.2) == pytest.approx(0.12)


def test_zero_uniform_does_not_blow_up():
    sampler = NormalSampler(uniform=_scripted([0.0, 0.0]))
    assert sampler.standard_normal() == 0.0


def test_seeded_samplers_repeat():
    a = NormalSampler(seed=123).draw_many(0.12, 0.05, 50)
    b = NormalSampler(seed=123).draw_many(0.12, 0.05, 50)
    np.testing.assert_array_equal(a, b)


def test_generator_can_be_injected():
    a = NormalSampler(np.random.default_rng(9)).draw_many(0.0, 1.0, 10)
    b = NormalSampler(seed=9).draw_many(0.0, 1.0, 10)
    np.testing.assert_array_equal(a, b)


def test_moments_match_parameters():
    draws = NormalSampler(seed=2024).draw_many(0.12, 0.05, 20_000)
    assert np.mean(draws) == pytest.approx(0.12, abs=0.005)
    assert np.std(draws) == pytest.approx(0.05, abs=0.005)


def test_summary_table():
    df = NormalSampler(seed=1).summary(0.08, 0.1, n=500)
    assert list(df.columns) == ["Mean", "Std", "P05", "P25", "P50", "P75", "P95"]
    row = df.iloc[0]
    assert row["P05"] <= row["P25"] <= row["P50"] <= row["P75"] <= row["P95"]
