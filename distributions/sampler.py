"""
Normal-variate sampler for yearly market returns.

Each Monte Carlo year draws ONE annual return:
  r = mean + stdDev * z,   z ~ N(0, 1)

z comes from the Box–Muller transform of two independent uniforms:
  z = sqrt(-2 ln u1) * cos(2π u2)

The uniform source is injectable so runs can be reproduced exactly:
  - a seed           -> numpy Generator seeded with it
  - a Generator      -> used as-is
  - any callable     -> called once per uniform (e.g. a scripted sequence in tests)

Anything with the signature (mean, std_dev) -> float can stand in for the
whole sampler (see ReturnSampler).
"""

from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np
import pandas as pd

ReturnSampler = Callable[[float, float], float]


class NormalSampler:
    """
    Box–Muller normal sampler over an injectable uniform source.

    Usage:
        sampler = NormalSampler(seed=42)
        r = sampler(0.12, 0.05)   # one annual return around 12% with 5% volatility
    """

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        *,
        seed: Optional[int] = None,
        uniform: Optional[Callable[[], float]] = None,
    ):
        if uniform is not None:
            self.rng = None
            self._uniform = uniform
        else:
            self.rng = rng if rng is not None else np.random.default_rng(seed)
            self._uniform = self.rng.random
        self.n_draws = 0

    def standard_normal(self) -> float:
        # Generator.random() is in [0, 1); flip it so log() never sees zero
        u1 = 1.0 - float(self._uniform())
        u2 = float(self._uniform())
        self.n_draws += 1
        return math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)

    def sample(self, mean: float, std_dev: float) -> float:
        return mean + self.standard_normal() * std_dev

    __call__ = sample

    def draw_many(self, mean: float, std_dev: float, n: int) -> np.ndarray:
        return np.array([self.sample(mean, std_dev) for _ in range(n)], dtype=float)

    def summary(self, mean: float, std_dev: float, n: int = 1000) -> pd.DataFrame:
        """Empirical check of the sampler: mean, std and percentiles of n fresh draws."""
        draws = self.draw_many(mean, std_dev, n)
        row = {"Mean": float(np.mean(draws)), "Std": float(np.std(draws))}
        for p in (0.05, 0.25, 0.50, 0.75, 0.95):
            row[f"P{int(p * 100):02d}"] = float(np.percentile(draws, p * 100))
        return pd.DataFrame([row])
