"""
Distributions package — random return generation for Monte Carlo.

  sampler.py — Box–Muller normal sampler with an injectable uniform source
"""

from .sampler import NormalSampler, ReturnSampler

__all__ = [
    "NormalSampler",
    "ReturnSampler",
]
