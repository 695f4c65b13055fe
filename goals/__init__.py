"""
Goal finding — reverse SIP planning from a target retirement spend.
"""

from .solver import (
    GoalResult,
    calculate_target_corpus,
    solve_required_contribution,
    solve_retirement_goal,
)

__all__ = [
    "GoalResult",
    "calculate_target_corpus",
    "solve_required_contribution",
    "solve_retirement_goal",
]
