# MIT License (see LICENSE)
"""
Goals for the particle system.

This subpackage provides the goal interface and the goal kinds:
    - Goal, GoalStep: Base class and per-iteration contribution.
    - BarGoal: Two-node axial bar (Hooke's law), with BarStep and BarResult.
    - AnchorGoal: Holds a particle at a support point.
    - LoadGoal: Constant point force in kN.

Typical usage:
    from structural_goals.goals import BarGoal

    bar = BarGoal(((0, 0, 0), (1000, 0, 0)), e_modulus=210000, area=100)
"""
from .base import Goal, GoalStep
from .bar import BarGoal, BarStep, BarResult
from .anchor import AnchorGoal
from .load import LoadGoal

__all__ = [
    "Goal",
    "GoalStep",
    "BarGoal",
    "BarStep",
    "BarResult",
    "AnchorGoal",
    "LoadGoal",
]
