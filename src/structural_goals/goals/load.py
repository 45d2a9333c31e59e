# MIT License (see LICENSE)
"""
Point load goal.

The load's move is the force itself in N with weight 1, so in the merge
Σ w·m it enters as a force alongside the bar terms E·A·ext/L. At the fixed
point of the iteration the applied loads balance the bar forces.
"""
from __future__ import annotations
from typing import Any

import numpy as np

from ..constants import N_PER_KN
from ..util import point3
from .base import Goal, GoalStep


class LoadGoal(Goal):
    """
    Constant point force acting on one particle.

    Args:
        point: Position of the loaded particle [mm].
        force: Force vector [Fx, Fy, Fz] in kN.
    """

    def __init__(self, point: Any, force: Any) -> None:
        super().__init__((point,), (1.0,))
        self.force = point3(force)
        self.move[0] = self.force * N_PER_KN

    def calculate(self, positions: np.ndarray) -> GoalStep:
        self._require_bound()
        return self._step()
