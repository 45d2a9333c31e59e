# MIT License (see LICENSE)
"""
Anchor goal: holds one particle at a target point (a support).
"""
from __future__ import annotations
import math
from typing import Any

import numpy as np

from ..constants import DEFAULT_ANCHOR_STRENGTH
from ..util import point3
from .base import Goal, GoalStep


class AnchorGoal(Goal):
    """
    Pulls a particle back to a fixed target position.

    Attributes:
        target: Position the particle is held at [mm]. Defaults to the
                registered point.
        strength: Merge weight. Must dominate the weights of the goals
                  sharing the particle for the support to stay put.
    """

    def __init__(
        self,
        point: Any,
        strength: float = DEFAULT_ANCHOR_STRENGTH,
        target: Any = None,
    ) -> None:
        strength = float(strength)
        if not math.isfinite(strength) or strength <= 0:
            raise ValueError(f"Anchor strength must be positive, got {strength}")
        super().__init__((point,), (strength,))
        self.strength = strength
        self.target = self.particle_positions[0].copy() if target is None else point3(target)

    def calculate(self, positions: np.ndarray) -> GoalStep:
        self._require_bound()
        self.move[0] = self.target - positions[self.particle_index[0]]
        return self._step()

    def output(self, positions: np.ndarray) -> np.ndarray:
        """Current position of the anchored particle."""
        self._require_bound()
        return positions[self.particle_index[0]].copy()
