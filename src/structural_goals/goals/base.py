# MIT License (see LICENSE)
"""
Base interface shared by all goals.

A goal acts on a fixed set of particles. The particle system asks it for
the positions it acts on (register), hands back the particle indices it
assigned (bind), and then calls calculate once per iteration. calculate
returns a GoalStep: the goal's desired move for each of its particles and
the weight the system should give that move when several goals pull on
the same particle.

Merge rule used by the system, per particle i:
    x_i += Σ_g w_g·m_g / Σ_g w_g
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from ..util import f64, point3


@dataclass(frozen=True)
class GoalStep:
    """
    Contribution of one goal for one iteration.

    Attributes:
        particle_index: Indices of the particles the moves apply to.
        move: Desired displacement per particle, shape (k, 3).
        weight: Merge weight per particle, shape (k,).
    """
    particle_index: tuple[int, ...]
    move: np.ndarray
    weight: np.ndarray


class Goal(ABC):
    """
    Abstract base class for goals.

    Attributes:
        particle_positions: Positions the goal acts on at construction, (k, 3).
        move: Last computed move per particle, (k, 3).
        weight: Merge weight per particle, (k,).
        particle_index: Particle indices assigned by the system, -1 until bound.
    """

    def __init__(self, points: Sequence[Any], weight: Sequence[float]) -> None:
        self.particle_positions = np.stack([point3(p) for p in points])
        self.weight = f64(weight)
        if self.weight.shape != (len(self.particle_positions),):
            raise ValueError(
                f"Expected {len(self.particle_positions)} weights, got shape {self.weight.shape}"
            )
        self.move = np.zeros_like(self.particle_positions)
        self.particle_index = [-1] * len(self.particle_positions)

    @property
    def is_bound(self) -> bool:
        """True once the particle system has assigned indices."""
        return all(i >= 0 for i in self.particle_index)

    def register(self) -> np.ndarray:
        """Return a copy of the positions this goal acts on, shape (k, 3)."""
        return self.particle_positions.copy()

    def bind(self, indices: Sequence[int]) -> None:
        """
        Store the particle indices assigned by the system.

        Raises:
            ValueError: If the number of indices does not match the goal
                        or an index is negative.
        """
        indices = [int(i) for i in indices]
        if len(indices) != len(self.particle_positions):
            raise ValueError(
                f"{type(self).__name__} acts on {len(self.particle_positions)} particles, "
                f"got {len(indices)} indices"
            )
        if any(i < 0 for i in indices):
            raise ValueError(f"Particle indices must be non-negative, got {indices}")
        self.particle_index = indices

    def _require_bound(self) -> None:
        if not self.is_bound:
            raise RuntimeError(f"{type(self).__name__} has not been added to a particle system")

    def _step(self) -> GoalStep:
        """Snapshot of the current move/weight for the system's merge."""
        return GoalStep(
            particle_index=tuple(self.particle_index),
            move=self.move.copy(),
            weight=self.weight.copy(),
        )

    @abstractmethod
    def calculate(self, positions: np.ndarray) -> GoalStep:
        """
        Compute this goal's move for the current particle positions.

        Args:
            positions: Particle buffer, shape (n, 3). Read-only.
        """
        ...

    def output(self, positions: np.ndarray) -> Any:
        """Goal-specific result after solving. None by default."""
        return None
