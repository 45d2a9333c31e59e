# MIT License (see LICENSE)
"""
Reference particle system.

The ParticleSystem owns the particle buffer and drives the goals:
- Registration: every goal reports the points it acts on; points closer
  than merge_tolerance to an existing particle reuse it, others append a
  new particle. The goal is then bound to the resulting indices.
- Iteration (step):
    1. Every goal computes its GoalStep against a read-only view of the
       buffer.
    2. Moves are merged per particle as a weighted average,
           x_i += Σ w·m / Σ w,
       using accumulating writes so goals may share particles freely.
- Solve (run): repeat step until the largest applied move drops below
  tolerance or max_iterations is reached.
- Results (outputs): one fresh calculate pass without merging, whose steps
  produce the per-goal results.

This is plain projection without momentum or damping. It is enough to
bring statically determinate and moderately indeterminate bar assemblies
to equilibrium; convergence speed is not a concern here.

Structure:
    - User creates a ParticleSystem.
    - User adds goals via add_goal().
    - User calls run() and reads outputs() / bar_results().
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import Any, Iterable

import numpy as np

from .constants import DEFAULT_MAX_ITERATIONS, DEFAULT_MERGE_TOLERANCE, DEFAULT_TOLERANCE
from .goals.base import Goal, GoalStep
from .goals.bar import BarGoal, BarResult, BarStep
from .profiler import Profiler
from .util import read_only

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveReport:
    """
    Summary of a run() call.

    Attributes:
        iterations: Number of steps taken.
        max_move: Largest particle move applied in the last step [mm].
        converged: True if max_move dropped to or below the tolerance.
    """
    iterations: int
    max_move: float
    converged: bool


@dataclass
class ParticleSystem:
    """
    Particle buffer plus the goals acting on it.

    Attributes:
        tolerance: Convergence threshold on the largest merged move [mm].
        max_iterations: Upper bound on steps per run().
        merge_tolerance: Registered points within this distance share a
                         particle [mm].
        profiler: Optional Profiler instance for timing statistics.
    """
    tolerance: float = DEFAULT_TOLERANCE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    merge_tolerance: float = DEFAULT_MERGE_TOLERANCE
    profiler: Profiler | None = None

    # Internal state
    goals: list[Goal] = field(default_factory=list)
    iterations: int = 0

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be at least 1, got {self.max_iterations}")
        if self.merge_tolerance < 0:
            raise ValueError(f"merge_tolerance must be non-negative, got {self.merge_tolerance}")
        self._positions = np.zeros((0, 3), dtype=np.float64)
        self._initial = np.zeros((0, 3), dtype=np.float64)

    @property
    def positions(self) -> np.ndarray:
        """Current particle positions, shape (n, 3). Read-only view."""
        return read_only(self._positions)

    @property
    def particle_count(self) -> int:
        return len(self._positions)

    def find_particle(self, point: Any) -> int:
        """
        Index of the registered particle within merge_tolerance of point.

        Returns:
            The particle index, or -1 if there is none.
        """
        if not len(self._initial):
            return -1
        dist = np.linalg.norm(self._initial - np.asarray(point, dtype=np.float64), axis=1)
        i = int(np.argmin(dist))
        return i if dist[i] <= self.merge_tolerance else -1

    def _add_particle(self, point: np.ndarray) -> int:
        self._initial = np.vstack([self._initial, point])
        self._positions = np.vstack([self._positions, point])
        return len(self._positions) - 1

    def add_goal(self, goal: Goal) -> list[int]:
        """
        Register a goal and bind it to particles.

        Args:
            goal: The goal instance to add.

        Returns:
            The particle indices assigned to the goal.

        Raises:
            ValueError: If two of the goal's points fall on one particle
                        (closer than merge_tolerance). Nothing is added.
        """
        indices = []
        new_points = []
        first_new = self.particle_count
        for p in goal.register():
            i = self.find_particle(p)
            if i < 0:
                for k, q in enumerate(new_points):
                    if np.linalg.norm(p - q) <= self.merge_tolerance:
                        i = first_new + k
                        break
            if i < 0:
                i = first_new + len(new_points)
                new_points.append(p)
            if i in indices:
                raise ValueError(
                    f"{type(goal).__name__} has points closer than merge_tolerance "
                    f"({self.merge_tolerance} mm); they would share particle {i}"
                )
            indices.append(i)
        goal.bind(indices)
        for p in new_points:
            self._add_particle(p)
        self.goals.append(goal)
        return indices

    def add_goals(self, goals: Iterable[Goal]) -> None:
        for g in goals:
            self.add_goal(g)

    def reset(self) -> None:
        """Move every particle back to its registered position and clear timings."""
        self._positions = self._initial.copy()
        self.iterations = 0
        if self.profiler:
            self.profiler.reset()

    def _calculate(self) -> list[GoalStep]:
        view = self.positions
        return [g.calculate(view) for g in self.goals]

    def _merge(self, steps: list[GoalStep]) -> float:
        """Weighted-average merge of all steps. Returns the largest move applied."""
        n = len(self._positions)
        if not steps or n == 0:
            return 0.0
        idx = np.concatenate([np.asarray(s.particle_index, dtype=np.intp) for s in steps])
        w = np.concatenate([s.weight for s in steps])
        wm = np.concatenate([s.move * s.weight[:, None] for s in steps])

        move_sum = np.zeros((n, 3), dtype=np.float64)
        weight_sum = np.zeros(n, dtype=np.float64)
        np.add.at(move_sum, idx, wm)
        np.add.at(weight_sum, idx, w)

        active = weight_sum > 0
        delta = np.zeros((n, 3), dtype=np.float64)
        delta[active] = move_sum[active] / weight_sum[active, None]
        self._positions += delta
        return float(np.max(np.linalg.norm(delta, axis=1)))

    def step(self) -> float:
        """
        Advance the system by one iteration.

        Returns:
            The largest particle move applied [mm].
        """
        prof = self.profiler
        if prof:
            with prof.section("calculate"):
                steps = self._calculate()
            with prof.section("merge"):
                max_move = self._merge(steps)
        else:
            steps = self._calculate()
            max_move = self._merge(steps)
        self.iterations += 1
        return max_move

    def run(self) -> SolveReport:
        """
        Iterate until converged or max_iterations is reached.

        Returns:
            SolveReport for this call.
        """
        max_move = float("inf")
        n = 0
        while n < self.max_iterations:
            max_move = self.step()
            n += 1
            if max_move <= self.tolerance:
                break
        converged = max_move <= self.tolerance
        if converged:
            logger.info(
                "Converged in %d iterations (%d particles, %d goals), max move %.3g mm",
                n, self.particle_count, len(self.goals), max_move,
            )
        else:
            logger.warning(
                "Not converged after %d iterations, max move %.3g mm > tolerance %.3g mm",
                n, max_move, self.tolerance,
            )
        if self.profiler:
            self.profiler.log_summary(logger)
        return SolveReport(iterations=n, max_move=max_move, converged=converged)

    def outputs(self) -> list[Any]:
        """
        Results of all goals for the current positions, in goal order.

        Bars report through the BarStep of a fresh calculate pass; the
        positions are not changed.
        """
        view = self.positions
        out = []
        for g in self.goals:
            s = g.calculate(view)
            if isinstance(s, BarStep):
                out.append(s.output(view))
            else:
                out.append(g.output(view))
        return out

    def bar_results(self) -> list[BarResult]:
        """Results of the bar goals only, in goal order."""
        return [r for g, r in zip(self.goals, self.outputs()) if isinstance(g, BarGoal)]
