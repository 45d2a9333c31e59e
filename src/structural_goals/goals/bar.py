# MIT License (see LICENSE)
"""
Axial bar goal.

A bar is a two-particle goal with axial stiffness only. Each iteration it
asks both endpoints to move half of the current extension towards each
other (or apart), so that applied together the two moves restore the rest
length. The merge weight of each endpoint is 2·E·A/L0: when the system
merges the bar with other goals on a shared particle, the weighted sum
Σ w·m balances as a sum of forces, and the bar's share
    w·|m| = (2·E·A/L0)·(extension/2) = E·A·extension/L0
is exactly the Hooke's-law axial force in N.

Units:
    positions [mm], E [MPa], A [mm²], pre-tension and output force [kN],
    output stress [MPa]. Negative force/stress means compression.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
import math
from typing import NamedTuple, Sequence

import numpy as np

from ..constants import N_PER_KN
from ..materials import BarSection
from ..types import Line
from ..util import norm, unit
from .base import Goal, GoalStep

logger = logging.getLogger(__name__)


class BarResult(NamedTuple):
    """
    Output record of a bar, in the order downstream consumers expect.

    Attributes:
        start_index: Particle index of the start point.
        end_index: Particle index of the end point.
        line: Current (deformed) bar geometry.
        axial_force: Axial force in kN (- compression, + tension).
        axial_stress: Axial stress in MPa (- compression, + tension).
    """
    start_index: int
    end_index: int
    line: Line
    axial_force: float
    axial_stress: float


def _bar_result(
    particle_index: Sequence[int],
    positions: np.ndarray,
    weight: float,
    move: np.ndarray,
    is_compression_member: bool,
    area: float,
) -> BarResult:
    """Axial force from the bar's share of the merge: F = ±w·|m| [N]."""
    factor = -1.0 if is_compression_member else 1.0
    force = factor * weight * norm(move)
    i0, i1 = particle_index
    return BarResult(
        start_index=i0,
        end_index=i1,
        line=Line(positions[i0], positions[i1]),
        axial_force=force / N_PER_KN,
        axial_stress=force / area,
    )


@dataclass(frozen=True)
class BarStep(GoalStep):
    """
    Bar contribution for one iteration.

    Carries what the bar saw when the step was computed, so the result
    it produces always matches the moves that went into the merge.

    Attributes:
        extension: Current length minus rest length [mm].
        is_compression_member: Sign state after this step.
        area: Cross-section area [mm²].
    """
    extension: float
    is_compression_member: bool
    area: float

    def output(self, positions: np.ndarray) -> BarResult:
        """Axial force/stress for this step and the current line geometry."""
        return _bar_result(
            self.particle_index, positions, float(self.weight[0]),
            self.move[0], self.is_compression_member, self.area,
        )


class BarGoal(Goal):
    """
    Bar element with axial stiffness only.

    Args:
        line: Bar geometry [mm] (a Line or a pair of points).
        e_modulus: Young's modulus E [MPa].
        area: Cross-section area A [mm²].
        pretension: Optional pre-tension force [kN]. Positive values shorten
                    the rest length so the assembled bar is in tension.

    Raises:
        ValueError: For non-positive E or A, coincident endpoints, or a
                    pre-tension that leaves a non-positive rest length.
    """

    def __init__(
        self,
        line: Line | Sequence[Sequence[float]],
        e_modulus: float,
        area: float,
        pretension: float = 0.0,
    ) -> None:
        if not isinstance(line, Line):
            start, end = line
            line = Line(start, end)
        section = BarSection(float(e_modulus), float(area))
        pretension = float(pretension)
        if not math.isfinite(pretension):
            raise ValueError(f"Pre-tension must be finite, got {pretension}")

        length = line.length
        if length <= 0.0:
            raise ValueError("Bar endpoints coincide; a bar needs a non-zero length")
        if not math.isfinite(length):
            raise ValueError(f"Bar length overflows: {length}")

        stiffness = 2.0 * section.axial_rigidity / length
        if not math.isfinite(stiffness) or stiffness <= 0.0:
            raise ValueError(
                f"Bar stiffness 2·E·A/L = {stiffness} is not a finite positive weight "
                f"(E·A = {section.axial_rigidity} N, L = {length} mm)"
            )
        super().__init__((line.start, line.end), (stiffness, stiffness))

        self.section = section
        self.area = section.area
        self.pretension = pretension
        self.is_compression_member = True

        # Adjust rest length if pre-stressed bar
        self.rest_length = length - (pretension * N_PER_KN * length) / section.axial_rigidity
        if not math.isfinite(self.rest_length) or self.rest_length <= 0.0:
            raise ValueError(
                f"Pre-tension {pretension} kN leaves a non-positive rest length "
                f"({self.rest_length} mm) for a bar of length {length} mm"
            )
        logger.debug(
            "BarGoal L0=%.6g rest=%.6g weight=%.6g", length, self.rest_length, stiffness
        )

    @property
    def e_modulus(self) -> float:
        return self.section.e_modulus

    def calculate(self, positions: np.ndarray) -> BarStep:
        """
        Compute the moves restoring the rest length.

        Args:
            positions: Particle buffer, shape (n, 3). Not modified.

        Returns:
            BarStep with move[0] = dir·ext/2 and move[1] = -move[0].

        Note:
            Coincident endpoints give a zero direction and hence a zero move.
        """
        self._require_bound()
        i0, i1 = self.particle_index
        d = positions[i1] - positions[i0]
        current_length = norm(d)
        force_dir = unit(d)
        if current_length == 0.0:
            logger.debug("BarGoal particles %d and %d coincide; no correction", i0, i1)

        extension = current_length - self.rest_length
        if extension > 0.0:
            self.is_compression_member = False
        elif extension < 0.0:
            self.is_compression_member = True

        self.move[0] = force_dir * (extension / 2)
        self.move[1] = -self.move[0]

        return BarStep(
            particle_index=(i0, i1),
            move=self.move.copy(),
            weight=self.weight.copy(),
            extension=extension,
            is_compression_member=self.is_compression_member,
            area=self.area,
        )

    def output(self, positions: np.ndarray) -> BarResult:
        """
        Axial force/stress from the most recent calculate.

        Before any calculate the move is zero, so the force is zero.
        """
        self._require_bound()
        return _bar_result(
            self.particle_index, positions, float(self.weight[0]),
            self.move[0], self.is_compression_member, self.area,
        )
