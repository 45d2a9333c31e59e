# MIT License (see LICENSE)
"""
Checks on a solved particle system.

Used for verifying that a run actually reached static equilibrium:
at a converged state the weighted moves on every free particle cancel
(forces balance), and the stored elastic energy is finite and positive
for any loaded assembly.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from .constants import N_PER_KN
from .goals.anchor import AnchorGoal
from .goals.bar import BarGoal, BarResult

if TYPE_CHECKING:
    from .solver import ParticleSystem


def strain_energy(results: list[BarResult], bars: list[BarGoal]) -> float:
    """
    Total elastic energy stored in the bars.

    U = Σ F²·L0 / (2·E·A) = Σ F² / w   with w = 2·E·A/L0

    Args:
        results: Bar results, one per bar, in the same order as bars.
        bars: The bar goals that produced them.

    Returns:
        Energy in N·mm.
    """
    if len(results) != len(bars):
        raise ValueError(f"Got {len(results)} results for {len(bars)} bars")
    u = 0.0
    for r, b in zip(results, bars):
        f = r.axial_force * N_PER_KN
        u += f * f / float(b.weight[0])
    return u


def nodal_residual(system: "ParticleSystem") -> float:
    """
    Largest force imbalance |Σ w·m| over particles not held by an anchor.

    Args:
        system: A particle system, typically after run().

    Returns:
        Residual force in N.
    """
    n = system.particle_count
    if n == 0:
        return 0.0
    view = system.positions
    total = np.zeros((n, 3), dtype=np.float64)
    anchored = np.zeros(n, dtype=bool)
    for g in system.goals:
        s = g.calculate(view)
        idx = np.asarray(s.particle_index, dtype=np.intp)
        np.add.at(total, idx, s.move * s.weight[:, None])
        if isinstance(g, AnchorGoal):
            anchored[idx] = True
    free = ~anchored
    if not free.any():
        return 0.0
    return float(np.max(np.linalg.norm(total[free], axis=1)))
