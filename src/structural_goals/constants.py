# MIT License (see LICENSE)
"""
Unit conversions and solver defaults.

Geometry is in millimetres, moduli and stresses in MPa (N/mm²), areas in
mm² and forces in kN at the public boundary. Internally forces are in N,
so E·A (MPa·mm²) is a force in N and F·L/(E·A) is a length in mm.
"""
from __future__ import annotations

# Newtons per kilonewton.
N_PER_KN: float = 1000.0

# Weight used by AnchorGoal when none is given. Large compared to typical
# bar stiffness weights 2·E·A/L (~1e4..1e6 N/mm) so supports barely drift.
DEFAULT_ANCHOR_STRENGTH: float = 1e12

# Default convergence threshold on the largest merged particle move [mm].
DEFAULT_TOLERANCE: float = 1e-9

# Registered positions closer than this share one particle [mm].
DEFAULT_MERGE_TOLERANCE: float = 1e-6

DEFAULT_MAX_ITERATIONS: int = 10000
