# MIT License (see LICENSE)
"""
structural_goals - Axial bar goals for particle-based structural form finding.

This package provides a Hooke's-law bar goal for iterative, particle-based
solvers, together with a small reference particle system to drive it.

Main entry points:
    - BarGoal: Two-node axial bar with optional pre-tension.
    - AnchorGoal, LoadGoal: Supports and point loads.
    - ParticleSystem: Registers goals, iterates, merges weighted moves.
    - unpack_bar_output: Rounded display values of a bar result.

Submodules:
    - goals: Goal interface and goal kinds.
    - io: JSON model loading and result writing.
    - invariants: Equilibrium and energy checks.

Example:
    from structural_goals import ParticleSystem, BarGoal, AnchorGoal, LoadGoal

    system = ParticleSystem()
    system.add_goal(BarGoal(((0, 0, 0), (1000, 0, 0)), e_modulus=210000, area=100))
    system.add_goal(AnchorGoal((0, 0, 0)))
    system.add_goal(LoadGoal((1000, 0, 0), force=(10, 0, 0)))
    system.run()
    print(system.bar_results())
"""
from .solver import ParticleSystem, SolveReport
from .goals import Goal, GoalStep, BarGoal, BarStep, BarResult, AnchorGoal, LoadGoal
from .types import Line
from .materials import BarSection
from .unpack import BarOutput, unpack_bar_output

__all__ = [
    # Solving
    "ParticleSystem",
    "SolveReport",
    # Goals
    "Goal",
    "GoalStep",
    "BarGoal",
    "BarStep",
    "BarResult",
    "AnchorGoal",
    "LoadGoal",
    # Geometry / sections
    "Line",
    "BarSection",
    # Presentation
    "BarOutput",
    "unpack_bar_output",
]
