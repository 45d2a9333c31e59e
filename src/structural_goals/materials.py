# MIT License (see LICENSE)
"""
Bar cross-section and material properties.

A BarSection bundles the two values that define the axial stiffness of a
bar per unit length: Young's modulus and cross-section area.
"""
from __future__ import annotations
from dataclasses import dataclass
import math


@dataclass(frozen=True)
class BarSection:
    """
    Axial properties of a bar element.
    
    Attributes:
        e_modulus: Young's modulus E in MPa (N/mm²). Must be > 0.
        area: Cross-section area A in mm². Must be > 0.
    
    Note:
        E·A has units of N, so the axial stiffness of a bar of length L
        is E·A/L in N/mm.
    """
    e_modulus: float
    area: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.e_modulus) or self.e_modulus <= 0:
            raise ValueError(f"E-modulus must be positive, got {self.e_modulus}")
        if not math.isfinite(self.area) or self.area <= 0:
            raise ValueError(f"Cross-section area must be positive, got {self.area}")
        if not math.isfinite(self.e_modulus * self.area):
            raise ValueError(
                f"E·A overflows for E={self.e_modulus} MPa and A={self.area} mm²"
            )

    @property
    def axial_rigidity(self) -> float:
        """E·A in N."""
        return self.e_modulus * self.area

