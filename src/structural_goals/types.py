# MIT License (see LICENSE)
"""
Core geometric type definitions.

Defines the line segment used to describe bar elements on input and
to report the deformed bar geometry on output. Points are plain float64
numpy arrays of shape (3,) in millimetres.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .util import point3, norm, read_only


Point3 = np.ndarray


@dataclass(frozen=True, eq=False)
class Line:
    """
    A straight segment between two 3D points.
    
    Attributes:
        start: First endpoint [x, y, z] in mm.
        end: Second endpoint [x, y, z] in mm.
    
    Note:
        Endpoints are copied to read-only float64 arrays on init, so the
        line cannot change after construction. Lines compare and hash by
        their coordinates.
    """
    start: Point3 | tuple[float, float, float]
    end: Point3 | tuple[float, float, float]

    def __post_init__(self) -> None:
        """Store endpoints as read-only float64 arrays."""
        object.__setattr__(self, "start", read_only(point3(self.start)))
        object.__setattr__(self, "end", read_only(point3(self.end)))

    @property
    def length(self) -> float:
        """Euclidean distance between the endpoints."""
        return norm(self.end - self.start)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return bool(np.array_equal(self.start, other.start) and np.array_equal(self.end, other.end))

    def __hash__(self) -> int:
        return hash((tuple(self.start.tolist()), tuple(self.end.tolist())))
