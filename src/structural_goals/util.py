# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

Provides low-level 3D vector helpers shared by the goals and the particle
system. All functions operate on vectors represented as numpy arrays of
shape (3,), or on stacks of them with shape (n, 3).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.
    
    Used throughout the codebase to ensure consistent numeric precision
    and allow tuple/list inputs for points and vectors.
    """
    return np.array(x, dtype=np.float64)


def point3(x) -> np.ndarray:
    """
    Convert an array-like to a float64 point of shape (3,).
    
    Raises:
        ValueError: If the input does not hold exactly three finite values.
    """
    p = f64(x)
    if p.shape != (3,):
        raise ValueError(f"Expected a 3D point, got shape {p.shape}")
    if not np.all(np.isfinite(p)):
        raise ValueError(f"Point coordinates must be finite, got {p.tolist()}")
    return p


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 3D vector. Avoids sqrt."""
    return float(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 3D vector."""
    return float(np.sqrt(norm2(v)))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit (normalized) vector in the same direction as v.
    
    Returns zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(3, dtype=np.float64)
    return v / n


def read_only(a: np.ndarray) -> np.ndarray:
    """Return a non-writeable view of an array (the array itself is untouched)."""
    view = a.view()
    view.flags.writeable = False
    return view
