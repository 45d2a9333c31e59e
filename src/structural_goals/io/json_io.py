# MIT License (see LICENSE)
"""
JSON loading of bar models and writing of bar results.

JSON Model Schema Overview:
---------------------------
{
  "tolerance": float,              # Convergence threshold [mm], default: 1e-9
  "max_iterations": int,           # Default: 10000
  "merge_tolerance": float,        # Point sharing distance [mm], default: 1e-6
  "bars": [
    {
      "line": [[x,y,z], [x,y,z]],  # Required, mm
      "E": float,                  # Required, MPa
      "A": float,                  # Required, mm²
      "pretension": float          # Optional, kN, default: 0
    }
  ],
  "anchors": [                     # Optional
    {
      "point": [x,y,z],            # Required
      "strength": float,           # Optional
      "target": [x,y,z]            # Optional, default: point
    }
  ],
  "loads": [                       # Optional
    {
      "point": [x,y,z],            # Required
      "force": [fx,fy,fz]          # Required, kN
    }
  ]
}

JSON Results Schema:
--------------------
[
  {
    "startIndex": int, "endIndex": int,
    "line": [[x,y,z], [x,y,z]],
    "axialForce": float,           # kN (- compression)
    "axialStress": float           # MPa (- compression)
  }
]
"""
from __future__ import annotations
import json
import logging
from typing import TYPE_CHECKING, Any

import numpy as np

from ..constants import (
    DEFAULT_ANCHOR_STRENGTH,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MERGE_TOLERANCE,
    DEFAULT_TOLERANCE,
)
from ..goals.anchor import AnchorGoal
from ..goals.bar import BarGoal, BarResult
from ..goals.load import LoadGoal

if TYPE_CHECKING:
    from ..solver import ParticleSystem

logger = logging.getLogger(__name__)


def load_model_raw(path: str) -> dict[str, Any]:
    """
    Load raw JSON data from a model file without object construction.

    Args:
        path: Absolute or relative path to the JSON file.

    Returns:
        Dictionary containing the raw JSON data.
    """
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _require(d: dict[str, Any], key: str, what: str) -> Any:
    if not isinstance(d, dict):
        raise ValueError(f"{what} definition must be an object, got {type(d).__name__}")
    if key not in d:
        raise ValueError(f"{what} definition missing required '{key}' field.")
    return d[key]


def _number(value: Any, key: str, what: str) -> float:
    """A JSON number; booleans and other kinds are rejected."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{what} field '{key}' must be a number, got {value!r}")
    return float(value)


def _integer(value: Any, key: str, what: str) -> int:
    """A JSON integer; integral floats such as 100.0 are accepted, 2.7 is not."""
    n = _number(value, key, what)
    if not n.is_integer():
        raise ValueError(f"{what} field '{key}' must be an integer, got {value!r}")
    return int(n)


def _vector(value: Any, key: str, what: str) -> list[float]:
    """A list of three JSON numbers."""
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        raise ValueError(f"{what} field '{key}' must be a list of 3 numbers, got {value!r}")
    return [_number(v, key, what) for v in value]


def _items(data: dict[str, Any], key: str) -> list[Any]:
    items = data.get(key, [])
    if not isinstance(items, list):
        raise ValueError(f"Model field '{key}' must be a list, got {type(items).__name__}")
    return items


def bar_from_json(d: dict[str, Any]) -> BarGoal:
    """Parse a single bar definition."""
    line = _require(d, "line", "Bar")
    if not isinstance(line, (list, tuple)) or len(line) != 2:
        raise ValueError(f"Bar line must be a list of 2 points, got {line!r}")
    return BarGoal(
        (_vector(line[0], "line", "Bar"), _vector(line[1], "line", "Bar")),
        e_modulus=_number(_require(d, "E", "Bar"), "E", "Bar"),
        area=_number(_require(d, "A", "Bar"), "A", "Bar"),
        pretension=_number(d.get("pretension", 0.0), "pretension", "Bar"),
    )


def anchor_from_json(d: dict[str, Any]) -> AnchorGoal:
    """Parse a single anchor definition."""
    point = _vector(_require(d, "point", "Anchor"), "point", "Anchor")
    target = d.get("target")
    return AnchorGoal(
        point,
        strength=_number(d.get("strength", DEFAULT_ANCHOR_STRENGTH), "strength", "Anchor"),
        target=None if target is None else _vector(target, "target", "Anchor"),
    )


def load_from_json(d: dict[str, Any]) -> LoadGoal:
    """Parse a single point load definition."""
    return LoadGoal(
        _vector(_require(d, "point", "Load"), "point", "Load"),
        _vector(_require(d, "force", "Load"), "force", "Load"),
    )


def model_from_json(data: dict[str, Any]) -> "ParticleSystem":
    """
    Build a ParticleSystem with all goals from parsed JSON data.

    Bars are added first, then anchors, then loads, so bar particle
    indices follow the order of the bars list.

    Raises:
        ValueError: If a required field is missing or a value is invalid.
    """
    # Import locally to avoid circular import
    from ..solver import ParticleSystem

    if not isinstance(data, dict):
        raise ValueError(f"Model must be a JSON object, got {type(data).__name__}")
    system = ParticleSystem(
        tolerance=_number(data.get("tolerance", DEFAULT_TOLERANCE), "tolerance", "Model"),
        max_iterations=_integer(
            data.get("max_iterations", DEFAULT_MAX_ITERATIONS), "max_iterations", "Model"
        ),
        merge_tolerance=_number(
            data.get("merge_tolerance", DEFAULT_MERGE_TOLERANCE), "merge_tolerance", "Model"
        ),
    )
    system.add_goals(bar_from_json(b) for b in _items(data, "bars"))
    system.add_goals(anchor_from_json(a) for a in _items(data, "anchors"))
    system.add_goals(load_from_json(p) for p in _items(data, "loads"))
    logger.debug(
        "Loaded model: %d goals on %d particles", len(system.goals), system.particle_count
    )
    return system


def load_model(path: str) -> "ParticleSystem":
    """
    Load and construct a ready-to-run ParticleSystem from a JSON file.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If required fields are missing or invalid.
    """
    return model_from_json(load_model_raw(path))


def result_to_json(result: BarResult) -> dict[str, Any]:
    """Serialize one bar result."""
    return {
        "startIndex": int(result.start_index),
        "endIndex": int(result.end_index),
        "line": [_to_list(result.line.start), _to_list(result.line.end)],
        "axialForce": float(result.axial_force),
        "axialStress": float(result.axial_stress),
    }


def results_to_json(results: list[BarResult]) -> list[dict[str, Any]]:
    """Serialize a list of bar results to a JSON-compatible list."""
    return [result_to_json(r) for r in results]


def save_results(results: list[BarResult], path: str, indent: int = 2) -> None:
    """Save bar results to a JSON file on disk."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(results_to_json(results), f, indent=indent)


def _to_list(arr: Any) -> list[float]:
    """Helper: Convert numpy array or tuple to a clean list of floats."""
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
