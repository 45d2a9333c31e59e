# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides:
    - JSON model loading: Build a ParticleSystem with bars, anchors and loads.
    - JSON result writing: Export bar results for downstream tools.

Typical usage:
    from structural_goals.io import load_model, save_results

    system = load_model("truss.json")
    system.run()
    save_results(system.bar_results(), "forces.json")
"""
from .json_io import (
    load_model,
    load_model_raw,
    model_from_json,
    bar_from_json,
    anchor_from_json,
    load_from_json,
    results_to_json,
    result_to_json,
    save_results,
)

__all__ = [
    # Loading
    "load_model",
    "load_model_raw",
    "model_from_json",
    "bar_from_json",
    "anchor_from_json",
    "load_from_json",
    # Saving
    "results_to_json",
    "result_to_json",
    "save_results",
]
