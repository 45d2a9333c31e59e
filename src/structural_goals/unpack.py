# MIT License (see LICENSE)
"""
Unpacking of bar output records for display.

A bar result is the ordered record
    (start_index, end_index, line, axial_force [kN], axial_stress [MPa]).
unpack_bar_output checks each field's kind, rounds force to 2 decimals and
stress to 1 decimal (round half to even), and passes everything else
through unchanged.
"""
from __future__ import annotations
from collections.abc import Sequence
from numbers import Integral, Real
from typing import Any, NamedTuple

from .types import Line

FORCE_DECIMALS = 2
STRESS_DECIMALS = 1


class BarOutput(NamedTuple):
    """Display values of one bar."""
    start_index: int
    end_index: int
    line: Line
    axial_force: float
    axial_stress: float


def _index(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    return int(value)


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    return float(value)


def unpack_bar_output(record: Any) -> BarOutput:
    """
    Split a bar output record into display values.

    Args:
        record: A BarResult or any 5-item sequence of the same layout.

    Returns:
        BarOutput with force rounded to 2 and stress to 1 decimal places.

    Raises:
        TypeError: If record is not a sequence or a field has the wrong kind.
        ValueError: If record does not have exactly 5 fields.
    """
    if isinstance(record, (str, bytes)) or not isinstance(record, Sequence):
        raise TypeError(f"Bar output must be a sequence, got {type(record).__name__}")
    if len(record) != 5:
        raise ValueError(f"Bar output must have 5 fields, got {len(record)}")

    start_index = _index(record[0], "start index")
    end_index = _index(record[1], "end index")
    line = record[2]
    if not isinstance(line, Line):
        raise TypeError(f"line must be a Line, got {type(line).__name__}")
    force = _number(record[3], "axial force")
    stress = _number(record[4], "axial stress")

    return BarOutput(
        start_index=start_index,
        end_index=end_index,
        line=line,
        axial_force=round(force, FORCE_DECIMALS),
        axial_stress=round(stress, STRESS_DECIMALS),
    )
