import numpy as np
import pytest
from structural_goals.goals import BarGoal
from structural_goals.solver import ParticleSystem
from structural_goals.types import Line


def test_equal_lines_hash_equal():
    a = Line((0, 0, 0), (1000, 0, 0))
    b = Line(np.array([0.0, 0.0, 0.0]), [1000.0, 0.0, 0.0])
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert {a: "bar"}[b] == "bar"
    assert Line((0, 0, 0), (0, 1000, 0)) != a


def test_results_can_be_grouped_by_line():
    system = ParticleSystem()
    system.add_goals([
        BarGoal(((0, 0, 0), (1000, 0, 0)), 200000.0, 100.0),
        BarGoal(((1000, 0, 0), (1000, 1000, 0)), 200000.0, 100.0),
    ])
    by_line = {r.line: r for r in system.bar_results()}
    assert set(by_line) == {Line((0, 0, 0), (1000, 0, 0)), Line((1000, 0, 0), (1000, 1000, 0))}


def test_line_endpoints_are_read_only_copies():
    start = np.array([1.0, 2.0, 3.0])
    line = Line(start, (4, 5, 6))
    h = hash(line)

    start[0] = 99.0
    assert line.start[0] == 1.0
    with pytest.raises(ValueError):
        line.start[0] = 99.0
    with pytest.raises(ValueError):
        line.end += 1.0
    assert hash(line) == h


def test_line_rejects_bad_points():
    with pytest.raises(ValueError):
        Line((0, 0), (1, 0, 0))
    with pytest.raises(ValueError):
        Line((0, 0, 0), (float("inf"), 0, 0))
