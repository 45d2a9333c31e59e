import json

import pytest
from structural_goals.goals import BarGoal, AnchorGoal, LoadGoal
from structural_goals.io import load_model, model_from_json, save_results, results_to_json


def _model() -> dict:
    return {
        "tolerance": 1e-9,
        "max_iterations": 5000,
        "bars": [
            {"line": [[0, 0, 0], [1000, -1000, 0]], "E": 200000, "A": 100},
            {"line": [[2000, 0, 0], [1000, -1000, 0]], "E": 200000, "A": 100},
        ],
        "anchors": [
            {"point": [0, 0, 0]},
            {"point": [2000, 0, 0], "strength": 1e13},
        ],
        "loads": [
            {"point": [1000, -1000, 0], "force": [0, -10, 0]},
        ],
    }


def test_load_model_builds_goals(tmp_path):
    p = tmp_path / "truss.json"
    p.write_text(json.dumps(_model()), encoding="utf-8")

    system = load_model(str(p))

    assert system.max_iterations == 5000
    assert system.particle_count == 3
    kinds = [type(g) for g in system.goals]
    assert kinds == [BarGoal, BarGoal, AnchorGoal, AnchorGoal, LoadGoal]
    assert system.goals[3].strength == 1e13
    assert system.goals[0].particle_index == [0, 1]
    assert system.goals[1].particle_index == [2, 1]


def test_model_runs_and_results_round_trip(tmp_path):
    system = model_from_json(_model())
    assert system.run().converged

    results = system.bar_results()
    p = tmp_path / "forces.json"
    save_results(results, str(p))

    data = json.loads(p.read_text(encoding="utf-8"))
    assert data == results_to_json(results)
    assert len(data) == 2
    first = data[0]
    assert set(first) == {"startIndex", "endIndex", "line", "axialForce", "axialStress"}
    assert first["startIndex"] == 0 and first["endIndex"] == 1
    assert first["axialForce"] == pytest.approx(10.0 / 2 ** 0.5, rel=1e-3)
    assert first["axialStress"] == pytest.approx(first["axialForce"] * 1000 / 100)
    assert len(first["line"]) == 2 and len(first["line"][1]) == 3


def test_pretension_is_read():
    system = model_from_json({
        "bars": [{"line": [[0, 0, 0], [1000, 0, 0]], "E": 200000, "A": 100, "pretension": 5}],
        "anchors": [{"point": [0, 0, 0]}, {"point": [1000, 0, 0]}],
    })
    assert system.goals[0].rest_length == pytest.approx(999.75)
    system.run()
    [result] = system.bar_results()
    assert result.axial_force == pytest.approx(5.0, rel=1e-6)


@pytest.mark.parametrize("data, match", [
    ({"bars": [{"E": 1, "A": 1}]}, "'line'"),
    ({"bars": [{"line": [[0, 0, 0], [1, 0, 0]], "A": 1}]}, "'E'"),
    ({"bars": [{"line": [[0, 0, 0]], "E": 1, "A": 1}]}, "2 points"),
    ({"bars": [{"line": [[0, 0, 0], [1, 0, 0]], "E": -1, "A": 1}]}, "E-modulus"),
    ({"anchors": [{"strength": 1}]}, "'point'"),
    ({"loads": [{"point": [0, 0, 0]}]}, "'force'"),
    ({"max_iterations": 0}, "max_iterations"),
    # wrongly typed values surface as ValueError, not TypeError
    ({"bars": [{"line": 5, "E": 1, "A": 1}]}, "2 points"),
    ({"bars": [{"line": [[0, 0, 0], [1, 0, 0]], "E": None, "A": 1}]}, "'E'"),
    ({"bars": [{"line": [[0, 0, 0], [1, 0, 0]], "E": 1, "A": "100"}]}, "'A'"),
    ({"bars": [{"line": [[0, 0, 0], [1, 0, 0]], "E": 1, "A": 1, "pretension": True}]},
     "'pretension'"),
    ({"bars": [{"line": [[0, 0, 0], "a"], "E": 1, "A": 1}]}, "'line'"),
    ({"bars": [{"line": [[0, 0, 0], [1, None, 0]], "E": 1, "A": 1}]}, "'line'"),
    ({"bars": [7]}, "must be an object"),
    ({"bars": 5}, "'bars'"),
    ({"anchors": [{"point": [0, 0]}]}, "'point'"),
    ({"anchors": [{"point": [0, 0, 0], "strength": "stiff"}]}, "'strength'"),
    ({"anchors": [{"point": [0, 0, 0], "target": 3}]}, "'target'"),
    ({"loads": [{"point": [0, 0, 0], "force": "10 kN"}]}, "'force'"),
    ({"loads": {"point": [0, 0, 0]}}, "'loads'"),
    # integral values only; 2.7 is not silently truncated to 2
    ({"max_iterations": 2.7}, "max_iterations"),
    ({"max_iterations": "100"}, "max_iterations"),
    ({"max_iterations": True}, "max_iterations"),
    ({"tolerance": None}, "tolerance"),
    ([], "JSON object"),
])
def test_invalid_model_rejected(data, match):
    with pytest.raises(ValueError, match=match):
        model_from_json(data)


def test_integral_float_max_iterations_accepted():
    system = model_from_json({"max_iterations": 100.0, "bars": []})
    assert system.max_iterations == 100
    assert isinstance(system.max_iterations, int)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_model(str(tmp_path / "missing.json"))
