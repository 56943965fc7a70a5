from __future__ import annotations

import pytest

from benchpress import ConfigurationError, EquivalenceError, SweepError, iter_grid, mark, press


def _trivial_builder(params):
    n = params["n"]
    return mark({"square": lambda: n * n}, min_time=1e-6, max_iterations=2)


def test_press_returns_one_group_per_point_in_order():
    result = press({"n": [1, 2]}, _trivial_builder)
    assert [group.params for group in result.groups] == [{"n": 1}, {"n": 2}]
    assert [row.params for row in result.rows] == [{"n": 1}, {"n": 2}]
    assert all(row.expression == "square" for row in result)
    assert result.parameters == ("n",)


def test_grid_is_row_major():
    points = list(iter_grid({"size": [10, 100], "kind": ["a", "b", "c"]}))
    assert points == [
        {"size": 10, "kind": "a"},
        {"size": 10, "kind": "b"},
        {"size": 10, "kind": "c"},
        {"size": 100, "kind": "a"},
        {"size": 100, "kind": "b"},
        {"size": 100, "kind": "c"},
    ]


def test_builder_receives_explicit_parameters():
    seen = []

    def builder(params):
        seen.append(params)
        return mark({"a": lambda: params["x"] + params["y"]}, min_time=1e-6, max_iterations=1)

    result = press({"x": [1, 2], "y": [5]}, builder)
    assert seen == [{"x": 1, "y": 5}, {"x": 2, "y": 5}]
    assert len(result) == 2


def test_duplicate_values_stay_separate_groups():
    result = press({"n": [3, 3]}, _trivial_builder)
    assert len(result.groups) == 2


def test_multiple_candidates_per_point():
    def builder(params):
        data = list(range(params["n"], 0, -1))
        return mark(
            {"sorted": lambda: sorted(data), "sort": lambda: list(sorted(data))},
            min_time=1e-6,
            max_iterations=2,
        )

    result = press({"n": [5, 50]}, builder)
    assert [row.expression for row in result] == ["sorted", "sort", "sorted", "sort"]
    assert [row.params["n"] for row in result] == [5, 5, 50, 50]


def test_first_failure_aborts_sweep():
    calls = []

    def builder(params):
        calls.append(params["n"])
        n = params["n"]
        offset = 1 if n == 2 else 0
        return mark({"f": lambda: n, "g": lambda: n + offset}, min_time=1e-6, max_iterations=1)

    with pytest.raises(SweepError) as excinfo:
        press({"n": [1, 2, 3]}, builder)
    assert calls == [1, 2]
    assert excinfo.value.params == {"n": 2}
    assert isinstance(excinfo.value.__cause__, EquivalenceError)
    assert "n=2" in str(excinfo.value)


@pytest.mark.parametrize("parameters", [{}, {"n": []}, {"n": "abc"}])
def test_invalid_grid(parameters):
    with pytest.raises(ConfigurationError):
        press(parameters, _trivial_builder)


@pytest.mark.parametrize("name", ["expression", "min", "time", "n_itr", "run"])
def test_parameter_names_cannot_shadow_result_columns(name):
    with pytest.raises(ConfigurationError, match="reserved"):
        press({name: [1, 2]}, lambda params: mark({"noop": lambda: None}, min_time=1e-6, max_iterations=1))
