from __future__ import annotations

import importlib.util

import matplotlib.pyplot as plt
import numpy as np
import pytest

from benchpress import LAYOUTS, UnsupportedLayoutError, plot
from benchpress.plotting import render as plot_module


@pytest.fixture
def sweep_rows(result_factory):
    return [
        result_factory("a", [0.001, 0.0012, 0.0011, 0.005], gc_flags=[False, False, False, True], params={"n": 1}),
        result_factory("a", [0.002, 0.002], params={"n": 2}),
        result_factory("b", [0.004], gc_flags=[True], params={"n": 2}),
    ]


@pytest.mark.parametrize("layout", LAYOUTS)
def test_every_layout_renders(sweep_rows, layout):
    fig = plot(sweep_rows, layout=layout)
    try:
        ax = fig.axes[0]
        assert ax.get_xscale() == "log"
        assert [label.get_text() for label in ax.get_yticklabels()] == ["a (n=1)", "a (n=2)", "b (n=2)"]
        assert ax.get_title() == layout
    finally:
        plt.close(fig)


def test_gc_samples_drawn_separately(sweep_rows):
    fig = plot(sweep_rows, layout="beeswarm")
    try:
        colors = {tuple(np.round(coll.get_facecolor()[0][:3], 3)) for coll in fig.axes[0].collections}
        assert len(colors) == 2
    finally:
        plt.close(fig)


def test_plot_onto_existing_axes(result_factory):
    fig, ax = plt.subplots()
    try:
        returned = plot([result_factory("x", [0.1, 0.2])], layout="boxplot", ax=ax)
        assert returned is fig
    finally:
        plt.close(fig)


def test_unknown_layout_rejected(result_factory):
    with pytest.raises(UnsupportedLayoutError):
        plot([result_factory("x", [0.1])], layout="pie")


def test_missing_matplotlib_is_reported(result_factory, monkeypatch):
    real_find_spec = importlib.util.find_spec

    def fake_find_spec(name, *args, **kwargs):
        if name == "matplotlib":
            return None
        return real_find_spec(name, *args, **kwargs)

    monkeypatch.setattr(plot_module.importlib.util, "find_spec", fake_find_spec)
    with pytest.raises(UnsupportedLayoutError):
        plot([result_factory("x", [0.1])], layout="violin")


def test_swarm_offsets_are_deterministic():
    times = np.array([0.1, 0.1, 0.1, 0.2])
    first = plot_module.swarm_offsets(times)
    second = plot_module.swarm_offsets(times)
    assert np.array_equal(first, second)
    assert len(set(first[:3])) == 3


def test_density_peaks_at_one():
    xs, ys = plot_module.density(np.array([0.01, 0.011, 0.012]))
    assert ys.max() == pytest.approx(1.0)
    assert xs.min() < 0.01 < xs.max()
