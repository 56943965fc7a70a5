"""Sample-level plots of benchmark timings."""

from __future__ import annotations

import importlib
import importlib.util
from typing import Any

import numpy as np

from benchpress.benchmarks.errors import UnsupportedLayoutError
from benchpress.benchmarks.schema import CandidateResult, as_rows
from benchpress.metrics.summary import ResultLike

LAYOUTS = ("beeswarm", "jitter", "ridge", "boxplot", "violin")
CLEAN_COLOR = "tab:blue"
GC_COLOR = "tab:red"


def _pyplot() -> Any:
    if importlib.util.find_spec("matplotlib") is None:
        raise UnsupportedLayoutError("matplotlib is not installed. Install matplotlib to plot results.")
    return importlib.import_module("matplotlib.pyplot")


def row_label(row: CandidateResult) -> str:
    if not row.params:
        return row.expression
    params = ", ".join(f"{key}={value}" for key, value in row.params.items())
    return f"{row.expression} ({params})"


def _split_times(row: CandidateResult) -> tuple[np.ndarray, np.ndarray]:
    clean = np.array([s.elapsed_s for s in row.samples if not s.gc], dtype=float)
    dirty = np.array([s.elapsed_s for s in row.samples if s.gc], dtype=float)
    return clean, dirty


def _positive(times: np.ndarray) -> np.ndarray:
    # Log axis; clamp timer-resolution zeros.
    return np.maximum(times, 1e-9)


def swarm_offsets(times: np.ndarray, width: float = 0.4, bins: int = 40) -> np.ndarray:
    """Deterministic offsets spreading points that share a log-time bin."""
    if times.size == 0:
        return np.zeros(0)
    logs = np.log10(_positive(times))
    lo, hi = logs.min(), logs.max()
    if hi == lo:
        idx = np.zeros(times.size, dtype=int)
    else:
        idx = np.minimum(((logs - lo) / (hi - lo) * bins).astype(int), bins - 1)
    offsets = np.zeros(times.size)
    crowd = max(np.bincount(idx).max(), 1)
    step = width / crowd
    for b in np.unique(idx):
        members = np.flatnonzero(idx == b)
        members = members[np.argsort(logs[members], kind="stable")]
        for rank, member in enumerate(members):
            # 0, +1, -1, +2, -2, ...
            side = (rank + 1) // 2
            offsets[member] = side * step * (1 if rank % 2 else -1)
    return offsets


def _jitter_offsets(times: np.ndarray, width: float = 0.3, seed: int = 0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.uniform(-width, width, size=times.size)


def density(times: np.ndarray, points: int = 128) -> tuple[np.ndarray, np.ndarray]:
    """Gaussian kernel density over log10 time, normalised to a peak of 1."""
    logs = np.log10(_positive(times))
    spread = logs.std()
    bandwidth = 1.06 * spread * logs.size ** (-1 / 5) if spread > 0 else 0.05
    grid = np.linspace(logs.min() - 3 * bandwidth, logs.max() + 3 * bandwidth, points)
    weights = np.exp(-0.5 * ((grid[:, None] - logs[None, :]) / bandwidth) ** 2).sum(axis=1)
    return 10 ** grid, weights / weights.max()


def _draw_points(ax: Any, rows: list[CandidateResult], offsets_fn) -> None:
    for pos, row in enumerate(rows):
        clean, dirty = _split_times(row)
        for times, color, marker in ((clean, CLEAN_COLOR, "o"), (dirty, GC_COLOR, "x")):
            if times.size == 0:
                continue
            ax.scatter(_positive(times), pos + offsets_fn(times), s=10, color=color, marker=marker, alpha=0.7)


def _horizontal_box_kwargs() -> dict[str, Any]:
    matplotlib = importlib.import_module("matplotlib")
    major, minor = (int(part) for part in matplotlib.__version__.split(".")[:2])
    # `vert` is deprecated from 3.10 onwards.
    if (major, minor) >= (3, 10):
        return {"orientation": "horizontal"}
    return {"vert": False}


def _draw_box(ax: Any, rows: list[CandidateResult]) -> None:
    clean_sets = [_positive(_split_times(row)[0]) for row in rows]
    positions = [pos for pos, times in enumerate(clean_sets) if times.size]
    data = [times for times in clean_sets if times.size]
    if data:
        ax.boxplot(data, positions=positions, widths=0.5, showfliers=False, **_horizontal_box_kwargs())
    for pos, row in enumerate(rows):
        dirty = _split_times(row)[1]
        if dirty.size:
            ax.scatter(_positive(dirty), np.full(dirty.size, pos), s=10, color=GC_COLOR, marker="x")


def _draw_violin(ax: Any, rows: list[CandidateResult]) -> None:
    for pos, row in enumerate(rows):
        clean, dirty = _split_times(row)
        if clean.size:
            xs, ys = density(clean)
            ax.fill_between(xs, pos - 0.4 * ys, pos + 0.4 * ys, color=CLEAN_COLOR, alpha=0.5)
        if dirty.size:
            ax.scatter(_positive(dirty), np.full(dirty.size, pos), s=10, color=GC_COLOR, marker="x")


def _draw_ridge(ax: Any, rows: list[CandidateResult]) -> None:
    for pos, row in enumerate(rows):
        clean, dirty = _split_times(row)
        if clean.size:
            xs, ys = density(clean)
            ax.fill_between(xs, pos, pos + 0.9 * ys, color=CLEAN_COLOR, alpha=0.5)
        if dirty.size:
            ax.scatter(_positive(dirty), np.full(dirty.size, pos), s=10, color=GC_COLOR, marker="x")


def plot(result: ResultLike, layout: str = "beeswarm", ax: Any = None) -> Any:
    """Plot every sample time per candidate row and return the figure.

    GC-affected samples are drawn as red crosses, the rest in blue.
    """
    if layout not in LAYOUTS:
        raise UnsupportedLayoutError(f"Unknown layout '{layout}'. Expected one of: {', '.join(LAYOUTS)}.")
    plt = _pyplot()
    rows = as_rows(result)

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 1 + 0.6 * max(len(rows), 1)))
    else:
        fig = ax.figure

    if layout == "beeswarm":
        _draw_points(ax, rows, swarm_offsets)
    elif layout == "jitter":
        _draw_points(ax, rows, _jitter_offsets)
    elif layout == "boxplot":
        _draw_box(ax, rows)
    elif layout == "violin":
        _draw_violin(ax, rows)
    else:
        _draw_ridge(ax, rows)

    ax.set_xscale("log")
    ax.set_yticks(range(len(rows)))
    ax.set_yticklabels([row_label(row) for row in rows])
    ax.set_xlabel("Time (s)")
    ax.set_title(layout)
    ax.grid(True, axis="x", alpha=0.3)
    fig.tight_layout()
    return fig
