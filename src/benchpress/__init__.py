"""Micro-benchmark harness: time candidates with mark, sweep grids with press."""

from benchpress.benchmarks import (
    BenchError,
    Candidate,
    CandidateResult,
    CandidateStats,
    ConfigurationError,
    EquivalenceError,
    ExecutionError,
    GridGroup,
    MarkConfig,
    MarkResult,
    Sample,
    SweepError,
    SweepResult,
    UnsupportedLayoutError,
    iter_grid,
    mark,
    press,
)
from benchpress.metrics.summary import format_table, sample_rows, summary_rows
from benchpress.plotting.render import LAYOUTS, plot

__version__ = "0.1.0"

__all__ = [
    "BenchError",
    "Candidate",
    "CandidateResult",
    "CandidateStats",
    "ConfigurationError",
    "EquivalenceError",
    "ExecutionError",
    "GridGroup",
    "LAYOUTS",
    "MarkConfig",
    "MarkResult",
    "Sample",
    "SweepError",
    "SweepResult",
    "UnsupportedLayoutError",
    "format_table",
    "iter_grid",
    "mark",
    "plot",
    "press",
    "sample_rows",
    "summary_rows",
]
