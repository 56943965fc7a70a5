"""Benchmarks subpackage."""

from benchpress.benchmarks.errors import (
    BenchError,
    ConfigurationError,
    EquivalenceError,
    ExecutionError,
    SweepError,
    UnsupportedLayoutError,
)
from benchpress.benchmarks.harness import MarkConfig, mark
from benchpress.benchmarks.schema import (
    Candidate,
    CandidateResult,
    CandidateStats,
    GridGroup,
    MarkResult,
    Sample,
    SweepResult,
)
from benchpress.benchmarks.sweep import iter_grid, press

__all__ = [
    "BenchError",
    "Candidate",
    "CandidateResult",
    "CandidateStats",
    "ConfigurationError",
    "EquivalenceError",
    "ExecutionError",
    "GridGroup",
    "MarkConfig",
    "MarkResult",
    "Sample",
    "SweepError",
    "SweepResult",
    "UnsupportedLayoutError",
    "iter_grid",
    "mark",
    "press",
]
