from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from benchpress.benchmarks.schema import CandidateResult, Sample
from benchpress.metrics.metrics import compute_stats


def make_result(expression: str, times: list[float], gc_flags: list[bool] | None = None, params=None) -> CandidateResult:
    flags = gc_flags or [False] * len(times)
    samples = tuple(
        Sample(elapsed_s=t, mem_alloc_bytes=64, gc=flag, gc_generation=0 if flag else None)
        for t, flag in zip(times, flags)
    )
    return CandidateResult(expression=expression, samples=samples, stats=compute_stats(samples), params=dict(params or {}))


@pytest.fixture
def result_factory():
    return make_result
