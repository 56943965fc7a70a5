"""Summary statistic calculations."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from benchpress.benchmarks.schema import CandidateStats, Sample


def retained_samples(samples: Sequence[Sample], filter_gc: bool = True) -> list[Sample]:
    if not filter_gc:
        return list(samples)
    return [sample for sample in samples if not sample.gc]


def compute_stats(samples: Sequence[Sample], filter_gc: bool = True) -> CandidateStats | None:
    """Statistics over the samples kept after GC filtering.

    Returns None when no sample survives the filter.
    """
    kept = retained_samples(samples, filter_gc)
    if not kept:
        return None

    times = np.fromiter((sample.elapsed_s for sample in kept), dtype=float, count=len(kept))
    total = float(times.sum())
    memory = [sample.mem_alloc_bytes for sample in kept if sample.mem_alloc_bytes is not None]
    return CandidateStats(
        min=float(times.min()),
        median=float(np.median(times)),
        mean=float(times.mean()),
        max=float(times.max()),
        itr_per_sec=len(kept) / total if total > 0 else float("inf"),
        mem_alloc=int(max(memory)) if memory else None,
    )
