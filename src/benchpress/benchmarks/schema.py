"""Schema definitions for benchmark inputs and outputs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Tuple


@dataclass(frozen=True)
class Candidate:
    """A named zero-argument operation under comparison."""

    name: str
    fn: Callable[[], Any]


@dataclass(frozen=True)
class Sample:
    """One timed execution of a candidate."""

    elapsed_s: float
    mem_alloc_bytes: int | None = None
    gc: bool = False
    gc_generation: int | None = None


@dataclass(frozen=True)
class CandidateStats:
    """Summary statistics over the retained samples of one candidate."""

    min: float
    median: float
    mean: float
    max: float
    itr_per_sec: float
    mem_alloc: int | None = None


@dataclass(frozen=True)
class CandidateResult:
    """All samples and derived statistics for one candidate."""

    expression: str
    samples: Tuple[Sample, ...]
    stats: CandidateStats | None
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def n_itr(self) -> int:
        return len(self.samples)

    @property
    def n_gc(self) -> int:
        return sum(1 for sample in self.samples if sample.gc)

    @property
    def total_time(self) -> float:
        return sum(sample.elapsed_s for sample in self.samples)

    def with_params(self, params: Mapping[str, Any]) -> "CandidateResult":
        return replace(self, params=dict(params))


@dataclass(frozen=True)
class MarkResult:
    """Ordered candidate results of a single mark call."""

    results: Tuple[CandidateResult, ...]

    def __iter__(self) -> Iterator[CandidateResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def __getitem__(self, key: int | str) -> CandidateResult:
        if isinstance(key, str):
            for result in self.results:
                if result.expression == key:
                    return result
            raise KeyError(key)
        return self.results[key]

    @property
    def expressions(self) -> List[str]:
        return [result.expression for result in self.results]


@dataclass(frozen=True)
class GridGroup:
    """Results produced at one grid point."""

    params: Dict[str, Any]
    results: Tuple[CandidateResult, ...]


@dataclass(frozen=True)
class SweepResult:
    """Concatenated candidate results of a parameter sweep.

    Groups keep the grid enumeration order; ``rows`` flattens them with each
    row tagged by its grid point.
    """

    groups: Tuple[GridGroup, ...]
    parameters: Tuple[str, ...] = ()

    @property
    def rows(self) -> Tuple[CandidateResult, ...]:
        return tuple(row for group in self.groups for row in group.results)

    def __iter__(self) -> Iterator[CandidateResult]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


def as_rows(result: MarkResult | SweepResult | Iterable[CandidateResult]) -> List[CandidateResult]:
    if isinstance(result, CandidateResult):
        return [result]
    return list(result)
