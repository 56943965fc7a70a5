"""Benchmark harness orchestration."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Mapping

import ast
import linecache
import logging
import re
import time
import tracemalloc

from benchpress.benchmarks.errors import ConfigurationError, EquivalenceError, ExecutionError
from benchpress.benchmarks.schema import Candidate, CandidateResult, MarkResult, Sample
from benchpress.metrics.equivalence import DEFAULT_ABS_TOL, DEFAULT_REL_TOL, explain_difference
from benchpress.metrics.metrics import compute_stats
from benchpress.utils.gc_monitor import GCMonitor

LOGGER = logging.getLogger(__name__)

Comparator = Callable[[Any, Any], bool]


@dataclass(frozen=True)
class MarkConfig:
    min_time: float = 0.5
    max_iterations: int = 10_000
    min_iterations: int = 1
    check_equivalence: bool = True
    memory: bool = True
    filter_gc: bool = True
    rel_tol: float = DEFAULT_REL_TOL
    abs_tol: float = DEFAULT_ABS_TOL
    comparator: Comparator | None = None

    def validate(self) -> None:
        if not self.min_time > 0:
            raise ConfigurationError(f"min_time must be positive, got {self.min_time!r}")
        if self.max_iterations <= 0:
            raise ConfigurationError(f"max_iterations must be positive, got {self.max_iterations!r}")
        if self.min_iterations <= 0:
            raise ConfigurationError(f"min_iterations must be positive, got {self.min_iterations!r}")
        if self.min_iterations > self.max_iterations:
            raise ConfigurationError(
                f"min_iterations ({self.min_iterations}) exceeds max_iterations ({self.max_iterations})"
            )
        if self.rel_tol < 0 or self.abs_tol < 0:
            raise ConfigurationError("Tolerances must be non-negative")


def _parse_lambda(text: str) -> tuple[ast.Lambda, str] | None:
    # Trim trailing context until the longest prefix parses as a lambda.
    for end in range(len(text), 0, -1):
        snippet = text[:end]
        try:
            tree = ast.parse(snippet, mode="eval")
        except SyntaxError:
            continue
        if isinstance(tree.body, ast.Lambda):
            return tree.body, snippet
    return None


def _code_column(code: Any) -> int | None:
    positions = getattr(code, "co_positions", None)
    if positions is None:
        return None
    columns = [col for lineno, _, col, _ in positions() if lineno == code.co_firstlineno and col is not None]
    return min(columns) if columns else None


def _lambda_source(fn: Callable[..., Any]) -> str | None:
    code = getattr(fn, "__code__", None)
    if code is None:
        return None
    line = linecache.getline(code.co_filename, code.co_firstlineno).rstrip("\n")
    if not line:
        return None

    # (start byte, end byte, body text) for every lambda on the line
    found: list[tuple[int, int, str]] = []
    for match in re.finditer(r"\blambda\b", line):
        parsed = _parse_lambda(line[match.start():])
        if parsed is None:
            continue
        node, snippet = parsed
        start = len(line[: match.start()].encode("utf-8"))
        found.append((start, start + node.end_col_offset, ast.get_source_segment(snippet, node.body)))

    if len(found) <= 1:
        return found[0][2] if found else None
    column = _code_column(code)
    if column is None:
        return None
    enclosing = [item for item in found if item[0] <= column < item[1]]
    if not enclosing:
        return None
    # innermost lambda wins when they nest
    return max(enclosing)[2]


def candidate_label(fn: Callable[..., Any]) -> str:
    """Label for an unnamed candidate, taken from its source where possible."""
    name = getattr(fn, "__name__", None)
    if name == "<lambda>":
        source = _lambda_source(fn)
        if source:
            return source
    if name:
        return name
    return repr(fn)


def resolve_candidates(
    candidates: Mapping[str, Callable[[], Any]] | Iterable[Callable[[], Any] | Candidate],
) -> list[Candidate]:
    if isinstance(candidates, Mapping):
        resolved = [Candidate(name=str(name), fn=fn) for name, fn in candidates.items()]
    else:
        resolved = []
        for item in candidates:
            if isinstance(item, Candidate):
                resolved.append(item)
            else:
                resolved.append(Candidate(name=candidate_label(item), fn=item))

    if not resolved:
        raise ConfigurationError("At least one candidate is required")
    seen: set[str] = set()
    for candidate in resolved:
        if not callable(candidate.fn):
            raise ConfigurationError(f"Candidate '{candidate.name}' is not callable")
        if candidate.name in seen:
            raise ConfigurationError(
                f"Duplicate candidate name '{candidate.name}'; pass a mapping of explicit names "
                "(unnamed lambdas that cannot be told apart from their source need one)"
            )
        seen.add(candidate.name)
    return resolved


def _invoke(candidate: Candidate) -> Any:
    try:
        return candidate.fn()
    except Exception as exc:
        raise ExecutionError(candidate.name, exc) from exc


def _run_candidate(candidate: Candidate, config: MarkConfig, monitor: GCMonitor) -> tuple[Any, list[Sample]]:
    output = _invoke(candidate)

    samples: list[Sample] = []
    elapsed_total = 0.0
    while True:
        monitor.reset()
        baseline = 0
        if config.memory:
            tracemalloc.reset_peak()
            baseline = tracemalloc.get_traced_memory()[0]

        start = time.perf_counter()
        _invoke(candidate)
        elapsed = time.perf_counter() - start

        mem_alloc = None
        if config.memory:
            mem_alloc = max(tracemalloc.get_traced_memory()[1] - baseline, 0)
        samples.append(
            Sample(
                elapsed_s=elapsed,
                mem_alloc_bytes=mem_alloc,
                gc=monitor.collections > 0,
                gc_generation=monitor.max_generation,
            )
        )
        elapsed_total += elapsed

        if len(samples) >= config.max_iterations:
            break
        if elapsed_total >= config.min_time and len(samples) >= config.min_iterations:
            break

    return output, samples


def _check_outputs(names: list[str], outputs: list[Any], config: MarkConfig) -> None:
    reference_name, reference = names[0], outputs[0]
    for name, output in zip(names[1:], outputs[1:]):
        try:
            if config.comparator is not None:
                equal = bool(config.comparator(reference, output))
                detail = None if equal else ""
            else:
                detail = explain_difference(reference, output, config.rel_tol, config.abs_tol)
        except Exception as exc:
            raise EquivalenceError(
                reference_name, name, f"comparison raised {type(exc).__name__}: {exc}"
            ) from exc
        if detail is not None:
            raise EquivalenceError(reference_name, name, detail)


def mark(
    candidates: Mapping[str, Callable[[], Any]] | Iterable[Callable[[], Any] | Candidate],
    *,
    config: MarkConfig | None = None,
    **options: Any,
) -> MarkResult:
    """Time each candidate and summarize its samples.

    ``options`` override fields of ``config`` (``min_time``,
    ``max_iterations``, ``check_equivalence`` ...). Candidates run one after
    another; any failure aborts the whole call.
    """
    try:
        config = replace(config, **options) if config is not None else MarkConfig(**options)
    except TypeError as exc:
        raise ConfigurationError(str(exc)) from exc
    config.validate()
    resolved = resolve_candidates(candidates)

    started_tracing = False
    if config.memory and not tracemalloc.is_tracing():
        tracemalloc.start()
        started_tracing = True

    outputs: list[Any] = []
    runs: list[list[Sample]] = []
    try:
        with GCMonitor() as monitor:
            for candidate in resolved:
                output, samples = _run_candidate(candidate, config, monitor)
                LOGGER.debug(
                    "%s: %d iterations (%d gc) in %.4fs",
                    candidate.name,
                    len(samples),
                    sum(1 for sample in samples if sample.gc),
                    sum(sample.elapsed_s for sample in samples),
                )
                outputs.append(output)
                runs.append(samples)
    finally:
        if started_tracing:
            tracemalloc.stop()

    names = [candidate.name for candidate in resolved]
    if config.check_equivalence and len(resolved) > 1:
        _check_outputs(names, outputs, config)

    results = []
    for name, samples in zip(names, runs):
        stats = compute_stats(samples, filter_gc=config.filter_gc)
        if stats is None:
            LOGGER.warning("%s: every iteration overlapped a garbage collection; statistics unavailable", name)
        results.append(CandidateResult(expression=name, samples=tuple(samples), stats=stats))
    return MarkResult(results=tuple(results))
