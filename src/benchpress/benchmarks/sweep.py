"""Parameter sweeps over a grid of benchmark inputs."""

from __future__ import annotations

import itertools
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, Mapping, Sequence

from benchpress.benchmarks.errors import ConfigurationError, SweepError
from benchpress.benchmarks.schema import CandidateResult, GridGroup, MarkResult, SweepResult
from benchpress.metrics.summary import RESERVED_COLUMNS

LOGGER = logging.getLogger(__name__)

Builder = Callable[[Dict[str, Any]], "MarkResult | Iterable[CandidateResult]"]


def _validate_parameters(parameters: Mapping[str, Sequence[Any]]) -> dict[str, list[Any]]:
    if not parameters:
        raise ConfigurationError("At least one sweep parameter is required")
    grid: dict[str, list[Any]] = {}
    for name, values in parameters.items():
        if isinstance(values, (str, bytes)):
            raise ConfigurationError(f"Parameter '{name}' must be a sequence of values, not a string")
        if str(name) in RESERVED_COLUMNS:
            raise ConfigurationError(f"Parameter name '{name}' is reserved for an output column")
        values = list(values)
        if not values:
            raise ConfigurationError(f"Parameter '{name}' has no values")
        grid[str(name)] = values
    return grid


def iter_grid(parameters: Mapping[str, Sequence[Any]]) -> Iterator[dict[str, Any]]:
    """Yield grid points row-major: the first parameter varies slowest."""
    grid = _validate_parameters(parameters)
    names = list(grid)
    for combo in itertools.product(*(grid[name] for name in names)):
        yield dict(zip(names, combo))


def press(
    parameters: Mapping[str, Sequence[Any]],
    builder: Builder,
    *,
    progress: bool = False,
) -> SweepResult:
    """Run ``builder`` at every grid point and collect the tagged results.

    The first failing grid point aborts the sweep with a ``SweepError``.
    """
    points = list(iter_grid(parameters))
    total = len(points)
    groups: list[GridGroup] = []
    for idx, point in enumerate(points, start=1):
        label = ", ".join(f"{key}={value!r}" for key, value in point.items())
        if progress:
            print(f"Running grid point {idx}/{total} ({label})...", end="\r")
        LOGGER.info("Grid point %d/%d: %s", idx, total, label)
        try:
            outcome = builder(dict(point))
            rows = tuple(row.with_params(point) for row in outcome)
        except Exception as exc:
            raise SweepError(point, exc) from exc
        groups.append(GridGroup(params=dict(point), results=rows))
    if progress and total:
        print(" " * 60, end="\r")
    return SweepResult(groups=tuple(groups), parameters=tuple(parameters))
