"""Tabular views over mark and press results."""

from __future__ import annotations

from typing import Any, Iterable

from benchpress.benchmarks.schema import CandidateResult, MarkResult, SweepResult, as_rows
from benchpress.utils.units import format_bytes, format_time

TIME_COLUMNS = ("min", "median", "mean", "max")
SUMMARY_COLUMNS = (
    "expression",
    *TIME_COLUMNS,
    "itr_per_sec",
    "mem_alloc",
    "n_itr",
    "n_gc",
    "total_time",
)
SAMPLE_COLUMNS = ("expression", "iteration", "time", "mem_alloc", "gc", "gc_generation")
# Output columns that grid parameter names must not shadow; "run" and "env" are added to JSONL summaries.
RESERVED_COLUMNS = frozenset((*SUMMARY_COLUMNS, *SAMPLE_COLUMNS, "run", "env"))

ResultLike = MarkResult | SweepResult | Iterable[CandidateResult]


def _param_names(rows: list[CandidateResult]) -> list[str]:
    names: list[str] = []
    for row in rows:
        for key in row.params:
            if key not in names:
                names.append(key)
    return names


def _summary_row(row: CandidateResult, params: list[str]) -> dict[str, Any]:
    record: dict[str, Any] = {key: row.params.get(key) for key in params}
    stats = row.stats
    record["expression"] = row.expression
    for column in TIME_COLUMNS:
        record[column] = getattr(stats, column) if stats is not None else None
    record["itr_per_sec"] = stats.itr_per_sec if stats is not None else None
    record["mem_alloc"] = stats.mem_alloc if stats is not None else None
    record["n_itr"] = row.n_itr
    record["n_gc"] = row.n_gc
    record["total_time"] = row.total_time
    return record


def _relative(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    for column in (*TIME_COLUMNS, "itr_per_sec", "mem_alloc"):
        values = [rec[column] for rec in records if rec[column] is not None]
        floor = min(values) if values else None
        for rec in records:
            if rec[column] is None or not floor:
                continue
            rec[column] = rec[column] / floor
    return records


def summary_rows(result: ResultLike, relative: bool = False) -> list[dict[str, Any]]:
    """One dict per candidate row; grid parameters lead the columns.

    With ``relative`` the timing and memory columns are expressed as
    multiples of the smallest value in each column.
    """
    rows = as_rows(result)
    params = _param_names(rows)
    records = [_summary_row(row, params) for row in rows]
    if relative:
        records = _relative(records)
    return records


def summary_columns(result: ResultLike) -> list[str]:
    return [*_param_names(as_rows(result)), *SUMMARY_COLUMNS]


def sample_rows(result: ResultLike) -> list[dict[str, Any]]:
    rows = as_rows(result)
    params = _param_names(rows)
    records: list[dict[str, Any]] = []
    for row in rows:
        for idx, sample in enumerate(row.samples, start=1):
            record: dict[str, Any] = {key: row.params.get(key) for key in params}
            record.update(
                {
                    "expression": row.expression,
                    "iteration": idx,
                    "time": sample.elapsed_s,
                    "mem_alloc": sample.mem_alloc_bytes,
                    "gc": sample.gc,
                    "gc_generation": sample.gc_generation,
                }
            )
            records.append(record)
    return records


def sample_columns(result: ResultLike) -> list[str]:
    return [*_param_names(as_rows(result)), *SAMPLE_COLUMNS]


def format_table(result: ResultLike) -> str:
    records = summary_rows(result)
    columns = summary_columns(result)
    cells: list[list[str]] = [list(columns)]
    for rec in records:
        line = []
        for column in columns:
            value = rec[column]
            if column in (*TIME_COLUMNS, "total_time"):
                line.append(format_time(value))
            elif column == "mem_alloc":
                line.append(format_bytes(value))
            elif column == "itr_per_sec":
                line.append("NA" if value is None else f"{value:.4g}")
            else:
                line.append(str(value))
        cells.append(line)
    widths = [max(len(line[idx]) for line in cells) for idx in range(len(columns))]
    rendered = []
    for line in cells:
        rendered.append("  ".join(cell.rjust(width) for cell, width in zip(line, widths)).rstrip())
    return "\n".join(rendered)
