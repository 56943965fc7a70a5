"""Output helpers for benchmark results."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Iterable, Sequence

from benchpress.metrics.summary import ResultLike, sample_columns, sample_rows, summary_columns, summary_rows
from benchpress.utils.reproducibility import env_info


def _ensure_parent(path: str | Path) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def write_jsonl(records: Iterable[dict[str, Any]], path: str | Path) -> None:
    output_path = _ensure_parent(path)
    with output_path.open("w", encoding="utf-8") as handle:
        for record in records:
            handle.write(json.dumps(record, default=str) + "\n")


def write_csv(path: str | Path, rows: Sequence[dict[str, Any]], fieldnames: Sequence[str]) -> None:
    output_path = _ensure_parent(path)
    with output_path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(fieldnames))
        writer.writeheader()
        writer.writerows(rows)


def write_summary(result: ResultLike, path: str | Path, run_name: str | None = None) -> None:
    """Write summary rows as CSV or JSONL, chosen by file suffix.

    JSONL records also carry the run name and environment details.
    """
    output_path = Path(path)
    rows = summary_rows(result)
    if output_path.suffix == ".csv":
        write_csv(output_path, rows, summary_columns(result))
        return
    env = env_info()
    write_jsonl(({**row, "run": run_name, "env": env} for row in rows), output_path)


def write_samples(result: ResultLike, path: str | Path) -> None:
    output_path = Path(path)
    rows = sample_rows(result)
    if output_path.suffix == ".csv":
        write_csv(output_path, rows, sample_columns(result))
        return
    write_jsonl(rows, output_path)


def load_jsonl(path: str | Path) -> list[dict[str, Any]]:
    records: list[dict[str, Any]] = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        if not line.strip():
            continue
        records.append(json.loads(line))
    return records
