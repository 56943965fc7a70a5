"""Aggregate summary JSONL files from repeated runs into one table."""
from __future__ import annotations

import argparse
from pathlib import Path
from statistics import mean, pstdev

from benchpress.io.output import load_jsonl, write_csv

NON_PARAM_FIELDS = {
    "expression",
    "min",
    "median",
    "mean",
    "max",
    "itr_per_sec",
    "mem_alloc",
    "n_itr",
    "n_gc",
    "total_time",
    "run",
    "env",
}


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Aggregate summary files.")
    parser.add_argument("--in", dest="inputs", nargs="+", required=True)
    parser.add_argument("--out", dest="out_path", type=Path, required=True)
    return parser.parse_args()


def _load_records(paths: list[str]) -> list[dict]:
    records: list[dict] = []
    for path in paths:
        records.extend(load_jsonl(path))
    return records


def _group_keys(records: list[dict]) -> tuple[str, ...]:
    keys: list[str] = []
    for record in records:
        for key in record:
            if key not in NON_PARAM_FIELDS and key not in keys:
                keys.append(key)
    return (*keys, "expression")


def aggregate(records: list[dict]) -> tuple[list[dict], list[str]]:
    keys = _group_keys(records)
    grouped: dict[tuple, list[dict]] = {}
    for record in records:
        group_key = tuple(record.get(k) for k in keys)
        grouped.setdefault(group_key, []).append(record)

    output: list[dict] = []
    for group_key, group_records in grouped.items():
        medians = [float(rec["median"]) for rec in group_records if rec.get("median") is not None]
        gc_counts = [int(rec.get("n_gc", 0)) for rec in group_records]
        row = {key: value for key, value in zip(keys, group_key)}
        row.update(
            {
                "runs": len(group_records),
                "median_mean": mean(medians) if medians else None,
                "median_std": pstdev(medians) if len(medians) > 1 else 0.0,
                "n_gc_total": sum(gc_counts),
            }
        )
        output.append(row)
    return output, [*keys, "runs", "median_mean", "median_std", "n_gc_total"]


def main() -> None:
    args = _parse_args()
    rows, fieldnames = aggregate(_load_records(args.inputs))
    write_csv(args.out_path, rows, fieldnames)


if __name__ == "__main__":
    main()
