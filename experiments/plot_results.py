"""Plot per-iteration sample files written by run_benchmark.py --samples."""
from __future__ import annotations

import argparse
from pathlib import Path

from benchpress.benchmarks.schema import CandidateResult, Sample
from benchpress.io.output import load_jsonl
from benchpress.metrics.metrics import compute_stats
from benchpress.plotting.render import LAYOUTS, plot

SAMPLE_FIELDS = {"expression", "iteration", "time", "mem_alloc", "gc", "gc_generation"}


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot sample JSONL outputs.")
    parser.add_argument("--input", type=Path, required=True)
    parser.add_argument("--out", type=Path, required=True)
    parser.add_argument("--layout", choices=LAYOUTS, default="beeswarm")
    return parser.parse_args()


def rebuild_results(records: list[dict]) -> list[CandidateResult]:
    groups: dict[tuple, list[dict]] = {}
    for record in records:
        params = tuple((key, value) for key, value in record.items() if key not in SAMPLE_FIELDS)
        groups.setdefault((record["expression"], params), []).append(record)

    results: list[CandidateResult] = []
    for (expression, params), group in groups.items():
        group.sort(key=lambda rec: rec["iteration"])
        samples = tuple(
            Sample(
                elapsed_s=float(rec["time"]),
                mem_alloc_bytes=rec.get("mem_alloc"),
                gc=bool(rec.get("gc", False)),
                gc_generation=rec.get("gc_generation"),
            )
            for rec in group
        )
        results.append(
            CandidateResult(expression=expression, samples=samples, stats=compute_stats(samples), params=dict(params))
        )
    return results


def main() -> None:
    args = _parse_args()
    results = rebuild_results(load_jsonl(args.input))
    fig = plot(results, layout=args.layout)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(args.out)


if __name__ == "__main__":
    main()
