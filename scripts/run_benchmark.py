"""Entry point for marking candidates or sweeping them over a parameter grid."""

from __future__ import annotations

import argparse
import importlib
import json
import logging
from pathlib import Path
from typing import Any, Callable

from benchpress import LAYOUTS, MarkConfig, format_table, mark, plot, press
from benchpress.benchmarks.errors import BenchError
from benchpress.io.output import write_samples, write_summary


def _parse_value(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


def _parse_grid(items: list[str]) -> dict[str, list[Any]]:
    grid: dict[str, list[Any]] = {}
    for item in items:
        if "=" not in item:
            raise SystemExit(f"Grid entries must look like name=v1,v2 (got '{item}')")
        name, values = item.split("=", 1)
        grid[name.strip()] = [_parse_value(value.strip()) for value in values.split(",") if value.strip()]
    return grid


def _load_attr(path: str) -> Callable[..., Any]:
    module_name, sep, attr = path.partition(":")
    if not sep or not attr:
        raise SystemExit(f"Candidates must be given as module:attribute (got '{path}')")
    module = importlib.import_module(module_name)
    target: Any = module
    for part in attr.split("."):
        target = getattr(target, part)
    return target


def _parse_candidates(items: list[str]) -> dict[str, Callable[..., Any]]:
    candidates: dict[str, Callable[..., Any]] = {}
    for item in items:
        name, sep, path = item.partition("=")
        if not sep:
            name, path = item.rpartition(":")[2], item
        candidates[name.strip()] = _load_attr(path.strip())
    return candidates


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Benchmark Python callables.")
    parser.add_argument(
        "--candidate",
        action="append",
        required=True,
        help="Candidate as [name=]module:attr. With --grid the attribute is a factory taking the grid values.",
    )
    parser.add_argument(
        "--grid",
        action="append",
        default=[],
        help="Sweep parameter as name=v1,v2 (repeatable). Values are parsed as JSON where possible.",
    )
    parser.add_argument("--min-time", type=float, default=MarkConfig.min_time)
    parser.add_argument("--max-iterations", type=int, default=MarkConfig.max_iterations)
    parser.add_argument("--min-iterations", type=int, default=MarkConfig.min_iterations)
    parser.add_argument("--no-check", action="store_true", help="Skip the output equivalence check.")
    parser.add_argument("--no-memory", action="store_true", help="Disable tracemalloc memory tracking.")
    parser.add_argument("--keep-gc", action="store_true", help="Keep GC-affected iterations in statistics.")
    parser.add_argument("--rel-tol", type=float, default=MarkConfig.rel_tol)
    parser.add_argument("--abs-tol", type=float, default=MarkConfig.abs_tol)
    parser.add_argument("--output", type=str, help="Summary output (.jsonl or .csv).")
    parser.add_argument("--samples", type=str, help="Per-iteration output (.jsonl or .csv).")
    parser.add_argument("--plot", type=str, help="Write a plot of sample times to this path.")
    parser.add_argument("--layout", choices=LAYOUTS, default="beeswarm")
    parser.add_argument("--name", type=str, help="Run name recorded in JSONL output.")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = MarkConfig(
        min_time=args.min_time,
        max_iterations=args.max_iterations,
        min_iterations=args.min_iterations,
        check_equivalence=not args.no_check,
        memory=not args.no_memory,
        filter_gc=not args.keep_gc,
        rel_tol=args.rel_tol,
        abs_tol=args.abs_tol,
    )
    candidates = _parse_candidates(args.candidate)
    grid = _parse_grid(args.grid)

    try:
        if grid:
            def _builder(params: dict[str, Any]):
                return mark({name: factory(**params) for name, factory in candidates.items()}, config=config)

            result = press(grid, _builder, progress=True)
        else:
            result = mark(candidates, config=config)
    except BenchError as exc:
        raise SystemExit(f"Benchmark failed: {exc}") from exc

    print(format_table(result))

    if args.output:
        write_summary(result, args.output, run_name=args.name)
        print(f"Wrote summary to {args.output}")
    if args.samples:
        write_samples(result, args.samples)
        print(f"Wrote samples to {args.samples}")
    if args.plot:
        fig = plot(result, layout=args.layout)
        Path(args.plot).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(args.plot)
        print(f"Wrote plot to {args.plot}")


if __name__ == "__main__":
    main()
