from __future__ import annotations

import csv
import json

from benchpress import mark, press
from benchpress.io.output import load_jsonl, write_samples, write_summary


def _sweep():
    return press(
        {"n": [1, 2]},
        lambda params: mark({"double": lambda: params["n"] * 2}, min_time=1e-6, max_iterations=3),
    )


def test_summary_jsonl_carries_env(tmp_path):
    path = tmp_path / "out" / "summary.jsonl"
    write_summary(_sweep(), path, run_name="demo")
    records = load_jsonl(path)
    assert [rec["n"] for rec in records] == [1, 2]
    assert all(rec["run"] == "demo" for rec in records)
    assert "python" in records[0]["env"]


def test_summary_csv(tmp_path):
    path = tmp_path / "summary.csv"
    write_summary(_sweep(), path)
    with path.open(encoding="utf-8") as handle:
        rows = list(csv.DictReader(handle))
    assert [row["n"] for row in rows] == ["1", "2"]
    assert rows[0]["expression"] == "double"
    assert rows[0]["n_itr"] == "3"


def test_samples_jsonl(tmp_path):
    path = tmp_path / "samples.jsonl"
    write_samples(_sweep(), path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 6
    first = json.loads(lines[0])
    assert first["iteration"] == 1
    assert first["gc"] in (True, False)
