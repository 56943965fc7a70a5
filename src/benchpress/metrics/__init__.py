"""Metrics subpackage."""

from benchpress.metrics.equivalence import explain_difference, outputs_equal
from benchpress.metrics.metrics import compute_stats
from benchpress.metrics.summary import format_table, sample_rows, summary_rows

__all__ = [
    "compute_stats",
    "explain_difference",
    "format_table",
    "outputs_equal",
    "sample_rows",
    "summary_rows",
]
