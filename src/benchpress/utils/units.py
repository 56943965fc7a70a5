"""Human-readable time and byte formatting."""

from __future__ import annotations

import math

_TIME_UNITS = (("s", 1.0), ("ms", 1e-3), ("µs", 1e-6), ("ns", 1e-9))
_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_time(seconds: float | None) -> str:
    if seconds is None or math.isnan(seconds):
        return "NA"
    if seconds == 0:
        return "0"
    for unit, scale in _TIME_UNITS:
        if abs(seconds) >= scale:
            return f"{seconds / scale:.3g}{unit}"
    return f"{seconds / 1e-9:.3g}ns"


def format_bytes(count: float | None) -> str:
    if count is None:
        return "NA"
    value = float(count)
    for unit in _BYTE_UNITS:
        if abs(value) < 1024 or unit == _BYTE_UNITS[-1]:
            if unit == "B":
                return f"{int(value)}B"
            return f"{value:.3g}{unit}"
        value /= 1024
    return f"{value:.3g}{_BYTE_UNITS[-1]}"
