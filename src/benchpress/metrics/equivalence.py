"""Structural equality of candidate outputs."""

from __future__ import annotations

import math
from typing import Any, Mapping

import numpy as np

DEFAULT_REL_TOL = 1.5e-8
DEFAULT_ABS_TOL = 1e-12


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, (bool, np.bool_))


def _arrays_equal(left: np.ndarray, right: np.ndarray, rel_tol: float, abs_tol: float) -> bool:
    if left.shape != right.shape:
        return False
    if np.issubdtype(left.dtype, np.inexact) or np.issubdtype(right.dtype, np.inexact):
        try:
            return bool(np.allclose(left, right, rtol=rel_tol, atol=abs_tol, equal_nan=True))
        except TypeError:
            return False
    return bool(np.array_equal(left, right))


def explain_difference(
    left: Any,
    right: Any,
    rel_tol: float = DEFAULT_REL_TOL,
    abs_tol: float = DEFAULT_ABS_TOL,
    path: str = "",
) -> str | None:
    """Return a description of the first difference, or None when equal.

    Floats compare with a relative tolerance and an absolute floor for values
    near zero. NaN equals NaN, and values of unrelated types never compare
    equal.
    """
    where = path or "value"
    # numpy scalars compare as their Python equivalents.
    if isinstance(left, np.generic):
        left = left.item()
    if isinstance(right, np.generic):
        right = right.item()

    if _is_real(left) and _is_real(right):
        if isinstance(left, (float, np.floating)) or isinstance(right, (float, np.floating)):
            lval, rval = float(left), float(right)
            if math.isnan(lval) and math.isnan(rval):
                return None
            if math.isclose(lval, rval, rel_tol=rel_tol, abs_tol=abs_tol):
                return None
            return f"{where}: {lval!r} != {rval!r}"
        if int(left) == int(right):
            return None
        return f"{where}: {left!r} != {right!r}"

    if isinstance(left, np.ndarray) or isinstance(right, np.ndarray):
        if not (isinstance(left, np.ndarray) and isinstance(right, np.ndarray)):
            return f"{where}: {type(left).__name__} vs {type(right).__name__}"
        if _arrays_equal(left, right, rel_tol, abs_tol):
            return None
        return f"{where}: arrays differ (shapes {left.shape} and {right.shape})"

    if isinstance(left, complex) or isinstance(right, complex):
        if not (isinstance(left, complex) and isinstance(right, complex)):
            return f"{where}: {type(left).__name__} vs {type(right).__name__}"
        if _complex_isclose(left, right, rel_tol, abs_tol):
            return None
        return f"{where}: {left!r} != {right!r}"

    if type(left) is not type(right):
        return f"{where}: {type(left).__name__} vs {type(right).__name__}"

    if isinstance(left, Mapping):
        if set(left) != set(right):
            return f"{where}: keys differ"
        for key in left:
            detail = explain_difference(left[key], right[key], rel_tol, abs_tol, f"{where}[{key!r}]")
            if detail is not None:
                return detail
        return None

    if isinstance(left, (list, tuple)):
        if len(left) != len(right):
            return f"{where}: length {len(left)} != {len(right)}"
        for idx, (litem, ritem) in enumerate(zip(left, right)):
            detail = explain_difference(litem, ritem, rel_tol, abs_tol, f"{where}[{idx}]")
            if detail is not None:
                return detail
        return None

    try:
        equal = left == right
        if isinstance(equal, np.ndarray):
            equal = bool(equal.all())
        equal = bool(equal)
    except (TypeError, ValueError):
        return f"{where}: values of type {type(left).__name__} are not comparable"
    if equal:
        return None
    return f"{where}: {left!r} != {right!r}"


def _complex_isclose(left: complex, right: complex, rel_tol: float, abs_tol: float) -> bool:
    return math.isclose(left.real, right.real, rel_tol=rel_tol, abs_tol=abs_tol) and math.isclose(
        left.imag, right.imag, rel_tol=rel_tol, abs_tol=abs_tol
    )


def outputs_equal(
    left: Any,
    right: Any,
    rel_tol: float = DEFAULT_REL_TOL,
    abs_tol: float = DEFAULT_ABS_TOL,
) -> bool:
    return explain_difference(left, right, rel_tol, abs_tol) is None
