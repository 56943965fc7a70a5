"""Exception hierarchy for benchmark runs."""

from __future__ import annotations

from typing import Any, Mapping


class BenchError(Exception):
    """Base class for all benchmark failures."""


class ConfigurationError(BenchError, ValueError):
    """Invalid mark/press arguments."""


class ExecutionError(BenchError):
    """A candidate raised while being executed."""

    def __init__(self, candidate: str, cause: BaseException) -> None:
        self.candidate = candidate
        self.cause = cause
        super().__init__(f"Candidate '{candidate}' raised {type(cause).__name__}: {cause}")


class EquivalenceError(BenchError):
    """Two candidates produced different outputs."""

    def __init__(self, reference: str, candidate: str, detail: str = "") -> None:
        self.reference = reference
        self.candidate = candidate
        message = f"Candidate '{candidate}' output differs from '{reference}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class SweepError(BenchError):
    """A grid point failed during a parameter sweep."""

    def __init__(self, params: Mapping[str, Any], cause: BaseException) -> None:
        self.params = dict(params)
        self.cause = cause
        label = ", ".join(f"{key}={value!r}" for key, value in self.params.items())
        super().__init__(f"Sweep failed at ({label}): {cause}")


class UnsupportedLayoutError(BenchError, RuntimeError):
    """Requested plot layout cannot be rendered."""
