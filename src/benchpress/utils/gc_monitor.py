"""Detect garbage collections that run while a candidate executes."""

from __future__ import annotations

import gc
from typing import Any


class GCMonitor:
    """Records collections reported through ``gc.callbacks``.

    Interpreters without ``gc.callbacks`` never report a collection, so every
    iteration counts as unaffected.
    """

    def __init__(self) -> None:
        self.collections = 0
        self.max_generation: int | None = None
        self._installed = False

    def _callback(self, phase: str, info: dict[str, Any]) -> None:
        if phase != "start":
            return
        self.collections += 1
        generation = info.get("generation")
        if generation is not None and (self.max_generation is None or generation > self.max_generation):
            self.max_generation = generation

    def reset(self) -> None:
        self.collections = 0
        self.max_generation = None

    def install(self) -> None:
        callbacks = getattr(gc, "callbacks", None)
        if callbacks is None or self._installed:
            return
        callbacks.append(self._callback)
        self._installed = True

    def uninstall(self) -> None:
        if not self._installed:
            return
        gc.callbacks.remove(self._callback)
        self._installed = False

    def __enter__(self) -> "GCMonitor":
        self.install()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.uninstall()
