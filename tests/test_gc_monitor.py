from __future__ import annotations

import gc

from benchpress.utils.gc_monitor import GCMonitor


def test_counts_collections_while_installed():
    with GCMonitor() as monitor:
        gc.collect(0)
        gc.collect(1)
        assert monitor.collections == 2
        assert monitor.max_generation == 1
        monitor.reset()
        assert monitor.collections == 0
        assert monitor.max_generation is None
    assert monitor._callback not in gc.callbacks


def test_ignores_collections_after_uninstall():
    monitor = GCMonitor()
    monitor.install()
    monitor.uninstall()
    gc.collect()
    assert monitor.collections == 0
