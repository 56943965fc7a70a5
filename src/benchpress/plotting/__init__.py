"""Plotting subpackage."""

from benchpress.plotting.render import LAYOUTS, plot

__all__ = ["LAYOUTS", "plot"]
