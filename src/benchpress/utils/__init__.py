"""Utility subpackage."""
