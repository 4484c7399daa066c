"""Reporters module - output formatting for diff results."""

from diffy.reporters.diff import DiffReporter

__all__ = ["DiffReporter"]
