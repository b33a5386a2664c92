"""Logging helpers for the termlight command line."""

from termlight.logging.formatters import SourceFormatter

__all__ = ["SourceFormatter"]
