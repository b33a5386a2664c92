"""CLI argument parsing and handling."""

from __future__ import annotations

from termlight.cli.parsing import classify_luma, parse_timeout_ms

__all__ = [
    "classify_luma",
    "parse_timeout_ms",
]
