"""Core termlight functionality."""

from __future__ import annotations

from termlight.core.config import ConfigLoader
from termlight.core.detector import (
    Detection,
    Detector,
    background_color,
    default_sources,
    detect,
    luma,
)
from termlight.core.interfaces import BackgroundSource

__all__ = [
    "BackgroundSource",
    "ConfigLoader",
    "Detection",
    "Detector",
    "background_color",
    "default_sources",
    "detect",
    "luma",
]
