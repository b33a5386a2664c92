"""Interfaces shared by the detection strategies."""

from __future__ import annotations

from typing import Protocol

from termlight.color import Color


class BackgroundSource(Protocol):
    """Protocol for a background color detection strategy."""

    name: str

    def query(self) -> Color:
        """Return the background color.

        Raises
        ------
        DetectionError
            If this strategy cannot determine the color
        """
        ...
