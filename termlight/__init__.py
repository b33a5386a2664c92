"""Tell whether the terminal is dark or light.

``background_color()`` returns the terminal background either as an
``RgbColor``, when the terminal answers the OSC 11 query, or as an
``AnsiColor`` read from ``COLORFGBG``. ``luma()`` reduces it to a
brightness between 0 (black) and 1 (white)::

    use_light_skin = termlight.luma() > 0.6

Both raise ``UnsupportedError`` when no strategy worked. Detection reads
from stdin, so calls must not run concurrently from several threads.
"""

from __future__ import annotations

from termlight.color import AnsiColor, Color, RgbColor, ansi_to_rgb
from termlight.core.detector import Detection, Detector, background_color, detect, luma
from termlight.exceptions import (
    DetectionError,
    QueryTimeoutError,
    ReplyParseError,
    TerminalIOError,
    UnsupportedError,
)

__all__ = [
    "AnsiColor",
    "Color",
    "Detection",
    "DetectionError",
    "Detector",
    "QueryTimeoutError",
    "ReplyParseError",
    "RgbColor",
    "TerminalIOError",
    "UnsupportedError",
    "ansi_to_rgb",
    "background_color",
    "detect",
    "luma",
]
