"""Background detection strategies.

Each strategy exposes a ``name`` and a ``query()`` method returning a color
or raising a ``DetectionError``.
"""

from __future__ import annotations

from termlight.sources.env import EnvSource, env_background_color
from termlight.sources.xterm import XtermSource, is_supported, query_background_color

__all__ = [
    "EnvSource",
    "XtermSource",
    "env_background_color",
    "is_supported",
    "query_background_color",
]
