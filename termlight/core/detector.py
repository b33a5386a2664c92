"""Strategy chain resolving the terminal background color.

1. On unix-like platforms, query the terminal with OSC 11 (precise RGB).
2. If that fails or is unavailable, read ``COLORFGBG`` (ANSI index).
3. Without an answer, raise ``UnsupportedError``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from termlight.color import Color
from termlight.constants import COLORFGBG_ENV_VAR, DEFAULT_TIMEOUT_SECONDS
from termlight.core.interfaces import BackgroundSource
from termlight.exceptions import DetectionError, UnsupportedError
from termlight.sources.env import EnvSource
from termlight.sources.xterm import XtermSource, is_supported

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Detection:
    """Outcome of a successful detection.

    Attributes
    ----------
    color : Color
        Background color, ANSI or RGB depending on the source
    source : str
        Name of the strategy that produced the color
    """

    color: Color
    source: str

    @property
    def luma(self) -> float:
        return self.color.luma()


def default_sources(
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    env_var: str = COLORFGBG_ENV_VAR,
    query_terminal: bool = True,
) -> list[BackgroundSource]:
    """Build the strategy chain available on this platform.

    Parameters
    ----------
    timeout : float
        Deadline in seconds for the terminal query
    env_var : str
        Environment variable read by the fallback strategy
    query_terminal : bool
        Whether to include the terminal query where the platform supports it

    Returns
    -------
    list[BackgroundSource]
        Terminal query first where supported, then the environment fallback
    """
    sources: list[BackgroundSource] = []
    if query_terminal and is_supported():
        sources.append(XtermSource(timeout=timeout))
    sources.append(EnvSource(var_name=env_var))
    return sources


class Detector:
    """Try detection strategies in order until one succeeds.

    Parameters
    ----------
    sources : Sequence[BackgroundSource] | None
        Strategies to try, in order. Defaults to ``default_sources(timeout)``
    timeout : float
        Deadline in seconds for the terminal query when sources is None
    """

    def __init__(
        self,
        sources: Sequence[BackgroundSource] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.sources = list(sources) if sources is not None else default_sources(timeout)

    def detect(self) -> Detection:
        """Run the strategy chain once.

        Returns
        -------
        Detection
            Color and the name of the strategy that found it

        Raises
        ------
        UnsupportedError
            If every strategy failed, chained to the last failure
        """
        last_error: DetectionError | None = None

        for source in self.sources:
            try:
                color = source.query()
            except DetectionError as e:
                logger.debug(
                    "Detection failed (%s): %s", e.kind, e, extra={"source": source.name}
                )
                last_error = e
                continue

            logger.debug("Detected background %s", color, extra={"source": source.name})
            return Detection(color=color, source=source.name)

        raise UnsupportedError("could not determine the terminal background color") from last_error

    def background_color(self) -> Color:
        return self.detect().color

    def luma(self) -> float:
        return self.detect().luma


def detect(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Detection:
    """Detect the background color and report which strategy found it."""
    return Detector(timeout=timeout).detect()


def background_color(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Color:
    """Try to determine the background color of the terminal.

    The result is an ``RgbColor`` when the terminal answered the OSC 11
    query and an ``AnsiColor`` when it came from ``COLORFGBG``.

    Parameters
    ----------
    timeout : float
        Deadline in seconds for the terminal query (default: 0.1)

    Returns
    -------
    Color
        The background color

    Raises
    ------
    UnsupportedError
        If no strategy could determine the color
    """
    return Detector(timeout=timeout).background_color()


def luma(timeout: float = DEFAULT_TIMEOUT_SECONDS) -> float:
    """Return the luma of the terminal background, from 0 (black) to 1 (white).

    A background is rather dark below 0.2 and rather light above 0.85. When
    a single pivot is needed, 0.6 works well.

    Raises
    ------
    UnsupportedError
        If no strategy could determine the color
    """
    return Detector(timeout=timeout).luma()
