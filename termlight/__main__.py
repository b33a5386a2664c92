#!/usr/bin/env python3
"""termlight - tell whether the terminal is dark or light."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Callable
from typing import Any

from termlight.cli.parsing import classify_luma, parse_timeout_ms
from termlight.color import RgbColor
from termlight.constants import EXIT_UNDETERMINED, Mode
from termlight.core.config import ConfigLoader
from termlight.core.detector import Detection, Detector, default_sources
from termlight.exceptions import UnsupportedError
from termlight.sources.env import EnvSource

logger = logging.getLogger(__name__)


class TermLight:
    """Command line interface for termlight."""

    def __init__(
        self,
        detector_factory: Callable[[dict[str, Any]], Detector] | None = None,
        config_loader: ConfigLoader | None = None,
    ) -> None:
        """Initialize TermLight with optional dependency injection."""
        self._config_loader = config_loader or ConfigLoader()
        self._detector_factory = detector_factory or self._create_detector

    def _create_detector(self, settings: dict[str, Any]) -> Detector:
        """Create a detector using the configured strategy chain."""
        return Detector(
            sources=default_sources(
                timeout=settings["timeout_ms"] / 1000,
                env_var=settings["env_var"],
                query_terminal=not settings["skip_terminal_query"],
            )
        )

    def _settings(
        self, config: str | None = None, timeout_ms: str | int | float | None = None
    ) -> dict[str, Any]:
        overrides: dict[str, Any] = {}
        if timeout_ms is not None:
            overrides["timeout_ms"] = parse_timeout_ms(timeout_ms)

        file_config = self._config_loader.load_config(config)
        return self._config_loader.get_config(file_config, overrides)

    def _detect(
        self, config: str | None = None, timeout_ms: str | int | float | None = None
    ) -> tuple[Detection, dict[str, Any]]:
        settings = self._settings(config=config, timeout_ms=timeout_ms)
        detection = self._detector_factory(settings).detect()
        logger.debug("Background luma %.3f", detection.luma, extra={"source": detection.source})
        return detection, settings

    def color(
        self,
        timeout_ms: str | int | float | None = None,
        config: str | None = None,
        json_output: bool = False,
    ) -> str:
        """Print the terminal background color.

        Parameters
        ----------
        timeout_ms : str | int | float | None
            Terminal query deadline override, e.g. ``150`` or ``"0.2s"``
        config : str | None
            Path to a termlight.yaml configuration file
        json_output : bool
            Print a JSON object with color, RGB value, luma and source

        Returns
        -------
        str
            ``#rrggbb`` for a terminal reply, ``ansi:<n>`` for COLORFGBG,
            or the JSON document
        """
        detection, _ = self._detect(config=config, timeout_ms=timeout_ms)

        if not json_output:
            return str(detection.color)

        return json.dumps(
            {
                "kind": "rgb" if isinstance(detection.color, RgbColor) else "ansi",
                "value": str(detection.color),
                "rgb": list(detection.color.rgb()),
                "luma": round(detection.luma, 4),
                "source": detection.source,
            }
        )

    def luma(
        self, timeout_ms: str | int | float | None = None, config: str | None = None
    ) -> str:
        """Print the background luma, from 0.000 (black) to 1.000 (white)."""
        detection, _ = self._detect(config=config, timeout_ms=timeout_ms)
        return f"{detection.luma:.3f}"

    def mode(
        self, timeout_ms: str | int | float | None = None, config: str | None = None
    ) -> str:
        """Print ``dark``, ``medium`` or ``light`` using the configured thresholds.

        Prints ``unknown`` and exits with status 3 when detection fails.
        """
        try:
            detection, settings = self._detect(config=config, timeout_ms=timeout_ms)
        except UnsupportedError as e:
            logger.debug("Background mode unknown: %s", e.__cause__ or e)
            print(Mode.UNKNOWN.value)
            sys.exit(EXIT_UNDETERMINED)

        return classify_luma(
            detection.luma, settings["dark_threshold"], settings["light_threshold"]
        ).value

    def env(self, config: str | None = None) -> str:
        """Print the background color read from COLORFGBG only."""
        settings = self._settings(config=config)
        return str(EnvSource(var_name=settings["env_var"]).query())


if __name__ == "__main__":
    from termlight.cli.main import main

    main()
