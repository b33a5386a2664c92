"""Global constants for termlight.

This module contains values shared by the detection strategies, the
configuration loader and the command line interface.
"""

from enum import Enum

DEFAULT_TIMEOUT_SECONDS = 0.1
"""Deadline in seconds for the terminal background query.

Most terminals answer within 10 ms. The status probe sent after the
background query bounds the wait for terminals that answer it, so the
full deadline is only spent on terminals that answer neither query.
"""

MAX_TIMEOUT_MS = 10000
"""Upper bound in milliseconds accepted for a configured query timeout."""

READ_CHUNK_SIZE = 1024
"""Number of bytes requested per read of the terminal input descriptor."""

COLORFGBG_ENV_VAR = "COLORFGBG"
"""Environment variable set by konsole and the rxvt family.

Its value looks like ``15;0`` where the second field is the ANSI index of
the background color.
"""

CONFIG_ENV_VAR = "TERMLIGHT_CONFIG"
"""Environment variable holding the path of the YAML configuration file."""

DEBUG_ENV_VAR = "TERMLIGHT_DEBUG"
"""Environment variable enabling debug logging and raw tracebacks when ``1``."""

DEFAULT_CONFIG_FILE = "termlight.yaml"
"""Configuration file looked up in the working directory."""

DEFAULT_DARK_THRESHOLD = 0.2
"""Luma below which a background is reported as dark."""

DEFAULT_LIGHT_THRESHOLD = 0.85
"""Luma above which a background is reported as light.

Values between the dark and light thresholds are reported as medium.
"""

EXIT_SUCCESS = 0
"""Exit code indicating successful program completion."""

EXIT_ERROR = 1
"""Exit code indicating a general application error."""

EXIT_CONFIG_ERROR = 2
"""Exit code indicating a configuration error.

Used when the configuration file cannot be parsed or fails validation.
"""

EXIT_UNDETERMINED = 3
"""Exit code used when no strategy could determine the background color."""


class Mode(str, Enum):
    """Background classification derived from luma."""

    DARK = "dark"
    MEDIUM = "medium"
    LIGHT = "light"
    UNKNOWN = "unknown"
