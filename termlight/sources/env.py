"""Background detection from the ``COLORFGBG`` environment variable.

Konsole, the rxvt family and some users set ``COLORFGBG`` to ``<fg>;<bg>``
where both fields are ANSI palette indices. Reading it is instant and needs
no terminal I/O, but the value is coarse and is not always updated when the
terminal theme changes.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from termlight.color import AnsiColor
from termlight.constants import COLORFGBG_ENV_VAR
from termlight.exceptions import ReplyParseError, UnsupportedError

logger = logging.getLogger(__name__)


def parse_colorfgbg(value: str) -> AnsiColor:
    """Parse a ``<fg>;<bg>`` value into the background color.

    Parameters
    ----------
    value : str
        Raw variable value, e.g. ``15;0``

    Returns
    -------
    AnsiColor
        The background (second) field

    Raises
    ------
    ReplyParseError
        If the value does not hold exactly two decimal indices between 0 and 255
    """
    fields = value.split(";")

    if len(fields) != 2:
        raise ReplyParseError(f"expected '<fg>;<bg>', got {len(fields)} field(s)", value)

    codes = []
    for field in fields:
        field = field.strip()
        if not field.isdecimal():
            raise ReplyParseError("color index is not a decimal integer", value)

        code = int(field)
        if code > 255:
            raise ReplyParseError("color index does not fit in a byte", value)
        codes.append(code)

    return AnsiColor(codes[1])


def env_background_color(
    environ: Mapping[str, str] | None = None, var_name: str = COLORFGBG_ENV_VAR
) -> AnsiColor:
    """Read the background color from the environment.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Environment to read, defaults to ``os.environ``
    var_name : str
        Name of the variable to read

    Returns
    -------
    AnsiColor
        Background color index

    Raises
    ------
    UnsupportedError
        If the variable is unset or empty
    ReplyParseError
        If the variable is malformed
    """
    if environ is None:
        environ = os.environ

    value = environ.get(var_name, "")
    if not value:
        raise UnsupportedError(f"{var_name} is not set")

    color = parse_colorfgbg(value)
    logger.debug("%s=%r resolved to %s", var_name, value, color)
    return color


class EnvSource:
    """Detection strategy backed by ``COLORFGBG``.

    Parameters
    ----------
    environ : Mapping[str, str] | None
        Environment to read, defaults to ``os.environ`` at query time
    var_name : str
        Name of the variable to read
    """

    name = "env"

    def __init__(
        self, environ: Mapping[str, str] | None = None, var_name: str = COLORFGBG_ENV_VAR
    ) -> None:
        self.environ = environ
        self.var_name = var_name

    def query(self) -> AnsiColor:
        return env_background_color(self.environ, self.var_name)
