"""Detection error hierarchy.

Strategies raise these errors and the detector catches them to move on to
the next strategy. Only ``UnsupportedError`` leaves the public API.
"""

from __future__ import annotations


class DetectionError(Exception):
    """Base class for background detection failures.

    Attributes
    ----------
    kind : str
        Short machine readable category of the failure
    """

    kind = "error"


class UnsupportedError(DetectionError):
    """No strategy could obtain the background color."""

    kind = "unsupported"


class QueryTimeoutError(DetectionError):
    """The terminal did not answer before the deadline.

    Parameters
    ----------
    timeout : float
        Deadline that elapsed, in seconds
    """

    kind = "timeout"

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"no terminal reply within {timeout * 1000:.0f} ms")


class ReplyParseError(DetectionError):
    """A reply or environment value was received but is malformed.

    Parameters
    ----------
    message : str
        Description of what did not match
    raw : bytes | str | None
        Offending input, kept for diagnostics
    """

    kind = "parse"

    def __init__(self, message: str, raw: bytes | str | None = None) -> None:
        self.raw = raw
        super().__init__(message if raw is None else f"{message}: {raw!r}")


class TerminalIOError(DetectionError):
    """Reading from or writing to the terminal failed."""

    kind = "io"
