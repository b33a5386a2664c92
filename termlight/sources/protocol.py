"""Encoding of the terminal queries and decoding of their replies.

Two queries are sent back to back:

* OSC 11 (``ESC ] 11 ; ? BEL``) asks for the background color, answered
  by ``ESC ] 11 ; rgb:RRRR/GGGG/BBBB`` terminated by ``BEL`` or ``ESC \\``.
* DSR (``ESC [ 5 n``) asks for the device status, answered by
  ``ESC [ 0 n``. Nearly every terminal supports it.

Terminals answer in order, so a status reply seen before any background
reply means the background query is not supported.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from termlight.color import RgbColor
from termlight.exceptions import ReplyParseError

ESC = b"\x1b"
BEL = b"\x07"
ST = b"\x1b\\"

BACKGROUND_QUERY = b"\x1b]11;?\x07"
STATUS_PROBE = b"\x1b[5n"
BACKGROUND_REPLY_PREFIX = b"\x1b]11;"

BACKGROUND_REPLY_RE = re.compile(rb"\x1b\]11;(?P<body>[^\x07\x1b]*)(?:\x07|\x1b\\)")
STATUS_REPLY_RE = re.compile(rb"\x1b\[(?P<status>\d+)n")
CHANNEL_RE = re.compile(r"[0-9a-fA-F]{1,4}")

BACKGROUND = "background"
STATUS = "status"


@dataclass(frozen=True)
class ReplyMatch:
    """A complete reply found in the input buffer.

    Attributes
    ----------
    kind : str
        ``"background"`` or ``"status"``
    start : int
        Offset of the reply's first byte in the buffer
    end : int
        Offset just past the reply's terminator
    data : bytes
        The reply bytes, terminator included
    """

    kind: str
    start: int
    end: int
    data: bytes


def encode_background_query() -> bytes:
    """Return the OSC 11 query asking for the background color."""
    return BACKGROUND_QUERY


def encode_status_probe() -> bytes:
    """Return the Device Status Report query used as race partner."""
    return STATUS_PROBE


def scale_channel(digits: str) -> int:
    """Reduce a 1 to 4 digit hex channel to 8 bits.

    Four digit channels keep their high byte, which is what xterm means by
    ``rgb:RRRR/GGGG/BBBB``.
    """
    value = int(digits, 16)
    width = len(digits)

    if width == 4:
        return value >> 8
    if width == 3:
        return value >> 4
    if width == 2:
        return value
    return value * 17


def parse_background_reply(data: bytes) -> RgbColor:
    """Parse an OSC 11 reply into an RGB color.

    Parameters
    ----------
    data : bytes
        Complete reply, e.g. ``b"\\x1b]11;rgb:1e1e/1e1e/1e1e\\x07"``

    Returns
    -------
    RgbColor
        Background color with 8 bit channels

    Raises
    ------
    ReplyParseError
        If the prefix, terminator or color channels do not match
    """
    if not data.startswith(BACKGROUND_REPLY_PREFIX):
        raise ReplyParseError("background reply has an unexpected prefix", data)

    match = BACKGROUND_REPLY_RE.fullmatch(data)
    if match is None:
        raise ReplyParseError("background reply is not properly terminated", data)

    body = match.group("body").decode("ascii", "replace")
    space, _, channel_text = body.partition(":")

    if space == "rgb":
        expected = 3
    elif space == "rgba":
        expected = 4
    else:
        raise ReplyParseError("background reply is not an rgb color", data)

    channels = channel_text.split("/")
    if len(channels) != expected:
        raise ReplyParseError(f"expected {expected} color channels, got {len(channels)}", data)

    for channel in channels:
        if not CHANNEL_RE.fullmatch(channel):
            raise ReplyParseError("color channel is not a 1 to 4 digit hex value", data)

    r, g, b = (scale_channel(channel) for channel in channels[:3])
    return RgbColor(r, g, b)


def parse_status_reply(data: bytes) -> bool:
    """Tell whether data is a complete Device Status Report reply."""
    return STATUS_REPLY_RE.fullmatch(data) is not None


def match_reply(buffer: bytes) -> ReplyMatch | None:
    """Find the first complete reply in the bytes read so far.

    Bytes that belong to neither reply are skipped, which tolerates stray
    keystrokes and late replies to an earlier query. When both replies are
    complete, the one whose terminator comes first wins.

    Parameters
    ----------
    buffer : bytes
        Everything read from the terminal during the current attempt

    Returns
    -------
    ReplyMatch | None
        The winning reply, or None while no reply is complete
    """
    candidates = []

    background = BACKGROUND_REPLY_RE.search(buffer)
    if background is not None:
        candidates.append(
            ReplyMatch(BACKGROUND, background.start(), background.end(), background.group(0))
        )

    status = STATUS_REPLY_RE.search(buffer)
    if status is not None:
        candidates.append(ReplyMatch(STATUS, status.start(), status.end(), status.group(0)))

    if not candidates:
        return None

    return min(candidates, key=lambda reply: reply.end)
