"""Terminal background color detection using the OSC 11 query.

The query and a Device Status Report probe are written to stdout while
stdin is in raw mode, then stdin is polled until one of the replies is
complete or the deadline elapses. When the background reply wins, the
status reply that follows it is read too, so nothing is left on stdin.

Only one query may run at a time: concurrent callers would read each
other's replies from the shared input stream.
"""

from __future__ import annotations

import logging
import os
import platform
import select
import sys
import time

from termlight.color import RgbColor
from termlight.constants import DEFAULT_TIMEOUT_SECONDS, READ_CHUNK_SIZE
from termlight.exceptions import QueryTimeoutError, TerminalIOError, UnsupportedError
from termlight.sources.protocol import (
    STATUS,
    STATUS_REPLY_RE,
    encode_background_query,
    encode_status_probe,
    match_reply,
    parse_background_reply,
)

logger = logging.getLogger(__name__)

try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None


def is_supported() -> bool:
    """Tell whether this platform offers raw mode and pollable terminal input."""
    return platform.system() != "Windows" and termios is not None and tty is not None


class RawMode:
    """Context manager holding a terminal in raw mode.

    The saved attributes are restored on every exit path. Entering raw mode
    discards input still pending on the descriptor.

    Parameters
    ----------
    fd : int
        Terminal file descriptor
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._saved: list | None = None

    def __enter__(self) -> RawMode:
        try:
            self._saved = termios.tcgetattr(self.fd)
        except termios.error as e:
            raise TerminalIOError(f"cannot read terminal attributes: {e}") from e

        try:
            tty.setraw(self.fd)
        except termios.error as e:
            self._restore()
            raise TerminalIOError(f"cannot switch terminal to raw mode: {e}") from e

        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._restore()
        return False

    def _restore(self) -> None:
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)
            return
        except termios.error as e:
            logger.debug("Draining restore of terminal mode failed, retrying: %s", e)

        try:
            termios.tcsetattr(self.fd, termios.TCSANOW, self._saved)
        except termios.error as e:
            raise TerminalIOError(f"cannot restore terminal mode: {e}") from e


def write_queries(fd: int) -> None:
    """Write the background query followed by the status probe."""
    payload = encode_background_query() + encode_status_probe()

    try:
        while payload:
            written = os.write(fd, payload)
            payload = payload[written:]
    except OSError as e:
        raise TerminalIOError(f"cannot write terminal query: {e}") from e


def _poll(fd: int, remaining: float) -> bytes:
    try:
        readable, _, _ = select.select([fd], [], [], remaining)
    except (OSError, ValueError) as e:
        raise TerminalIOError(f"cannot poll terminal input: {e}") from e

    if not readable:
        return b""

    try:
        chunk = os.read(fd, READ_CHUNK_SIZE)
    except OSError as e:
        raise TerminalIOError(f"cannot read terminal input: {e}") from e

    if not chunk:
        raise TerminalIOError("terminal input reached end of file")

    return chunk


def _drain_status_reply(fd: int, deadline: float, pending: bytearray) -> None:
    """Consume the status reply that trails a background reply.

    Gives up silently at the deadline or on a read failure, since the
    background color is already known.
    """
    while STATUS_REPLY_RE.search(pending) is None:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.debug("Status reply not seen before the deadline: %r", bytes(pending))
            return

        try:
            pending += _poll(fd, remaining)
        except TerminalIOError as e:
            logger.debug("Stopped waiting for the status reply: %s", e)
            return


def read_reply(fd: int, timeout: float) -> RgbColor:
    """Poll the terminal input until a reply wins the race.

    Bytes are accumulated across reads so that replies split over several
    reads are still recognized. After a background reply, reading goes on
    until the status reply is consumed or the deadline elapses.

    Parameters
    ----------
    fd : int
        Terminal input descriptor
    timeout : float
        Deadline in seconds

    Returns
    -------
    RgbColor
        Parsed background color

    Raises
    ------
    UnsupportedError
        If the status reply arrives before the background reply
    QueryTimeoutError
        If no complete reply arrives before the deadline
    ReplyParseError
        If the background reply is malformed
    TerminalIOError
        If polling or reading fails, or input reaches end of file
    """
    deadline = time.monotonic() + timeout
    buffer = bytearray()

    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.debug("Terminal query timed out, %d byte(s) read: %r", len(buffer), bytes(buffer))
            raise QueryTimeoutError(timeout)

        chunk = _poll(fd, remaining)
        if not chunk:
            continue

        buffer += chunk
        reply = match_reply(bytes(buffer))
        if reply is None:
            continue

        logger.debug("Terminal %s reply: %r", reply.kind, reply.data)

        if reply.kind == STATUS:
            raise UnsupportedError("terminal does not answer the background color query")

        try:
            return parse_background_reply(reply.data)
        finally:
            _drain_status_reply(fd, deadline, buffer[reply.end :])


def _discard_pending_input(fd: int) -> None:
    try:
        termios.tcflush(fd, termios.TCIFLUSH)
    except termios.error as e:
        logger.debug("Could not discard pending terminal input: %s", e)


def _std_fd(stream, name: str) -> int:
    try:
        return stream.fileno()
    except (AttributeError, ValueError, OSError) as e:
        raise UnsupportedError(f"{name} has no file descriptor") from e


def query_background_color(
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    input_fd: int | None = None,
    output_fd: int | None = None,
) -> RgbColor:
    """Ask the terminal for its background color.

    Parameters
    ----------
    timeout : float
        Deadline in seconds for a reply (default: 0.1)
    input_fd : int | None
        Descriptor replies are read from, defaults to stdin
    output_fd : int | None
        Descriptor queries are written to, defaults to stdout

    Returns
    -------
    RgbColor
        Background color reported by the terminal

    Raises
    ------
    UnsupportedError
        If the platform or the terminal cannot answer the query
    QueryTimeoutError
        If the terminal stays silent until the deadline
    ReplyParseError
        If the reply is malformed
    TerminalIOError
        If terminal I/O or mode switching fails
    """
    if not is_supported():
        raise UnsupportedError("terminal queries are not available on this platform")

    if input_fd is None:
        input_fd = _std_fd(sys.stdin, "stdin")
    if output_fd is None:
        output_fd = _std_fd(sys.stdout, "stdout")

    if not (os.isatty(input_fd) and os.isatty(output_fd)):
        raise UnsupportedError("stdin and stdout must both be terminals")

    with RawMode(input_fd):
        write_queries(output_fd)
        try:
            return read_reply(input_fd, timeout)
        except QueryTimeoutError:
            _discard_pending_input(input_fd)
            raise


class XtermSource:
    """Detection strategy querying the terminal with OSC 11.

    Parameters
    ----------
    timeout : float
        Deadline in seconds for a reply
    input_fd : int | None
        Descriptor replies are read from, defaults to stdin
    output_fd : int | None
        Descriptor queries are written to, defaults to stdout
    """

    name = "xterm"

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        input_fd: int | None = None,
        output_fd: int | None = None,
    ) -> None:
        self.timeout = timeout
        self.input_fd = input_fd
        self.output_fd = output_fd

    def query(self) -> RgbColor:
        return query_background_color(self.timeout, self.input_fd, self.output_fd)
