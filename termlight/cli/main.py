"""CLI entry point for termlight."""

from __future__ import annotations

import logging
import os
import sys

import fire

from termlight.constants import (
    DEBUG_ENV_VAR,
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_UNDETERMINED,
)
from termlight.exceptions import DetectionError, UnsupportedError
from termlight.logging import SourceFormatter


def get_termlight_class() -> type:
    """Get TermLight class on-demand to avoid circular imports.

    Returns
    -------
    type
        TermLight command class
    """
    from termlight.__main__ import TermLight

    return TermLight


def handle_unsupported_error(error: UnsupportedError, debug_mode: bool) -> None:
    """Handle a detection that no strategy could complete.

    Parameters
    ----------
    error : UnsupportedError
        The error raised by the detector
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    UnsupportedError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print("Could not determine the terminal background color\n", file=sys.stderr)
    if error.__cause__ is not None:
        print(f"Last attempt failed: {error.__cause__}\n", file=sys.stderr)
    print("This usually means:", file=sys.stderr)
    print("  - stdin or stdout is not a terminal", file=sys.stderr)
    print("  - the terminal does not answer OSC 11 queries", file=sys.stderr)
    print("  - COLORFGBG is not set\n", file=sys.stderr)
    print("Try:", file=sys.stderr)
    print("  termlight color --timeout_ms=500", file=sys.stderr)
    print("  COLORFGBG='15;0' termlight color", file=sys.stderr)
    sys.exit(EXIT_UNDETERMINED)


def handle_detection_error(error: DetectionError, debug_mode: bool) -> None:
    """Handle a single strategy failure surfaced by the ``env`` command.

    Parameters
    ----------
    error : DetectionError
        The strategy error
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    DetectionError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Detection error ({error.kind}): {error}", file=sys.stderr)
    sys.exit(EXIT_UNDETERMINED)


def handle_value_error(error: ValueError, debug_mode: bool) -> None:
    """Handle invalid configuration or arguments.

    Parameters
    ----------
    error : ValueError
        The value error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    ValueError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Configuration error: {error}", file=sys.stderr)
    sys.exit(EXIT_CONFIG_ERROR)


def handle_runtime_error(error: RuntimeError, debug_mode: bool) -> None:
    """Handle unexpected runtime error.

    Parameters
    ----------
    error : RuntimeError
        The runtime error that was raised
    debug_mode : bool
        Whether debug mode is enabled

    Raises
    ------
    RuntimeError
        Re-raised if debug mode is enabled
    """
    if debug_mode:
        raise

    print(f"Unexpected error: {error}", file=sys.stderr)
    sys.exit(EXIT_ERROR)


def configure_logging(debug_mode: bool) -> None:
    """Route diagnostics to stderr, keeping stdout for results.

    Parameters
    ----------
    debug_mode : bool
        Log at DEBUG level instead of WARNING
    """
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setFormatter(SourceFormatter("%(levelname)s %(name)s: %(message)s"))

    logging.basicConfig(
        level=logging.DEBUG if debug_mode else logging.WARNING,
        handlers=[stderr_handler],
    )


def main() -> None:
    """Entry point for Fire CLI with graceful error handling.

    Fire maps the methods of TermLight to commands (``color``, ``luma``,
    ``mode``, ``env``) and prints their return values.
    """
    debug_mode = os.environ.get(DEBUG_ENV_VAR) == "1"
    configure_logging(debug_mode)

    TermLight = get_termlight_class()

    try:
        fire.Fire(TermLight())
    except UnsupportedError as e:
        handle_unsupported_error(e, debug_mode)
    except DetectionError as e:
        handle_detection_error(e, debug_mode)
    except ValueError as e:
        handle_value_error(e, debug_mode)
    except RuntimeError as e:
        handle_runtime_error(e, debug_mode)
