"""CLI argument parsing and result classification utilities."""

from __future__ import annotations

from termlight.constants import MAX_TIMEOUT_MS, Mode


def parse_timeout_ms(timeout: str | int | float) -> int:
    """Parse a timeout parameter into whole milliseconds.

    Parameters
    ----------
    timeout : str | int | float
        Timeout as milliseconds (``150``), or a string with an ``ms`` or
        ``s`` suffix (``"150ms"``, ``"0.2s"``)

    Returns
    -------
    int
        Timeout in milliseconds

    Raises
    ------
    ValueError
        If the value is not numeric or outside 1 to 10000 ms
    """
    if isinstance(timeout, bool):
        raise ValueError(f"Invalid timeout value: {timeout!r}")

    if isinstance(timeout, (int, float)):
        millis = float(timeout)
    else:
        text = str(timeout).strip().lower()
        scale = 1.0

        if text.endswith("ms"):
            text = text[:-2]
        elif text.endswith("s"):
            text = text[:-1]
            scale = 1000.0

        try:
            millis = float(text.strip()) * scale
        except ValueError:
            raise ValueError(f"Invalid timeout value: '{timeout}' is not numeric") from None

    result = round(millis)
    if result < 1 or result > MAX_TIMEOUT_MS:
        raise ValueError(
            f"Invalid timeout value: {timeout}. Timeout must be between 1 and {MAX_TIMEOUT_MS} ms"
        )

    return result


def classify_luma(luma: float, dark_threshold: float, light_threshold: float) -> Mode:
    """Classify a background luma as dark, medium or light.

    Parameters
    ----------
    luma : float
        Background luma between 0 and 1
    dark_threshold : float
        Luma below which the background is dark
    light_threshold : float
        Luma above which the background is light

    Returns
    -------
    Mode
        The classification
    """
    if luma < dark_threshold:
        return Mode.DARK
    if luma > light_threshold:
        return Mode.LIGHT
    return Mode.MEDIUM
