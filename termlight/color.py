"""Background color representation and luma computation."""

from __future__ import annotations

from dataclasses import dataclass

BASIC_COLORS: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 128, 0),
    (0, 0, 128),
    (128, 0, 128),
    (0, 128, 128),
    (192, 192, 192),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)
"""xterm defaults for the 16 basic ANSI colors."""

CUBE_LEVELS = (0, 95, 135, 175, 215, 255)
"""Channel intensities of the 6x6x6 color cube (indices 16 to 231)."""

LUMA_WEIGHTS = (0.2126, 0.7152, 0.0722)


def _check_byte(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 255:
        raise ValueError(f"{name} must be an integer between 0 and 255, got {value!r}")


def ansi_to_rgb(code: int) -> tuple[int, int, int]:
    """Map an index of the 256-color palette to RGB.

    Parameters
    ----------
    code : int
        ANSI color index between 0 and 255

    Returns
    -------
    tuple[int, int, int]
        Red, green and blue channels between 0 and 255

    Raises
    ------
    ValueError
        If code is outside the palette
    """
    _check_byte("ANSI code", code)

    if code < 16:
        return BASIC_COLORS[code]

    if code < 232:
        index = code - 16
        return (
            CUBE_LEVELS[index // 36],
            CUBE_LEVELS[(index // 6) % 6],
            CUBE_LEVELS[index % 6],
        )

    gray = 8 + 10 * (code - 232)
    return (gray, gray, gray)


def rgb_luma(r: int, g: int, b: int) -> float:
    """Compute the perceptual brightness of an RGB triple, between 0 and 1."""
    wr, wg, wb = LUMA_WEIGHTS
    value = (wr * r + wg * g + wb * b) / 255
    return min(1.0, max(0.0, value))


@dataclass(frozen=True)
class AnsiColor:
    """Background given as an index of the terminal's 256-color palette.

    Attributes
    ----------
    code : int
        Palette index between 0 and 255
    """

    code: int

    def __post_init__(self) -> None:
        _check_byte("code", self.code)

    def rgb(self) -> tuple[int, int, int]:
        return ansi_to_rgb(self.code)

    def luma(self) -> float:
        return rgb_luma(*self.rgb())

    def __str__(self) -> str:
        return f"ansi:{self.code}"


@dataclass(frozen=True)
class RgbColor:
    """Background given as an exact RGB triple.

    Attributes
    ----------
    r : int
        Red channel between 0 and 255
    g : int
        Green channel between 0 and 255
    b : int
        Blue channel between 0 and 255
    """

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        _check_byte("r", self.r)
        _check_byte("g", self.g)
        _check_byte("b", self.b)

    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def luma(self) -> float:
        return rgb_luma(self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        """Color formatted as ``#rrggbb``."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def __str__(self) -> str:
        return self.hex


Color = AnsiColor | RgbColor


def rgb(color: Color) -> tuple[int, int, int]:
    """Return the RGB channels of a color, resolving ANSI indices."""
    return color.rgb()


def luma(color: Color) -> float:
    """Return the luma of a color, from 0 (black) to 1 (white)."""
    return color.luma()
