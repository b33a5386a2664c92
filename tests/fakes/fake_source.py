"""Fake detection strategy for dependency injection testing."""

from termlight.color import Color
from termlight.exceptions import DetectionError


class FakeSource:
    """Strategy returning a fixed color or raising a fixed error.

    Parameters
    ----------
    name : str
        Strategy name reported in detections
    color : Color | None
        Color returned by ``query()``
    error : DetectionError | None
        Error raised by ``query()``, takes precedence over color
    """

    def __init__(
        self, name: str, color: Color | None = None, error: DetectionError | None = None
    ) -> None:
        self.name = name
        self.color = color
        self.error = error
        self.calls = 0

    def query(self) -> Color:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.color
