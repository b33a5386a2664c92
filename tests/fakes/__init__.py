"""Test fake implementations for dependency injection testing."""

from tests.fakes.fake_source import FakeSource
from tests.fakes.fake_terminal import FakeTerminal

__all__ = ["FakeSource", "FakeTerminal"]
