"""Fixtures for termlight unit tests."""

from collections.abc import Generator

import pytest

from tests.fakes import FakeTerminal


@pytest.fixture
def terminal() -> Generator[FakeTerminal, None, None]:
    """Provide a fake terminal with termios patched to act on it.

    Yields
    ------
    FakeTerminal
        Fake terminal whose descriptors can be passed to the query
    """
    fake = FakeTerminal()
    try:
        with fake.installed():
            yield fake
    finally:
        fake.close()
