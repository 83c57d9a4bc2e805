from __future__ import annotations

import pytest

from fakes import FakeDriver, FakeTimerFactory


@pytest.fixture
def timers() -> FakeTimerFactory:
    return FakeTimerFactory()


@pytest.fixture
def driver() -> FakeDriver:
    return FakeDriver()
