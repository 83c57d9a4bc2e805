from __future__ import annotations

import pytest

from fakes import lte_reading
from pymodem.models.signal import SignalReading, Technology
from pymodem.state.store import SnapshotStore


def test_store_starts_at_zeroed_baseline() -> None:
    store = SnapshotStore()

    assert store.reading == SignalReading()
    assert all(not record.available for record in store.values.values())
    assert store.properties()["cdma-rssi"] == (False, 0.0)


def test_publish_stores_and_forwards_reading() -> None:
    published: list[SignalReading] = []
    store = SnapshotStore(publish=lambda reading: published.append(reading) is None)

    assert store.publish(lte_reading(-70.0)) is True

    assert published == [lte_reading(-70.0)]
    assert store.values[Technology.LTE].rssi == -70.0
    assert store.properties()["lte-rssi"] == (True, -70.0)


def test_clear_publishes_baseline() -> None:
    published: list[SignalReading] = []
    store = SnapshotStore(publish=lambda reading: published.append(reading) is None)
    store.publish(lte_reading())

    store.clear()

    assert store.reading == SignalReading()
    assert published[-1] == SignalReading()


def test_publish_with_nothing_exported_drops_values(caplog: pytest.LogCaptureFixture) -> None:
    store = SnapshotStore(publish=lambda _reading: False)

    with caplog.at_level("WARNING"):
        assert store.publish(lte_reading()) is False

    assert store.reading == SignalReading()
    assert "interface not exported" in caplog.text
