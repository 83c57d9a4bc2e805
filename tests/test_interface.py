from __future__ import annotations

import pytest

from fakes import lte_reading
from pymodem.exceptions import UnsupportedError
from pymodem.models.signal import SignalReading
from pymodem.signal.interface import SignalInterface


def _recorder(interface: SignalInterface) -> list[frozenset[str]]:
    changes: list[frozenset[str]] = []
    interface.subscribe(lambda _iface, changed: changes.append(changed))
    return changes


def test_update_values_notifies_changed_properties_only() -> None:
    interface = SignalInterface()
    changes = _recorder(interface)

    interface.update_values(lte_reading())
    interface.update_values(lte_reading())

    assert changes == [frozenset({"lte-rssi", "lte-rsrq", "lte-rsrp", "lte-snr"})]
    assert interface.get("lte-snr") == (True, 12.5)


def test_rate_change_is_notified() -> None:
    interface = SignalInterface(rate=5)
    changes = _recorder(interface)

    interface.rate = 5
    interface.rate = 10

    assert changes == [frozenset({"rate"})]
    assert interface.rate == 10


def test_unsubscribe_stops_notifications() -> None:
    interface = SignalInterface()
    changes: list[frozenset[str]] = []

    def callback(_iface: SignalInterface, changed: frozenset[str]) -> None:
        changes.append(changed)

    interface.subscribe(callback)
    interface.unsubscribe(callback)
    interface.unsubscribe(callback)
    interface.update_values(lte_reading())

    assert changes == []


def test_failing_subscriber_does_not_block_others() -> None:
    interface = SignalInterface()

    def broken(_iface: SignalInterface, _changed: frozenset[str]) -> None:
        raise RuntimeError("boom")

    interface.subscribe(broken)
    changes = _recorder(interface)

    interface.update_values(lte_reading())
    interface.update_values(SignalReading())

    assert len(changes) == 2
    assert interface.get("lte-rssi") == (False, 0.0)


def test_unknown_property() -> None:
    with pytest.raises(KeyError):
        SignalInterface().get("nr5g-rsrp")


@pytest.mark.asyncio
async def test_setup_without_handler_is_unsupported() -> None:
    with pytest.raises(UnsupportedError):
        await SignalInterface().handle_setup(5)


@pytest.mark.asyncio
async def test_setup_dispatches_to_handler() -> None:
    interface = SignalInterface()
    calls: list[tuple[int, str | None]] = []

    async def handler(rate: int, requester: str | None) -> None:
        calls.append((rate, requester))

    interface.connect_setup(handler)
    await interface.handle_setup(30, ":1.7")

    assert calls == [(30, ":1.7")]
