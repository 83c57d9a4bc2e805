"""In-memory snapshot store for extended signal values."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pymodem.models.signal import SignalReading, Technology, TechnologySignal

_logger = logging.getLogger(__name__)

# Receives every new snapshot.  Returns ``False`` when there is nowhere to
# publish to (interface not exported).
PublishHook = Callable[[SignalReading], bool]


class SnapshotStore:
    """Most recently published signal values of one device.

    The store always holds a complete reading: before the first successful
    query, and after every clear, that is the zeroed baseline in which every
    technology is unavailable.
    """

    def __init__(
        self,
        *,
        publish: PublishHook | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._publish = publish
        self._logger = logger or _logger
        self._reading = SignalReading()

    @property
    def reading(self) -> SignalReading:
        return self._reading

    @property
    def values(self) -> dict[Technology, TechnologySignal]:
        """Per-technology records of the current snapshot."""
        return self._reading.by_technology()

    def properties(self) -> dict[str, tuple[bool, float]]:
        return self._reading.to_properties()

    def publish(self, reading: SignalReading) -> bool:
        """Store *reading* and hand it to the publish hook.

        When the hook reports that nothing is exported, the values are not
        kept: the store falls back to the zeroed baseline so that a later
        export never shows a snapshot that was never published.
        """
        if self._publish is not None and not self._publish(reading):
            self._logger.warning("Cannot update extended signal information: interface not exported")
            self._reading = SignalReading()
            return False
        self._reading = reading
        return True

    def clear(self) -> None:
        """Reset to the zeroed baseline and publish it."""
        self._reading = SignalReading()
        if self._publish is not None:
            self._publish(self._reading)
