"""Externally visible extended signal interface object.

This is the object a daemon exports on its bus: a ``Rate`` property, the
thirteen ``(available, value)`` signal properties and a ``Setup(rate)``
request.  Transport is out of scope; observers subscribe to property change
notifications instead.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from pymodem._constants import RATE_PROPERTY, SIGNAL_PROPERTIES, UNAVAILABLE_VALUE
from pymodem.exceptions import UnsupportedError
from pymodem.models.signal import SignalReading

_logger = logging.getLogger(__name__)

SetupHandler = Callable[[int, str | None], Awaitable[None]]
ChangeCallback = Callable[["SignalInterface", frozenset[str]], None]


class SignalInterface:
    """Property bag plus request dispatch for one device."""

    def __init__(self, *, rate: int = 0) -> None:
        self._rate = rate
        self._values: dict[str, tuple[bool, float]] = {name: UNAVAILABLE_VALUE for name, _, _ in SIGNAL_PROPERTIES}
        self._changed: set[str] = set()
        self._subscribers: list[ChangeCallback] = []
        self._setup_handler: SetupHandler | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def rate(self) -> int:
        return self._rate

    @rate.setter
    def rate(self, value: int) -> None:
        if value != self._rate:
            self._rate = value
            self._changed.add(RATE_PROPERTY)
        self.flush()

    def get(self, name: str) -> tuple[bool, float]:
        """Return the ``(available, value)`` tuple of signal property *name*."""
        return self._values[name]

    def properties(self) -> dict[str, tuple[bool, float]]:
        return dict(self._values)

    def update_values(self, reading: SignalReading) -> None:
        """Set every signal property from *reading* and flush right away."""
        for name, value in reading.to_properties().items():
            if self._values[name] != value:
                self._values[name] = value
                self._changed.add(name)
        self.flush()

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, callback: ChangeCallback) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: ChangeCallback) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    def flush(self) -> None:
        """Notify subscribers of properties changed since the last flush."""
        if not self._changed:
            return
        changed = frozenset(self._changed)
        self._changed.clear()
        for callback in list(self._subscribers):
            try:
                callback(self, changed)
            except Exception:
                _logger.warning("Signal property subscriber failed", exc_info=True)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def connect_setup(self, handler: SetupHandler | None) -> None:
        self._setup_handler = handler

    @property
    def handles_setup(self) -> bool:
        return self._setup_handler is not None

    async def handle_setup(self, rate: int, requester: str | None = None) -> None:
        """Dispatch a ``Setup(rate)`` request to the connected handler."""
        handler = self._setup_handler
        if handler is None:
            raise UnsupportedError("Extended signal information reporting not supported")
        await handler(rate, requester)
