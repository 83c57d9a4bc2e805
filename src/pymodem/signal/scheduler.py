"""Periodic extended signal refresh.

The scheduler owns the refresh rate of one device and the recurring timer
that polls the device driver.  Everything runs on the event loop of the
owning daemon: timer ticks, query completions and rate changes are never
concurrent with each other.

A query that completes after reporting was disabled is discarded; the
query itself is never cancelled, drivers give no cancellation guarantee.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from pymodem._constants import U32_MAX
from pymodem.exceptions import InvalidArgumentError, UnsupportedError
from pymodem.models.modem import ModemState
from pymodem.models.signal import SignalReading
from pymodem.state.store import SnapshotStore

_logger = logging.getLogger(__name__)

LoadValues = Callable[[], Awaitable[SignalReading | Sequence[bool | float]]]
StateGetter = Callable[[], ModemState]


class Timer(Protocol):
    interval: float

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Timer]


class RecurringTimer:
    """Invoke *callback* every *interval* seconds on the running loop.

    The timer is rearmed before the callback runs, so a failing callback
    never stops the cadence.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], None],
        *,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self.interval = interval
        self._callback = callback
        self._loop = loop or asyncio.get_running_loop()
        self._handle: asyncio.TimerHandle | None = None
        self._cancelled = False
        self._arm()

    @property
    def active(self) -> bool:
        return not self._cancelled

    def _arm(self) -> None:
        self._handle = self._loop.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        self._arm()
        try:
            self._callback()
        except Exception:
            _logger.warning("Recurring timer callback failed", exc_info=True)

    def cancel(self) -> None:
        self._cancelled = True
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()


@dataclass
class RefreshContext:
    """Active refresh state; exists only while reporting is running."""

    rate: int = 0
    timer: Timer | None = None

    def cancel_timer(self) -> None:
        timer = self.timer
        self.timer = None
        if timer is not None:
            timer.cancel()


class RefreshScheduler:
    """Refresh-rate state machine for one device."""

    def __init__(
        self,
        *,
        store: SnapshotStore,
        get_state: StateGetter,
        load_values: LoadValues | None,
        timer_factory: TimerFactory = RecurringTimer,
        on_shutdown: Callable[[], None] | None = None,
        rate: int = 0,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._get_state = get_state
        self._load_values = load_values
        self._timer_factory = timer_factory
        self._on_shutdown = on_shutdown
        self._rate = _validate_rate(rate)
        self._logger = logger or _logger
        self._context: RefreshContext | None = None
        # Bumped on every teardown; queries started under an older
        # generation are stale by the time they complete.
        self._generation = 0
        self._queries: set[asyncio.Task[None]] = set()

    @property
    def rate(self) -> int:
        """Stored refresh rate in seconds (``0`` = disabled)."""
        return self._rate

    @property
    def context(self) -> RefreshContext | None:
        return self._context

    @property
    def timer(self) -> Timer | None:
        return self._context.timer if self._context is not None else None

    @property
    def supported(self) -> bool:
        return self._load_values is not None

    @property
    def pending(self) -> int:
        """Number of hardware queries still in flight."""
        return len(self._queries)

    def reconfigure(self, explicit_rate: int | None = None) -> None:
        """Apply *explicit_rate*, or re-apply the stored rate when ``None``.

        Raises
        ------
        InvalidArgumentError
            *explicit_rate* does not fit an unsigned 32-bit integer.
        UnsupportedError
            Refresh would start but the driver has no query hook.
        """
        if explicit_rate is not None:
            self._rate = _validate_rate(explicit_rate)
        new_rate = self._rate

        if new_rate == 0:
            self._logger.debug("Extended signal information reporting disabled (rate: 0 seconds)")
            self._teardown()
            return

        if self._get_state() < ModemState.ENABLING:
            self._logger.debug("Extended signal information reporting disabled (modem not yet enabled)")
            return

        if self._load_values is None:
            raise UnsupportedError("Extended signal information reporting not supported")

        ctx = self._context
        if ctx is None:
            ctx = self._context = RefreshContext()

        if ctx.rate == new_rate:
            return

        # The context only changes once the new timer exists.
        timer = self._timer_factory(new_rate, self.on_timer_fire)
        self._logger.debug("Extended signal information reporting enabled (rate: %u seconds)", new_rate)
        ctx.cancel_timer()
        ctx.rate = new_rate
        ctx.timer = timer

        # First values right away, not one full period from now.
        self.on_timer_fire()

    def on_timer_fire(self) -> None:
        """Start one hardware query; its result is applied on completion."""
        if self._load_values is None:
            return
        task = asyncio.get_running_loop().create_task(self._refresh(self._generation))
        self._queries.add(task)
        task.add_done_callback(self._queries.discard)

    async def _refresh(self, generation: int) -> None:
        assert self._load_values is not None
        try:
            result = await self._load_values()
            reading = result if isinstance(result, SignalReading) else SignalReading.from_values(result)
        except Exception as exc:
            if generation != self._generation:
                self._logger.debug("Ignoring failed extended signal query: reporting was disabled")
                return
            self._logger.warning("Couldn't load extended signal information: %s", exc)
            self._store.clear()
            return

        if generation != self._generation:
            self._logger.debug("Discarding stale extended signal information: reporting was disabled")
            return
        self._store.publish(reading)

    def disable(self) -> None:
        """Stop reporting and clear the published values."""
        self._logger.debug("Extended signal information reporting disabled")
        self._teardown()

    def shutdown(self) -> None:
        """Disable and ask the owner to unpublish the interface."""
        self.disable()
        if self._on_shutdown is not None:
            self._on_shutdown()

    async def wait_idle(self) -> None:
        """Wait for every in-flight query to be applied or discarded."""
        while self._queries:
            await asyncio.gather(*list(self._queries), return_exceptions=True)

    def _teardown(self) -> None:
        self._generation += 1
        ctx = self._context
        self._context = None
        if ctx is not None:
            ctx.cancel_timer()
        self._store.clear()


def _validate_rate(rate: int) -> int:
    if isinstance(rate, bool) or not isinstance(rate, int) or not 0 <= rate <= U32_MAX:
        raise InvalidArgumentError(f"Invalid refresh rate {rate!r}: must be an unsigned 32-bit integer")
    return rate
