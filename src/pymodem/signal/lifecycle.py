"""Extended signal interface lifecycle for one device.

The surrounding daemon drives :class:`SignalLifecycle` through
``initialize`` -> ``enable`` <-> ``disable`` -> ``shutdown``.  The
lifecycle owns the device's :class:`RefreshScheduler` and
:class:`SnapshotStore`, creates the :class:`SignalInterface` the daemon
exports, and serves authorized ``Setup(rate)`` requests.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable
from typing import Protocol

from pymodem._mqtt import SignalMqttPublisher
from pymodem.config import ModemConfig
from pymodem.exceptions import FailedError, UnsupportedError
from pymodem.models.modem import AuthorizationKind
from pymodem.models.signal import SignalReading
from pymodem.signal.interface import SignalInterface
from pymodem.signal.scheduler import LoadValues, RecurringTimer, RefreshScheduler, StateGetter, TimerFactory
from pymodem.state.store import SnapshotStore

_logger = logging.getLogger(__name__)

Exporter = Callable[[SignalInterface | None], None]


class Authorizer(Protocol):
    """Authorization subsystem of the daemon.

    ``authorize`` returns when *requester* holds *kind*; otherwise it raises
    (normally :class:`~pymodem.exceptions.UnauthorizedError`).
    """

    async def authorize(self, requester: str | None, kind: AuthorizationKind) -> None: ...


class LifecycleState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    ENABLED = "enabled"
    DISABLED = "disabled"
    SHUT_DOWN = "shut-down"


class SignalLifecycle:
    """Top-level state machine of the extended signal interface.

    Parameters
    ----------
    get_state : callable
        Returns the current :class:`~pymodem.models.modem.ModemState`.
    authorizer : Authorizer
        Checks ``Setup`` requesters for device-control authorization.
    load_values : callable or None
        The driver's hardware query.  ``None`` means the driver cannot
        report extended signal information.
    exporter : callable or None
        Told when the interface object is exported (called with it) and
        unexported (called with ``None``).
    config : ModemConfig or None
        Supplies the initial refresh rate and MQTT settings.
    device_id : str or None
        Identifies the device in MQTT topics.  Required for MQTT
        republishing when ``config.mqtt_enabled`` is set.
    mqtt_publisher : SignalMqttPublisher or None
        Explicit publisher; overrides the one built from ``config``.
    timer_factory : callable
        Builds the recurring refresh timer.
    logger : logging.Logger or None
        Used by the lifecycle and handed to its components.  When omitted
        every component logs through its own module logger.
    """

    def __init__(
        self,
        *,
        get_state: StateGetter,
        authorizer: Authorizer,
        load_values: LoadValues | None = None,
        exporter: Exporter | None = None,
        config: ModemConfig | None = None,
        device_id: str | None = None,
        mqtt_publisher: SignalMqttPublisher | None = None,
        timer_factory: TimerFactory = RecurringTimer,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config or ModemConfig()
        self._authorizer = authorizer
        self._exporter = exporter
        self._logger = logger or _logger
        self._supported = load_values is not None
        self._interface: SignalInterface | None = None
        self._exported = False
        self._state = LifecycleState.UNINITIALIZED

        if mqtt_publisher is None and self._config.mqtt_enabled and device_id is not None:
            mqtt_publisher = SignalMqttPublisher(self._config, device_id, logger=logger)
        self._mqtt = mqtt_publisher

        self._store = SnapshotStore(publish=self._publish, logger=logger)
        self._scheduler = RefreshScheduler(
            store=self._store,
            get_state=get_state,
            load_values=load_values,
            timer_factory=timer_factory,
            on_shutdown=self._unexport,
            rate=self._config.default_rate,
            logger=logger,
        )

    @property
    def supported(self) -> bool:
        return self._supported

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def interface(self) -> SignalInterface | None:
        return self._interface

    @property
    def exported(self) -> bool:
        return self._exported

    @property
    def scheduler(self) -> RefreshScheduler:
        return self._scheduler

    @property
    def store(self) -> SnapshotStore:
        return self._store

    @property
    def mqtt_publisher(self) -> SignalMqttPublisher | None:
        return self._mqtt

    @property
    def rate(self) -> int:
        return self._scheduler.rate

    # ------------------------------------------------------------------
    # Lifecycle entry points
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Create (once) the interface object and export it when supported.

        An unsupported driver still gets an interface object for property
        access, but it is not exported and this raises
        :class:`UnsupportedError`.
        """
        self._ensure_not_shut_down()

        if self._interface is None:
            interface = SignalInterface(rate=self._scheduler.rate)
            self._interface = interface
            if self._supported:
                self._store.clear()
                interface.connect_setup(self.handle_setup_request)
                self._export(interface)
                await self._start_mqtt()

        if self._state is LifecycleState.UNINITIALIZED:
            self._state = LifecycleState.INITIALIZED

        if not self._supported:
            raise UnsupportedError("Extended signal information reporting not supported")

    async def enable(self) -> None:
        """Resume refresh at the stored rate now that the modem is enabling."""
        self._ensure_not_shut_down()
        if not self._supported:
            raise UnsupportedError("Extended signal information reporting not supported")

        self._scheduler.reconfigure(None)
        self._state = LifecycleState.ENABLED

    async def disable(self) -> None:
        self._scheduler.disable()
        if self._state is not LifecycleState.SHUT_DOWN:
            self._state = LifecycleState.DISABLED

    async def shutdown(self) -> None:
        """Stop refresh, unexport and forget the interface object.  Idempotent."""
        self._scheduler.shutdown()
        self._state = LifecycleState.SHUT_DOWN
        await self._stop_mqtt()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def handle_setup_request(self, rate: int, requester: str | None = None) -> None:
        """Serve ``Setup(rate)``: authorize, then apply the new rate.

        Authorizer errors propagate unchanged; nothing is modified unless
        authorization succeeds.
        """
        await self._authorizer.authorize(requester, AuthorizationKind.DEVICE_CONTROL)

        interface = self._interface
        if interface is None:
            raise FailedError("Couldn't get interface skeleton")

        try:
            self._scheduler.reconfigure(rate)
        finally:
            interface.rate = self._scheduler.rate

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _ensure_not_shut_down(self) -> None:
        if self._state is LifecycleState.SHUT_DOWN:
            raise FailedError("Extended signal interface has been shut down")

    def _publish(self, reading: SignalReading) -> bool:
        interface = self._interface
        if interface is None:
            return False
        interface.update_values(reading)
        return True

    def _export(self, interface: SignalInterface) -> None:
        self._logger.debug("Exporting extended signal interface")
        self._exported = True
        if self._exporter is not None:
            self._exporter(interface)
        if self._mqtt is not None:
            self._mqtt.export(interface)

    def _unexport(self) -> None:
        if self._interface is None:
            return
        was_exported = self._exported
        self._exported = False
        self._interface = None
        if was_exported:
            self._logger.debug("Unexporting extended signal interface")
            if self._exporter is not None:
                self._exporter(None)
            if self._mqtt is not None:
                self._mqtt.export(None)

    async def _start_mqtt(self) -> None:
        publisher = self._mqtt
        if publisher is None or publisher.is_running:
            return
        try:
            await asyncio.get_running_loop().run_in_executor(None, publisher.start)
        except Exception:
            self._logger.warning("MQTT publisher start failed", exc_info=True)

    async def _stop_mqtt(self) -> None:
        publisher = self._mqtt
        if publisher is None or not publisher.is_running:
            return
        try:
            await asyncio.get_running_loop().run_in_executor(None, publisher.stop)
        except Exception:
            self._logger.warning("MQTT publisher stop failed", exc_info=True)
