"""MQTT republishing of extended signal snapshots."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any, cast

import paho.mqtt.client as mqtt

from pymodem._constants import signal_topic
from pymodem.config import ModemConfig
from pymodem.signal.interface import SignalInterface

ClientFactory = Callable[[str], mqtt.Client]


def build_signal_payload(interface: SignalInterface) -> dict[str, Any]:
    """Snapshot of *interface* as a JSON-serializable object."""
    return {
        "rate": interface.rate,
        "values": {
            name: {"available": available, "value": value}
            for name, (available, value) in interface.properties().items()
        },
    }


def _default_client_factory(client_id: str) -> mqtt.Client:
    return mqtt.Client(
        callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
        client_id=client_id,
        protocol=mqtt.MQTTv5,
    )


class SignalMqttPublisher:
    """Threaded paho-mqtt runtime that republishes signal property changes.

    Use :meth:`export` as the lifecycle's exporter so the publisher follows
    the interface object as it is exported and unexported.
    """

    def __init__(
        self,
        config: ModemConfig,
        device_id: str,
        *,
        client_factory: ClientFactory = _default_client_factory,
        logger: logging.Logger | None = None,
    ) -> None:
        self._config = config
        self._device_id = device_id
        self._client_factory = client_factory
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False
        self._interface: SignalInterface | None = None
        # JSON snapshot taken on the event loop; the network thread only sends it.
        self._payload: str | None = None
        self.topic = signal_topic(config.mqtt_topic_prefix, device_id)

    @property
    def is_running(self) -> bool:
        """Whether the MQTT runtime is actively running."""
        return self._running

    @property
    def interface(self) -> SignalInterface | None:
        return self._interface

    def start(self) -> None:
        """Connect to the configured broker and start the network loop."""
        if self._running:
            return
        self._logger.debug(
            "MQTT publisher start requested host=%s port=%s topic=%s",
            self._config.mqtt_host,
            self._config.mqtt_port,
            self.topic,
        )

        client = self._client_factory(f"pymodem-{self._device_id}")
        client.enable_logger(self._logger)

        def on_connect(
            _c: mqtt.Client,
            _userdata: Any,
            _flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if reason_code.value != 0:
                self._logger.warning("MQTT connect failed: %s", reason_code)
                return
            self._logger.debug("MQTT connected successfully reason=%s", reason_code)
            # Late connections still get the latest snapshot.
            payload = self._payload
            if payload is not None:
                self._send(payload)

        def on_disconnect(
            _client: mqtt.Client,
            _userdata: Any,
            _disconnect_flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if self._running:
                self._logger.debug("MQTT disconnected: %s", reason_code)

        client.on_connect = on_connect
        client.on_disconnect = on_disconnect

        client.connect(self._config.mqtt_host, self._config.mqtt_port, keepalive=self._config.mqtt_keepalive)
        client.loop_start()

        self._client = client
        self._running = True
        self._logger.debug("MQTT network loop started")

    def stop(self) -> None:
        """Stop and disconnect the MQTT client if running."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False

        if client is None:
            return
        try:
            if was_running:
                self._logger.debug("MQTT disconnect requested")
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT network loop stopped")

    def export(self, interface: SignalInterface | None) -> None:
        """Follow *interface*; ``None`` detaches from the current one."""
        previous = self._interface
        if previous is interface:
            return
        if previous is not None:
            previous.unsubscribe(self._on_change)
        self._interface = interface
        if interface is None:
            self._payload = None
            return
        interface.subscribe(self._on_change)
        self._publish(interface)

    def _on_change(self, interface: SignalInterface, _changed: frozenset[str]) -> None:
        self._publish(interface)

    def _publish(self, interface: SignalInterface) -> None:
        payload = json.dumps(build_signal_payload(interface), separators=(",", ":"))
        self._payload = payload
        self._send(payload)

    def _send(self, payload: str) -> None:
        client = self._client
        if client is None or not self._running:
            return
        try:
            info = client.publish(
                self.topic,
                payload,
                qos=self._config.mqtt_qos,
                retain=self._config.mqtt_retain,
            )
            if info.rc != mqtt.MQTT_ERR_SUCCESS:
                self._logger.warning("MQTT publish to %s failed rc=%s", self.topic, info.rc)
        except Exception:
            self._logger.warning("MQTT publish to %s failed", self.topic, exc_info=True)
