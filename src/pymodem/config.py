"""Daemon-side configuration for pymodem."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pymodem._constants import DEFAULT_TOPIC_PREFIX, U32_MAX
from pymodem.exceptions import ModemConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(env_key: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ModemConfigError(f"{env_key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class ModemConfig:
    """Configuration for the extended signal interface.

    Parameters
    ----------
    default_rate : int
        Refresh rate (seconds) the interface starts with before any
        ``Setup`` request.  ``0`` keeps automatic refresh disabled.
    mqtt_enabled : bool
        Republish signal snapshots to an MQTT broker.
    mqtt_host : str
        MQTT broker host.
    mqtt_port : int
        MQTT broker port.
    mqtt_keepalive : int
        MQTT keepalive in seconds.
    mqtt_topic_prefix : str
        Topic prefix; snapshots go to ``<prefix>/<device_id>/signal``.
    mqtt_qos : int
        QoS level used for snapshot publishes.
    mqtt_retain : bool
        Publish snapshots with the retain flag so late subscribers get the
        latest values.
    """

    default_rate: int = 0
    mqtt_enabled: bool = False
    mqtt_host: str = "localhost"
    mqtt_port: int = 1883
    mqtt_keepalive: int = 60
    mqtt_topic_prefix: str = DEFAULT_TOPIC_PREFIX
    mqtt_qos: int = 0
    mqtt_retain: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.default_rate <= U32_MAX:
            raise ModemConfigError(f"default_rate must be between 0 and {U32_MAX}, got {self.default_rate}")
        if not 1 <= self.mqtt_port <= 65535:
            raise ModemConfigError(f"mqtt_port must be between 1 and 65535, got {self.mqtt_port}")
        if self.mqtt_qos not in (0, 1, 2):
            raise ModemConfigError(f"mqtt_qos must be 0, 1 or 2, got {self.mqtt_qos}")
        if self.mqtt_keepalive <= 0:
            raise ModemConfigError("mqtt_keepalive must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> ModemConfig:
        """Create configuration from environment variables.

        Reads the optional ``PYMODEM_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ModemConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_INT_MAP = {
            "PYMODEM_SIGNAL_RATE": "default_rate",
            "PYMODEM_MQTT_PORT": "mqtt_port",
            "PYMODEM_MQTT_KEEPALIVE": "mqtt_keepalive",
            "PYMODEM_MQTT_QOS": "mqtt_qos",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_int(env_key, val)

        _ENV_STR_MAP = {
            "PYMODEM_MQTT_HOST": "mqtt_host",
            "PYMODEM_MQTT_TOPIC_PREFIX": "mqtt_topic_prefix",
        }
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = val

        if "mqtt_enabled" not in overrides:
            config_kwargs["mqtt_enabled"] = _env_bool(env.get("PYMODEM_MQTT_ENABLED"), False)
        if "mqtt_retain" not in overrides:
            config_kwargs["mqtt_retain"] = _env_bool(env.get("PYMODEM_MQTT_RETAIN"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
