from __future__ import annotations

import pytest

from pymodem.config import ModemConfig
from pymodem.exceptions import ModemConfigError


def test_defaults() -> None:
    config = ModemConfig()
    assert config.default_rate == 0
    assert config.mqtt_enabled is False
    assert config.mqtt_topic_prefix == "pymodem"


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYMODEM_SIGNAL_RATE", "15")
    monkeypatch.setenv("PYMODEM_MQTT_ENABLED", "yes")
    monkeypatch.setenv("PYMODEM_MQTT_HOST", "broker.lan")
    monkeypatch.setenv("PYMODEM_MQTT_PORT", "8883")
    monkeypatch.setenv("PYMODEM_MQTT_RETAIN", "off")

    config = ModemConfig.from_env()

    assert config.default_rate == 15
    assert config.mqtt_enabled is True
    assert config.mqtt_host == "broker.lan"
    assert config.mqtt_port == 8883
    assert config.mqtt_retain is False


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYMODEM_SIGNAL_RATE", "15")
    monkeypatch.setenv("PYMODEM_MQTT_ENABLED", "1")

    config = ModemConfig.from_env(default_rate=3, mqtt_enabled=False)

    assert config.default_rate == 3
    assert config.mqtt_enabled is False


def test_from_env_string_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYMODEM_MQTT_HOST", "broker.lan")
    monkeypatch.setenv("PYMODEM_MQTT_TOPIC_PREFIX", "lab")

    config = ModemConfig.from_env(mqtt_host="mqtt.internal")

    assert config.mqtt_host == "mqtt.internal"
    assert config.mqtt_topic_prefix == "lab"


def test_from_env_unparseable_bool_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYMODEM_MQTT_ENABLED", "maybe")
    assert ModemConfig.from_env().mqtt_enabled is False


def test_from_env_rejects_non_integer(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PYMODEM_SIGNAL_RATE", "soon")
    with pytest.raises(ModemConfigError, match="PYMODEM_SIGNAL_RATE"):
        ModemConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"default_rate": -1},
        {"default_rate": 0x1_0000_0000},
        {"mqtt_port": 0},
        {"mqtt_qos": 3},
        {"mqtt_keepalive": 0},
    ],
)
def test_invalid_values_rejected(kwargs: dict[str, int]) -> None:
    with pytest.raises(ModemConfigError):
        ModemConfig(**kwargs)
