"""Internal constants shared across the library."""

U32_MAX = 0xFFFFFFFF

# ------------------------------------------------------------------
# Firmware update settings wire format  ``(u, a{sv})``
# ------------------------------------------------------------------

FASTBOOT_AT_KEY = "fastboot-at"

# ------------------------------------------------------------------
# Extended signal interface properties
# ------------------------------------------------------------------

RATE_PROPERTY = "rate"

# Published ``(available, value)`` tuples, in bus order.  Each entry maps the
# property name to the technology and the field within that technology.
SIGNAL_PROPERTIES: tuple[tuple[str, str, str], ...] = (
    ("cdma-rssi", "cdma", "rssi"),
    ("cdma-ecio", "cdma", "ecio"),
    ("evdo-rssi", "evdo", "rssi"),
    ("evdo-ecio", "evdo", "ecio"),
    ("evdo-sinr", "evdo", "sinr"),
    ("evdo-io", "evdo", "io"),
    ("gsm-rssi", "gsm", "rssi"),
    ("umts-rssi", "umts", "rssi"),
    ("umts-ecio", "umts", "ecio"),
    ("lte-rssi", "lte", "rssi"),
    ("lte-rsrq", "lte", "rsrq"),
    ("lte-rsrp", "lte", "rsrp"),
    ("lte-snr", "lte", "snr"),
)

UNAVAILABLE_VALUE: tuple[bool, float] = (False, 0.0)

# ------------------------------------------------------------------
# MQTT snapshot publisher
# ------------------------------------------------------------------

DEFAULT_TOPIC_PREFIX = "pymodem"


def signal_topic(prefix: str, device_id: str) -> str:
    """Return the topic extended signal snapshots are published on."""
    return f"{prefix.rstrip('/')}/{device_id}/signal"
