"""Wire codecs for daemon value types."""

from pymodem.codec.firmware_update import (
    WirePayload,
    decode_firmware_update_settings,
    encode_firmware_update_settings,
)

__all__ = [
    "WirePayload",
    "decode_firmware_update_settings",
    "encode_firmware_update_settings",
]
