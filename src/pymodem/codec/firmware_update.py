"""Firmware update settings <-> ``(u, a{sv})`` wire payload.

On the wire the settings are a 2-tuple of the method tag and a dictionary
of method-specific fields.  Internally they are a
:class:`~pymodem.models.firmware.FirmwareUpdateSettings` value; this module
is the only place the two representations meet.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Annotated, Any

from pydantic import Field, StrictInt, StrictStr, TypeAdapter, ValidationError

from pymodem._constants import FASTBOOT_AT_KEY, U32_MAX
from pymodem.exceptions import InvalidArgumentError
from pymodem.models.firmware import FirmwareUpdateMethod, FirmwareUpdateSettings, known_method, method_label

_logger = logging.getLogger(__name__)

WirePayload = tuple[int, dict[str, Any]]

_PAYLOAD_ADAPTER: TypeAdapter[tuple[int, dict[str, Any]]] = TypeAdapter(
    tuple[Annotated[StrictInt, Field(ge=0, le=U32_MAX)], dict[StrictStr, Any]]
)

# Consumes one dictionary entry into model keyword arguments.
_FieldConsumer = Callable[[dict[str, Any], str, Any], None]


def _reject_key(_fields: dict[str, Any], key: str, _value: Any) -> None:
    raise InvalidArgumentError(f"Invalid settings dictionary, unexpected key '{key}'", key=key)


def _consume_fastboot(fields: dict[str, Any], key: str, value: Any) -> None:
    if key != FASTBOOT_AT_KEY:
        _reject_key(fields, key, value)
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(
            f"Invalid settings dictionary, '{key}' must be a non-empty string",
            key=key,
        )
    fields["fastboot_at"] = value


# Methods missing here, including tags newer than this library, accept no keys.
_CONSUMERS: dict[int, _FieldConsumer] = {
    FirmwareUpdateMethod.UNKNOWN: _reject_key,
    FirmwareUpdateMethod.FASTBOOT: _consume_fastboot,
}

# Wire key -> model keyword that must have been consumed, per method.
_REQUIRED: dict[int, dict[str, str]] = {
    FirmwareUpdateMethod.FASTBOOT: {FASTBOOT_AT_KEY: "fastboot_at"},
}


def encode_firmware_update_settings(settings: FirmwareUpdateSettings | None) -> WirePayload:
    """Flatten *settings* into its wire payload.

    ``None`` encodes as the ``UNKNOWN`` method with no fields.
    """
    if settings is None:
        return (int(FirmwareUpdateMethod.UNKNOWN), {})

    fields: dict[str, Any] = {}
    if settings.method == FirmwareUpdateMethod.FASTBOOT:
        fields[FASTBOOT_AT_KEY] = settings.fastboot_at
    return (int(settings.method), fields)


def decode_firmware_update_settings(payload: Any) -> FirmwareUpdateSettings:
    """Build settings from a wire payload.

    Raises
    ------
    InvalidArgumentError
        The payload is missing or malformed, carries a key the method does
        not accept, or lacks a key the method requires.  ``key`` on the
        error names the offending entry.  Unknown method tags are kept as
        they are and accept no keys.
    """
    if payload is None:
        raise InvalidArgumentError("No input given")

    try:
        method_tag, dictionary = _PAYLOAD_ADAPTER.validate_python(payload)
    except ValidationError as exc:
        raise InvalidArgumentError("Invalid input type") from exc

    method = known_method(method_tag)

    consume = _CONSUMERS.get(method, _reject_key)
    fields: dict[str, Any] = {}
    for key, value in dictionary.items():
        consume(fields, key, value)

    for wire_key, field_name in _REQUIRED.get(method, {}).items():
        if field_name not in fields:
            raise InvalidArgumentError(
                f"{method_label(method).capitalize()} method requires the '{wire_key}' setting",
                key=wire_key,
            )

    _logger.debug("Decoded firmware update settings method=%s keys=%s", method_label(method), sorted(dictionary))
    return FirmwareUpdateSettings(method=method, **fields)
