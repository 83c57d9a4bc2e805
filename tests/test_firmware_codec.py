from __future__ import annotations

import pytest

from pymodem.codec import decode_firmware_update_settings, encode_firmware_update_settings
from pymodem.exceptions import CoreErrorCode, InvalidArgumentError
from pymodem.models.firmware import FirmwareUpdateMethod, FirmwareUpdateSettings


@pytest.mark.parametrize(
    "settings",
    [
        FirmwareUpdateSettings(),
        FirmwareUpdateSettings(method=FirmwareUpdateMethod.FASTBOOT, fastboot_at="AT+FASTBOOT"),
    ],
)
def test_decode_reproduces_encoded_settings(settings: FirmwareUpdateSettings) -> None:
    assert decode_firmware_update_settings(encode_firmware_update_settings(settings)) == settings


def test_encode_unknown_method_has_no_fields() -> None:
    assert encode_firmware_update_settings(FirmwareUpdateSettings()) == (0, {})


def test_encode_none_is_unknown_method() -> None:
    assert encode_firmware_update_settings(None) == (0, {})


def test_encode_fastboot_carries_at_command() -> None:
    settings = FirmwareUpdateSettings(method=FirmwareUpdateMethod.FASTBOOT, fastboot_at="AT^FASTBOOT")
    assert encode_firmware_update_settings(settings) == (1, {"fastboot-at": "AT^FASTBOOT"})


def test_decode_fastboot_without_at_command_names_missing_key() -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        decode_firmware_update_settings((int(FirmwareUpdateMethod.FASTBOOT), {}))

    assert exc_info.value.key == "fastboot-at"
    assert "fastboot-at" in str(exc_info.value)
    assert exc_info.value.code == CoreErrorCode.INVALID_ARGS


def test_decode_unknown_key_names_offending_key() -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        decode_firmware_update_settings((int(FirmwareUpdateMethod.FASTBOOT), {"bogus": "x"}))

    assert exc_info.value.key == "bogus"
    assert "bogus" in str(exc_info.value)


def test_decode_unknown_key_rejected_even_with_required_key_present() -> None:
    payload = (1, {"fastboot-at": "AT+FASTBOOT", "bogus": 1})
    with pytest.raises(InvalidArgumentError) as exc_info:
        decode_firmware_update_settings(payload)
    assert exc_info.value.key == "bogus"


def test_decode_fastboot_key_not_accepted_for_unknown_method() -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        decode_firmware_update_settings((0, {"fastboot-at": "AT+FASTBOOT"}))
    assert exc_info.value.key == "fastboot-at"


def test_decode_fastboot_at_must_be_string() -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        decode_firmware_update_settings((1, {"fastboot-at": 5}))
    assert exc_info.value.key == "fastboot-at"


def test_decode_fastboot_at_must_not_be_empty() -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        decode_firmware_update_settings((1, {"fastboot-at": ""}))
    assert exc_info.value.key == "fastboot-at"


def test_decode_without_input() -> None:
    with pytest.raises(InvalidArgumentError, match="No input given"):
        decode_firmware_update_settings(None)


@pytest.mark.parametrize(
    "payload",
    [
        "AT+FASTBOOT",
        (1,),
        (1, {}, "extra"),
        ("1", {}),
        (True, {}),
        (-1, {}),
        (0x1_0000_0000, {}),
        (1, ["fastboot-at", "AT"]),
        (1, {7: "AT"}),
    ],
)
def test_decode_rejects_malformed_payload(payload: object) -> None:
    with pytest.raises(InvalidArgumentError, match="Invalid input type"):
        decode_firmware_update_settings(payload)


def test_decode_keeps_newer_method_tag() -> None:
    settings = decode_firmware_update_settings((2, {}))

    assert settings.method == 2
    assert not isinstance(settings.method, FirmwareUpdateMethod)
    assert settings == FirmwareUpdateSettings(method=2)
    assert encode_firmware_update_settings(settings) == (2, {})


def test_decode_newer_method_tag_accepts_no_keys() -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        decode_firmware_update_settings((2, {"x": 1}))
    assert exc_info.value.key == "x"


def test_decode_newer_method_tag_rejects_fastboot_key() -> None:
    with pytest.raises(InvalidArgumentError) as exc_info:
        decode_firmware_update_settings((2, {"fastboot-at": "AT+FASTBOOT"}))
    assert exc_info.value.key == "fastboot-at"


def test_decode_largest_method_tag() -> None:
    assert decode_firmware_update_settings((0xFFFF_FFFF, {})).method == 0xFFFF_FFFF


def test_decode_accepts_list_pair() -> None:
    settings = decode_firmware_update_settings([1, {"fastboot-at": "AT+FASTBOOT"}])
    assert settings.method == FirmwareUpdateMethod.FASTBOOT
    assert settings.fastboot_at == "AT+FASTBOOT"
