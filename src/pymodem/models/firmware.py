"""Firmware update settings.

The settings describe how a modem must be driven into its firmware update
mode.  The set of fields depends on the update method:

* ``FASTBOOT`` carries the AT command that resets the module into fastboot
  mode (``fastboot_at``, required).
* ``UNKNOWN`` carries nothing else.

Method tags without a :class:`FirmwareUpdateMethod` member (methods added
by newer peers) are kept as plain integers and carry no fields.
"""

from __future__ import annotations

import enum
from typing import Annotated

from pydantic import AfterValidator, Field, model_validator

from pymodem._constants import U32_MAX
from pymodem.exceptions import ModemContractError
from pymodem.models._base import ModemBaseModel


class FirmwareUpdateMethod(enum.IntEnum):
    """Method used to update the modem firmware.

    Values are the ``u32`` tags used on the wire.
    """

    UNKNOWN = 0
    FASTBOOT = 1


def known_method(tag: int) -> int:
    """Return the :class:`FirmwareUpdateMethod` member for *tag*, or *tag* itself."""
    try:
        return FirmwareUpdateMethod(tag)
    except ValueError:
        return tag


def method_label(method: int) -> str:
    if isinstance(method, FirmwareUpdateMethod):
        return method.name
    return f"method {method}"


MethodTag = Annotated[int, Field(ge=0, le=U32_MAX), AfterValidator(known_method)]


class FirmwareUpdateSettings(ModemBaseModel):
    """Immutable firmware update settings.

    Usage::

        settings = FirmwareUpdateSettings(
            method=FirmwareUpdateMethod.FASTBOOT,
            fastboot_at="AT^FASTBOOT",
        )
    """

    method: MethodTag = FirmwareUpdateMethod.UNKNOWN
    fastboot_at_command: str | None = Field(default=None, alias="fastboot_at", min_length=1)

    @model_validator(mode="after")
    def _validate_method_fields(self) -> FirmwareUpdateSettings:
        if self.method == FirmwareUpdateMethod.FASTBOOT:
            if self.fastboot_at_command is None:
                raise ValueError("Fastboot method requires the 'fastboot_at' setting")
        elif self.fastboot_at_command is not None:
            raise ValueError(f"'fastboot_at' is only valid with the fastboot method, not {method_label(self.method)}")
        return self

    @property
    def fastboot_at(self) -> str:
        """AT command that resets the module into fastboot mode.

        Only applicable when ``method`` is ``FASTBOOT``; reading it on any
        other method raises :class:`ModemContractError`.
        """
        if self.method != FirmwareUpdateMethod.FASTBOOT or self.fastboot_at_command is None:
            raise ModemContractError(f"fastboot_at is not available for update method {method_label(self.method)}")
        return self.fastboot_at_command
