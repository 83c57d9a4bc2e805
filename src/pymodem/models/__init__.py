"""Data models for modem state, extended signal and firmware update settings."""

from pymodem.models._base import ModemBaseModel, ModemEnum
from pymodem.models.firmware import FirmwareUpdateMethod, FirmwareUpdateSettings
from pymodem.models.modem import AuthorizationKind, ModemState
from pymodem.models.signal import (
    CdmaSignal,
    EvdoSignal,
    GsmSignal,
    LteSignal,
    SignalReading,
    Technology,
    TechnologySignal,
    UmtsSignal,
)

__all__ = [
    "AuthorizationKind",
    "CdmaSignal",
    "EvdoSignal",
    "FirmwareUpdateMethod",
    "FirmwareUpdateSettings",
    "GsmSignal",
    "LteSignal",
    "ModemBaseModel",
    "ModemEnum",
    "ModemState",
    "SignalReading",
    "Technology",
    "TechnologySignal",
    "UmtsSignal",
]
