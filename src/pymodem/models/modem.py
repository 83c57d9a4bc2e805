"""Modem lifecycle and authorization enums."""

from __future__ import annotations

from enum import StrEnum

from pymodem.models._base import ModemEnum


class ModemState(ModemEnum):
    """Overall modem lifecycle state.

    Members are ordered: comparisons such as ``state >= ModemState.ENABLING``
    are meaningful.
    """

    FAILED = -1
    UNKNOWN = 0
    INITIALIZING = 1
    LOCKED = 2
    DISABLED = 3
    DISABLING = 4
    ENABLING = 5
    ENABLED = 6
    SEARCHING = 7
    REGISTERED = 8
    DISCONNECTING = 9
    CONNECTING = 10
    CONNECTED = 11


class AuthorizationKind(StrEnum):
    """Authorization required before a request is served."""

    DEVICE_CONTROL = "device-control"
