"""pymodem - extended signal reporting and firmware update settings for modem daemons."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pymodem")
except PackageNotFoundError:
    __version__ = "0+local"
from pymodem.codec import decode_firmware_update_settings, encode_firmware_update_settings
from pymodem.config import ModemConfig
from pymodem.exceptions import (
    CoreErrorCode,
    FailedError,
    InvalidArgumentError,
    ModemConfigError,
    ModemContractError,
    ModemCoreError,
    ModemError,
    UnauthorizedError,
    UnsupportedError,
)
from pymodem.models import (
    AuthorizationKind,
    FirmwareUpdateMethod,
    FirmwareUpdateSettings,
    ModemState,
    SignalReading,
    Technology,
)
from pymodem.signal import (
    Authorizer,
    LifecycleState,
    RefreshScheduler,
    SignalInterface,
    SignalLifecycle,
)
from pymodem.state import SnapshotStore

__all__ = [
    "__version__",
    "AuthorizationKind",
    "Authorizer",
    "CoreErrorCode",
    "FailedError",
    "FirmwareUpdateMethod",
    "FirmwareUpdateSettings",
    "InvalidArgumentError",
    "LifecycleState",
    "ModemConfig",
    "ModemConfigError",
    "ModemContractError",
    "ModemCoreError",
    "ModemError",
    "ModemState",
    "RefreshScheduler",
    "SignalInterface",
    "SignalLifecycle",
    "SignalReading",
    "SnapshotStore",
    "Technology",
    "UnauthorizedError",
    "UnsupportedError",
    "decode_firmware_update_settings",
    "encode_firmware_update_settings",
]
