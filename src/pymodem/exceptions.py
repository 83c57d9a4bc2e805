"""Custom exception hierarchy for pymodem."""

from __future__ import annotations

from enum import StrEnum


class CoreErrorCode(StrEnum):
    """Codes of the daemon's core error domain."""

    FAILED = "failed"
    UNSUPPORTED = "unsupported"
    UNAUTHORIZED = "unauthorized"
    INVALID_ARGS = "invalid-args"


class ModemError(Exception):
    """Base exception for all pymodem errors."""


class ModemConfigError(ModemError):
    """Invalid or missing configuration."""


class ModemContractError(ModemError):
    """An API was used outside of its contract.

    This signals a programming error in the caller (a broken precondition),
    not a runtime condition that should be retried or reported to a peer.
    """


class ModemCoreError(ModemError):
    """Error reported back to the caller of a daemon operation."""

    code: CoreErrorCode = CoreErrorCode.FAILED

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class FailedError(ModemCoreError):
    """Internal precondition broken (e.g. interface object missing)."""

    code = CoreErrorCode.FAILED


class UnsupportedError(ModemCoreError):
    """The device driver does not provide the requested capability."""

    code = CoreErrorCode.UNSUPPORTED


class UnauthorizedError(ModemCoreError):
    """The requester failed the authorization check."""

    code = CoreErrorCode.UNAUTHORIZED


class InvalidArgumentError(ModemCoreError):
    """Malformed input.

    ``key`` names the offending (or missing) dictionary key when the error
    is about a specific entry of a settings payload.
    """

    code = CoreErrorCode.INVALID_ARGS

    def __init__(self, message: str, *, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)
