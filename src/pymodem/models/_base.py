"""Base model and enum for pymodem value types.

Every signal model inherits from :class:`ModemBaseModel` which provides:

* frozen, ``extra="forbid"`` semantics so readings are immutable values
  and typos in driver output fail loudly.
* A ``model_validator(mode="before")`` that drops ``None`` and NaN inputs
  so the field default is used.

State enums inherit from :class:`ModemEnum` which resolves any value
without a mapped member to ``UNKNOWN`` instead of raising ``ValueError``.
"""

from __future__ import annotations

import enum
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class ModemEnum(enum.IntEnum):
    """Base for daemon-reported state enums.

    Every subclass **must** define ``UNKNOWN``.
    """

    @classmethod
    def _missing_(cls, value: object) -> ModemEnum:
        # pylint: disable=no-member
        if hasattr(cls, "UNKNOWN"):
            unknown: ModemEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class ModemBaseModel(BaseModel):
    """Base for immutable pymodem models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )

    @staticmethod
    def _clean_dict(values: dict[str, Any]) -> dict[str, Any]:
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            cleaned[key] = value
        return cleaned

    @model_validator(mode="before")
    @classmethod
    def _drop_missing_values(cls, values: Any) -> Any:
        """Drop ``None``/NaN inputs so the field default applies."""
        if not isinstance(values, dict):
            return values
        return ModemBaseModel._clean_dict(values)
