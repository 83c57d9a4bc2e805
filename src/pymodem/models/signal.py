"""Extended signal quality models.

A :class:`SignalReading` is what a device driver's hardware query returns:
one record per radio technology, each with an ``available`` flag and a
technology-specific, ordered set of named doubles.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from typing import ClassVar

from pydantic import Field, model_validator

from pymodem._constants import SIGNAL_PROPERTIES
from pymodem.models._base import ModemBaseModel


class Technology(StrEnum):
    """Radio access technology family."""

    CDMA = "cdma"
    EVDO = "evdo"
    GSM = "gsm"
    UMTS = "umts"
    LTE = "lte"


class TechnologySignal(ModemBaseModel):
    """Signal values for one technology.

    When ``available`` is ``False`` every numeric field is reported as
    ``0.0``; whatever the driver passed in is meaningless and discarded.
    """

    technology: ClassVar[Technology]

    available: bool = False

    @model_validator(mode="after")
    def _zero_when_unavailable(self) -> TechnologySignal:
        if self.available:
            return self
        for field_name in self.field_names():
            object.__setattr__(self, field_name, 0.0)
        return self

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Numeric field names, in declaration order."""
        return tuple(name for name in cls.model_fields if name != "available")

    def values(self) -> tuple[tuple[str, float], ...]:
        """Ordered ``(name, value)`` pairs of the numeric fields."""
        return tuple((name, getattr(self, name)) for name in self.field_names())


class CdmaSignal(TechnologySignal):
    technology: ClassVar[Technology] = Technology.CDMA

    rssi: float = 0.0
    ecio: float = 0.0


class EvdoSignal(TechnologySignal):
    technology: ClassVar[Technology] = Technology.EVDO

    rssi: float = 0.0
    ecio: float = 0.0
    sinr: float = 0.0
    io: float = 0.0


class GsmSignal(TechnologySignal):
    technology: ClassVar[Technology] = Technology.GSM

    rssi: float = 0.0


class UmtsSignal(TechnologySignal):
    technology: ClassVar[Technology] = Technology.UMTS

    rssi: float = 0.0
    ecio: float = 0.0


class LteSignal(TechnologySignal):
    technology: ClassVar[Technology] = Technology.LTE

    rssi: float = 0.0
    rsrq: float = 0.0
    rsrp: float = 0.0
    snr: float = 0.0


class SignalReading(ModemBaseModel):
    """One complete set of extended signal values.

    The default instance (every technology unavailable) is the zeroed
    baseline published before the first successful query and after any
    failure.
    """

    cdma: CdmaSignal = Field(default_factory=CdmaSignal)
    evdo: EvdoSignal = Field(default_factory=EvdoSignal)
    gsm: GsmSignal = Field(default_factory=GsmSignal)
    umts: UmtsSignal = Field(default_factory=UmtsSignal)
    lte: LteSignal = Field(default_factory=LteSignal)

    TECHNOLOGY_MODELS: ClassVar[tuple[type[TechnologySignal], ...]] = (
        CdmaSignal,
        EvdoSignal,
        GsmSignal,
        UmtsSignal,
        LteSignal,
    )

    @classmethod
    def from_values(cls, values: Sequence[bool | float]) -> SignalReading:
        """Build a reading from the flat tuple a hardware query produces.

        For each technology in cdma, evdo, gsm, umts, lte order the tuple
        holds the availability flag followed by that technology's fields.
        """
        expected = sum(1 + len(model.field_names()) for model in cls.TECHNOLOGY_MODELS)
        if len(values) != expected:
            raise ValueError(f"expected {expected} signal values, got {len(values)}")

        kwargs: dict[str, TechnologySignal] = {}
        index = 0
        for model in cls.TECHNOLOGY_MODELS:
            names = model.field_names()
            available = bool(values[index])
            fields = dict(zip(names, values[index + 1 : index + 1 + len(names)], strict=True))
            kwargs[model.technology.value] = model(available=available, **fields)
            index += 1 + len(names)
        return cls(**kwargs)

    def technology(self, technology: Technology | str) -> TechnologySignal:
        """Return the record for *technology*."""
        signal: TechnologySignal = getattr(self, Technology(technology).value)
        return signal

    def by_technology(self) -> dict[Technology, TechnologySignal]:
        return {tech: self.technology(tech) for tech in Technology}

    def to_properties(self) -> dict[str, tuple[bool, float]]:
        """Flatten into the published ``(available, value)`` properties."""
        properties: dict[str, tuple[bool, float]] = {}
        for prop, tech, field_name in SIGNAL_PROPERTIES:
            signal = self.technology(tech)
            properties[prop] = (signal.available, float(getattr(signal, field_name)))
        return properties
