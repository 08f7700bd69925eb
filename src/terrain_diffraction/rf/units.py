"""Unit-safe physical quantities and conversions used by the RF helpers."""

from __future__ import annotations

from dataclasses import dataclass
from math import isfinite, log10
from typing import TypeVar

from terrain_diffraction.contracts import InputError

C = 2.998e8  # speed of light in air (m/s)

_KHZ = 1e3
_MHZ = 1e6
_GHZ = 1e9

T = TypeVar("T")


def require(value: object, kind: type[T], field: str) -> T:
    """Reject values that are not of the expected semantic type."""
    if not isinstance(value, kind):
        raise TypeError(f"{field} must be a {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True, slots=True, order=True)
class Frequency:
    """Carrier frequency in hertz."""

    hz: float

    def __post_init__(self) -> None:
        if not isfinite(self.hz) or self.hz <= 0.0:
            raise InputError(f"frequency must be positive, got {self.hz}")

    @classmethod
    def from_khz(cls, value: float) -> Frequency:
        return cls(float(value) * _KHZ)

    @classmethod
    def from_mhz(cls, value: float) -> Frequency:
        return cls(float(value) * _MHZ)

    @classmethod
    def from_ghz(cls, value: float) -> Frequency:
        return cls(float(value) * _GHZ)

    @property
    def mhz(self) -> float:
        return self.hz / _MHZ

    @property
    def ghz(self) -> float:
        return self.hz / _GHZ


@dataclass(frozen=True, slots=True, order=True)
class Distance:
    """Non-negative distance in metres."""

    meters: float

    def __post_init__(self) -> None:
        if not isfinite(self.meters) or self.meters < 0.0:
            raise InputError(f"distance must not be negative, got {self.meters}")

    @classmethod
    def from_km(cls, value: float) -> Distance:
        return cls(float(value) * 1000.0)

    @property
    def km(self) -> float:
        return self.meters / 1000.0


@dataclass(frozen=True, slots=True, order=True)
class Attenuation:
    """Loss expressed in decibels."""

    db: float

    def field_ratio(self) -> float:
        """Convert to an absolute field ratio (20 log10 scale)."""
        return pow(10.0, self.db / 20.0)

    def power_ratio(self) -> float:
        """Convert to an absolute power ratio (10 log10 scale)."""
        return pow(10.0, self.db / 10.0)

    @classmethod
    def from_field_ratio(cls, ratio: float) -> Attenuation:
        if ratio <= 0.0:
            raise InputError("field ratio must be positive")
        return cls(20.0 * log10(ratio))

    @classmethod
    def from_power_ratio(cls, ratio: float) -> Attenuation:
        if ratio <= 0.0:
            raise InputError("power ratio must be positive")
        return cls(10.0 * log10(ratio))

    def __add__(self, other: Attenuation) -> Attenuation:
        return Attenuation(self.db + require(other, Attenuation, "other").db)


def frequency_to_wavelength(freq: Frequency) -> Distance:
    """Return the free-space wavelength for a carrier frequency."""
    freq = require(freq, Frequency, "freq")
    return Distance(C / freq.hz)


def wavelength_to_frequency(wavelength: Distance) -> Frequency:
    """Return the carrier frequency for a free-space wavelength."""
    wavelength = require(wavelength, Distance, "wavelength")
    if wavelength.meters <= 0.0:
        raise InputError("wavelength must be positive")
    return Frequency(C / wavelength.meters)


def dbm_to_milliwatt(dbm: float) -> float:
    """Convert a power level in dBm to milliwatts."""
    return pow(10.0, dbm / 10.0)


def milliwatt_to_dbm(milliwatt: float) -> float:
    """Convert milliwatts to dBm."""
    if milliwatt <= 0.0:
        raise InputError("power must be positive")
    return 10.0 * log10(milliwatt)
