"""Core data contracts and error taxonomy for terrain diffraction calculations."""

from __future__ import annotations

from dataclasses import dataclass
from math import isfinite
from typing import Any


class DiffractionError(ValueError):
    """Base error for diffraction calculations."""


class DomainError(DiffractionError):
    """Input violates a physical validity precondition of an approximation."""


class InputError(DiffractionError):
    """Malformed terrain profile or path geometry."""


def to_float_list(values: object) -> list[float]:
    """Convert list-like or numpy-like values to a list of finite floats."""
    if hasattr(values, "tolist"):
        raw_values = values.tolist()
    else:
        raw_values = values

    if not isinstance(raw_values, (list, tuple)):
        raise TypeError("Expected list-like values that can be converted to a Python list.")

    result = [float(value) for value in raw_values]
    if not all(isfinite(value) for value in result):
        raise InputError("terrain samples must be finite numbers.")
    return result


@dataclass(frozen=True, slots=True)
class NormalizedProfile:
    """Terrain expressed in the frame where the line of sight is the x axis.

    `y` is positive where terrain rises above the line of sight.
    """

    x: tuple[float, ...]
    y: tuple[float, ...]
    path_length: float
    inclination_rad: float

    def __len__(self) -> int:
        return len(self.x)

    def interior(self) -> list[tuple[float, float]]:
        """Return `(x, y)` pairs excluding the two endpoint samples."""
        return list(zip(self.x[1:-1], self.y[1:-1]))


@dataclass(frozen=True, slots=True)
class HorizonAngles:
    """Steepest sightline angles from each path endpoint, in radians."""

    theta1_rad: float
    theta2_rad: float


@dataclass(frozen=True, slots=True)
class KnifeEdge:
    """Single equivalent obstruction standing in for a terrain profile."""

    distance_m: float
    height_m: float
    path_length_m: float

    @property
    def d1_m(self) -> float:
        return self.distance_m

    @property
    def d2_m(self) -> float:
        return self.path_length_m - self.distance_m

    def to_dict(self) -> dict[str, float]:
        return {
            "distance_m": self.distance_m,
            "height_m": self.height_m,
            "d1_m": self.d1_m,
            "d2_m": self.d2_m,
        }


@dataclass(frozen=True, slots=True)
class DiffractionLoss:
    """Knife edge together with its diffraction parameter and estimated loss."""

    method: str
    knife_edge: KnifeEdge
    v: float
    loss_db: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "knife_edge": self.knife_edge.to_dict(),
            "v": self.v,
            "loss_db": self.loss_db,
        }


@dataclass(frozen=True, slots=True)
class ImpingementResult:
    """Worst first-Fresnel-zone impingement found along a path.

    `index` is None when every sample was skipped and the midpoint fallback
    was reported.
    """

    fraction: float
    distance_m: float
    height_m: float
    zone_radius_m: float
    index: int | None
    skipped: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "fraction": self.fraction,
            "distance_m": self.distance_m,
            "height_m": self.height_m,
            "zone_radius_m": self.zone_radius_m,
            "index": self.index,
            "skipped": self.skipped,
        }
