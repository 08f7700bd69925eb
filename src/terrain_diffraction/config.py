"""Runtime settings for diffraction calculations."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

_ENV_PREFIX = "TERRAIN_DIFFRACTION_"


@dataclass(frozen=True, slots=True)
class DiffractionSettings:
    """Tolerances and thresholds shared by the solvers and scanners."""

    # distance * ratio must reach one wavelength for Fresnel formulas to apply
    fresnel_min_distance_wavelength_ratio: float = 0.1
    degenerate_tolerance: float = 1e-9
    tie_tolerance_m: float = 1e-9
    impingement_ideal: float = 0.2
    impingement_ok: float = 0.4

    def __post_init__(self) -> None:
        """Validate threshold ordering and positivity."""
        if self.fresnel_min_distance_wavelength_ratio <= 0.0:
            raise ValueError("fresnel_min_distance_wavelength_ratio must be positive")
        if self.degenerate_tolerance <= 0.0:
            raise ValueError("degenerate_tolerance must be positive")
        if self.tie_tolerance_m < 0.0:
            raise ValueError("tie_tolerance_m must not be negative")
        if not 0.0 <= self.impingement_ideal <= self.impingement_ok <= 1.0:
            raise ValueError("impingement thresholds must satisfy 0 <= ideal <= ok <= 1")


DEFAULT_SETTINGS = DiffractionSettings()


def _env_float(name: str) -> float | None:
    """Read an optional float override from the environment."""
    raw = os.getenv(_ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{_ENV_PREFIX}{name} must be a number, got {raw!r}") from exc


def load_settings(base: DiffractionSettings | None = None) -> DiffractionSettings:
    """Build settings from defaults overridden by `TERRAIN_DIFFRACTION_*` variables."""
    overrides: dict[str, float] = {}
    for field_name in (
        "fresnel_min_distance_wavelength_ratio",
        "degenerate_tolerance",
        "tie_tolerance_m",
        "impingement_ideal",
        "impingement_ok",
    ):
        value = _env_float(field_name.upper())
        if value is not None:
            overrides[field_name] = value
    return replace(base or DEFAULT_SETTINGS, **overrides)
