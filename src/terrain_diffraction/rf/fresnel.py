"""Fresnel-zone and Fresnel-Kirchhoff knife-edge primitives (ITU-R P.526)."""

from __future__ import annotations

from math import log10, sqrt

from terrain_diffraction.config import DEFAULT_SETTINGS, DiffractionSettings
from terrain_diffraction.contracts import DomainError, InputError
from terrain_diffraction.rf.units import (
    C,
    Attenuation,
    Distance,
    Frequency,
    frequency_to_wavelength,
    require,
)

# below this the single knife-edge approximation is not valid
MIN_DIFFRACTION_PARAMETER = -0.7


def _check_distance_vs_wavelength(
    distance_m: float, wavelength_m: float, label: str, settings: DiffractionSettings
) -> None:
    if distance_m * settings.fresnel_min_distance_wavelength_ratio < wavelength_m:
        raise DomainError(
            "Fresnel calculation valid only for distances >> wavelength "
            f"({label}: {distance_m:.2f}m wavelength: {wavelength_m:.2f}m)"
        )


def fresnel_zone_radius(
    d1: Distance,
    d2: Distance,
    freq: Frequency,
    order: int = 1,
    settings: DiffractionSettings | None = None,
) -> float:
    """Return the radius in metres of the Fresnel zone at a point between two endpoints.

    Args:
        d1: Distance from the first endpoint to the point.
        d2: Distance from the point to the second endpoint.
        freq: Carrier frequency.
        order: Fresnel zone number, 1 for the first zone.
        settings: Validity thresholds; defaults apply when omitted.

    Raises:
        DomainError: When either distance is not much greater than the wavelength.
    """
    d1 = require(d1, Distance, "d1")
    d2 = require(d2, Distance, "d2")
    if order < 1:
        raise InputError("Fresnel zone order must be >= 1")
    settings = settings or DEFAULT_SETTINGS
    wavelength = frequency_to_wavelength(freq).meters
    _check_distance_vs_wavelength(d1.meters, wavelength, "d1", settings)
    _check_distance_vs_wavelength(d2.meters, wavelength, "d2", settings)
    return sqrt(order * wavelength * d1.meters * d2.meters / (d1.meters + d2.meters))


def fresnel_first_zone_max(
    freq: Frequency, dist: Distance, settings: DiffractionSettings | None = None
) -> float:
    """Return the first Fresnel zone radius at the midpoint of a path."""
    freq = require(freq, Frequency, "freq")
    dist = require(dist, Distance, "dist")
    settings = settings or DEFAULT_SETTINGS
    wavelength = frequency_to_wavelength(freq).meters
    _check_distance_vs_wavelength(dist.meters, wavelength, "distance", settings)
    return 0.5 * sqrt(C * dist.meters / freq.hz)


def fresnel_kirchhoff_parameter(
    freq: Frequency, d1: Distance, d2: Distance, height_m: float
) -> float:
    """Return the dimensionless diffraction parameter v for a knife edge.

    `height_m` is positive when the edge rises above the line of sight.
    """
    d1 = require(d1, Distance, "d1")
    d2 = require(d2, Distance, "d2")
    if d1.meters <= 0.0 or d2.meters <= 0.0:
        raise DomainError("knife edge must lie strictly between the path endpoints")
    wavelength = frequency_to_wavelength(freq).meters
    return height_m * sqrt(2.0 * (d1.meters + d2.meters) / (wavelength * d1.meters * d2.meters))


def fresnel_kirchhoff_loss_approx(v: float) -> Attenuation:
    """Approximate knife-edge diffraction loss J(v), valid for v > -0.7."""
    if v < MIN_DIFFRACTION_PARAMETER:
        raise DomainError(f"diffraction parameter v={v:.3f} is below the approximation range (v >= -0.7)")
    return Attenuation(6.9 + 20.0 * log10(sqrt((v - 0.1) ** 2 + 1.0) + v - 0.1))
