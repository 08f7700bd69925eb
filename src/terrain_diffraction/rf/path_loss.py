"""Free-space, distance and foliage helpers."""

from __future__ import annotations

from math import atan2, cos, hypot, log10, pi, radians, sin, sqrt

from terrain_diffraction.contracts import DomainError
from terrain_diffraction.rf.units import C, Attenuation, Distance, Frequency, require

EARTH_RADIUS_M = 6.371e6


def free_space_attenuation(freq: Frequency, dist: Distance) -> float:
    """Return free-space path loss as a linear power ratio."""
    freq = require(freq, Frequency, "freq")
    dist = require(dist, Distance, "dist")
    return (4.0 * pi * dist.meters * freq.hz / C) ** 2


def free_space_path_loss(freq: Frequency, dist: Distance) -> Attenuation:
    """Return free-space path loss in decibels."""
    freq = require(freq, Frequency, "freq")
    dist = require(dist, Distance, "dist")
    if dist.meters <= 0.0:
        raise DomainError("free-space loss is undefined at zero distance")
    return Attenuation(20.0 * log10(4.0 * pi * dist.meters * freq.hz / C))


def great_circle_distance(
    lat1: float, lon1: float, lat2: float, lon2: float, radius_m: float = EARTH_RADIUS_M
) -> Distance:
    """Haversine distance between two WGS84 coordinates on a sphere of `radius_m`."""
    phi1, lam1 = radians(lat1), radians(lon1)
    phi2, lam2 = radians(lat2), radians(lon2)
    dphi, dlam = abs(phi2 - phi1), abs(lam2 - lam1)

    a = sin(dphi / 2.0) ** 2 + cos(phi1) * cos(phi2) * sin(dlam / 2.0) ** 2
    c = 2.0 * atan2(sqrt(a), sqrt(1.0 - a))
    return Distance(radius_m * c)


def line_of_sight_distance(
    lat1: float, lon1: float, alt1: float, lat2: float, lon2: float, alt2: float
) -> Distance:
    """Approximate straight-line distance between two lat/lon/altitude points.

    The great-circle distance is taken at the mean altitude and combined with
    the altitude difference as a flat-earth right triangle, so accuracy drops
    as the path grows.
    """
    radius = EARTH_RADIUS_M + (alt1 + alt2) / 2.0
    ground = great_circle_distance(lat1, lon1, lat2, lon2, radius)
    return Distance(hypot(ground.meters, alt2 - alt1))


def foliage_loss(freq: Frequency, depth: Distance) -> Attenuation:
    """Weissberger excess loss for a signal crossing `depth` of dense dry foliage."""
    freq = require(freq, Frequency, "freq")
    depth = require(depth, Distance, "depth")
    if not 230e6 <= freq.hz <= 95e9:
        raise DomainError(f"frequency {freq.mhz:.2f}MHz outside the Weissberger range 230MHz-95GHz")
    if depth.meters > 400.0:
        raise DomainError(f"foliage depth {depth.meters:.2f}m outside the Weissberger range 0-400m")

    if depth.meters == 0.0:
        return Attenuation(0.0)
    if depth.meters <= 14.0:
        return Attenuation(0.45 * freq.ghz**0.284 * depth.meters)
    return Attenuation(1.33 * freq.ghz**0.284 * depth.meters**0.588)
