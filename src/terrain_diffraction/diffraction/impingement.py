"""First Fresnel zone impingement scan along a terrain profile."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Literal

from terrain_diffraction.config import DEFAULT_SETTINGS, DiffractionSettings
from terrain_diffraction.contracts import DomainError, ImpingementResult
from terrain_diffraction.geometry.normalize import terrain_to_path_xy
from terrain_diffraction.rf.fresnel import fresnel_zone_radius
from terrain_diffraction.rf.units import Distance, Frequency

logger = logging.getLogger(__name__)

ImpingementClass = Literal["ideal", "acceptable", "obstructed"]


def impingement_fraction(height_m: float, zone_radius_m: float) -> float:
    """Return the blocked share of a Fresnel zone for an obstruction `height_m` above the line of sight."""
    half = zone_radius_m / 2.0
    if height_m > half:
        return 1.0
    if height_m < -half:
        return 0.0
    return (height_m + half) / zone_radius_m


def max_fresnel_impingement(
    p1: float,
    p2: float,
    d: Distance,
    freq: Frequency,
    terrain: object,
    settings: DiffractionSettings | None = None,
) -> ImpingementResult:
    """Scan interior samples for the largest first Fresnel zone impingement.

    Samples too close to an endpoint for the Fresnel approximation are
    skipped. When no sample can be evaluated the result is a zero fraction at
    the path midpoint.
    """
    settings = settings or DEFAULT_SETTINGS
    profile = terrain_to_path_xy(p1, p2, d, terrain)
    length = profile.path_length

    best: ImpingementResult | None = None
    skipped = 0
    for index in range(1, len(profile) - 1):
        x, y = profile.x[index], profile.y[index]
        try:
            radius = fresnel_zone_radius(
                Distance(max(x, 0.0)), Distance(max(length - x, 0.0)), freq, 1, settings
            )
        except DomainError as exc:
            logger.debug("skipping sample %d: %s", index, exc)
            skipped += 1
            continue

        fraction = impingement_fraction(y, radius)
        if best is None or fraction > best.fraction:
            best = ImpingementResult(
                fraction=fraction,
                distance_m=x,
                height_m=y,
                zone_radius_m=radius,
                index=index,
            )

    if best is None:
        return ImpingementResult(
            fraction=0.0,
            distance_m=length / 2.0,
            height_m=0.0,
            zone_radius_m=0.0,
            index=None,
            skipped=skipped,
        )
    return replace(best, skipped=skipped)


def classify_impingement(
    fraction: float, settings: DiffractionSettings | None = None
) -> ImpingementClass:
    """Grade an impingement fraction against the ideal and acceptable thresholds."""
    settings = settings or DEFAULT_SETTINGS
    if fraction <= settings.impingement_ideal:
        return "ideal"
    if fraction <= settings.impingement_ok:
        return "acceptable"
    return "obstructed"
