"""Bullington "Figure 12" two-horizon reduction of a terrain profile.

The steepest sightline from each endpoint to any interior sample defines a
triangle over the path baseline. Its apex is the equivalent knife edge.
"""

from __future__ import annotations

import logging
from math import atan2, cos, pi, sin

from terrain_diffraction.config import DEFAULT_SETTINGS, DiffractionSettings
from terrain_diffraction.contracts import (
    DiffractionLoss,
    DomainError,
    HorizonAngles,
    InputError,
    KnifeEdge,
    NormalizedProfile,
)
from terrain_diffraction.geometry.normalize import terrain_to_path_xy
from terrain_diffraction.rf.fresnel import fresnel_kirchhoff_loss_approx, fresnel_kirchhoff_parameter
from terrain_diffraction.rf.units import Distance, Frequency

logger = logging.getLogger(__name__)

METHOD = "bullington"


def find_horizon_angles(profile: NormalizedProfile) -> HorizonAngles:
    """Return the steepest interior sightline angle seen from each endpoint.

    The two maxima are chosen independently and need not come from the same
    sample.
    """
    interior = profile.interior()
    if not interior:
        raise InputError("Bullington method needs at least one interior terrain sample")

    length = profile.path_length
    theta1 = -pi / 2.0
    theta2 = -pi / 2.0
    for x, y in interior:
        theta1 = max(theta1, atan2(y, x))
        theta2 = max(theta2, atan2(y, length - x))
    return HorizonAngles(theta1_rad=theta1, theta2_rad=theta2)


def solve_knife_edge(
    angles: HorizonAngles, path_length: float, settings: DiffractionSettings | None = None
) -> KnifeEdge:
    """Intersect the two horizon rays over a baseline of `path_length` (law of sines)."""
    settings = settings or DEFAULT_SETTINGS
    theta1, theta2 = angles.theta1_rad, angles.theta2_rad
    if theta1 + theta2 >= pi:
        raise DomainError(f"horizon angles {theta1:.4f} + {theta2:.4f} rad do not form a triangle")

    theta_a = pi - theta1 - theta2
    sin_a = sin(theta_a)
    if abs(sin_a) < settings.degenerate_tolerance:
        raise DomainError("horizon rays are parallel; equivalent knife edge is undefined")

    r = path_length / sin_a
    side = r * sin(theta2)
    return KnifeEdge(
        distance_m=cos(theta1) * side,
        height_m=sin(theta1) * side,
        path_length_m=path_length,
    )


def terrain_to_bullington(
    p1: float,
    p2: float,
    d: Distance,
    terrain: object,
    settings: DiffractionSettings | None = None,
) -> KnifeEdge:
    """Reduce terrain to the Bullington equivalent knife edge in the line-of-sight frame."""
    profile = terrain_to_path_xy(p1, p2, d, terrain)
    angles = find_horizon_angles(profile)
    logger.debug("bullington angles theta1=%.6f theta2=%.6f", angles.theta1_rad, angles.theta2_rad)
    return solve_knife_edge(angles, profile.path_length, settings)


def bullington_loss(
    p1: float,
    p2: float,
    d: Distance,
    freq: Frequency,
    terrain: object,
    settings: DiffractionSettings | None = None,
) -> DiffractionLoss:
    """Estimate diffraction loss from the Bullington equivalent knife edge."""
    edge = terrain_to_bullington(p1, p2, d, terrain, settings)
    if not 0.0 < edge.distance_m < edge.path_length_m:
        raise DomainError(
            f"equivalent knife edge at {edge.distance_m:.2f}m falls outside the path "
            f"(length {edge.path_length_m:.2f}m)"
        )
    v = fresnel_kirchhoff_parameter(freq, Distance(edge.d1_m), Distance(edge.d2_m), edge.height_m)
    loss = fresnel_kirchhoff_loss_approx(v)
    return DiffractionLoss(method=METHOD, knife_edge=edge, v=v, loss_db=loss.db)
