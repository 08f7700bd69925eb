"""Single knife-edge reduction of a terrain profile (Fresnel-Kirchhoff model)."""

from __future__ import annotations

import logging
from math import cos

from terrain_diffraction.config import DEFAULT_SETTINGS, DiffractionSettings
from terrain_diffraction.contracts import DiffractionLoss, DomainError, KnifeEdge
from terrain_diffraction.geometry.normalize import (
    path_inclination,
    path_length,
    terrain_to_path_clearance,
)
from terrain_diffraction.geometry.profile import sample_spacing
from terrain_diffraction.rf.fresnel import fresnel_kirchhoff_loss_approx, fresnel_kirchhoff_parameter
from terrain_diffraction.rf.units import Distance, Frequency

logger = logging.getLogger(__name__)

METHOD = "fresnel_kirchhoff"


def _peak_index(heights: tuple[float, ...], tolerance: float) -> float:
    """Return the (possibly fractional) index of the highest sample.

    A flat top spread over adjacent samples reports the middle of the first
    such run.
    """
    peak = max(heights)
    start = next(i for i, h in enumerate(heights) if peak - h <= tolerance)
    end = start
    while end + 1 < len(heights) and peak - heights[end + 1] <= tolerance:
        end += 1
    return (start + end) / 2.0


def terrain_to_fresnel_kirchhoff(
    p1: float,
    p2: float,
    d: Distance,
    terrain: object,
    settings: DiffractionSettings | None = None,
) -> KnifeEdge:
    """Reduce terrain to its worst obstruction.

    The along-profile spacing is the ground spacing projected by the path
    inclination; dividing it back by `cos(theta)` places the edge at its
    ground distance from the transmitter.
    """
    settings = settings or DEFAULT_SETTINGS
    heights = terrain_to_path_clearance(p1, p2, d, terrain)
    index = _peak_index(heights, settings.tie_tolerance_m)
    cos_t = cos(path_inclination(p1, p2, d))
    profile_spacing = cos_t * sample_spacing(d, len(heights))
    distance = index * profile_spacing / cos_t
    height = max(heights)
    logger.debug("fresnel-kirchhoff edge index=%.1f distance=%.4f height=%.4f", index, distance, height)
    return KnifeEdge(distance_m=distance, height_m=height, path_length_m=path_length(p1, p2, d))


def fresnel_kirchhoff_loss(
    p1: float,
    p2: float,
    d: Distance,
    freq: Frequency,
    terrain: object,
    settings: DiffractionSettings | None = None,
) -> DiffractionLoss:
    """Estimate diffraction loss from the single worst obstruction."""
    edge = terrain_to_fresnel_kirchhoff(p1, p2, d, terrain, settings)
    if edge.d1_m <= 0.0 or edge.d2_m <= 0.0:
        end = "transmitter" if edge.d1_m <= 0.0 else "receiver"
        raise DomainError(
            f"worst obstruction is the {end} endpoint sample; knife-edge loss needs an interior obstruction"
        )
    v = fresnel_kirchhoff_parameter(freq, Distance(edge.d1_m), Distance(edge.d2_m), edge.height_m)
    loss = fresnel_kirchhoff_loss_approx(v)
    return DiffractionLoss(method=METHOD, knife_edge=edge, v=v, loss_db=loss.db)
