"""Path-aligned coordinate transforms for terrain profiles.

The normalized frame puts the transmitter at the origin and the receiver at
`(path_length, 0)`, so the line of sight is the x axis. Normalized `y` and
clearance heights are positive where terrain rises above the line of sight.
"""

from __future__ import annotations

import logging
from math import atan2, cos, hypot, sin

from terrain_diffraction.contracts import NormalizedProfile
from terrain_diffraction.geometry.profile import sample_spacing, validate_path
from terrain_diffraction.rf.units import Distance, require

logger = logging.getLogger(__name__)


def path_inclination(p1: float, p2: float, d: Distance) -> float:
    """Return the line-of-sight inclination in radians."""
    d = require(d, Distance, "d")
    return atan2(p2 - p1, d.meters)


def path_length(p1: float, p2: float, d: Distance) -> float:
    """Return the straight-line length between the two endpoints."""
    d = require(d, Distance, "d")
    return hypot(d.meters, p2 - p1)


def _vertical_clearances(p1: float, p2: float, d: Distance, samples: list[float]) -> list[tuple[float, float]]:
    """Return `(reference_distance, reference_height - terrain)` per sample."""
    dd = sample_spacing(d, len(samples))
    dh = (p2 - p1) / (len(samples) - 1)
    return [(i * dd, p1 + i * dh - terrain) for i, terrain in enumerate(samples)]


def terrain_to_path_xy(p1: float, p2: float, d: Distance, terrain: object) -> NormalizedProfile:
    """Rotate a terrain profile into the line-of-sight frame.

    Args:
        p1: Transmitter height (m).
        p2: Receiver height (m).
        d: Ground distance between the endpoints.
        terrain: Uniformly spaced elevation samples, endpoints included.

    Returns:
        NormalizedProfile with one `(x, y)` pair per sample.
    """
    samples = validate_path(d, terrain)
    theta = path_inclination(p1, p2, d)
    cos_t, sin_t = cos(theta), sin(theta)
    length = path_length(p1, p2, d)

    xs: list[float] = []
    ys: list[float] = []
    for i, (ref_dist, clearance) in enumerate(_vertical_clearances(p1, p2, d, samples)):
        x = ref_dist / cos_t - sin_t * clearance
        y = -cos_t * clearance
        logger.debug("sample %d dist=%.4f clearance=%.4f x=%.4f y=%.4f", i, ref_dist, clearance, x, y)
        xs.append(x)
        ys.append(y)

    return NormalizedProfile(x=tuple(xs), y=tuple(ys), path_length=length, inclination_rad=theta)


def terrain_to_path_clearance(p1: float, p2: float, d: Distance, terrain: object) -> tuple[float, ...]:
    """Return the perpendicular obstruction height of every sample above the line of sight."""
    samples = validate_path(d, terrain)
    cos_t = cos(path_inclination(p1, p2, d))
    return tuple(-cos_t * clearance for _, clearance in _vertical_clearances(p1, p2, d, samples))


def normalize_point(p1: float, p2: float, d: Distance, distance: float, height: float) -> tuple[float, float]:
    """Map an absolute `(distance, height)` point into the line-of-sight frame."""
    theta = path_inclination(p1, p2, d)
    rel_height = height - p1
    x = cos(theta) * distance + sin(theta) * rel_height
    y = -sin(theta) * distance + cos(theta) * rel_height
    return (x, y)


def unnormalize_point(p1: float, p2: float, d: Distance, x: float, y: float) -> tuple[float, float]:
    """Map a line-of-sight frame point back to absolute `(distance, height)`."""
    theta = path_inclination(p1, p2, d)
    distance = cos(theta) * x - sin(theta) * y
    height = sin(theta) * x + cos(theta) * y + p1
    return (distance, height)
