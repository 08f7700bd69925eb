"""Terrain profile validation and smoothing helpers."""

from __future__ import annotations

from collections.abc import Sequence

from terrain_diffraction.contracts import InputError, to_float_list
from terrain_diffraction.rf.units import Distance, require


def validate_path(d: Distance, terrain: object) -> list[float]:
    """Validate path distance and terrain samples, returning samples as floats."""
    d = require(d, Distance, "d")
    if d.meters <= 0.0:
        raise InputError("path distance must be greater than zero")
    samples = to_float_list(terrain)
    if len(samples) < 2:
        raise InputError("terrain profile needs at least 2 samples")
    return samples


def sample_spacing(d: Distance, count: int) -> float:
    """Return the implicit ground spacing between `count` uniform samples."""
    if count < 2:
        raise InputError("terrain profile needs at least 2 samples")
    return d.meters / (count - 1)


def smooth(samples: Sequence[float]) -> list[float]:
    """Halve a profile by averaging consecutive pairs; a trailing odd sample is kept."""
    smoothed = [(samples[i] + samples[i + 1]) / 2.0 for i in range(0, len(samples) - 1, 2)]
    if len(samples) % 2 == 1:
        smoothed.append(samples[-1])
    return smoothed


def smooth_n(samples: Sequence[float], passes: int) -> list[float]:
    """Apply `smooth` repeatedly, stopping before a profile drops below 2 samples."""
    if passes < 0:
        raise InputError("smoothing passes must not be negative")
    result = list(samples)
    for _ in range(passes):
        if len(result) < 4:
            break
        result = smooth(result)
    return result
