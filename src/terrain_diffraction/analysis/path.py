"""End-to-end diffraction analysis for one radio path."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from terrain_diffraction.config import DEFAULT_SETTINGS, DiffractionSettings
from terrain_diffraction.contracts import DiffractionLoss, DomainError, ImpingementResult, to_float_list
from terrain_diffraction.diffraction.bullington import bullington_loss
from terrain_diffraction.diffraction.fresnel_kirchhoff import fresnel_kirchhoff_loss
from terrain_diffraction.diffraction.impingement import (
    ImpingementClass,
    classify_impingement,
    max_fresnel_impingement,
)
from terrain_diffraction.geometry.normalize import path_inclination, path_length, unnormalize_point
from terrain_diffraction.geometry.profile import smooth_n, validate_path
from terrain_diffraction.rf.path_loss import free_space_path_loss
from terrain_diffraction.rf.units import Distance, Frequency, require

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathConfig:
    """Geometry and carrier of one path to analyze."""

    p1: float
    p2: float
    distance: Distance
    frequency: Frequency
    terrain: tuple[float, ...]
    smoothing_passes: int = 0

    def __post_init__(self) -> None:
        require(self.distance, Distance, "distance")
        require(self.frequency, Frequency, "frequency")
        object.__setattr__(self, "terrain", tuple(validate_path(self.distance, self.terrain)))


@dataclass(frozen=True)
class PathReport:
    """Diffraction figures for a path, in line-of-sight and absolute coordinates."""

    path_length_m: float
    inclination_rad: float
    free_space_loss_db: float
    fresnel_kirchhoff: DiffractionLoss | None
    bullington: DiffractionLoss | None
    impingement: ImpingementResult
    impingement_class: ImpingementClass
    knife_edge_profile: list[tuple[float, float]]
    warnings: list[str] = field(default_factory=list)

    @property
    def diffraction_loss_db(self) -> float:
        """Bullington loss when available, else the single knife-edge loss, else 0."""
        if self.bullington is not None:
            return self.bullington.loss_db
        if self.fresnel_kirchhoff is not None:
            return self.fresnel_kirchhoff.loss_db
        return 0.0

    @property
    def total_loss_db(self) -> float:
        return self.free_space_loss_db + self.diffraction_loss_db

    def to_dict(self) -> dict[str, Any]:
        """Serialize the report to a JSON-compatible dictionary."""
        return {
            "path_length_m": self.path_length_m,
            "inclination_rad": self.inclination_rad,
            "free_space_loss_db": self.free_space_loss_db,
            "fresnel_kirchhoff": self.fresnel_kirchhoff.to_dict() if self.fresnel_kirchhoff else None,
            "bullington": self.bullington.to_dict() if self.bullington else None,
            "impingement": self.impingement.to_dict(),
            "impingement_class": self.impingement_class,
            "diffraction_loss_db": self.diffraction_loss_db,
            "total_loss_db": self.total_loss_db,
            "knife_edge_profile": [list(point) for point in self.knife_edge_profile],
            "warnings": list(self.warnings),
        }


def _try_loss(
    label: str, warnings: list[str], func: Callable[..., DiffractionLoss], *args: object
) -> DiffractionLoss | None:
    """Run a loss estimator, recording domain failures as report warnings."""
    try:
        return func(*args)
    except DomainError as exc:
        logger.warning("%s loss unavailable: %s", label, exc)
        warnings.append(f"{label}: {exc}")
        return None


def analyze_path(config: PathConfig, settings: DiffractionSettings | None = None) -> PathReport:
    """Run every diffraction estimator over a path and collect the results."""
    settings = settings or DEFAULT_SETTINGS
    terrain = to_float_list(config.terrain)
    if config.smoothing_passes:
        terrain = smooth_n(terrain, config.smoothing_passes)

    p1, p2, d, freq = config.p1, config.p2, config.distance, config.frequency
    warnings: list[str] = []

    fk = _try_loss("fresnel_kirchhoff", warnings, fresnel_kirchhoff_loss, p1, p2, d, freq, terrain, settings)
    bull = None
    if len(terrain) > 2:
        bull = _try_loss("bullington", warnings, bullington_loss, p1, p2, d, freq, terrain, settings)
    else:
        warnings.append("bullington: profile has no interior samples")

    impingement = max_fresnel_impingement(p1, p2, d, freq, terrain, settings)
    if impingement.index is None:
        warnings.append("impingement: no sample far enough from the endpoints to evaluate")

    edge = bull or fk
    if edge is not None:
        apex = unnormalize_point(p1, p2, d, edge.knife_edge.distance_m, edge.knife_edge.height_m)
        knife_edge_profile = [(0.0, p1), apex, (d.meters, p2)]
    else:
        knife_edge_profile = [(0.0, p1), (d.meters, p2)]

    return PathReport(
        path_length_m=path_length(p1, p2, d),
        inclination_rad=path_inclination(p1, p2, d),
        free_space_loss_db=free_space_path_loss(freq, Distance(path_length(p1, p2, d))).db,
        fresnel_kirchhoff=fk,
        bullington=bull,
        impingement=impingement,
        impingement_class=classify_impingement(impingement.fraction, settings),
        knife_edge_profile=knife_edge_profile,
        warnings=warnings,
    )
