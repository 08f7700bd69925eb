"""FastAPI app exposing terrain normalization and diffraction endpoints."""

from __future__ import annotations

from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, model_validator

from terrain_diffraction.analysis.path import PathConfig, analyze_path
from terrain_diffraction.config import DiffractionSettings, load_settings
from terrain_diffraction.contracts import DiffractionError, ImpingementResult
from terrain_diffraction.diffraction.bullington import bullington_loss, terrain_to_bullington
from terrain_diffraction.diffraction.fresnel_kirchhoff import (
    fresnel_kirchhoff_loss,
    terrain_to_fresnel_kirchhoff,
)
from terrain_diffraction.diffraction.impingement import classify_impingement, max_fresnel_impingement
from terrain_diffraction.geometry.normalize import terrain_to_path_xy
from terrain_diffraction.rf.units import Distance, Frequency


class PathRequest(BaseModel):
    """Path geometry shared by every endpoint."""

    p1: float
    p2: float
    distance_m: float = Field(gt=0.0)
    terrain: list[float] = Field(min_length=2)

    def distance(self) -> Distance:
        return Distance(self.distance_m)


class CarrierPathRequest(PathRequest):
    """Path geometry with a carrier frequency."""

    frequency_mhz: float = Field(gt=0.0)

    def frequency(self) -> Frequency:
        return Frequency.from_mhz(self.frequency_mhz)


class KnifeEdgeRequest(PathRequest):
    """Request schema for equivalent knife-edge reduction."""

    method: Literal["fresnel_kirchhoff", "bullington"] = "bullington"
    frequency_mhz: float | None = Field(default=None, gt=0.0)

    @model_validator(mode="after")
    def validate_method(self) -> "KnifeEdgeRequest":
        """Bullington needs interior samples to form horizon rays."""
        if self.method == "bullington" and len(self.terrain) < 3:
            raise ValueError("bullington method needs at least 3 terrain samples")
        return self


class AnalyzeRequest(CarrierPathRequest):
    """Request schema for the full path analysis."""

    smoothing_passes: int = Field(default=0, ge=0, le=16)


class NormalizeResponse(BaseModel):
    """Terrain in the line-of-sight frame."""

    x: list[float]
    y: list[float]
    path_length_m: float
    inclination_rad: float


class KnifeEdgeResponse(BaseModel):
    """Equivalent knife edge, optionally with its diffraction loss."""

    method: str
    distance_m: float
    height_m: float
    d1_m: float
    d2_m: float
    v: float | None = None
    loss_db: float | None = None


class ImpingementResponse(BaseModel):
    """Worst first Fresnel zone impingement along the path."""

    fraction: float
    distance_m: float
    height_m: float
    zone_radius_m: float
    index: int | None
    skipped: int
    classification: str


def _impingement_response(result: ImpingementResult, settings: DiffractionSettings) -> ImpingementResponse:
    return ImpingementResponse(
        **result.to_dict(),
        classification=classify_impingement(result.fraction, settings),
    )


def create_app(settings: DiffractionSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI app."""
    app = FastAPI(title="Terrain Diffraction API", version="0.1.0")
    settings = settings or load_settings()
    app.state.settings = settings

    @app.post("/normalize", response_model=NormalizeResponse)
    def post_normalize(payload: PathRequest) -> NormalizeResponse:
        """Rotate terrain into the line-of-sight frame."""
        try:
            profile = terrain_to_path_xy(payload.p1, payload.p2, payload.distance(), payload.terrain)
        except DiffractionError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return NormalizeResponse(
            x=list(profile.x),
            y=list(profile.y),
            path_length_m=profile.path_length,
            inclination_rad=profile.inclination_rad,
        )

    @app.post("/knife-edge", response_model=KnifeEdgeResponse)
    def post_knife_edge(payload: KnifeEdgeRequest) -> KnifeEdgeResponse:
        """Reduce terrain to one equivalent knife edge, with loss when a frequency is given."""
        args = (payload.p1, payload.p2, payload.distance())
        try:
            if payload.frequency_mhz is None:
                reducer = terrain_to_bullington if payload.method == "bullington" else terrain_to_fresnel_kirchhoff
                edge = reducer(*args, payload.terrain, settings)
                return KnifeEdgeResponse(method=payload.method, **edge.to_dict())

            estimator = bullington_loss if payload.method == "bullington" else fresnel_kirchhoff_loss
            loss = estimator(*args, Frequency.from_mhz(payload.frequency_mhz), payload.terrain, settings)
        except DiffractionError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return KnifeEdgeResponse(
            method=loss.method,
            v=loss.v,
            loss_db=loss.loss_db,
            **loss.knife_edge.to_dict(),
        )

    @app.post("/impingement", response_model=ImpingementResponse)
    def post_impingement(payload: CarrierPathRequest) -> ImpingementResponse:
        """Scan the first Fresnel zone for terrain impingement."""
        try:
            result = max_fresnel_impingement(
                payload.p1,
                payload.p2,
                payload.distance(),
                payload.frequency(),
                payload.terrain,
                settings,
            )
        except DiffractionError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _impingement_response(result, settings)

    @app.post("/analyze")
    def post_analyze(payload: AnalyzeRequest) -> dict[str, Any]:
        """Run the full diffraction analysis for one path."""
        try:
            config = PathConfig(
                p1=payload.p1,
                p2=payload.p2,
                distance=payload.distance(),
                frequency=payload.frequency(),
                terrain=tuple(payload.terrain),
                smoothing_passes=payload.smoothing_passes,
            )
            report = analyze_path(config, settings)
        except DiffractionError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return report.to_dict()

    return app


app = create_app()
