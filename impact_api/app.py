from contextlib import asynccontextmanager
from dataclasses import asdict, replace
from math import isfinite
from typing import Literal, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field
from starlette.concurrency import run_in_threadpool

from . import settings
from .catalogs import (ASTEROID_MATERIALS, FAMOUS_ASTEROIDS, MITIGATION_STRATEGIES, AsteroidMaterial,
                       UnknownCatalogEntryError, get_famous_asteroid, get_material)
from .geo import LandMask
from .impact_model import (AsteroidParameters, ImpactLocation, InvalidParameterError,
                           calculate_deflection_delta_v, compute_impact_effects)
from .mission import assess_mission

land_mask = LandMask()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.LOAD_LAND_MASK:
        await run_in_threadpool(land_mask.load)
    else:
        print("[land.load] skipped (LOAD_LAND_MASK=0); surface type defaults to land")
    yield


app = FastAPI(title="Asteroid Impact Simulator", version="1.0.0", lifespan=lifespan)


def get_land_mask() -> LandMask:
    return land_mask


# -------------------------------
# Health + catalogs
# -------------------------------
@app.get("/health")
def health():
    return {"status": "ok"}

@app.get("/materials")
def materials():
    return [asdict(m) for m in ASTEROID_MATERIALS]

@app.get("/strategies")
def strategies():
    return [asdict(s) for s in MITIGATION_STRATEGIES]

@app.get("/presets")
def presets():
    return [asdict(a) for a in FAMOUS_ASTEROIDS]

@app.get("/surfaceType")
def surface_type(
    lat: float = Query(..., ge=-90, le=90, description="Latitude in decimal degrees"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude in decimal degrees"),
    mask: LandMask = Depends(get_land_mask),
):
    return {"surface_type": mask.surface_type(lat, lon), "land_mask_loaded": mask.is_loaded}

# -------------------------------
# Impact simulation endpoints
# -------------------------------

class LocationIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lon: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    name: str = Field("", description="Display name")
    surface_type: Optional[Literal["land", "ocean"]] = Field(
        None, description="Resolved from the land mask when omitted")

class ImpactRequest(BaseModel):
    diameter_m: float = Field(..., gt=0, allow_inf_nan=False, description="Asteroid diameter in meters")
    velocity_kms: float = Field(..., gt=0, allow_inf_nan=False, description="Impact velocity in km/s")
    angle_deg: float = Field(45.0, ge=0, le=90, description="Entry angle to horizontal in degrees")
    material_id: str = Field("stone", description="Catalog material id")
    density_kgpm3: Optional[float] = Field(None, gt=0, allow_inf_nan=False, description="Overrides the material density")
    location: LocationIn
    angle_mode: Optional[Literal["crater", "energy"]] = None

class PresetRequest(BaseModel):
    location: LocationIn
    angle_deg: float = Field(45.0, ge=0, le=90)
    angle_mode: Optional[Literal["crater", "energy"]] = None


def _resolve_material(material_id: str, density_kgpm3: Optional[float]) -> AsteroidMaterial:
    material = get_material(material_id)
    if density_kgpm3 is not None:
        material = replace(material, density=density_kgpm3)
    return material

def _resolve_location(loc: LocationIn, mask: LandMask) -> ImpactLocation:
    kind = loc.surface_type
    if kind is None:
        kind = mask.surface_type(loc.lat, loc.lon)
        print(f"[surface] lat={loc.lat} lon={loc.lon} -> {kind} (mask_loaded={mask.is_loaded})")
    return ImpactLocation(latitude=loc.lat, longitude=loc.lon, name=loc.name, surface_type=kind)

def _finite_or_none(values: dict) -> dict:
    """JSON has no inf/NaN: degenerate effect values go out as null."""
    return {k: (None if isinstance(v, float) and not isfinite(v) else v) for k, v in values.items()}

def _run_impact(params: AsteroidParameters, angle_mode: Optional[str]) -> dict:
    mode = angle_mode or settings.ANGLE_MODE
    try:
        result = compute_impact_effects(params, angle_mode=mode, validate=settings.STRICT_VALIDATION)
    except InvalidParameterError as e:
        raise HTTPException(status_code=422, detail=str(e))
    print(f"[impact.summary] d={params.diameter}m v={params.velocity}km/s angle={params.angle} "
          f"rho={params.density} surface={params.location.surface_type} mode={mode} "
          f"Mt={result.energy_megatons:.4g} class={result.impact_class!r}")
    return {
        "inputs": {
            "diameter_m": params.diameter,
            "velocity_kms": params.velocity,
            "angle_deg": params.angle,
            "material": asdict(params.material),
            "location": asdict(params.location),
            "angle_mode": mode,
        },
        **_finite_or_none(asdict(result)),
    }

@app.post("/impact/summary")
def impact_summary(req: ImpactRequest, mask: LandMask = Depends(get_land_mask)):
    try:
        material = _resolve_material(req.material_id, req.density_kgpm3)
    except UnknownCatalogEntryError as e:
        raise HTTPException(status_code=404, detail=str(e))
    params = AsteroidParameters(
        diameter=req.diameter_m,
        material=material,
        velocity=req.velocity_kms,
        angle=req.angle_deg,
        location=_resolve_location(req.location, mask),
    )
    return _run_impact(params, req.angle_mode)

@app.post("/impact/preset/{preset_id}")
def impact_preset(preset_id: str, req: PresetRequest, mask: LandMask = Depends(get_land_mask)):
    try:
        preset = get_famous_asteroid(preset_id)
        material = get_material(preset.material_id)
    except UnknownCatalogEntryError as e:
        raise HTTPException(status_code=404, detail=str(e))
    params = AsteroidParameters(
        diameter=preset.diameter,
        material=material,
        velocity=preset.velocity,
        angle=req.angle_deg,
        location=_resolve_location(req.location, mask),
    )
    out = _run_impact(params, req.angle_mode)
    out["preset"] = asdict(preset)
    return out

# -------------------------------
# Mitigation endpoints
# -------------------------------

class MissionRequest(BaseModel):
    lead_time_days: float = Field(..., gt=0, description="Days between launch decision and impact")
    asteroid_diameter_m: float = Field(..., gt=0)
    strategy_id: str = Field(..., description="Catalog strategy id")

class DeflectionRequest(BaseModel):
    asteroid_mass_kg: float = Field(..., gt=0)
    impactor_mass_kg: float = Field(..., gt=0)
    impactor_velocity_mps: float = Field(..., gt=0)
    beta: float = Field(2.5, gt=0, description="Momentum enhancement factor")

@app.post("/mission/assess")
def mission_assess(req: MissionRequest):
    try:
        outcome = assess_mission(req.lead_time_days, req.asteroid_diameter_m, req.strategy_id)
    except UnknownCatalogEntryError as e:
        raise HTTPException(status_code=404, detail=str(e))
    print(f"[mission.assess] strategy={req.strategy_id} lead={req.lead_time_days}d d={req.asteroid_diameter_m}m "
          f"p={outcome.success_probability:.3f} feasible={outcome.feasible}")
    return asdict(outcome)

@app.post("/mission/deflection")
def mission_deflection(req: DeflectionRequest):
    dv = calculate_deflection_delta_v(req.asteroid_mass_kg, req.impactor_mass_kg,
                                      req.impactor_velocity_mps, beta=req.beta)
    return {"delta_v_mps": dv, "beta": req.beta}
