from __future__ import annotations
from dataclasses import dataclass
from math import pi, cos, radians, sqrt, floor, isfinite
from typing import Protocol

KM_PER_DEG = 111.0
CITY_INFLUENCE_KM = 100.0
CITY_DENSITY_FLOOR = 0.1     # fraction of city density at the edge of influence
SPARSE_DENSITY = 5.0         # people/km^2, desert bands
RURAL_DENSITY = 50.0         # people/km^2, generic land


@dataclass(frozen=True)
class City:
    name: str
    lat: float
    lng: float
    density: float  # people/km^2


REFERENCE_CITIES: tuple[City, ...] = (
    City("Tokyo", 35.6762, 139.6503, 6158.0),
    City("Delhi", 28.7041, 77.1025, 11320.0),
    City("New York", 40.7128, -74.0060, 10947.0),
    City("Mumbai", 19.0760, 72.8777, 20694.0),
    City("London", 51.5074, -0.1278, 5701.0),
    City("Sydney", -33.8688, 151.2093, 2058.0),
    City("Moscow", 55.7558, 37.6173, 4822.0),
    City("Shanghai", 31.2304, 121.4737, 3816.0),
    City("Beijing", 39.9042, 116.4074, 1311.0),
    City("São Paulo", -23.5505, -46.6333, 7821.0),
)


class PopulationDensityModel(Protocol):
    def density_at(self, lat: float, lng: float, surface_type: str) -> float:
        """People per km^2 at (lat, lng)."""
        ...


def planar_distance_km(lat: float, lng: float, city: City) -> float:
    """Equirectangular distance, longitude scaled by cos(lat) of the query point."""
    dy = (lat - city.lat) * KM_PER_DEG
    dx = (lng - city.lng) * KM_PER_DEG * cos(radians(lat))
    return sqrt(dy * dy + dx * dx)


def _in_sparse_band(lat: float, lng: float) -> bool:
    # Sahara/Arabia and the US south-west
    return (20.0 < abs(lat) < 40.0) and ((-20.0 < lng < 60.0) or (-120.0 < lng < -100.0))


class CityCentroidDensityModel:
    """
    Coarse density heuristic: linear falloff around the nearest reference city
    (within 100 km), otherwise ocean / desert band / rural defaults.
    """

    def __init__(self, cities: tuple[City, ...] = REFERENCE_CITIES):
        self.cities = cities

    def nearest_city(self, lat: float, lng: float) -> tuple[City, float] | None:
        best: tuple[City, float] | None = None
        for c in self.cities:
            d = planar_distance_km(lat, lng, c)
            if d < CITY_INFLUENCE_KM and (best is None or d < best[1]):
                best = (c, d)
        return best

    def density_at(self, lat: float, lng: float, surface_type: str) -> float:
        hit = self.nearest_city(lat, lng)
        if hit is not None:
            city, d = hit
            return city.density * max(CITY_DENSITY_FLOOR, 1.0 - d / CITY_INFLUENCE_KM)
        if surface_type == "ocean":
            return 0.0
        if _in_sparse_band(lat, lng):
            return SPARSE_DENSITY
        return RURAL_DENSITY


DEFAULT_DENSITY_MODEL = CityCentroidDensityModel()


def floor_count(x: float) -> int:
    """floor() for head counts; NaN/inf (degenerate inputs) collapse to 0."""
    return floor(x) if isfinite(x) else 0


def estimate_affected_population(center_lat: float, center_lng: float,
                                 blast_radius_m: float, surface_type: str,
                                 density_model: PopulationDensityModel | None = None) -> int:
    model = DEFAULT_DENSITY_MODEL if density_model is None else density_model
    density = model.density_at(center_lat, center_lng, surface_type)
    r_km = blast_radius_m / 1000.0
    area_km2 = pi * r_km * r_km
    return floor_count(area_km2 * density)
