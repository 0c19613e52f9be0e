from __future__ import annotations
from dataclasses import dataclass
from math import pi, sin, radians, sqrt, log10, nan, inf, isfinite

from .catalogs import AsteroidMaterial
from .population import PopulationDensityModel, estimate_affected_population, floor_count

# -----------------------------
# Physical constants & defaults
# -----------------------------
G_EARTH = 9.81                   # m/s^2
J_PER_MT_TNT = 4.184e15          # J in 1 megaton TNT
J_PER_HIROSHIMA = 6.3e13         # ~15 kt
RHO_TARGET_ROCK = 2700.0         # kg/m^3
RHO_TARGET_WATER = 1000.0        # kg/m^3

# Crater scaling D = K * (E / (rho_t g))^beta
K_CRATER = 1.161
BETA_CRATER = 0.22

BLAST_REF_MT = 0.00025           # 5 psi reference yield
OVERPRESSURE_PER_MT = 50.0       # at 1 km, coarse proxy
THERMAL_SCALE = 1.5
AIRBURST_MAX_DIAMETER_M = 100.0
TSUNAMI_TRAVEL_TIME_MIN = 30.0
CASUALTY_FRACTION = 0.6

SURFACE_TYPES = ("land", "ocean")

# "crater": angle only scales cratering efficiency (energy uses full speed).
# "energy": legacy variant, energy from the vertical speed component v*sin(angle).
ANGLE_MODES = ("crater", "energy")
DEFAULT_ANGLE_MODE = "crater"

# (upper bound in Mt, class, Torino-like scale)
IMPACT_CLASSES = (
    (1.0, "Local damage", 1),
    (10.0, "City-killer", 5),
    (100.0, "Regional catastrophe", 8),
    (1000.0, "Continental devastation", 9),
)
TOP_IMPACT_CLASS = ("Extinction-level event", 10)


class InvalidParameterError(ValueError):
    """Raised by opt-in validation for non-physical inputs."""


# ---------- IEEE-style math (degenerate inputs propagate instead of raising) ----------
def _pow(base: float, exp: float) -> float:
    if base < 0.0 and not float(exp).is_integer():
        return nan
    try:
        return base ** exp
    except OverflowError:
        return -inf if base < 0.0 and int(exp) % 2 else inf


def _sin(x: float) -> float:
    return sin(x) if isfinite(x) else nan


def _sqrt(x: float) -> float:
    return sqrt(x) if x >= 0.0 else nan


def _log10(x: float) -> float:
    if x == 0.0:
        return -inf
    return log10(x) if x > 0.0 else nan


def _pow10(x: float) -> float:
    try:
        return 10.0 ** x
    except OverflowError:
        return inf


# -----------------------------
# Inputs / outputs
# -----------------------------
@dataclass(frozen=True)
class ImpactLocation:
    latitude: float
    longitude: float
    name: str = ""
    surface_type: str = "land"  # "land" | "ocean"

    @property
    def is_ocean(self) -> bool:
        return self.surface_type == "ocean"


@dataclass(frozen=True)
class AsteroidParameters:
    diameter: float             # m
    material: AsteroidMaterial
    velocity: float             # km/s
    angle: float                # deg from HORIZONTAL
    location: ImpactLocation

    @property
    def density(self) -> float:
        return self.material.density

    @property
    def speed_mps(self) -> float:
        return self.velocity * 1000.0

    @property
    def angle_rad(self) -> float:
        return radians(self.angle)


@dataclass(frozen=True)
class ImpactEffectResult:
    # Energy
    energy_joules: float
    energy_megatons: float
    tnt_equivalent: str
    # Crater
    crater_diameter: float
    crater_depth: float
    crater_volume: float
    # Blast
    blast_radius: float
    overpressure_at_1km: float
    # Thermal
    thermal_radius: float
    fireball_duration: float
    # Seismic
    seismic_magnitude: float
    ground_shaking_radius: float
    # Special effects
    tsunami_height: float | None
    tsunami_travel_time: float | None
    airburst_altitude: float | None
    # Population
    estimated_casualties: int
    affected_population: int
    # Classification
    impact_class: str
    torino_scale: int


def validate_parameters(params: AsteroidParameters, angle_mode: str = DEFAULT_ANGLE_MODE) -> None:
    if params.diameter <= 0.0:
        raise InvalidParameterError(f"diameter must be > 0 m, got {params.diameter}.")
    if params.density <= 0.0:
        raise InvalidParameterError(f"density must be > 0 kg/m^3, got {params.density}.")
    if params.velocity <= 0.0:
        raise InvalidParameterError(f"velocity must be > 0 km/s, got {params.velocity}.")
    if not 0.0 <= params.angle <= 90.0:
        raise InvalidParameterError(f"angle must be within [0, 90] degrees, got {params.angle}.")
    if params.location.surface_type not in SURFACE_TYPES:
        raise InvalidParameterError(f"Unknown surface type '{params.location.surface_type}'.")
    if angle_mode not in ANGLE_MODES:
        raise InvalidParameterError(f"Unknown angle mode '{angle_mode}'.")


class ImpactModel:
    """
    Closed-form impact effects: energy, crater, blast, thermal, seismic,
    airburst, tsunami, population and classification.
    """

    def __init__(self, params: AsteroidParameters, angle_mode: str = DEFAULT_ANGLE_MODE,
                 density_model: PopulationDensityModel | None = None):
        if angle_mode not in ANGLE_MODES:
            raise ValueError(f"Unknown angle mode '{angle_mode}'.")
        self.p = params
        self.angle_mode = angle_mode
        self.density_model = density_model

    # ---------- Energetics ----------
    @property
    def mass_kg(self) -> float:
        r = 0.5 * self.p.diameter
        return (4.0 / 3.0) * pi * _pow(r, 3) * self.p.density

    def impact_speed_mps(self) -> float:
        v = self.p.speed_mps
        return v * _sin(self.p.angle_rad) if self.angle_mode == "energy" else v

    def kinetic_energy_J(self) -> float:
        return 0.5 * self.mass_kg * _pow(self.impact_speed_mps(), 2)

    def energy_mt_tnt(self) -> float:
        return self.kinetic_energy_J() / J_PER_MT_TNT

    def energy_kt_tnt(self) -> float:
        return self.energy_mt_tnt() * 1000.0

    # ---------- Crater ----------
    def angle_factor(self) -> float:
        """Cratering efficiency; 1 when the angle is already folded into the energy."""
        return _sin(self.p.angle_rad) if self.angle_mode == "crater" else 1.0

    def target_density(self) -> float:
        return RHO_TARGET_WATER if self.p.location.is_ocean else RHO_TARGET_ROCK

    def crater_diameter_m(self) -> float:
        scaled = self.kinetic_energy_J() * self.angle_factor() / (self.target_density() * G_EARTH)
        return K_CRATER * _pow(scaled, BETA_CRATER)

    def crater_depth_m(self) -> float:
        return self.crater_diameter_m() / 5.0

    def crater_volume_m3(self) -> float:
        D = self.crater_diameter_m()
        return (2.0 / 3.0) * pi * _pow(D / 2.0, 2) * (D / 5.0)

    # ---------- Air blast ----------
    def blast_radius_m(self) -> float:
        """5 psi overpressure boundary."""
        return _pow(self.energy_mt_tnt() / BLAST_REF_MT, 1.0 / 3.0) * 1000.0

    def overpressure_at_1km(self) -> float:
        return self.energy_mt_tnt() * OVERPRESSURE_PER_MT

    # ---------- Thermal ----------
    def thermal_radius_m(self) -> float:
        """3rd-degree burn radius."""
        return _sqrt(self.energy_mt_tnt() / pi) * 1000.0 * THERMAL_SCALE

    def fireball_duration_s(self) -> float:
        return _pow(self.energy_mt_tnt(), 0.44)

    # ---------- Seismic ----------
    def seismic_magnitude(self) -> float:
        return 0.67 * _log10(self.kinetic_energy_J()) - 5.87

    def ground_shaking_radius_m(self) -> float:
        return _pow10(self.seismic_magnitude()) * 100.0

    # ---------- Special effects ----------
    def airburst_altitude_m(self) -> float | None:
        if self.p.diameter < AIRBURST_MAX_DIAMETER_M:
            return 8000.0 + (self.p.diameter / 100.0) * 20000.0
        return None

    def tsunami(self) -> tuple[float, float] | None:
        """(wave height m, travel time min) for ocean targets."""
        if not self.p.location.is_ocean:
            return None
        return _sqrt(self.energy_mt_tnt()) * 2.0, TSUNAMI_TRAVEL_TIME_MIN

    # ---------- Population ----------
    def affected_population(self) -> int:
        loc = self.p.location
        return estimate_affected_population(loc.latitude, loc.longitude, self.blast_radius_m(),
                                            loc.surface_type, density_model=self.density_model)

    # ---------- Convenience summary ----------
    def result(self) -> ImpactEffectResult:
        E_J = self.kinetic_energy_J()
        E_Mt = E_J / J_PER_MT_TNT
        tsunami = self.tsunami()
        affected = self.affected_population()
        impact_class, torino = classify_impact(E_Mt)
        return ImpactEffectResult(
            energy_joules=E_J,
            energy_megatons=E_Mt,
            tnt_equivalent=format_tnt_equivalent(E_Mt),
            crater_diameter=self.crater_diameter_m(),
            crater_depth=self.crater_depth_m(),
            crater_volume=self.crater_volume_m3(),
            blast_radius=self.blast_radius_m(),
            overpressure_at_1km=self.overpressure_at_1km(),
            thermal_radius=self.thermal_radius_m(),
            fireball_duration=self.fireball_duration_s(),
            seismic_magnitude=self.seismic_magnitude(),
            ground_shaking_radius=self.ground_shaking_radius_m(),
            tsunami_height=None if tsunami is None else tsunami[0],
            tsunami_travel_time=None if tsunami is None else tsunami[1],
            airburst_altitude=self.airburst_altitude_m(),
            estimated_casualties=floor_count(affected * CASUALTY_FRACTION),
            affected_population=affected,
            impact_class=impact_class,
            torino_scale=torino,
        )


def compute_impact_effects(params: AsteroidParameters, *, angle_mode: str = DEFAULT_ANGLE_MODE,
                           density_model: PopulationDensityModel | None = None,
                           validate: bool = False) -> ImpactEffectResult:
    """
    Pure and deterministic. With validate=False (default) non-physical inputs
    yield degenerate numbers (0, NaN, inf) rather than errors.
    """
    if validate:
        validate_parameters(params, angle_mode)
    return ImpactModel(params, angle_mode=angle_mode, density_model=density_model).result()


# -----------------------------
# Classification helpers
# -----------------------------
def classify_impact(energy_megatons: float) -> tuple[str, int]:
    for upper, label, scale in IMPACT_CLASSES:
        if energy_megatons < upper:
            return label, scale
    return TOP_IMPACT_CLASS


def format_tnt_equivalent(megatons: float) -> str:
    if megatons < 0.001:
        return f"{megatons * 1e6:.1f} tons TNT"
    if megatons < 1.0:
        return f"{megatons * 1e3:.1f} kilotons TNT"
    if megatons < 1000.0:
        return f"{megatons:.1f} megatons TNT"
    return f"{megatons / 1000.0:.1f} gigatons TNT"


def joules_to_megatons(joules: float) -> float:
    return joules / J_PER_MT_TNT


def megatons_to_joules(megatons: float) -> float:
    return megatons * J_PER_MT_TNT


def joules_to_hiroshima(joules: float) -> float:
    return joules / J_PER_HIROSHIMA


# -----------------------------
# Deflection
# -----------------------------
def calculate_deflection_delta_v(asteroid_mass: float, impactor_mass: float,
                                 impactor_velocity: float, beta: float = 2.5) -> float:
    """Kinetic-impactor delta-v (m/s): beta * m_i * v_i / m_a, beta = momentum enhancement."""
    return beta * impactor_mass * impactor_velocity / asteroid_mass
