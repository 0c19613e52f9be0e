from __future__ import annotations
from dataclasses import dataclass


class UnknownCatalogEntryError(LookupError):
    """Raised when a material, strategy or preset id is not in its catalog."""

    def __init__(self, catalog: str, entry_id: str):
        super().__init__(f"Unknown {catalog} '{entry_id}'.")
        self.catalog = catalog
        self.entry_id = entry_id


@dataclass(frozen=True)
class AsteroidMaterial:
    id: str
    name: str
    density: float  # kg/m^3
    description: str
    examples: str = ""


@dataclass(frozen=True)
class MitigationStrategy:
    id: str
    name: str
    description: str
    min_lead_time_days: float
    base_success_probability: float
    cost: str
    technology: str


@dataclass(frozen=True)
class FamousAsteroid:
    id: str
    name: str
    diameter: float   # m
    material_id: str
    velocity: float   # km/s
    description: str
    historical_event: str | None = None


# -----------------------------
# Asteroid materials
# -----------------------------
ASTEROID_MATERIALS: tuple[AsteroidMaterial, ...] = (
    AsteroidMaterial(
        id="iron",
        name="Iron (M-type)",
        density=7800.0,
        description="Metallic asteroids composed primarily of iron and nickel. "
                    "The densest type, producing the most devastating impacts.",
        examples="Psyche, most meteorites found on Earth",
    ),
    AsteroidMaterial(
        id="stone",
        name="Stone (S-type)",
        density=3000.0,
        description="Rocky asteroids made of silicate minerals. The most common type, similar to Earth rocks.",
        examples="Eros, Itokawa, most near-Earth asteroids",
    ),
    AsteroidMaterial(
        id="carbon",
        name="Carbon (C-type)",
        density=2000.0,
        description="Dark, primitive asteroids rich in carbon compounds and water.",
        examples="Bennu, Ryugu",
    ),
    AsteroidMaterial(
        id="ice",
        name="Ice/Comet",
        density=1000.0,
        description="Icy bodies with frozen water, CO2 and organics. Low density but high velocity.",
        examples="Halley's Comet, 67P/Churyumov-Gerasimenko",
    ),
    AsteroidMaterial(
        id="gold",
        name="Platinum-Rich",
        density=8000.0,
        description="Rare metallic asteroids with high concentrations of precious metals.",
        examples="Psyche (theoretical), certain M-type cores",
    ),
    AsteroidMaterial(
        id="stony-iron",
        name="Stony-Iron",
        density=4800.0,
        description="Mixed composition of metal and silicates. Rare asteroid type.",
        examples="Pallasite and mesosiderite parent bodies",
    ),
)

# -----------------------------
# Deflection strategies
# -----------------------------
MITIGATION_STRATEGIES: tuple[MitigationStrategy, ...] = (
    MitigationStrategy(
        id="kinetic",
        name="Kinetic Impactor",
        description="Ram a spacecraft into the asteroid to change its velocity. Proven by DART (2022).",
        min_lead_time_days=365,
        base_success_probability=0.75,
        cost="$300M - $500M",
        technology="Current (NASA DART)",
    ),
    MitigationStrategy(
        id="gravity",
        name="Gravity Tractor",
        description="Hover a spacecraft near the asteroid and let gravitational attraction slowly alter its path.",
        min_lead_time_days=1825,  # 5 years
        base_success_probability=0.65,
        cost="$1B - $2B",
        technology="Near-term feasible",
    ),
    MitigationStrategy(
        id="nuclear",
        name="Nuclear Deflection",
        description="Detonate a nuclear device near the asteroid to vaporize surface material and create thrust.",
        min_lead_time_days=180,
        base_success_probability=0.85,
        cost="$2B - $5B",
        technology="Theoretically proven",
    ),
    MitigationStrategy(
        id="laser",
        name="Laser Ablation",
        description="Focused lasers vaporize the asteroid surface, creating thrust over time.",
        min_lead_time_days=730,  # 2 years
        base_success_probability=0.60,
        cost="$5B+",
        technology="Experimental",
    ),
    MitigationStrategy(
        id="ion-beam",
        name="Ion Beam Shepherd",
        description="A spacecraft directs an ion beam at the asteroid, pushing it without contact.",
        min_lead_time_days=1460,  # 4 years
        base_success_probability=0.60,
        cost="$1B - $3B",
        technology="Conceptual",
    ),
    MitigationStrategy(
        id="mass-driver",
        name="Mass Driver",
        description="Landed machinery ejects surface material at high speed, producing a reaction force.",
        min_lead_time_days=2555,  # 7 years
        base_success_probability=0.55,
        cost="$10B+",
        technology="Conceptual",
    ),
    MitigationStrategy(
        id="solar-sail",
        name="Solar Sail",
        description="A reflective sail attached to the asteroid uses radiation pressure to nudge its orbit.",
        min_lead_time_days=3650,  # 10 years
        base_success_probability=0.50,
        cost="$500M - $1B",
        technology="Experimental",
    ),
    MitigationStrategy(
        id="fragmentation",
        name="Fragmentation",
        description="Break the asteroid into small pieces that burn up or miss. Risky for large bodies.",
        min_lead_time_days=90,
        base_success_probability=0.45,
        cost="$2B - $5B",
        technology="Theoretically proven",
    ),
)

# -----------------------------
# Presets (real objects / events)
# -----------------------------
FAMOUS_ASTEROIDS: tuple[FamousAsteroid, ...] = (
    FamousAsteroid("apophis", "99942 Apophis", 370.0, "stone", 30.73,
                   "Close approach in 2029 will bring it within 31,000 km of Earth",
                   "Future encounter (April 13, 2029)"),
    FamousAsteroid("bennu", "101955 Bennu", 492.0, "carbon", 27.7,
                   "Target of NASA's OSIRIS-REx sample return mission",
                   "Visited by spacecraft 2018-2021"),
    FamousAsteroid("chelyabinsk", "Chelyabinsk Meteor", 20.0, "stone", 19.16,
                   "Exploded over Russia in 2013, injuring 1,500 people",
                   "February 15, 2013"),
    FamousAsteroid("tunguska", "Tunguska Event", 60.0, "stone", 27.0,
                   "Largest impact event in recorded history, flattened 2,000 km² of forest",
                   "June 30, 1908"),
    FamousAsteroid("barringer", "Barringer Crater Impactor", 50.0, "iron", 12.8,
                   "Created Meteor Crater in Arizona",
                   "~50,000 years ago"),
    FamousAsteroid("chicxulub", "Chicxulub Impactor", 10000.0, "stone", 20.0,
                   "Caused the extinction of the dinosaurs",
                   "66 million years ago"),
    FamousAsteroid("vredefort", "Vredefort Impactor", 15000.0, "stone", 20.0,
                   "Created the largest verified impact crater on Earth",
                   "~2 billion years ago"),
    FamousAsteroid("ryugu", "162173 Ryugu", 900.0, "carbon", 26.8,
                   "Target of Japan's Hayabusa2 sample return mission",
                   "Samples returned December 2020"),
    FamousAsteroid("itokawa", "25143 Itokawa", 330.0, "stone", 25.0,
                   "First asteroid from which samples were returned to Earth",
                   "Visited by Hayabusa 2005"),
    FamousAsteroid("didymos", "65803 Didymos", 780.0, "stone", 23.92,
                   "Target of NASA's DART mission, the first asteroid deflection test",
                   "DART impact September 26, 2022"),
)


def _lookup(entries, catalog: str, entry_id: str):
    for e in entries:
        if e.id == entry_id:
            return e
    raise UnknownCatalogEntryError(catalog, entry_id)


def get_material(material_id: str) -> AsteroidMaterial:
    return _lookup(ASTEROID_MATERIALS, "material", material_id)


def get_strategy(strategy_id: str) -> MitigationStrategy:
    return _lookup(MITIGATION_STRATEGIES, "strategy", strategy_id)


def get_famous_asteroid(preset_id: str) -> FamousAsteroid:
    return _lookup(FAMOUS_ASTEROIDS, "preset", preset_id)
