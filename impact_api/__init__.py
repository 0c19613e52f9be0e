from .catalogs import (ASTEROID_MATERIALS, FAMOUS_ASTEROIDS, MITIGATION_STRATEGIES, AsteroidMaterial,
                       FamousAsteroid, MitigationStrategy, UnknownCatalogEntryError, get_famous_asteroid,
                       get_material, get_strategy)
from .impact_model import (AsteroidParameters, ImpactEffectResult, ImpactLocation, ImpactModel,
                           InvalidParameterError, calculate_deflection_delta_v, classify_impact,
                           compute_impact_effects, format_tnt_equivalent)
from .mission import MissionOutcome, assess_mission, estimate_mission_success_probability, is_mission_feasible
from .population import CityCentroidDensityModel, PopulationDensityModel, estimate_affected_population

__version__ = "1.0.0"
