from __future__ import annotations
from dataclasses import dataclass

from .catalogs import get_strategy

BASE_SUCCESS_PROBABILITY = 0.7
MIN_PROBABILITY = 0.1
MAX_PROBABILITY = 0.95
LEAD_TIME_CAP_YEARS = 1.5
LEAD_TIME_WEIGHT = 0.2
SIZE_REFERENCE_M = 1000.0
SIZE_WEIGHT = 0.15

# Confidence adjustment per strategy; strategies not listed get 0.
STRATEGY_FACTORS = {
    "kinetic": 0.05,   # proven (DART)
    "nuclear": 0.10,
    "gravity": -0.05,
    "laser": -0.10,    # experimental
}


@dataclass(frozen=True)
class MissionOutcome:
    success_probability: float
    feasible: bool
    lead_time_days: float
    asteroid_diameter: float
    strategy_id: str
    min_lead_time_days: float


def _clamp(x: float, lo: float, hi: float) -> float:
    return min(max(x, lo), hi)


def estimate_mission_success_probability(lead_time_days: float, asteroid_diameter: float,
                                         strategy_id: str) -> float:
    lead_time_factor = min(lead_time_days / 365.0, LEAD_TIME_CAP_YEARS) * LEAD_TIME_WEIGHT
    size_factor = max(0.0, (SIZE_REFERENCE_M - asteroid_diameter) / SIZE_REFERENCE_M) * SIZE_WEIGHT
    strategy_factor = STRATEGY_FACTORS.get(strategy_id, 0.0)
    p = BASE_SUCCESS_PROBABILITY + lead_time_factor + size_factor + strategy_factor
    return _clamp(p, MIN_PROBABILITY, MAX_PROBABILITY)


def is_mission_feasible(lead_time_days: float, strategy_id: str) -> bool:
    """Catalog gate: the strategy needs at least its minimum lead time."""
    return lead_time_days >= get_strategy(strategy_id).min_lead_time_days


def assess_mission(lead_time_days: float, asteroid_diameter: float, strategy_id: str) -> MissionOutcome:
    """
    Probability and feasibility are reported separately; an infeasible mission
    still carries the probability it would have had with enough lead time.
    """
    strategy = get_strategy(strategy_id)
    return MissionOutcome(
        success_probability=estimate_mission_success_probability(lead_time_days, asteroid_diameter, strategy_id),
        feasible=lead_time_days >= strategy.min_lead_time_days,
        lead_time_days=lead_time_days,
        asteroid_diameter=asteroid_diameter,
        strategy_id=strategy_id,
        min_lead_time_days=strategy.min_lead_time_days,
    )
