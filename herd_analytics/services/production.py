from __future__ import annotations
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..config import AnalyticsConfig, DEFAULT_CONFIG
from .weights import HerdMember, is_female, match_keyword, round_half_up

class ProductionMode(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def multiplier(self) -> int:
        return MODE_MULTIPLIERS[self]

MODE_MULTIPLIERS = {
    ProductionMode.DAILY: 1,
    ProductionMode.MONTHLY: 30,
    ProductionMode.YEARLY: 365,
}

def parse_mode(mode: Union[ProductionMode, str, None]) -> ProductionMode:
    if isinstance(mode, ProductionMode):
        return mode
    if mode is None:
        return ProductionMode.DAILY
    return ProductionMode(str(mode).strip().lower())

def milk_liters_for_breed(breed: Optional[str], config: AnalyticsConfig = DEFAULT_CONFIG) -> float:
    profile = match_keyword(breed, config.milk_profiles, None)
    return profile.liters_per_day if profile is not None else config.default_milk_liters

def daily_milk(member: HerdMember, config: AnalyticsConfig = DEFAULT_CONFIG) -> float:
    """Liters/day for a lactating female, 0 for everyone else."""
    if not is_female(member.record.gender) or member.age_years < config.lactation_min_age:
        return 0.0
    return milk_liters_for_breed(member.record.breed, config)

def production_kpis(
    herd: List[HerdMember],
    mode: Union[ProductionMode, str] = ProductionMode.DAILY,
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> Dict[str, Any]:
    mode = parse_mode(mode)

    meat_total = sum(m.weight for m in herd)
    milk_daily = sum(daily_milk(m, config) for m in herd)
    milk_production = round_half_up(milk_daily * mode.multiplier)
    average_weight = round_half_up(meat_total / len(herd)) if herd else 0
    estimated_value = round_half_up(
        meat_total * config.meat_price_per_kg + milk_production * config.milk_price_per_liter
    )

    return {
        "mode": mode.value,
        "multiplier": mode.multiplier,
        "meat_total": meat_total,
        "milk_daily": milk_daily,
        "milk_production": milk_production,
        "average_weight": average_weight,
        "estimated_value": estimated_value,
    }
