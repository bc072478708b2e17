"""Static production tables and tunable business parameters.

The tables are immutable and bundled into an ``AnalyticsConfig`` that is
passed explicitly to the estimator and the aggregator, so alternative tables
can be swapped in (tests, other regions) without touching module state.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

@dataclass(frozen=True)
class BreedProfile:
    keyword: str
    female_kg: float
    male_kg: float

@dataclass(frozen=True)
class MilkProfile:
    keyword: str
    liters_per_day: float

@dataclass(frozen=True)
class AgeBreakpoint:
    below_years: float
    factor: float

# Matched in order by case-insensitive substring; first hit wins.
BREED_PROFILES: Tuple[BreedProfile, ...] = (
    BreedProfile("holstein", 650, 1000),
    BreedProfile("jersey", 420, 650),
    BreedProfile("brown swiss", 600, 900),
    BreedProfile("pardo suizo", 600, 900),
    BreedProfile("angus", 550, 850),
    BreedProfile("hereford", 550, 850),
    BreedProfile("charolais", 700, 1100),
    BreedProfile("simmental", 650, 1000),
    BreedProfile("limousin", 600, 950),
    BreedProfile("brahman", 500, 800),
    BreedProfile("cebu", 450, 700),
    BreedProfile("normando", 550, 850),
    BreedProfile("gyr", 430, 650),
    BreedProfile("gir", 430, 650),
)
DEFAULT_BREED_PROFILE = BreedProfile("default", 450, 700)

MILK_PROFILES: Tuple[MilkProfile, ...] = (
    MilkProfile("holstein", 25),
    MilkProfile("jersey", 18),
    MilkProfile("brown swiss", 20),
    MilkProfile("pardo suizo", 20),
    MilkProfile("simmental", 14),
    MilkProfile("normando", 15),
    MilkProfile("gyr", 12),
    MilkProfile("gir", 12),
)
DEFAULT_MILK_LITERS = 10.0

AGE_FACTOR_CURVE: Tuple[AgeBreakpoint, ...] = (
    AgeBreakpoint(0.5, 0.15),
    AgeBreakpoint(1.0, 0.35),
    AgeBreakpoint(1.5, 0.55),
    AgeBreakpoint(2.0, 0.70),
    AgeBreakpoint(3.0, 0.85),
    AgeBreakpoint(5.0, 1.00),
    AgeBreakpoint(8.0, 1.05),
)
SENIOR_AGE_FACTOR = 0.95

LACTATION_MIN_AGE_YEARS = 2.0

MEAT_PRICE_PER_KG = 4.5
MILK_PRICE_PER_LITER = 0.35

@dataclass(frozen=True)
class AnalyticsConfig:
    breed_profiles: Tuple[BreedProfile, ...] = BREED_PROFILES
    default_breed_profile: BreedProfile = DEFAULT_BREED_PROFILE
    milk_profiles: Tuple[MilkProfile, ...] = MILK_PROFILES
    default_milk_liters: float = DEFAULT_MILK_LITERS
    age_factor_curve: Tuple[AgeBreakpoint, ...] = AGE_FACTOR_CURVE
    senior_age_factor: float = SENIOR_AGE_FACTOR
    lactation_min_age: float = LACTATION_MIN_AGE_YEARS
    meat_price_per_kg: float = MEAT_PRICE_PER_KG
    milk_price_per_liter: float = MILK_PRICE_PER_LITER
    top_n: int = field(default=5)

    def with_prices(self, meat: Optional[float] = None, milk: Optional[float] = None) -> "AnalyticsConfig":
        return replace(
            self,
            meat_price_per_kg=self.meat_price_per_kg if meat is None else float(meat),
            milk_price_per_liter=self.milk_price_per_liter if milk is None else float(milk),
        )

    @classmethod
    def from_env(cls) -> "AnalyticsConfig":
        meat = os.getenv("MEAT_PRICE_PER_KG")
        milk = os.getenv("MILK_PRICE_PER_LITER")
        return cls().with_prices(
            meat=float(meat) if meat else None,
            milk=float(milk) if milk else None,
        )

DEFAULT_CONFIG = AnalyticsConfig()
