from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, TypeVar

from ..config import AnalyticsConfig, BreedProfile, DEFAULT_CONFIG
from .age import age_in_years
from .records import AnimalRecord

class Gender(str, Enum):
    FEMALE = "female"
    MALE = "male"

FEMALE_LABELS = {"female", "f", "hembra", "h"}
MALE_LABELS = {"male", "m", "macho"}

P = TypeVar("P")

def normalize_gender(label: Optional[str]) -> Optional[Gender]:
    text = (label or "").strip().lower()
    if text in FEMALE_LABELS:
        return Gender.FEMALE
    if text in MALE_LABELS:
        return Gender.MALE
    return None

def is_female(label: Optional[str]) -> bool:
    return normalize_gender(label) is Gender.FEMALE

def round_half_up(value: float) -> int:
    # .5 always rounds up, unlike Python's banker's rounding
    return int(math.floor(value + 0.5))

def match_keyword(breed: Optional[str], profiles: Iterable[P], default: P) -> P:
    text = (breed or "").lower()
    for p in profiles:
        if p.keyword in text:
            return p
    return default

def breed_profile(breed: Optional[str], config: AnalyticsConfig = DEFAULT_CONFIG) -> BreedProfile:
    return match_keyword(breed, config.breed_profiles, config.default_breed_profile)

def base_weight(breed: Optional[str], gender: Optional[str], config: AnalyticsConfig = DEFAULT_CONFIG) -> float:
    profile = breed_profile(breed, config)
    return profile.female_kg if is_female(gender) else profile.male_kg

def age_factor(age_years: float, config: AnalyticsConfig = DEFAULT_CONFIG) -> float:
    for bp in config.age_factor_curve:
        if age_years < bp.below_years:
            return bp.factor
    return config.senior_age_factor

def variation_factor(animal_id: Optional[int]) -> float:
    """Deterministic per-animal jitter in [0.90, 1.10)."""
    return 0.90 + ((animal_id or 0) % 20) / 100

def recorded_weight(value) -> Optional[float]:
    try:
        w = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(w) or math.isinf(w) or w <= 0:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return w

def estimate_weight(animal: AnimalRecord, as_of=None, config: AnalyticsConfig = DEFAULT_CONFIG) -> int:
    age = age_in_years(animal.birth_date, as_of)
    raw = base_weight(animal.breed, animal.gender, config) * age_factor(age, config) * variation_factor(animal.id)
    return max(1, round_half_up(raw))

def effective_weight(animal: AnimalRecord, as_of=None, config: AnalyticsConfig = DEFAULT_CONFIG) -> float:
    real = recorded_weight(animal.weight)
    if real is not None:
        return real
    return estimate_weight(animal, as_of=as_of, config=config)

@dataclass(frozen=True)
class HerdMember:
    record: AnimalRecord
    age_years: float
    weight: float
    estimated: bool

def evaluate_herd(
    animals: Iterable[AnimalRecord],
    as_of=None,
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> List[HerdMember]:
    as_of = as_of or datetime.now()
    herd: List[HerdMember] = []
    for a in animals:
        real = recorded_weight(a.weight)
        herd.append(HerdMember(
            record=a,
            age_years=age_in_years(a.birth_date, as_of),
            weight=real if real is not None else estimate_weight(a, as_of=as_of, config=config),
            estimated=real is None,
        ))
    return herd
