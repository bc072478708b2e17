"""One analytics pass over a herd snapshot.

The three collections are read-only inputs supplied together by the caller.
If any of them is missing (``None``) the herd data is considered unavailable
and the empty report is returned instead of raising.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, Optional, Union

from ..config import AnalyticsConfig, DEFAULT_CONFIG
from .distributions import (
    age_distribution,
    breed_distribution,
    gender_distribution,
    stable_distribution,
    vaccine_distribution,
)
from .production import ProductionMode, parse_mode, production_kpis
from .ranking import top_heaviest
from .records import AnimalRecord, StableRecord, VaccineRecord
from .weights import evaluate_herd

logger = logging.getLogger(__name__)

def empty_report(
    mode: Union[ProductionMode, str] = ProductionMode.DAILY,
    as_of: Optional[datetime] = None,
    data_available: bool = False,
) -> Dict[str, Any]:
    mode = parse_mode(mode)
    return {
        "mode": mode.value,
        "multiplier": mode.multiplier,
        "as_of": (as_of or datetime.now()).isoformat(),
        "data_available": data_available,
        "herd_size": 0,
        "meat_total": 0,
        "milk_daily": 0,
        "milk_production": 0,
        "average_weight": 0,
        "estimated_value": 0,
        "breed_distribution": [],
        "gender_distribution": [],
        "age_distribution": [],
        "stable_distribution": [],
        "vaccine_distribution": [],
        "top_heaviest": [],
    }

def build_production_report(
    animals: Optional[Iterable[AnimalRecord]],
    vaccines: Optional[Iterable[VaccineRecord]],
    stables: Optional[Iterable[StableRecord]],
    mode: Union[ProductionMode, str] = ProductionMode.DAILY,
    config: Optional[AnalyticsConfig] = None,
    as_of: Optional[datetime] = None,
) -> Dict[str, Any]:
    mode = parse_mode(mode)
    config = config or DEFAULT_CONFIG
    as_of = as_of or datetime.now()

    if animals is None or vaccines is None or stables is None:
        logger.warning("Herd data unavailable; returning empty %s report", mode.value)
        return empty_report(mode, as_of)

    animals = list(animals)
    vaccines = list(vaccines)
    stables = list(stables)

    # an empty herd yields no distributions at all, vaccine counts included
    if not animals:
        return empty_report(mode, as_of, data_available=True)

    herd = evaluate_herd(animals, as_of=as_of, config=config)
    logger.debug(
        "Analytics pass: %d animals (%d estimated), %d vaccines, %d stables, mode=%s",
        len(herd), sum(1 for m in herd if m.estimated), len(vaccines), len(stables), mode.value,
    )

    report = empty_report(mode, as_of, data_available=True)
    report.update(production_kpis(herd, mode, config))
    report.update({
        "herd_size": len(herd),
        "breed_distribution": breed_distribution(herd),
        "gender_distribution": gender_distribution(herd),
        "age_distribution": age_distribution(herd),
        "stable_distribution": stable_distribution(herd, stables, config.top_n),
        "vaccine_distribution": vaccine_distribution(vaccines, config.top_n),
        "top_heaviest": top_heaviest(herd, config.top_n),
    })
    return report
