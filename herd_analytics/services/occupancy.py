from __future__ import annotations
from typing import Any, Dict

def capacity_status(pct: float) -> str:
    if pct == 0:
        return "Empty"
    if pct < 50:
        return "Healthy"
    if pct < 85:
        return "Moderate"
    return "Critical"

def stable_occupancy(limit: int, occupancy: int) -> Dict[str, Any]:
    if limit and limit > 0:
        pct = min(occupancy * 100.0 / limit, 100.0)
    else:
        pct = 100.0 if occupancy else 0.0
    return {
        "occupancy": occupancy,
        "free_slots": max(0, (limit or 0) - occupancy),
        "occupancy_pct": round(pct, 1),
        "capacity_status": capacity_status(pct),
    }
