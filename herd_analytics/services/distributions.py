from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from .records import StableRecord, VaccineRecord
from .weights import HerdMember, round_half_up

UNKNOWN_LABEL = "Unknown"
UNASSIGNED_LABEL = "Unassigned"

# (label, exclusive upper bound in years); the last bucket is open-ended
AGE_BUCKETS = (
    ("0–1", 1.0),
    ("1–2", 2.0),
    ("2–5", 5.0),
    ("5+", None),
)

def _label(value: Optional[str]) -> str:
    text = (value or "").strip()
    return text if text else UNKNOWN_LABEL

def _count_by(labels: Iterable[Any]) -> Dict[Any, int]:
    counts: Dict[Any, int] = {}
    for label in labels:
        counts[label] = counts.get(label, 0) + 1
    return counts

def _top(rows: List[Dict[str, Any]], n: int) -> List[Dict[str, Any]]:
    # sorted() is stable: ties keep first-seen order
    return sorted(rows, key=lambda r: r["count"], reverse=True)[:n]

def breed_distribution(herd: List[HerdMember]) -> List[Dict[str, Any]]:
    groups: Dict[str, Dict[str, float]] = {}
    for m in herd:
        g = groups.setdefault(_label(m.record.breed), {"total": 0.0, "count": 0})
        g["total"] += m.weight
        g["count"] += 1

    size = len(herd)
    return [
        {
            "breed": breed,
            "average_weight": round_half_up(g["total"] / g["count"]),
            "count": g["count"],
            "percentage": round(g["count"] * 100.0 / size, 1),
        }
        for breed, g in groups.items()
    ]

def gender_distribution(herd: List[HerdMember]) -> List[Dict[str, Any]]:
    counts = _count_by(_label(m.record.gender) for m in herd)
    return [{"gender": g, "count": c} for g, c in counts.items()]

def age_bucket(age_years: float) -> str:
    for label, upper in AGE_BUCKETS:
        if upper is None or age_years < upper:
            return label
    return AGE_BUCKETS[-1][0]

def age_distribution(herd: List[HerdMember]) -> List[Dict[str, Any]]:
    if not herd:
        return []
    counts = _count_by(age_bucket(m.age_years) for m in herd)
    return [{"age_group": label, "count": counts.get(label, 0)} for label, _ in AGE_BUCKETS]

def stable_distribution(
    herd: List[HerdMember],
    stables: Iterable[StableRecord],
    top_n: int = 5,
) -> List[Dict[str, Any]]:
    names = {s.id: s.name for s in stables}
    counts = _count_by(m.record.stable_id for m in herd)

    rows = []
    for stable_id, count in counts.items():
        if stable_id is None:
            label = UNASSIGNED_LABEL
        else:
            label = names.get(stable_id) or f"Stable {stable_id}"
        rows.append({"stable_id": stable_id, "stable": label, "count": count})
    return _top(rows, top_n)

def vaccine_distribution(vaccines: Iterable[VaccineRecord], top_n: int = 5) -> List[Dict[str, Any]]:
    counts = _count_by(_label(v.vaccine_type) for v in vaccines)
    return _top([{"type": t, "count": c} for t, c in counts.items()], top_n)
