from __future__ import annotations
from typing import Any, Dict, List

from .weights import HerdMember

def top_heaviest(herd: List[HerdMember], n: int = 5) -> List[Dict[str, Any]]:
    ranked = sorted(herd, key=lambda m: m.weight, reverse=True)[:n]
    return [
        {
            **m.record.to_dict(),
            "effective_weight": m.weight,
            "estimated": m.estimated,
            "age_years": round(m.age_years, 2),
        }
        for m in ranked
    ]
