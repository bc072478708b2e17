from __future__ import annotations
from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Union

BirthDate = Union[date, datetime, str, None]

def _pick(payload: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in payload and payload[k] is not None:
            return payload[k]
    return default

def _as_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None

@dataclass(frozen=True)
class AnimalRecord:
    id: int
    breed: str = ""
    gender: str = ""
    birth_date: BirthDate = None
    weight: Optional[float] = None
    stable_id: Optional[int] = None
    name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AnimalRecord":
        # snake_case from this API, camelCase from the upstream livestock API
        return cls(
            id=_as_int(_pick(payload, "id")) or 0,
            breed=str(_pick(payload, "breed", default="")),
            gender=str(_pick(payload, "gender", default="")),
            birth_date=_pick(payload, "birth_date", "birthDate"),
            weight=_pick(payload, "weight", "weight_kg"),
            stable_id=_as_int(_pick(payload, "stable_id", "stableId")),
            name=str(_pick(payload, "name", default="")),
        )

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        if isinstance(self.birth_date, (date, datetime)):
            d["birth_date"] = self.birth_date.isoformat()
        return d

@dataclass(frozen=True)
class VaccineRecord:
    vaccine_type: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "VaccineRecord":
        return cls(vaccine_type=str(_pick(payload, "vaccine_type", "vaccineType", default="")))

@dataclass(frozen=True)
class StableRecord:
    id: int
    name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "StableRecord":
        return cls(
            id=_as_int(_pick(payload, "id")) or 0,
            name=str(_pick(payload, "name", default="")),
        )
