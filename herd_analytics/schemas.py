from __future__ import annotations
from datetime import date
from pydantic import BaseModel, Field
from typing import Optional

class StableCreate(BaseModel):
    name: str = Field(..., min_length=1)
    limit: int = Field(..., ge=1)
    location: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)

class BovineCreate(BaseModel):
    name: str = Field(..., min_length=1)
    gender: str = Field(default="Female")
    breed: str = Field(default="Holstein")
    birth_date: Optional[date] = Field(default=None)
    location: Optional[str] = Field(default=None)

    weight: Optional[float] = Field(default=None, ge=0)
    color: Optional[str] = Field(default=None)
    notes: Optional[str] = Field(default=None)

    stable_id: Optional[int] = Field(default=None, ge=1)

class VaccineCreate(BaseModel):
    bovine_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    vaccine_type: str = Field(..., min_length=1)
    vaccine_date: date
