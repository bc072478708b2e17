from __future__ import annotations

from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey, Index
from sqlalchemy.orm import relationship
from .db import Base

class Stable(Base):
    __tablename__ = "stables"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)

    limit = Column(Integer, nullable=False, default=1)  # head capacity
    location = Column(String, nullable=True)
    description = Column(String, nullable=True)

    bovines = relationship("Bovine", back_populates="stable")

class Bovine(Base):
    __tablename__ = "bovines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)

    gender = Column(String, nullable=True)
    breed = Column(String, nullable=True)
    birth_date = Column(Date, nullable=True)
    location = Column(String, nullable=True)

    weight = Column(Float, nullable=True)  # kg, NULL when never weighed
    color = Column(String, nullable=True)
    notes = Column(String, nullable=True)

    stable_id = Column(Integer, ForeignKey("stables.id"), nullable=True)

    stable = relationship("Stable", back_populates="bovines")
    vaccines = relationship("Vaccine", back_populates="bovine", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_bovine_stable", "stable_id"),
    )

class Vaccine(Base):
    __tablename__ = "vaccines"

    id = Column(Integer, primary_key=True, index=True)
    bovine_id = Column(Integer, ForeignKey("bovines.id"), nullable=False)

    name = Column(String, nullable=False)
    vaccine_type = Column(String, nullable=True)
    vaccine_date = Column(Date, nullable=False)

    bovine = relationship("Bovine", back_populates="vaccines")

    __table_args__ = (
        Index("idx_vaccine_bovine_date", "bovine_id", "vaccine_date"),
    )
