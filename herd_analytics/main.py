from __future__ import annotations

import logging
import os
from typing import List, Optional, Tuple

from fastapi import FastAPI, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import AnalyticsConfig
from .db import Base, engine, get_db
from .models import Bovine, Stable, Vaccine
from .schemas import BovineCreate, StableCreate, VaccineCreate
from .services.analytics import build_production_report, empty_report
from .services.occupancy import stable_occupancy
from .services.production import ProductionMode, daily_milk
from .services.records import AnimalRecord, StableRecord, VaccineRecord
from .services.weights import evaluate_herd

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Herd Production Analytics", version="1.0.0")
Base.metadata.create_all(bind=engine)

ANALYTICS_CONFIG = AnalyticsConfig.from_env()

def animal_record(b: Bovine) -> AnimalRecord:
    return AnimalRecord(
        id=b.id,
        name=b.name,
        breed=b.breed or "",
        gender=b.gender or "",
        birth_date=b.birth_date,
        weight=b.weight,
        stable_id=b.stable_id,
    )

def load_herd_snapshot(db: Session) -> Tuple[List[AnimalRecord], List[VaccineRecord], List[StableRecord]]:
    # all three collections are read before any aggregation starts
    animals = [animal_record(b) for b in db.query(Bovine).order_by(Bovine.id).all()]
    vaccines = [VaccineRecord(vaccine_type=v.vaccine_type or "") for v in db.query(Vaccine).order_by(Vaccine.id).all()]
    stables = [StableRecord(id=s.id, name=s.name) for s in db.query(Stable).order_by(Stable.id).all()]
    return animals, vaccines, stables

def stable_out(s: Stable, db: Session) -> dict:
    count = db.query(Bovine).filter(Bovine.stable_id == s.id).count()
    return {
        "id": s.id,
        "name": s.name,
        "limit": s.limit,
        "location": s.location,
        "description": s.description,
        **stable_occupancy(s.limit, count),
    }

def bovine_out(b: Bovine) -> dict:
    return {
        "id": b.id,
        "name": b.name,
        "gender": b.gender,
        "breed": b.breed,
        "birth_date": b.birth_date.isoformat() if b.birth_date else None,
        "location": b.location,
        "weight": b.weight,
        "color": b.color,
        "notes": b.notes,
        "stable_id": b.stable_id,
    }

def vaccine_out(v: Vaccine) -> dict:
    return {
        "id": v.id,
        "bovine_id": v.bovine_id,
        "name": v.name,
        "vaccine_type": v.vaccine_type,
        "vaccine_date": v.vaccine_date.isoformat(),
    }

def get_stable_or_404(db: Session, stable_id: int) -> Stable:
    stable = db.query(Stable).filter(Stable.id == stable_id).first()
    if not stable:
        raise HTTPException(status_code=404, detail="Stable not found.")
    return stable

def get_bovine_or_404(db: Session, bovine_id: int) -> Bovine:
    bovine = db.query(Bovine).filter(Bovine.id == bovine_id).first()
    if not bovine:
        raise HTTPException(status_code=404, detail="Bovine not found.")
    return bovine

def check_stable_room(db: Session, stable_id: int, moving_bovine_id: Optional[int] = None):
    stable = db.query(Stable).filter(Stable.id == stable_id).first()
    if not stable:
        raise HTTPException(status_code=400, detail=f"Stable {stable_id} does not exist. Create stable first.")

    q = db.query(Bovine).filter(Bovine.stable_id == stable_id)
    if moving_bovine_id is not None:
        q = q.filter(Bovine.id != moving_bovine_id)
    if q.count() >= stable.limit:
        raise HTTPException(status_code=409, detail=f"Stable '{stable.name}' is at capacity ({stable.limit}).")

@app.get("/")
def root():
    return {"service": "Herd Production Analytics API", "docs": "/docs", "health": "/health"}

@app.get("/health")
def health():
    return {"ok": True}

@app.get("/summary")
def summary(db: Session = Depends(get_db)):
    return {
        "total_bovines": db.query(Bovine).count(),
        "total_vaccinations": db.query(Vaccine).count(),
        "total_stables": db.query(Stable).count(),
    }

# ---------------------------
# Stables
# ---------------------------
@app.get("/stables")
def list_stables(db: Session = Depends(get_db)):
    return [stable_out(s, db) for s in db.query(Stable).order_by(Stable.id).all()]

@app.post("/stables")
def create_stable(payload: StableCreate, db: Session = Depends(get_db)):
    existing = db.query(Stable).filter(Stable.name == payload.name).first()
    if existing:
        raise HTTPException(status_code=409, detail="Stable name already exists.")

    stable = Stable(
        name=payload.name,
        limit=payload.limit,
        location=payload.location,
        description=payload.description,
    )
    db.add(stable)
    db.commit()
    db.refresh(stable)
    logger.info("Created stable %s (%s)", stable.id, stable.name)
    return stable_out(stable, db)

@app.get("/stables/{stable_id}")
def get_stable(stable_id: int, db: Session = Depends(get_db)):
    return stable_out(get_stable_or_404(db, stable_id), db)

@app.put("/stables/{stable_id}")
def update_stable(stable_id: int, payload: StableCreate, db: Session = Depends(get_db)):
    stable = get_stable_or_404(db, stable_id)

    clash = db.query(Stable).filter(Stable.name == payload.name, Stable.id != stable_id).first()
    if clash:
        raise HTTPException(status_code=409, detail="Stable name already exists.")

    stable.name = payload.name
    stable.limit = payload.limit
    stable.location = payload.location
    stable.description = payload.description
    db.commit()
    return stable_out(stable, db)

@app.delete("/stables/{stable_id}")
def delete_stable(stable_id: int, db: Session = Depends(get_db)):
    stable = get_stable_or_404(db, stable_id)
    if db.query(Bovine).filter(Bovine.stable_id == stable_id).count():
        raise HTTPException(status_code=409, detail="Stable still has bovines assigned.")
    db.delete(stable)
    db.commit()
    logger.info("Deleted stable %s", stable_id)
    return {"deleted": True, "id": stable_id}

@app.get("/stables/{stable_id}/bovines")
def stable_bovines(stable_id: int, db: Session = Depends(get_db)):
    get_stable_or_404(db, stable_id)
    bovines = db.query(Bovine).filter(Bovine.stable_id == stable_id).order_by(Bovine.id).all()
    return [bovine_out(b) for b in bovines]

# ---------------------------
# Bovines
# ---------------------------
@app.get("/bovines")
def list_bovines(db: Session = Depends(get_db)):
    return [bovine_out(b) for b in db.query(Bovine).order_by(Bovine.id).all()]

@app.post("/bovines")
def create_bovine(payload: BovineCreate, db: Session = Depends(get_db)):
    if payload.stable_id is not None:
        check_stable_room(db, payload.stable_id)

    bovine = Bovine(**payload.model_dump())
    db.add(bovine)
    db.commit()
    db.refresh(bovine)
    logger.info("Created bovine %s (%s)", bovine.id, bovine.name)
    return bovine_out(bovine)

@app.get("/bovines/{bovine_id}")
def get_bovine(bovine_id: int, db: Session = Depends(get_db)):
    return bovine_out(get_bovine_or_404(db, bovine_id))

@app.put("/bovines/{bovine_id}")
def update_bovine(bovine_id: int, payload: BovineCreate, db: Session = Depends(get_db)):
    bovine = get_bovine_or_404(db, bovine_id)
    if payload.stable_id is not None and payload.stable_id != bovine.stable_id:
        check_stable_room(db, payload.stable_id, moving_bovine_id=bovine_id)

    for field, value in payload.model_dump().items():
        setattr(bovine, field, value)
    db.commit()
    return bovine_out(bovine)

@app.delete("/bovines/{bovine_id}")
def delete_bovine(bovine_id: int, db: Session = Depends(get_db)):
    bovine = get_bovine_or_404(db, bovine_id)
    db.delete(bovine)
    db.commit()
    logger.info("Deleted bovine %s", bovine_id)
    return {"deleted": True, "id": bovine_id}

@app.get("/bovines/{bovine_id}/estimate")
def bovine_estimate(bovine_id: int, db: Session = Depends(get_db)):
    bovine = get_bovine_or_404(db, bovine_id)
    member = evaluate_herd([animal_record(bovine)], config=ANALYTICS_CONFIG)[0]
    return {
        "id": bovine.id,
        "name": bovine.name,
        "age_years": round(member.age_years, 2),
        "recorded_weight": bovine.weight,
        "effective_weight": member.weight,
        "estimated": member.estimated,
        "milk_liters_per_day": daily_milk(member, ANALYTICS_CONFIG),
    }

# ---------------------------
# Vaccines
# ---------------------------
@app.get("/vaccines")
def list_vaccines(db: Session = Depends(get_db)):
    return [vaccine_out(v) for v in db.query(Vaccine).order_by(Vaccine.vaccine_date, Vaccine.id).all()]

@app.get("/vaccines/bovine/{bovine_id}")
def bovine_vaccines(bovine_id: int, db: Session = Depends(get_db)):
    get_bovine_or_404(db, bovine_id)
    recs = (
        db.query(Vaccine)
        .filter(Vaccine.bovine_id == bovine_id)
        .order_by(Vaccine.vaccine_date)
        .all()
    )
    return [vaccine_out(v) for v in recs]

@app.post("/vaccines")
def create_vaccine(payload: VaccineCreate, db: Session = Depends(get_db)):
    bovine = db.query(Bovine).filter(Bovine.id == payload.bovine_id).first()
    if not bovine:
        raise HTTPException(status_code=400, detail="Bovine not found. Create bovine first.")

    vaccine = Vaccine(**payload.model_dump())
    db.add(vaccine)
    db.commit()
    db.refresh(vaccine)
    return vaccine_out(vaccine)

@app.get("/vaccines/{vaccine_id}")
def get_vaccine(vaccine_id: int, db: Session = Depends(get_db)):
    vaccine = db.query(Vaccine).filter(Vaccine.id == vaccine_id).first()
    if not vaccine:
        raise HTTPException(status_code=404, detail="Vaccine not found.")
    return vaccine_out(vaccine)

@app.put("/vaccines/{vaccine_id}")
def update_vaccine(vaccine_id: int, payload: VaccineCreate, db: Session = Depends(get_db)):
    vaccine = db.query(Vaccine).filter(Vaccine.id == vaccine_id).first()
    if not vaccine:
        raise HTTPException(status_code=404, detail="Vaccine not found.")
    if not db.query(Bovine).filter(Bovine.id == payload.bovine_id).first():
        raise HTTPException(status_code=400, detail="Bovine not found. Create bovine first.")

    for field, value in payload.model_dump().items():
        setattr(vaccine, field, value)
    db.commit()
    return vaccine_out(vaccine)

@app.delete("/vaccines/{vaccine_id}")
def delete_vaccine(vaccine_id: int, db: Session = Depends(get_db)):
    vaccine = db.query(Vaccine).filter(Vaccine.id == vaccine_id).first()
    if not vaccine:
        raise HTTPException(status_code=404, detail="Vaccine not found.")
    db.delete(vaccine)
    db.commit()
    return {"deleted": True, "id": vaccine_id}

# ---------------------------
# Production analytics
# ---------------------------
@app.get("/analytics/production")
def production_analytics(
    mode: ProductionMode = Query(default=ProductionMode.DAILY, description="daily, monthly or yearly"),
    db: Session = Depends(get_db),
):
    try:
        animals, vaccines, stables = load_herd_snapshot(db)
    except SQLAlchemyError:
        logger.exception("Could not load herd snapshot for analytics")
        return empty_report(mode)

    return build_production_report(animals, vaccines, stables, mode=mode, config=ANALYTICS_CONFIG)
