from __future__ import annotations

import random
from datetime import date, timedelta
from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from herd_analytics.db import Base, engine, SessionLocal
from herd_analytics.models import Bovine, Stable, Vaccine

random.seed(42)

VACCINE_TYPES = ["Aftosa", "Brucelosis", "Rabia", "Carbunco", "Clostridiosis", "IBR-DVB", "Leptospirosis"]

def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

def seed_stables(db: Session) -> list:
    rows = [
        ("North Barn", 40, "North paddock"),
        ("South Barn", 30, "South paddock"),
        ("Milking Parlor", 25, "Main yard"),
        ("Calf Pen", 20, "Main yard"),
        ("Feedlot A", 60, "East field"),
        ("Quarantine", 6, "West corner"),
    ]
    stables = []
    for name, limit, location in rows:
        s = Stable(name=name, limit=limit, location=location)
        db.add(s)
        stables.append(s)
    db.commit()
    return stables

def seed_demo_bovines(db: Session, stables: list):
    today = date.today()

    # Fixed demo animals (IDs you can reference during presentations)
    demo = [
        # A) Weighed Holstein cow, counts toward milk
        dict(name="DEMO-A-WEIGHED", breed="Holstein", gender="Female", years=4, weight=640.0, stable=2),
        # B) Never-weighed Angus cow, estimated from breed/age
        dict(name="DEMO-B-ESTIMATED", breed="Angus", gender="Female", years=3, weight=None, stable=0),
        # C) Young calf, low growth factor and no milk
        dict(name="DEMO-C-CALF", breed="Jersey", gender="Female", years=0, weight=None, stable=3),
        # D) Unknown breed bull, default profile
        dict(name="DEMO-D-UNKNOWN", breed="", gender="Male", years=6, weight=None, stable=4),
        # E) No birth date on file
        dict(name="DEMO-E-NODATE", breed="Brahman", gender="Macho", years=None, weight=None, stable=1),
    ]
    for d in demo:
        birth = None
        if d["years"] is not None:
            birth = today - relativedelta(years=d["years"], months=random.randint(1, 10))
        db.add(Bovine(
            name=d["name"],
            breed=d["breed"],
            gender=d["gender"],
            birth_date=birth,
            weight=d["weight"],
            stable_id=stables[d["stable"]].id,
        ))
    db.commit()

def seed_random_herd(db: Session, stables: list, n_bovines: int = 60, unweighed_share: float = 0.4):
    today = date.today()
    breeds = ["Holstein", "Holstein", "Jersey", "Brown Swiss", "Angus", "Brahman", "Simmental", "Criollo"]
    weight_ranges = {
        "Holstein": (520, 760),
        "Jersey": (360, 500),
        "Brown Swiss": (520, 720),
        "Angus": (480, 820),
        "Brahman": (450, 780),
        "Simmental": (560, 900),
        "Criollo": (350, 600),
    }

    herd_stables = stables[:5]
    for i in range(n_bovines):
        breed = random.choice(breeds)
        lo, hi = weight_ranges[breed]
        weighed = random.random() >= unweighed_share
        db.add(Bovine(
            name=f"BOV-{3000+i}",
            breed=breed,
            gender=random.choice(["Female", "Female", "Male"]),
            birth_date=today - relativedelta(years=random.randint(0, 9), months=random.randint(0, 11)),
            weight=round(random.uniform(lo, hi), 1) if weighed else None,
            stable_id=random.choice(herd_stables).id,
        ))
    db.commit()

def seed_vaccines(db: Session, days: int = 365):
    today = date.today()
    for bovine in db.query(Bovine).all():
        for _ in range(random.randint(0, 3)):
            vtype = random.choice(VACCINE_TYPES)
            db.add(Vaccine(
                bovine_id=bovine.id,
                name=f"{vtype} booster",
                vaccine_type=vtype,
                vaccine_date=today - timedelta(days=random.randint(0, days)),
            ))
    db.commit()

def main():
    reset_db()
    db = SessionLocal()
    try:
        stables = seed_stables(db)
        seed_demo_bovines(db, stables)
        seed_random_herd(db, stables, n_bovines=60)
        seed_vaccines(db)
        db.commit()
        print("Seed complete: stables, demo bovines, random herd and vaccinations created.")
        print("Demo bovines:")
        print("  DEMO-A-WEIGHED, DEMO-B-ESTIMATED, DEMO-C-CALF, DEMO-D-UNKNOWN, DEMO-E-NODATE")
    finally:
        db.close()

if __name__ == "__main__":
    main()
