from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from herd_analytics.db import get_db
from herd_analytics.main import app


def make_stable(client, name="North Barn", limit=10):
    r = client.post("/stables", json={"name": name, "limit": limit, "location": "North paddock"})
    assert r.status_code == 200, r.text
    return r.json()


def make_bovine(client, **overrides):
    payload = {
        "name": "Aurora",
        "gender": "Female",
        "breed": "Holstein",
        "birth_date": "2019-04-02",
        "weight": 600,
    }
    payload.update(overrides)
    r = client.post("/bovines", json=payload)
    assert r.status_code == 200, r.text
    return r.json()


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_create_stable_and_list_with_occupancy(client):
    stable = make_stable(client, limit=4)
    assert stable["occupancy"] == 0
    assert stable["capacity_status"] == "Empty"

    make_bovine(client, stable_id=stable["id"])
    make_bovine(client, name="Bessie", stable_id=stable["id"])

    r = client.get(f"/stables/{stable['id']}")
    assert r.status_code == 200
    data = r.json()
    assert data["occupancy"] == 2
    assert data["free_slots"] == 2
    assert data["occupancy_pct"] == 50.0
    assert data["capacity_status"] == "Moderate"

    lst = client.get("/stables").json()
    assert [s["name"] for s in lst] == ["North Barn"]

    herd = client.get(f"/stables/{stable['id']}/bovines").json()
    assert [b["name"] for b in herd] == ["Aurora", "Bessie"]


def test_duplicate_stable_name_conflicts(client):
    make_stable(client)
    r = client.post("/stables", json={"name": "North Barn", "limit": 3})
    assert r.status_code == 409


def test_stable_capacity_is_enforced(client):
    stable = make_stable(client, name="Quarantine", limit=1)
    make_bovine(client, stable_id=stable["id"])
    r = client.post("/bovines", json={"name": "Extra", "stable_id": stable["id"]})
    assert r.status_code == 409


def test_bovine_needs_existing_stable(client):
    r = client.post("/bovines", json={"name": "Lost", "stable_id": 99})
    assert r.status_code == 400


def test_cannot_delete_occupied_stable(client):
    stable = make_stable(client)
    bovine = make_bovine(client, stable_id=stable["id"])
    assert client.delete(f"/stables/{stable['id']}").status_code == 409

    assert client.delete(f"/bovines/{bovine['id']}").status_code == 200
    assert client.delete(f"/stables/{stable['id']}").status_code == 200
    assert client.get(f"/stables/{stable['id']}").status_code == 404


def test_update_bovine(client):
    bovine = make_bovine(client)
    r = client.put(f"/bovines/{bovine['id']}", json={"name": "Aurora II", "breed": "Jersey", "gender": "Female"})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["name"] == "Aurora II"
    assert data["weight"] is None

    assert client.get("/bovines/999").status_code == 404


def test_negative_weight_is_rejected(client):
    r = client.post("/bovines", json={"name": "Bad", "weight": -1})
    assert r.status_code == 422


def test_bovine_estimate(client):
    weighed = make_bovine(client)
    r = client.get(f"/bovines/{weighed['id']}/estimate")
    assert r.status_code == 200
    data = r.json()
    assert data["effective_weight"] == 600
    assert data["estimated"] is False
    assert data["milk_liters_per_day"] == 25

    calf = make_bovine(client, name="Calf", birth_date=None, weight=None, gender="Male")
    data = client.get(f"/bovines/{calf['id']}/estimate").json()
    assert data["estimated"] is True
    assert data["age_years"] == 0
    assert data["milk_liters_per_day"] == 0
    assert data["effective_weight"] > 0


def test_vaccine_flow_and_cascade(client):
    bovine = make_bovine(client)
    r = client.post("/vaccines", json={
        "bovine_id": bovine["id"],
        "name": "Aftosa booster",
        "vaccine_type": "Aftosa",
        "vaccine_date": "2025-03-01",
    })
    assert r.status_code == 200, r.text
    vaccine = r.json()

    assert client.get(f"/vaccines/{vaccine['id']}").json()["vaccine_type"] == "Aftosa"
    assert len(client.get(f"/vaccines/bovine/{bovine['id']}").json()) == 1

    r = client.put(f"/vaccines/{vaccine['id']}", json={
        "bovine_id": bovine["id"],
        "name": "Rabies",
        "vaccine_type": "Rabia",
        "vaccine_date": "2025-04-01",
    })
    assert r.status_code == 200
    assert r.json()["vaccine_type"] == "Rabia"

    assert client.get("/summary").json() == {"total_bovines": 1, "total_vaccinations": 1, "total_stables": 0}
    client.delete(f"/bovines/{bovine['id']}")
    assert client.get("/summary").json()["total_vaccinations"] == 0


def test_vaccine_for_unknown_bovine(client):
    r = client.post("/vaccines", json={
        "bovine_id": 5,
        "name": "Aftosa booster",
        "vaccine_type": "Aftosa",
        "vaccine_date": "2025-03-01",
    })
    assert r.status_code == 400


def test_production_analytics_endpoint(client):
    stable = make_stable(client)
    make_bovine(client, stable_id=stable["id"])
    make_bovine(client, name="Bessie", birth_date="2020-01-01", stable_id=stable["id"])
    make_bovine(client, name="Toro", gender="Male", breed="Angus", weight=900)

    r = client.get("/analytics/production", params={"mode": "monthly"})
    assert r.status_code == 200, r.text
    report = r.json()
    assert report["mode"] == "monthly"
    assert report["meat_total"] == 2100
    assert report["average_weight"] == 700
    assert report["milk_production"] == 1500
    assert report["estimated_value"] == 9975
    assert report["stable_distribution"][0] == {"stable_id": stable["id"], "stable": "North Barn", "count": 2}
    assert {"stable_id": None, "stable": "Unassigned", "count": 1} in report["stable_distribution"]
    assert report["top_heaviest"][0]["name"] == "Toro"


def test_production_analytics_rejects_unknown_mode(client):
    assert client.get("/analytics/production", params={"mode": "weekly"}).status_code == 422


def test_production_analytics_empty_herd(client):
    report = client.get("/analytics/production").json()
    assert report["data_available"] is True
    assert report["meat_total"] == 0
    assert report["top_heaviest"] == []


def test_production_analytics_when_store_is_unavailable(client):
    # no tables in this database, so every query fails
    broken = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    BrokenSession = sessionmaker(bind=broken)

    def broken_db():
        db = BrokenSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = broken_db
    r = client.get("/analytics/production", params={"mode": "yearly"})
    assert r.status_code == 200
    report = r.json()
    assert report["data_available"] is False
    assert report["mode"] == "yearly"
    assert report["estimated_value"] == 0
    assert report["breed_distribution"] == []
