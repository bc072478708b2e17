from herd_analytics.services.distributions import (
    age_bucket,
    age_distribution,
    breed_distribution,
    gender_distribution,
    stable_distribution,
    vaccine_distribution,
)
from herd_analytics.services.records import AnimalRecord, StableRecord, VaccineRecord
from herd_analytics.services.weights import HerdMember


def member(id, weight, breed="Holstein", gender="Female", age=4.0, stable_id=None):
    return HerdMember(
        record=AnimalRecord(id=id, breed=breed, gender=gender, stable_id=stable_id),
        age_years=age,
        weight=weight,
        estimated=False,
    )


def test_breed_distribution_averages_and_counts():
    herd = [
        member(1, 600, "Holstein"),
        member(2, 700, "Holstein"),
        member(3, 500, "Angus"),
        member(4, 96, ""),
    ]
    rows = breed_distribution(herd)
    assert rows == [
        {"breed": "Holstein", "average_weight": 650, "count": 2, "percentage": 50.0},
        {"breed": "Angus", "average_weight": 500, "count": 1, "percentage": 25.0},
        {"breed": "Unknown", "average_weight": 96, "count": 1, "percentage": 25.0},
    ]
    assert sum(r["count"] for r in rows) == len(herd)


def test_breed_percentages_sum_to_hundred_within_rounding():
    herd = [member(1, 500, "A"), member(2, 500, "B"), member(3, 500, "C")]
    rows = breed_distribution(herd)
    assert abs(sum(r["percentage"] for r in rows) - 100.0) <= 0.2


def test_gender_distribution_uses_raw_labels():
    herd = [
        member(1, 500, gender="Female"),
        member(2, 500, gender="female"),
        member(3, 500, gender="Male"),
        member(4, 500, gender="Female"),
        member(5, 500, gender="  "),
    ]
    assert gender_distribution(herd) == [
        {"gender": "Female", "count": 2},
        {"gender": "female", "count": 1},
        {"gender": "Male", "count": 1},
        {"gender": "Unknown", "count": 1},
    ]


def test_age_buckets():
    assert age_bucket(0.0) == "0–1"
    assert age_bucket(0.99) == "0–1"
    assert age_bucket(1.0) == "1–2"
    assert age_bucket(2.0) == "2–5"
    assert age_bucket(4.99) == "2–5"
    assert age_bucket(5.0) == "5+"


def test_age_distribution_always_lists_four_buckets():
    herd = [member(1, 300, age=0.3), member(2, 300, age=0.7), member(3, 600, age=7.0)]
    assert age_distribution(herd) == [
        {"age_group": "0–1", "count": 2},
        {"age_group": "1–2", "count": 0},
        {"age_group": "2–5", "count": 0},
        {"age_group": "5+", "count": 1},
    ]
    assert age_distribution([]) == []


def test_stable_distribution_top_five_with_names_and_fallbacks():
    stables = [StableRecord(id=i, name=f"Barn {i}") for i in range(1, 7)]
    ids = [1, 2, 2, 3, 3, 3, 4, 5, 5, 6, 6, 99, None]
    herd = [member(i, 500, stable_id=s) for i, s in enumerate(ids)]

    rows = stable_distribution(herd, stables)
    assert len(rows) == 5
    assert [r["stable"] for r in rows] == ["Barn 3", "Barn 2", "Barn 5", "Barn 6", "Barn 1"]
    assert [r["count"] for r in rows] == [3, 2, 2, 2, 1]

    all_rows = stable_distribution(herd, stables, top_n=10)
    labels = {r["stable"] for r in all_rows}
    assert "Stable 99" in labels
    assert "Unassigned" in labels


def test_vaccine_distribution_top_five_stable_ties():
    types = ["Aftosa", "Rabia", "Aftosa", "Brucelosis", "", "Rabia", "IBR", "Carbunco", "Clostridiosis"]
    vaccines = [VaccineRecord(vaccine_type=t) for t in types]
    rows = vaccine_distribution(vaccines)
    assert rows == [
        {"type": "Aftosa", "count": 2},
        {"type": "Rabia", "count": 2},
        {"type": "Brucelosis", "count": 1},
        {"type": "Unknown", "count": 1},
        {"type": "IBR", "count": 1},
    ]


def test_distributions_do_not_mutate_inputs():
    herd = [member(2, 400, stable_id=1), member(1, 800, stable_id=1)]
    snapshot = list(herd)
    stables = [StableRecord(id=1, name="North")]
    breed_distribution(herd)
    stable_distribution(herd, stables)
    assert herd == snapshot
    assert stables == [StableRecord(id=1, name="North")]
