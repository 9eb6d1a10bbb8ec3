import asyncio

import pytest

from househelp.application.use_cases.matching import MatchingUseCase, compatibility_score
from househelp.domain.entities.matching import MatchingCriteria, WorkerProfile
from househelp.infrastructure.backend.memory_procedures import build_memory_backend

KIGALI = (-1.9441, 30.0619)


def _criteria(**overrides):
    values = {"services": ["cleaning"], "latitude": KIGALI[0], "longitude": KIGALI[1], "radius_km": 10}
    values.update(overrides)
    return MatchingCriteria(**values)


def _worker(**overrides):
    values = {
        "id": "w",
        "services": ["cleaning", "cooking"],
        "rating": 5,
        "experience_years": 10,
        "hourly_rate": 1000,
        "languages": ["en"],
        "latitude": KIGALI[0],
        "longitude": KIGALI[1],
    }
    values.update(overrides)
    return WorkerProfile(**values)


def _profile(id, services, rating, lat_offset=0.0, experience_years=5):
    return {
        "id": id,
        "services": services,
        "languages": ["rw"],
        "rating": rating,
        "experience_years": experience_years,
        "hourly_rate": 2000,
        "location": {"latitude": KIGALI[0] + lat_offset, "longitude": KIGALI[1]},
    }


def test_default_weights_for_a_perfect_nearby_worker():
    # services 30 + distance 20 + rating 15 + experience 10
    assert compatibility_score(_worker(), _criteria(), 0) == pytest.approx(75)


def test_partial_matches_are_weighted():
    worker = _worker(services=["cleaning"], rating=4, experience_years=5, hourly_rate=1500, languages=["en"])
    criteria = _criteria(services=["cleaning", "cooking"], max_hourly_rate=2000, languages=["en", "fr"])

    # 15 services + 10 distance + 12 rating + 5 experience + 2.5 price + 7.5 languages
    assert compatibility_score(worker, criteria, 5) == pytest.approx(52)


def test_priorities_raise_weights_and_score_is_capped():
    criteria = _criteria(prioritize_rating=True, prioritize_experience=True)
    assert compatibility_score(_worker(), criteria, 0) == pytest.approx(100)

    criteria = _criteria(prioritize_rating=True, prioritize_experience=True, prioritize_price=True, max_hourly_rate=2000)
    assert compatibility_score(_worker(), criteria, 0) == 100


def test_experience_is_capped_at_ten_years():
    criteria = _criteria()
    assert compatibility_score(_worker(experience_years=25), criteria, 0) == compatibility_score(_worker(), criteria, 0)


def test_far_and_expensive_workers_score_nothing_for_distance_and_price():
    criteria = _criteria(max_hourly_rate=800)
    # services 30 + rating 15 + experience 10
    assert compatibility_score(_worker(hourly_rate=1200), criteria, 25) == pytest.approx(55)


def test_empty_service_list_does_not_divide_by_zero():
    assert compatibility_score(_worker(), _criteria(services=[]), 0) == pytest.approx(45)


def test_find_matches_sorts_by_score(backend):
    matches = asyncio.run(MatchingUseCase(backend).find_matches(_criteria()))

    assert [m.worker.id for m in matches] == ["w1", "w2"]
    assert matches[0].compatibility_score > matches[1].compatibility_score
    assert matches[0].distance_km < 1
    assert matches[1].worker.full_name == "Jean Habimana"


def test_find_matches_applies_filters_and_limit(backend):
    uc = MatchingUseCase(backend)

    assert [m.worker.id for m in asyncio.run(uc.find_matches(_criteria(radius_km=5)))] == ["w1"]
    assert [m.worker.id for m in asyncio.run(uc.find_matches(_criteria(min_rating=4.5)))] == ["w1"]
    assert [m.worker.id for m in asyncio.run(uc.find_matches(_criteria(languages=["fr"])))] == ["w2"]
    assert [m.worker.id for m in asyncio.run(uc.find_matches(_criteria(max_hourly_rate=2000)))] == ["w2"]
    assert [m.worker.id for m in asyncio.run(uc.find_matches(_criteria(), limit=1))] == ["w1"]


def test_find_matches_skips_workers_without_location():
    row = _profile("w9", ["cleaning"], 5.0)
    del row["location"]
    backend = build_memory_backend({"worker_profiles": [row]})
    assert asyncio.run(MatchingUseCase(backend).find_matches(_criteria())) == []


def test_find_matches_returns_empty_on_backend_error(backend):
    backend.fail("worker_profiles")
    assert asyncio.run(MatchingUseCase(backend).find_matches(_criteria())) == []


def test_recommendations_put_new_workers_first():
    backend = build_memory_backend(
        {
            "bookings": [
                {"id": "b1", "user_id": "u1", "services": ["cleaning"], "worker_id": "w1", "created_at": "2024-03-01"},
                {"id": "b2", "user_id": "u1", "services": ["cleaning", "cooking"], "worker_id": "w1", "created_at": "2024-03-02"},
                {"id": "b3", "user_id": "u1", "services": ["cooking"], "worker_id": None, "created_at": "2024-03-03"},
            ],
            "profiles": [{"id": "u1", "location": {"latitude": KIGALI[0], "longitude": KIGALI[1]}}],
            "worker_profiles": [
                _profile("w1", ["cleaning"], 4.9),
                _profile("w2", ["cooking"], 4.5, lat_offset=0.02),
                _profile("w3", ["cleaning"], 3.5),
                _profile("w4", ["cleaning"], 4.8, lat_offset=0.5),
            ],
        }
    )

    matches = asyncio.run(MatchingUseCase(backend).get_recommended_matches("u1"))

    assert [m.worker.id for m in matches] == ["w2", "w1"]
    assert matches[1].compatibility_score > matches[0].compatibility_score


def test_recommendations_without_bookings_fall_back_to_top_rated(backend):
    matches = asyncio.run(MatchingUseCase(backend).get_recommended_matches("newcomer"))

    assert [m.worker.id for m in matches] == ["w1", "w2"]
    assert [m.compatibility_score for m in matches] == [pytest.approx(96), pytest.approx(84)]
    assert all(m.distance_km == 0 for m in matches)


def test_recommendations_without_profile_are_empty():
    backend = build_memory_backend(
        {
            "bookings": [{"id": "b1", "user_id": "u1", "services": ["cleaning"], "worker_id": "w1"}],
            "worker_profiles": [_profile("w1", ["cleaning"], 4.9)],
        }
    )
    assert asyncio.run(MatchingUseCase(backend).get_recommended_matches("u1")) == []
