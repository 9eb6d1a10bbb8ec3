from __future__ import annotations

import logging
from collections import Counter
from typing import Any

from househelp.application.exceptions import BackendError
from househelp.application.ports.backend import BackendPort, TableQuery
from househelp.application.utils.geo import haversine_distance
from househelp.application.utils.rows import entity_from_row
from househelp.domain.entities.matching import MatchingCriteria, MatchResult, WorkerProfile

SERVICE_WEIGHT = 30
DISTANCE_WEIGHT = 20
LANGUAGE_WEIGHT = 15
PRIORITY_WEIGHT = 25
RATING_WEIGHT = 15
EXPERIENCE_WEIGHT = 10
PRICE_WEIGHT = 10
EXPERIENCE_CAP_YEARS = 10
MAX_SCORE = 100

RECOMMENDATION_RADIUS_KM = 20
RECOMMENDATION_MIN_RATING = 4.0
RECENT_BOOKINGS = 10
TOP_SERVICES = 3


def distance_km(criteria: MatchingCriteria, worker: WorkerProfile) -> float:
    return haversine_distance(criteria.latitude, criteria.longitude, worker.latitude, worker.longitude) / 1000


def compatibility_score(worker: WorkerProfile, criteria: MatchingCriteria, distance: float) -> float:
    """
    Weighted 0..100 score of how well worker fits criteria; distance is in km.

    Services 30, distance 20 and languages 15 are fixed. Rating, experience and
    price weigh 25 when prioritised, otherwise 15, 10 and 10. Price only counts
    when a positive max hourly rate is given, languages only when some are asked for.
    """
    score = 0.0

    if criteria.services:
        matched = sum(1 for service in worker.services if service in criteria.services)
        score += matched / len(criteria.services) * SERVICE_WEIGHT

    if criteria.radius_km > 0:
        score += max(0.0, 1 - distance / criteria.radius_km) * DISTANCE_WEIGHT

    rating_weight = PRIORITY_WEIGHT if criteria.prioritize_rating else RATING_WEIGHT
    score += worker.rating / 5 * rating_weight

    experience_weight = PRIORITY_WEIGHT if criteria.prioritize_experience else EXPERIENCE_WEIGHT
    score += min(1.0, worker.experience_years / EXPERIENCE_CAP_YEARS) * experience_weight

    if criteria.max_hourly_rate and criteria.max_hourly_rate > 0:
        price_weight = PRIORITY_WEIGHT if criteria.prioritize_price else PRICE_WEIGHT
        score += max(0.0, 1 - worker.hourly_rate / criteria.max_hourly_rate) * price_weight

    if criteria.languages:
        matched = sum(1 for language in worker.languages if language in criteria.languages)
        score += matched / len(criteria.languages) * LANGUAGE_WEIGHT

    return min(MAX_SCORE, score)


def _is_candidate(worker: WorkerProfile, criteria: MatchingCriteria, distance: float) -> bool:
    if criteria.services and not set(worker.services) & set(criteria.services):
        return False
    if criteria.languages and not set(worker.languages) & set(criteria.languages):
        return False
    if criteria.min_rating is not None and worker.rating < criteria.min_rating:
        return False
    if criteria.max_hourly_rate is not None and worker.hourly_rate > criteria.max_hourly_rate:
        return False
    return distance <= criteria.radius_km


def _worker_from_row(row: dict[str, Any]) -> WorkerProfile:
    location = row.get("location")
    if not isinstance(location, dict):
        location = {}
    return entity_from_row(
        WorkerProfile,
        row,
        latitude=location.get("latitude", row.get("latitude")),
        longitude=location.get("longitude", row.get("longitude")),
    )


class MatchingUseCase:
    def __init__(self, backend: BackendPort) -> None:
        self._backend = backend
        self._logger = logging.getLogger(__name__)

    async def find_matches(self, criteria: MatchingCriteria, limit: int = 10) -> list[MatchResult]:
        """Workers within the search radius that fit criteria, best score first."""
        gte = {"rating": criteria.min_rating} if criteria.min_rating is not None else {}
        results = []
        try:
            rows = await self._backend.select("worker_profiles", TableQuery(gte=gte, order=(("rating", False),)))
            for row in rows or []:
                worker = _worker_from_row(row)
                if worker.latitude is None or worker.longitude is None:
                    continue
                distance = distance_km(criteria, worker)
                if _is_candidate(worker, criteria, distance):
                    results.append(MatchResult(worker, compatibility_score(worker, criteria, distance), distance))
        except BackendError as e:
            self._logger.error("Error finding matches", extra={"error": str(e)})
            return []

        results.sort(key=lambda r: r.compatibility_score, reverse=True)
        return results[:limit]

    async def get_recommended_matches(self, user_id: str, limit: int = 5) -> list[MatchResult]:
        """
        Matches built from the user's recent bookings: their most booked services
        around their profile location. Workers they have not booked before come first.
        Users without bookings get the top rated workers instead.
        """
        try:
            bookings = await self._backend.select(
                "bookings",
                TableQuery(eq={"user_id": user_id}, order=(("created_at", False),), limit=RECENT_BOOKINGS),
                columns="services,worker_id",
            )
            if not bookings:
                return await self._top_rated_workers(limit)

            frequency: Counter[str] = Counter()
            booked_workers = set()
            for booking in bookings:
                frequency.update(booking.get("services") or [])
                if booking.get("worker_id"):
                    booked_workers.add(booking["worker_id"])

            profile = await self._backend.select_one(
                "profiles", TableQuery(eq={"id": user_id}), columns="location"
            )
        except BackendError as e:
            self._logger.error("Error getting recommended matches", extra={"user_id": user_id, "error": str(e)})
            return []

        location = profile.get("location") or {}
        criteria = MatchingCriteria(
            services=[service for service, _ in frequency.most_common(TOP_SERVICES)],
            latitude=location.get("latitude") or 0,
            longitude=location.get("longitude") or 0,
            radius_km=RECOMMENDATION_RADIUS_KM,
            min_rating=RECOMMENDATION_MIN_RATING,
        )
        matches = await self.find_matches(criteria, limit)
        matches.sort(key=lambda m: (m.worker.id in booked_workers, -m.compatibility_score))
        return matches

    async def _top_rated_workers(self, limit: int) -> list[MatchResult]:
        try:
            rows = await self._backend.select(
                "worker_profiles",
                TableQuery(gte={"rating": RECOMMENDATION_MIN_RATING}, order=(("rating", False),), limit=limit),
            )
            workers = [_worker_from_row(row) for row in rows or []]
        except BackendError as e:
            self._logger.error("Error getting top rated workers", extra={"error": str(e)})
            return []
        # distance unknown without a search location
        return [MatchResult(worker, worker.rating * 20, 0.0) for worker in workers]
