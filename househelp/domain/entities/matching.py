from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WorkerProfile:
    id: str
    services: list[str] = field(default_factory=list)
    languages: list[str] = field(default_factory=list)
    rating: float = 0.0
    experience_years: float = 0
    hourly_rate: float = 0.0
    latitude: float | None = None
    longitude: float | None = None
    full_name: str | None = None


@dataclass(frozen=True)
class MatchingCriteria:
    services: list[str]
    latitude: float
    longitude: float
    radius_km: float
    min_rating: float | None = None
    languages: list[str] = field(default_factory=list)
    max_hourly_rate: float | None = None
    prioritize_experience: bool = False
    prioritize_rating: bool = False
    prioritize_price: bool = False


@dataclass(frozen=True)
class MatchResult:
    worker: WorkerProfile
    compatibility_score: float  # 0..100
    distance_km: float
