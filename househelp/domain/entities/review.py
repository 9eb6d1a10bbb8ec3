from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Review:
    id: str
    booking_id: str
    reviewer_id: str
    reviewee_id: str
    rating: int
    is_worker_review: bool
    status: str  # "pending", "published", "rejected", "flagged"
    created_at: str
    updated_at: str
    comment: str | None = None
    reviewer_name: str | None = None
    reviewer_image: str | None = None


@dataclass(frozen=True)
class ReviewResponse:
    id: str
    review_id: str
    responder_id: str
    response: str
    created_at: str
    updated_at: str
    responder_name: str | None = None


@dataclass(frozen=True)
class UserRating:
    average_rating: float = 0.0
    total_reviews: int = 0
