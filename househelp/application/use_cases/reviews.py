from __future__ import annotations

import logging
from datetime import datetime, timezone

from househelp.application.exceptions import BackendError
from househelp.application.ports.backend import BackendPort, TableQuery
from househelp.application.utils.rows import entity_from_row
from househelp.domain.entities.result import ActionResult
from househelp.domain.entities.review import Review, ReviewResponse, UserRating

MIN_RATING = 1
MAX_RATING = 5


class ReviewUseCase:
    def __init__(self, backend: BackendPort) -> None:
        self._backend = backend
        self._logger = logging.getLogger(__name__)

    async def get_user_reviews(self, user_id: str, is_worker_review: bool) -> list[Review]:
        """Published reviews about user_id, newest first."""
        try:
            rows = await self._backend.select(
                "reviews",
                TableQuery(
                    eq={"reviewee_id": user_id, "is_worker_review": is_worker_review, "status": "published"},
                    order=(("created_at", False),),
                ),
                columns="*,reviewer:reviewer_id(id,full_name,profile_image)",
            )
            reviews = []
            for row in rows or []:
                reviewer = row.get("reviewer") or {}
                reviews.append(
                    entity_from_row(
                        Review,
                        row,
                        reviewer_name=reviewer.get("full_name"),
                        reviewer_image=reviewer.get("profile_image"),
                    )
                )
            return reviews
        except BackendError as e:
            self._logger.error("Error fetching user reviews", extra={"user_id": user_id, "error": str(e)})
            return []

    async def get_review_responses(self, review_ids: list[str]) -> dict[str, ReviewResponse]:
        if not review_ids:
            return {}
        try:
            rows = await self._backend.select(
                "review_responses",
                TableQuery(in_={"review_id": list(review_ids)}),
                columns="*,responder:responder_id(id,full_name)",
            )
            responses: dict[str, ReviewResponse] = {}
            for row in rows or []:
                responder = row.get("responder") or {}
                response = entity_from_row(ReviewResponse, row, responder_name=responder.get("full_name"))
                responses[response.review_id] = response
            return responses
        except BackendError as e:
            self._logger.error("Error fetching review responses", extra={"error": str(e)})
            return {}

    async def get_user_rating(self, user_id: str) -> UserRating:
        try:
            data = await self._backend.rpc("get_user_rating", {"user_id_param": user_id})
            if isinstance(data, list):
                data = data[0] if data else None
            if data:
                return UserRating(
                    average_rating=float(data.get("average_rating") or 0),
                    total_reviews=int(data.get("total_reviews") or 0),
                )
            return UserRating()
        except (BackendError, AttributeError, TypeError, ValueError) as e:
            self._logger.error("Error fetching user rating", extra={"user_id": user_id, "error": str(e)})
            return UserRating()

    async def can_review_booking(self, booking_id: str, reviewer_id: str, reviewee_id: str) -> bool:
        try:
            data = await self._backend.rpc(
                "can_review_booking",
                {
                    "booking_id_param": booking_id,
                    "reviewer_id_param": reviewer_id,
                    "reviewee_id_param": reviewee_id,
                },
            )
            return bool(data)
        except BackendError as e:
            self._logger.error(
                "Error checking if user can review booking",
                extra={"booking_id": booking_id, "error": str(e)},
            )
            return False

    async def submit_review(
        self,
        booking_id: str,
        reviewer_id: str,
        reviewee_id: str,
        rating: int,
        comment: str,
        is_worker_review: bool,
    ) -> ActionResult:
        if not MIN_RATING <= rating <= MAX_RATING:
            return ActionResult(success=False, error=f"Rating must be between {MIN_RATING} and {MAX_RATING}")

        if not await self.can_review_booking(booking_id, reviewer_id, reviewee_id):
            return ActionResult(success=False, error="You cannot review this booking")

        try:
            row = await self._backend.insert(
                "reviews",
                {
                    "booking_id": booking_id,
                    "reviewer_id": reviewer_id,
                    "reviewee_id": reviewee_id,
                    "rating": rating,
                    "comment": comment,
                    "is_worker_review": is_worker_review,
                    # published immediately, no moderation queue yet
                    "status": "published",
                },
            )
            return ActionResult(success=True, id=str(row["id"]))
        except (BackendError, KeyError) as e:
            self._logger.error("Error submitting review", extra={"booking_id": booking_id, "error": str(e)})
            return ActionResult(success=False, error="Failed to submit review")

    async def respond_to_review(self, review_id: str, responder_id: str, response: str) -> ActionResult:
        """Only the reviewee may respond; a second response replaces the first."""
        try:
            review = await self._backend.select_one(
                "reviews", TableQuery(eq={"id": review_id}), columns="reviewee_id"
            )
            if review.get("reviewee_id") != responder_id:
                return ActionResult(success=False, error="You cannot respond to this review")

            existing = await self._backend.select_maybe_one(
                "review_responses", TableQuery(eq={"review_id": review_id}), columns="id"
            )
            if existing:
                await self._backend.update(
                    "review_responses",
                    {"response": response, "updated_at": datetime.now(timezone.utc).isoformat()},
                    TableQuery(eq={"id": existing["id"]}),
                )
                return ActionResult(success=True, id=str(existing["id"]))

            row = await self._backend.insert(
                "review_responses",
                {"review_id": review_id, "responder_id": responder_id, "response": response},
            )
            return ActionResult(success=True, id=str(row.get("id")) if row.get("id") else None)
        except BackendError as e:
            self._logger.error("Error responding to review", extra={"review_id": review_id, "error": str(e)})
            return ActionResult(success=False, error="Failed to respond to review")

    async def report_review(self, review_id: str, reporter_id: str, reason: str) -> ActionResult:
        try:
            row = await self._backend.insert(
                "review_reports",
                {"review_id": review_id, "reporter_id": reporter_id, "reason": reason, "status": "pending"},
            )
            return ActionResult(success=True, id=str(row.get("id")) if row.get("id") else None)
        except BackendError as e:
            self._logger.error("Error reporting review", extra={"review_id": review_id, "error": str(e)})
            return ActionResult(success=False, error="Failed to report review")
