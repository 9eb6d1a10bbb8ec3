import asyncio

import pytest

from househelp.application.use_cases.reviews import ReviewUseCase
from househelp.infrastructure.backend.memory_procedures import build_memory_backend


@pytest.fixture
def reviews_backend():
    return build_memory_backend(
        {
            "bookings": [
                {"id": "b1", "household_id": "h1", "worker_id": "w1", "status": "completed", "service_type": "cleaning"},
                {"id": "b2", "household_id": "h1", "worker_id": "w1", "status": "pending", "service_type": "cleaning"},
            ]
        }
    )


def _submit(uc, booking_id="b1", rating=5, reviewer="h1", reviewee="w1"):
    return asyncio.run(
        uc.submit_review(
            booking_id=booking_id,
            reviewer_id=reviewer,
            reviewee_id=reviewee,
            rating=rating,
            comment="Very thorough",
            is_worker_review=True,
        )
    )


def test_can_review_only_completed_bookings_between_parties(reviews_backend):
    uc = ReviewUseCase(reviews_backend)
    assert asyncio.run(uc.can_review_booking("b1", "h1", "w1"))
    assert asyncio.run(uc.can_review_booking("b1", "w1", "h1"))
    assert not asyncio.run(uc.can_review_booking("b2", "h1", "w1"))
    assert not asyncio.run(uc.can_review_booking("b1", "h1", "stranger"))


@pytest.mark.parametrize("rating", [0, 6])
def test_rating_out_of_range_is_rejected(reviews_backend, rating):
    result = _submit(ReviewUseCase(reviews_backend), rating=rating)
    assert not result.success
    assert result.error == "Rating must be between 1 and 5"
    assert reviews_backend.rpc_calls == []


def test_submit_publishes_once_per_booking(reviews_backend):
    uc = ReviewUseCase(reviews_backend)

    result = _submit(uc)
    assert result.success
    assert reviews_backend.rows("reviews")[0]["status"] == "published"

    again = _submit(uc)
    assert not again.success
    assert again.error == "You cannot review this booking"


def test_submit_reports_failure_on_insert_error(reviews_backend):
    reviews_backend.fail("reviews")
    result = _submit(ReviewUseCase(reviews_backend))
    assert not result.success
    assert result.error == "Failed to submit review"


def test_reviews_and_rating_for_reviewee(reviews_backend):
    uc = ReviewUseCase(reviews_backend)
    _submit(uc, rating=4)

    reviews = asyncio.run(uc.get_user_reviews("w1", True))
    assert len(reviews) == 1
    assert reviews[0].rating == 4
    assert reviews[0].comment == "Very thorough"
    assert asyncio.run(uc.get_user_reviews("w1", False)) == []

    rating = asyncio.run(uc.get_user_rating("w1"))
    assert rating.average_rating == 4.0
    assert rating.total_reviews == 1


def test_rating_defaults_to_zero(reviews_backend):
    uc = ReviewUseCase(reviews_backend)
    rating = asyncio.run(uc.get_user_rating("nobody"))
    assert (rating.average_rating, rating.total_reviews) == (0.0, 0)

    reviews_backend.fail("get_user_rating")
    rating = asyncio.run(uc.get_user_rating("w1"))
    assert (rating.average_rating, rating.total_reviews) == (0.0, 0)


def test_rating_accepts_single_row_list(reviews_backend):
    reviews_backend.register("get_user_rating", lambda db, params: [{"average_rating": 4.5, "total_reviews": 2}])
    rating = asyncio.run(ReviewUseCase(reviews_backend).get_user_rating("w1"))
    assert rating.average_rating == 4.5
    assert rating.total_reviews == 2


def test_only_reviewee_can_respond(reviews_backend):
    uc = ReviewUseCase(reviews_backend)
    review_id = _submit(uc).id

    denied = asyncio.run(uc.respond_to_review(review_id, "h1", "Not mine to answer"))
    assert not denied.success
    assert denied.error == "You cannot respond to this review"


def test_second_response_replaces_the_first(reviews_backend):
    uc = ReviewUseCase(reviews_backend)
    review_id = _submit(uc).id

    first = asyncio.run(uc.respond_to_review(review_id, "w1", "Thank you"))
    second = asyncio.run(uc.respond_to_review(review_id, "w1", "Thank you so much"))

    assert first.success and second.success
    assert first.id == second.id
    responses = asyncio.run(uc.get_review_responses([review_id]))
    assert responses[review_id].response == "Thank you so much"
    assert len(reviews_backend.rows("review_responses")) == 1


def test_respond_to_missing_review_fails(reviews_backend):
    result = asyncio.run(ReviewUseCase(reviews_backend).respond_to_review("missing", "w1", "Hello"))
    assert not result.success
    assert result.error == "Failed to respond to review"


def test_review_responses_empty_input(reviews_backend):
    assert asyncio.run(ReviewUseCase(reviews_backend).get_review_responses([])) == {}


def test_report_is_queued_for_moderation(reviews_backend):
    uc = ReviewUseCase(reviews_backend)
    review_id = _submit(uc).id

    result = asyncio.run(uc.report_review(review_id, "w1", "Inaccurate"))
    assert result.success
    report = reviews_backend.rows("review_reports")[0]
    assert report["status"] == "pending"
    assert report["reason"] == "Inaccurate"
