from fastapi import APIRouter, Depends, Query

from househelp.api.v1.schemas import ReviewReportSchema, ReviewRespondSchema, ReviewSubmitSchema
from househelp.application.use_cases.reviews import ReviewUseCase
from househelp.domain.entities.result import ActionResult
from househelp.wiring.dependencies import get_review_use_case

router = APIRouter(prefix="/reviews")


@router.get("/users/{user_id}")
async def user_reviews(
    user_id: str,
    is_worker_review: bool = False,
    uc: ReviewUseCase = Depends(get_review_use_case),
):
    return await uc.get_user_reviews(user_id, is_worker_review)


@router.get("/users/{user_id}/rating")
async def user_rating(user_id: str, uc: ReviewUseCase = Depends(get_review_use_case)):
    return await uc.get_user_rating(user_id)


@router.get("/responses")
async def review_responses(
    review_ids: list[str] = Query(default=[]),
    uc: ReviewUseCase = Depends(get_review_use_case),
):
    return await uc.get_review_responses(review_ids)


@router.get("/eligibility")
async def can_review(
    booking_id: str,
    reviewer_id: str,
    reviewee_id: str,
    uc: ReviewUseCase = Depends(get_review_use_case),
) -> dict[str, bool]:
    return {"can_review": await uc.can_review_booking(booking_id, reviewer_id, reviewee_id)}


@router.post("")
async def submit_review(req: ReviewSubmitSchema, uc: ReviewUseCase = Depends(get_review_use_case)) -> ActionResult:
    return await uc.submit_review(
        booking_id=req.booking_id,
        reviewer_id=req.reviewer_id,
        reviewee_id=req.reviewee_id,
        rating=req.rating,
        comment=req.comment,
        is_worker_review=req.is_worker_review,
    )


@router.post("/{review_id}/responses")
async def respond(
    review_id: str,
    req: ReviewRespondSchema,
    uc: ReviewUseCase = Depends(get_review_use_case),
) -> ActionResult:
    return await uc.respond_to_review(review_id, req.responder_id, req.response)


@router.post("/{review_id}/reports")
async def report(
    review_id: str,
    req: ReviewReportSchema,
    uc: ReviewUseCase = Depends(get_review_use_case),
) -> ActionResult:
    return await uc.report_review(review_id, req.reporter_id, req.reason)
