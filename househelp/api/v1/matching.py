from fastapi import APIRouter, Depends, Query

from househelp.api.v1.schemas import MatchSearchSchema
from househelp.application.use_cases.matching import MatchingUseCase
from househelp.domain.entities.matching import MatchingCriteria
from househelp.wiring.dependencies import get_matching_use_case

router = APIRouter(prefix="/matching")


@router.post("/search")
async def search(req: MatchSearchSchema, uc: MatchingUseCase = Depends(get_matching_use_case)):
    criteria = MatchingCriteria(**req.model_dump(exclude={"limit"}))
    return await uc.find_matches(criteria, req.limit)


@router.get("/recommendations/{user_id}")
async def recommendations(
    user_id: str,
    limit: int = Query(default=5, ge=1, le=50),
    uc: MatchingUseCase = Depends(get_matching_use_case),
):
    return await uc.get_recommended_matches(user_id, limit)
