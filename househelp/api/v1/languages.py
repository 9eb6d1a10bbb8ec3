from fastapi import APIRouter, Depends, HTTPException

from househelp.api.v1.schemas import SetLanguageSchema, TranslateSchema
from househelp.application.use_cases.language import LanguageUseCase
from househelp.wiring.dependencies import get_language_use_case

router = APIRouter(prefix="/languages")


@router.get("")
async def available_languages(uc: LanguageUseCase = Depends(get_language_use_case)):
    return await uc.get_available_languages()


@router.get("/current")
async def current_language(uc: LanguageUseCase = Depends(get_language_use_case)) -> dict[str, str]:
    if not uc.is_initialized:
        await uc.initialize()
    return {"code": uc.current_language}


@router.put("/current")
async def set_language(
    req: SetLanguageSchema,
    uc: LanguageUseCase = Depends(get_language_use_case),
) -> dict[str, str]:
    if not await uc.set_language(req.code, req.user_id):
        raise HTTPException(status_code=400, detail=f"Language {req.code} is not supported")
    return {"code": uc.current_language}


@router.post("/translate")
async def translate(req: TranslateSchema, uc: LanguageUseCase = Depends(get_language_use_case)) -> dict[str, str]:
    if not uc.is_initialized:
        await uc.initialize()
    return {"text": uc.translate(req.key, req.namespace, req.params)}
