from fastapi import APIRouter, Depends, HTTPException

from househelp.api.v1.schemas import InitiatePaymentSchema, PaymentMethodCreateSchema, WalletPaymentSchema
from househelp.application.use_cases.payments import PaymentUseCase
from househelp.domain.entities.payment import PaymentMethodDetails
from househelp.domain.entities.result import ActionResult, PaymentResult
from househelp.wiring.dependencies import get_payment_use_case

router = APIRouter(prefix="/payments")


@router.get("/users/{user_id}/methods")
async def payment_methods(user_id: str, uc: PaymentUseCase = Depends(get_payment_use_case)):
    return await uc.get_user_payment_methods(user_id)


@router.post("/users/{user_id}/methods")
async def add_payment_method(
    user_id: str,
    req: PaymentMethodCreateSchema,
    uc: PaymentUseCase = Depends(get_payment_use_case),
) -> ActionResult:
    details = PaymentMethodDetails(**req.model_dump(exclude={"provider"}))
    return await uc.add_payment_method(user_id, req.provider, details)


@router.put("/users/{user_id}/methods/{payment_method_id}/default")
async def set_default(
    user_id: str,
    payment_method_id: str,
    uc: PaymentUseCase = Depends(get_payment_use_case),
) -> dict[str, bool]:
    return {"success": await uc.set_default_payment_method(user_id, payment_method_id)}


@router.delete("/users/{user_id}/methods/{payment_method_id}")
async def remove_payment_method(
    user_id: str,
    payment_method_id: str,
    uc: PaymentUseCase = Depends(get_payment_use_case),
) -> dict[str, bool]:
    return {"success": await uc.remove_payment_method(user_id, payment_method_id)}


@router.get("/users/{user_id}/transactions")
async def transactions(user_id: str, uc: PaymentUseCase = Depends(get_payment_use_case)):
    return await uc.get_user_transactions(user_id)


@router.get("/users/{user_id}/wallet")
async def wallet(user_id: str, uc: PaymentUseCase = Depends(get_payment_use_case)):
    return {
        "balance": await uc.get_wallet_balance(user_id),
        "transactions": await uc.get_wallet_transactions(user_id),
    }


@router.post("/users/{user_id}/wallet/payments")
async def wallet_payment(
    user_id: str,
    req: WalletPaymentSchema,
    uc: PaymentUseCase = Depends(get_payment_use_case),
) -> PaymentResult:
    try:
        return await uc.process_wallet_payment(user_id, req.amount, req.description, req.reference_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/users/{user_id}/payments")
async def initiate_payment(
    user_id: str,
    req: InitiatePaymentSchema,
    uc: PaymentUseCase = Depends(get_payment_use_case),
) -> ActionResult:
    try:
        return await uc.initiate_payment(
            user_id=user_id,
            payment_method_id=req.payment_method_id,
            amount=req.amount,
            booking_id=req.booking_id,
            payment_type=req.payment_type,
            description=req.description,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
