from fastapi import APIRouter, Depends, HTTPException

from househelp.api.v1.schemas import (
    DiscountedPriceSchema,
    DiscountValidateSchema,
    PriceCalculationResponseSchema,
    PriceCalculationSchema,
    QuoteRequestSchema,
    QuoteResponseSchema,
)
from househelp.application.use_cases.discounts import DiscountUseCase
from househelp.application.use_cases.pricing import PricingUseCase
from househelp.application.utils.pricing_math import format_amount
from househelp.wiring.dependencies import get_discount_use_case, get_pricing_use_case

router = APIRouter(prefix="/pricing")


@router.get("/packages")
async def list_packages(uc: PricingUseCase = Depends(get_pricing_use_case)):
    return await uc.get_service_packages()


@router.get("/services/{service_type}")
async def service_pricing(
    service_type: str,
    package_id: str | None = None,
    worker_id: str | None = None,
    uc: PricingUseCase = Depends(get_pricing_use_case),
):
    if worker_id:
        return await uc.get_pricing_options(service_type, worker_id)
    return await uc.get_service_pricing(service_type, package_id)


@router.get("/workers/{worker_id}")
async def worker_pricing(
    worker_id: str,
    service_type: str | None = None,
    uc: PricingUseCase = Depends(get_pricing_use_case),
):
    return await uc.get_worker_pricing(worker_id, service_type)


@router.get("/plans")
async def subscription_plans(uc: PricingUseCase = Depends(get_pricing_use_case)):
    return await uc.get_subscription_plans()


@router.get("/subscriptions/{user_id}")
async def user_subscription(user_id: str, uc: PricingUseCase = Depends(get_pricing_use_case)):
    subscription = await uc.get_user_subscription(user_id)
    if subscription is None:
        raise HTTPException(status_code=404, detail="No subscription")
    return subscription


@router.post("/calculate", response_model=PriceCalculationResponseSchema)
def calculate(req: PriceCalculationSchema, uc: PricingUseCase = Depends(get_pricing_use_case)):
    total = uc.calculate_total_price(req.hourly_rate, req.hours, req.days, req.discount_percentage)
    return PriceCalculationResponseSchema(total=total, formatted_total=format_amount(total))


@router.post("/discounted", response_model=PriceCalculationResponseSchema)
def discounted(req: DiscountedPriceSchema, uc: PricingUseCase = Depends(get_pricing_use_case)):
    total = uc.calculate_discounted_price(req.original_price, req.discount_type, req.discount_value)
    return PriceCalculationResponseSchema(total=total, formatted_total=format_amount(total))


@router.post("/discounts/validate")
async def validate_discount(req: DiscountValidateSchema, uc: DiscountUseCase = Depends(get_discount_use_case)):
    try:
        return await uc.validate_discount_code(req.code, req.order_value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/quote", response_model=QuoteResponseSchema)
async def quote(
    req: QuoteRequestSchema,
    pricing: PricingUseCase = Depends(get_pricing_use_case),
    discounts: DiscountUseCase = Depends(get_discount_use_case),
):
    options = await pricing.get_pricing_options(req.service_type, req.worker_id)
    if req.package_id:
        options = [o for o in options if o.package_id == req.package_id]
    if not options:
        raise HTTPException(status_code=404, detail="No pricing available for this service")
    selected = options[0]

    discount_error = None
    if req.discount_code:
        try:
            result, validation = await discounts.quote_with_code(selected, req.hours, req.days, req.discount_code)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        if not validation.is_valid:
            discount_error = validation.error_message or "This discount code cannot be applied"
    else:
        result = discounts.build_quote(selected, req.hours, req.days)

    return QuoteResponseSchema(
        package_id=selected.package_id,
        package_name=selected.package_name,
        hourly_rate=result.hourly_rate,
        total_hours=result.total_hours,
        subtotal=result.subtotal,
        total=result.total,
        formatted_total=format_amount(result.total),
        discount_code_applied=result.discount_code_applied,
        discount_error=discount_error,
        checkout_enabled=result.checkout_enabled,
    )
