from __future__ import annotations

import logging
from typing import Any

from househelp.application.exceptions import BackendError
from househelp.application.ports.backend import BackendPort
from househelp.application.utils.pricing_math import (
    HOURS_PER_DAY,
    calculate_discounted_price,
    calculate_total_price,
)
from househelp.domain.entities.pricing import (
    DiscountType,
    DiscountValidation,
    PriceQuote,
    ServicePricing,
)

INVALID_CODE_MESSAGE = "Invalid discount code"
VALIDATION_ERROR_MESSAGE = "Error validating discount code"


class DiscountUseCase:
    def __init__(self, backend: BackendPort, hours_per_day: int = HOURS_PER_DAY) -> None:
        self._backend = backend
        self._hours_per_day = hours_per_day
        self._logger = logging.getLogger(__name__)

    async def validate_discount_code(self, code: str, order_value: float) -> DiscountValidation:
        """
        Ask the backend whether code applies to an order of order_value.
        Expiry and usage caps are the backend's business; an empty answer means invalid.
        """
        code = (code or "").strip()
        if not code:
            raise ValueError("Please enter a discount code")

        try:
            rows = await self._backend.rpc(
                "validate_discount_code",
                {"code_param": code, "order_value_param": order_value},
            )
            if rows:
                return _validation_from_row(rows[0])
            return DiscountValidation(is_valid=False, error_message=INVALID_CODE_MESSAGE)
        except (BackendError, KeyError, TypeError, ValueError) as e:
            self._logger.error(
                "Error validating discount code", extra={"rpc": "validate_discount_code", "error": str(e)}
            )
            return DiscountValidation(is_valid=False, error_message=VALIDATION_ERROR_MESSAGE)

    def build_quote(
        self,
        pricing: ServicePricing,
        hours: float,
        days: float = 0,
        discount: DiscountValidation | None = None,
    ) -> PriceQuote:
        """
        Two stage pipeline: the package discount is applied inside the hourly total,
        then a validated promo code is applied to that discounted subtotal.
        """
        subtotal = calculate_total_price(
            pricing.price_hourly,
            hours,
            days,
            pricing.discount_percentage,
            hours_per_day=self._hours_per_day,
        )
        total = subtotal
        applied = False
        if discount and discount.is_valid and discount.discount_type and discount.discount_value:
            total = calculate_discounted_price(subtotal, discount.discount_type, discount.discount_value)
            applied = True

        return PriceQuote(
            hourly_rate=pricing.price_hourly,
            hours=hours,
            days=days,
            total_hours=hours + days * self._hours_per_day,
            package_discount_percentage=pricing.discount_percentage,
            subtotal=subtotal,
            total=total,
            discount_code_applied=applied,
            checkout_enabled=not (hours == 0 and days == 0),
        )

    async def quote_with_code(
        self,
        pricing: ServicePricing,
        hours: float,
        days: float,
        code: str,
    ) -> tuple[PriceQuote, DiscountValidation]:
        base = self.build_quote(pricing, hours, days)
        validation = await self.validate_discount_code(code, base.subtotal)
        if not validation.is_valid:
            self._logger.info("Discount code rejected", extra={"error": validation.error_message})
        return self.build_quote(pricing, hours, days, validation), validation


def _validation_from_row(row: dict[str, Any]) -> DiscountValidation:
    discount_type = row.get("discount_type")
    discount_value = row.get("discount_value")
    return DiscountValidation(
        is_valid=bool(row["is_valid"]),
        discount_type=DiscountType(discount_type) if discount_type else None,
        discount_value=float(discount_value) if discount_value is not None else None,
        error_message=row.get("error_message"),
    )
