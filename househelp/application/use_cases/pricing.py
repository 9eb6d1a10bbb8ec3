from __future__ import annotations

import logging

from househelp.application.exceptions import BackendError, RecordNotFoundError
from househelp.application.ports.backend import BackendPort, TableQuery
from househelp.application.utils.pricing_math import (
    HOURS_PER_DAY,
    calculate_discounted_price,
    calculate_total_price,
)
from househelp.application.utils.rows import entities_from_rows, entity_from_row
from househelp.domain.entities.pricing import (
    DiscountType,
    ServicePackage,
    ServicePricing,
    SubscriptionPlan,
    UserSubscription,
    WorkerPricing,
)


class PricingUseCase:
    def __init__(self, backend: BackendPort, hours_per_day: int = HOURS_PER_DAY) -> None:
        self._backend = backend
        self._hours_per_day = hours_per_day
        self._logger = logging.getLogger(__name__)

    async def get_service_packages(self) -> list[ServicePackage]:
        try:
            rows = await self._backend.select(
                "service_packages",
                TableQuery(eq={"is_active": True}, order=(("name", True),)),
            )
            return entities_from_rows(ServicePackage, rows)
        except BackendError as e:
            self._logger.error("Error fetching service packages", extra={"error": str(e)})
            return []

    async def get_service_pricing(self, service_type: str, package_id: str | None = None) -> list[ServicePricing]:
        try:
            rows = await self._backend.rpc(
                "get_service_pricing",
                {"service_type_param": service_type, "package_id_param": package_id},
            )
            return entities_from_rows(ServicePricing, rows)
        except BackendError as e:
            self._logger.error(
                "Error fetching service pricing", extra={"rpc": "get_service_pricing", "error": str(e)}
            )
            return []

    async def get_worker_pricing(self, worker_id: str, service_type: str | None = None) -> list[WorkerPricing]:
        try:
            rows = await self._backend.rpc(
                "get_worker_pricing",
                {"worker_id_param": worker_id, "service_type_param": service_type},
            )
            return entities_from_rows(WorkerPricing, rows)
        except BackendError as e:
            self._logger.error(
                "Error fetching worker pricing", extra={"worker_id": worker_id, "error": str(e)}
            )
            return []

    async def get_pricing_options(self, service_type: str, worker_id: str | None = None) -> list[ServicePricing]:
        """
        Worker-specific rates when the worker has any, otherwise the standard packages.
        Worker rates carry no package discount and a one hour minimum.
        """
        if worker_id:
            worker_pricing = await self.get_worker_pricing(worker_id, service_type)
            if worker_pricing:
                return [
                    ServicePricing(
                        service_type=wp.service_type,
                        package_id="custom",
                        package_name="Custom" if wp.is_custom else "Standard",
                        price_hourly=wp.price_hourly,
                        price_daily=wp.price_daily,
                        price_weekly=wp.price_weekly,
                        price_monthly=wp.price_monthly,
                        min_hours=1,
                        discount_percentage=0,
                    )
                    for wp in worker_pricing
                ]
        return await self.get_service_pricing(service_type)

    async def get_subscription_plans(self) -> list[SubscriptionPlan]:
        try:
            rows = await self._backend.select(
                "subscription_plans",
                TableQuery(eq={"is_active": True}, order=(("price_monthly", True),)),
            )
            return entities_from_rows(SubscriptionPlan, rows)
        except BackendError as e:
            self._logger.error("Error fetching subscription plans", extra={"error": str(e)})
            return []

    async def get_user_subscription(self, user_id: str) -> UserSubscription | None:
        try:
            row = await self._backend.select_one(
                "user_subscriptions",
                TableQuery(eq={"user_id": user_id}),
                columns="id,user_id,plan_id,subscription_plans(name),status,start_date,end_date,is_auto_renew",
            )
        except RecordNotFoundError:
            return None
        except BackendError as e:
            self._logger.error("Error fetching user subscription", extra={"user_id": user_id, "error": str(e)})
            return None

        plan = row.get("subscription_plans") or {}
        try:
            return entity_from_row(UserSubscription, row, plan_name=plan.get("name", ""))
        except BackendError as e:
            self._logger.error("Error fetching user subscription", extra={"user_id": user_id, "error": str(e)})
            return None

    def calculate_total_price(
        self,
        hourly_rate: float,
        hours: float,
        days: float = 0,
        discount_percentage: float = 0,
    ) -> float:
        return calculate_total_price(
            hourly_rate, hours, days, discount_percentage, hours_per_day=self._hours_per_day
        )

    def calculate_discounted_price(
        self, original_price: float, discount_type: DiscountType | str, discount_value: float
    ) -> float:
        return calculate_discounted_price(original_price, discount_type, discount_value)
