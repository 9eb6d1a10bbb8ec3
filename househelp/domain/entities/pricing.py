from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class DiscountType(str, Enum):
    percentage = "percentage"
    fixed = "fixed"


@dataclass(frozen=True)
class ServicePackage:
    id: str
    name: str
    description: str = ""
    is_active: bool = True


@dataclass(frozen=True)
class ServicePricing:
    service_type: str
    package_id: str
    package_name: str
    price_hourly: float
    price_daily: float | None = None
    price_weekly: float | None = None
    price_monthly: float | None = None
    min_hours: int = 1
    discount_percentage: float = 0.0


@dataclass(frozen=True)
class WorkerPricing:
    service_type: str
    price_hourly: float
    price_daily: float | None = None
    price_weekly: float | None = None
    price_monthly: float | None = None
    is_custom: bool = False


@dataclass(frozen=True)
class SubscriptionPlan:
    id: str
    name: str
    price_monthly: float
    description: str = ""
    price_yearly: float | None = None
    features: list[str] = field(default_factory=list)
    is_active: bool = True


@dataclass(frozen=True)
class UserSubscription:
    id: str
    user_id: str
    plan_id: str
    plan_name: str
    status: str  # "active", "canceled", "expired", "trial"
    start_date: str
    end_date: str | None = None
    is_auto_renew: bool = False


@dataclass(frozen=True)
class DiscountValidation:
    is_valid: bool
    discount_type: DiscountType | None = None
    discount_value: float | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class PriceQuote:
    hourly_rate: float
    hours: float
    days: float
    total_hours: float
    package_discount_percentage: float
    subtotal: float  # after package discount, before promo code
    total: float
    discount_code_applied: bool = False
    checkout_enabled: bool = True
