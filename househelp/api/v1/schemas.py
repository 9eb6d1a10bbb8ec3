from typing import Any

from pydantic import BaseModel, Field

from househelp.domain.entities.notification import NotificationType
from househelp.domain.entities.payment import PaymentProvider, PaymentType
from househelp.domain.entities.pricing import DiscountType


class PriceCalculationSchema(BaseModel):
    hourly_rate: float = Field(ge=0)
    hours: float = Field(default=0, ge=0)
    days: float = Field(default=0, ge=0)
    discount_percentage: float = Field(default=0, ge=0, le=100)


class PriceCalculationResponseSchema(BaseModel):
    total: float
    formatted_total: str


class DiscountedPriceSchema(BaseModel):
    original_price: float = Field(ge=0)
    discount_type: DiscountType
    discount_value: float = Field(ge=0)


class DiscountValidateSchema(BaseModel):
    code: str = Field(min_length=1)
    order_value: float = Field(ge=0)


class QuoteRequestSchema(BaseModel):
    service_type: str
    package_id: str | None = None
    worker_id: str | None = None
    hours: float = Field(default=0, ge=0)
    days: float = Field(default=0, ge=0)
    discount_code: str | None = None


class QuoteResponseSchema(BaseModel):
    package_id: str
    package_name: str
    hourly_rate: float
    total_hours: float
    subtotal: float
    total: float
    formatted_total: str
    discount_code_applied: bool
    discount_error: str | None = None
    checkout_enabled: bool


class LocationReadingSchema(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    accuracy: float | None = None


class NotificationCreateSchema(BaseModel):
    user_id: str
    title: str = Field(min_length=1)
    body: str = ""
    type: NotificationType = NotificationType.system
    data: dict[str, Any] | None = None


class MarkReadSchema(BaseModel):
    notification_ids: list[str] | None = None


class ReviewSubmitSchema(BaseModel):
    booking_id: str
    reviewer_id: str
    reviewee_id: str
    rating: int = Field(ge=1, le=5)
    comment: str = ""
    is_worker_review: bool = False


class ReviewRespondSchema(BaseModel):
    responder_id: str
    response: str = Field(min_length=1)


class ReviewReportSchema(BaseModel):
    reporter_id: str
    reason: str = Field(min_length=1)


class PaymentMethodCreateSchema(BaseModel):
    provider: PaymentProvider
    last_four: str | None = Field(default=None, min_length=4, max_length=4)
    expiry_month: int | None = Field(default=None, ge=1, le=12)
    expiry_year: int | None = None
    cardholder_name: str | None = None
    phone_number: str | None = None
    token_id: str | None = None
    set_default: bool = False


class WalletPaymentSchema(BaseModel):
    amount: float = Field(gt=0)
    description: str
    reference_id: str


class InitiatePaymentSchema(BaseModel):
    payment_method_id: str
    amount: float = Field(gt=0)
    booking_id: str
    payment_type: PaymentType = PaymentType.booking
    description: str = ""


class SetLanguageSchema(BaseModel):
    code: str = Field(min_length=2)
    user_id: str | None = None


class TranslateSchema(BaseModel):
    key: str
    namespace: str = "common"
    params: dict[str, str] = Field(default_factory=dict)


class InvoiceLineSchema(BaseModel):
    description: str
    quantity: float = Field(gt=0)
    unit_price: float = Field(ge=0)
    tax_rate: float | None = Field(default=None, ge=0, le=100)


class InvoiceCreateSchema(BaseModel):
    booking_id: str
    worker_id: str
    user_id: str
    items: list[InvoiceLineSchema] = Field(min_length=1)
    notes: str | None = None


class MatchSearchSchema(BaseModel):
    services: list[str] = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    radius_km: float = Field(gt=0)
    min_rating: float | None = Field(default=None, ge=0, le=5)
    languages: list[str] = Field(default_factory=list)
    max_hourly_rate: float | None = Field(default=None, ge=0)
    prioritize_experience: bool = False
    prioritize_rating: bool = False
    prioritize_price: bool = False
    limit: int = Field(default=10, ge=1, le=50)
