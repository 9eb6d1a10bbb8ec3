from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PaymentProvider(str, Enum):
    mtn = "mtn"
    airtel = "airtel"
    card = "card"
    bank = "bank"


class PaymentType(str, Enum):
    booking = "booking"
    subscription = "subscription"
    deposit = "deposit"


@dataclass(frozen=True)
class PaymentMethod:
    id: str
    user_id: str
    provider: str
    created_at: str
    is_default: bool = False
    last_four: str | None = None
    expiry_month: int | None = None
    expiry_year: int | None = None
    cardholder_name: str | None = None
    phone_number: str | None = None


@dataclass(frozen=True)
class PaymentMethodDetails:
    last_four: str | None = None
    expiry_month: int | None = None
    expiry_year: int | None = None
    cardholder_name: str | None = None
    phone_number: str | None = None
    token_id: str | None = None
    set_default: bool = False


@dataclass(frozen=True)
class Transaction:
    id: str
    user_id: str
    amount: float
    currency: str
    status: str  # "pending", "processing", "completed", "failed", "refunded"
    payment_type: str
    created_at: str
    booking_id: str | None = None
    payment_method_id: str | None = None
    provider_transaction_id: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class Wallet:
    id: str
    user_id: str
    balance: float
    currency: str


@dataclass(frozen=True)
class WalletTransaction:
    id: str
    wallet_id: str
    amount: float
    type: str  # "deposit", "withdrawal", "payment", "refund"
    status: str  # "pending", "completed", "failed"
    created_at: str
    reference_id: str | None = None
    description: str | None = None
