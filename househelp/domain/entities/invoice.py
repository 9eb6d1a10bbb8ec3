from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class InvoiceStatus(str, Enum):
    draft = "draft"
    sent = "sent"
    paid = "paid"
    overdue = "overdue"
    cancelled = "cancelled"


@dataclass(frozen=True)
class InvoiceItem:
    id: str
    invoice_id: str
    description: str
    quantity: float
    unit_price: float
    amount: float
    tax_rate: float = 0.0
    tax_amount: float = 0.0


@dataclass(frozen=True)
class InvoiceLine:
    """Line requested by the caller before amounts are computed."""

    description: str
    quantity: float
    unit_price: float
    tax_rate: float | None = None


@dataclass(frozen=True)
class Invoice:
    id: str
    user_id: str
    worker_id: str
    invoice_number: str
    amount: float
    currency: str
    tax_amount: float
    total_amount: float
    status: str
    due_date: str
    created_at: str
    updated_at: str
    booking_id: str | None = None
    paid_date: str | None = None
    notes: str | None = None
    pdf_url: str | None = None
    items: list[InvoiceItem] = field(default_factory=list)
