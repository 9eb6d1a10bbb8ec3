from __future__ import annotations

from dataclasses import dataclass, field

from househelp.domain.entities.invoice import Invoice


@dataclass(frozen=True)
class ActionResult:
    success: bool
    id: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class PaymentResult:
    success: bool
    message: str
    transaction_id: str | None = None


@dataclass(frozen=True)
class InvoiceLookup:
    invoice: Invoice | None
    error: str | None = None


@dataclass(frozen=True)
class InvoiceList:
    invoices: list[Invoice] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class DownloadResult:
    success: bool
    file_path: str | None = None
    error: str | None = None
