from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from househelp.application.exceptions import BackendError
from househelp.application.ports.backend import BackendPort, TableQuery
from househelp.application.ports.file_downloader import FileDownloaderPort
from househelp.application.utils.rows import entities_from_rows, entity_from_row
from househelp.domain.entities.invoice import Invoice, InvoiceItem, InvoiceLine, InvoiceStatus
from househelp.domain.entities.result import ActionResult, DownloadResult, InvoiceList, InvoiceLookup

_INVOICE_COLUMNS = "*,items:invoice_items(*)"


@dataclass(frozen=True)
class InvoiceTotals:
    items: list[dict[str, Any]]
    subtotal: float
    tax_amount: float
    total_amount: float


def compute_invoice_totals(lines: list[InvoiceLine]) -> InvoiceTotals:
    """Line amount is quantity x unit price; tax is charged per line at its own rate."""
    subtotal = 0.0
    total_tax = 0.0
    items: list[dict[str, Any]] = []
    for line in lines:
        amount = line.quantity * line.unit_price
        subtotal += amount
        tax_amount = amount * (line.tax_rate / 100) if line.tax_rate else 0.0
        total_tax += tax_amount
        items.append(
            {
                "description": line.description,
                "quantity": line.quantity,
                "unit_price": line.unit_price,
                "amount": amount,
                "tax_rate": line.tax_rate or 0,
                "tax_amount": tax_amount,
            }
        )
    return InvoiceTotals(items=items, subtotal=subtotal, tax_amount=total_tax, total_amount=subtotal + total_tax)


class InvoiceUseCase:
    def __init__(
        self,
        backend: BackendPort,
        downloader: FileDownloaderPort,
        download_dir: str | Path = "./data/invoices",
    ) -> None:
        self._backend = backend
        self._downloader = downloader
        self._download_dir = Path(download_dir)
        self._logger = logging.getLogger(__name__)

    async def generate_invoice(
        self,
        booking_id: str,
        worker_id: str,
        user_id: str,
        lines: list[InvoiceLine],
        notes: str | None = None,
    ) -> ActionResult:
        if not lines:
            raise ValueError("An invoice needs at least one item")

        totals = compute_invoice_totals(lines)
        try:
            invoice_id = await self._backend.rpc(
                "generate_invoice",
                {
                    "booking_id_param": booking_id,
                    "worker_id_param": worker_id,
                    "user_id_param": user_id,
                    "amount_param": totals.subtotal,
                    "tax_amount_param": totals.tax_amount,
                    "total_amount_param": totals.total_amount,
                    "notes_param": notes,
                    "items_param": totals.items,
                },
            )
        except BackendError as e:
            self._logger.error("Error generating invoice", extra={"booking_id": booking_id, "error": str(e)})
            return ActionResult(success=False, error="Failed to generate invoice")

        invoice_id = str(invoice_id)
        await self._generate_invoice_pdf(invoice_id)
        self._logger.info("Invoice generated", extra={"invoice_id": invoice_id, "booking_id": booking_id})
        return ActionResult(success=True, id=invoice_id)

    async def _generate_invoice_pdf(self, invoice_id: str) -> None:
        try:
            await self._backend.rpc("generate_invoice_pdf", {"invoice_id_param": invoice_id})
        except BackendError as e:
            self._logger.error("Error generating invoice PDF", extra={"invoice_id": invoice_id, "error": str(e)})

    async def get_invoice_details(self, invoice_id: str) -> InvoiceLookup:
        try:
            row = await self._backend.select_one(
                "invoices", TableQuery(eq={"id": invoice_id}), columns=_INVOICE_COLUMNS
            )
            return InvoiceLookup(invoice=_invoice_from_row(row))
        except BackendError as e:
            self._logger.error("Error getting invoice details", extra={"invoice_id": invoice_id, "error": str(e)})
            return InvoiceLookup(invoice=None, error="Failed to get invoice details")

    async def get_user_invoices(self, user_id: str, status: InvoiceStatus | str | None = None) -> InvoiceList:
        return await self._list_invoices("user_id", user_id, status)

    async def get_worker_invoices(self, worker_id: str, status: InvoiceStatus | str | None = None) -> InvoiceList:
        return await self._list_invoices("worker_id", worker_id, status)

    async def _list_invoices(self, column: str, owner_id: str, status: InvoiceStatus | str | None) -> InvoiceList:
        eq: dict[str, Any] = {column: owner_id}
        if status:
            eq["status"] = InvoiceStatus(status).value
        try:
            rows = await self._backend.select(
                "invoices",
                TableQuery(eq=eq, order=(("created_at", False),)),
                columns=_INVOICE_COLUMNS,
            )
            return InvoiceList(invoices=[_invoice_from_row(row) for row in rows or []])
        except BackendError as e:
            self._logger.error("Error getting invoices", extra={column: owner_id, "error": str(e)})
            return InvoiceList(invoices=[], error="Failed to get invoices")

    async def mark_invoice_as_paid(self, invoice_id: str) -> ActionResult:
        try:
            await self._backend.rpc("mark_invoice_paid", {"invoice_id_param": invoice_id})
            return ActionResult(success=True, id=invoice_id)
        except BackendError as e:
            self._logger.error("Error marking invoice as paid", extra={"invoice_id": invoice_id, "error": str(e)})
            return ActionResult(success=False, error="Failed to mark invoice as paid")

    async def download_invoice_pdf(self, invoice_id: str) -> DownloadResult:
        try:
            row = await self._backend.select_one(
                "invoices", TableQuery(eq={"id": invoice_id}), columns="pdf_url,invoice_number"
            )
            pdf_url = row.get("pdf_url")
            if not pdf_url:
                self._logger.error("Invoice PDF not available", extra={"invoice_id": invoice_id})
                return DownloadResult(success=False, error="Failed to download invoice PDF")

            destination = self._download_dir / f"invoice_{row.get('invoice_number')}.pdf"
            path = await self._downloader.download(pdf_url, destination)
            return DownloadResult(success=True, file_path=str(path))
        except (BackendError, OSError) as e:
            self._logger.error("Error downloading invoice PDF", extra={"invoice_id": invoice_id, "error": str(e)})
            return DownloadResult(success=False, error="Failed to download invoice PDF")


def _invoice_from_row(row: dict[str, Any]) -> Invoice:
    items = entities_from_rows(InvoiceItem, row.get("items") or [])
    return entity_from_row(Invoice, row, items=items)
