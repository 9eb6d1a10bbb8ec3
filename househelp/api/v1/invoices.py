from fastapi import APIRouter, Depends, HTTPException

from househelp.api.v1.schemas import InvoiceCreateSchema
from househelp.application.use_cases.invoices import InvoiceUseCase
from househelp.domain.entities.invoice import InvoiceLine, InvoiceStatus
from househelp.domain.entities.result import ActionResult, DownloadResult, InvoiceList
from househelp.wiring.dependencies import get_invoice_use_case

router = APIRouter(prefix="/invoices")


@router.post("")
async def generate_invoice(req: InvoiceCreateSchema, uc: InvoiceUseCase = Depends(get_invoice_use_case)) -> ActionResult:
    lines = [InvoiceLine(**item.model_dump()) for item in req.items]
    try:
        return await uc.generate_invoice(req.booking_id, req.worker_id, req.user_id, lines, req.notes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/users/{user_id}")
async def user_invoices(
    user_id: str,
    status: InvoiceStatus | None = None,
    uc: InvoiceUseCase = Depends(get_invoice_use_case),
) -> InvoiceList:
    return await uc.get_user_invoices(user_id, status)


@router.get("/workers/{worker_id}")
async def worker_invoices(
    worker_id: str,
    status: InvoiceStatus | None = None,
    uc: InvoiceUseCase = Depends(get_invoice_use_case),
) -> InvoiceList:
    return await uc.get_worker_invoices(worker_id, status)


@router.get("/{invoice_id}")
async def invoice_details(invoice_id: str, uc: InvoiceUseCase = Depends(get_invoice_use_case)):
    lookup = await uc.get_invoice_details(invoice_id)
    if lookup.invoice is None:
        raise HTTPException(status_code=404, detail=lookup.error or "Invoice not found")
    return lookup.invoice


@router.post("/{invoice_id}/paid")
async def mark_paid(invoice_id: str, uc: InvoiceUseCase = Depends(get_invoice_use_case)) -> ActionResult:
    return await uc.mark_invoice_as_paid(invoice_id)


@router.post("/{invoice_id}/download")
async def download(invoice_id: str, uc: InvoiceUseCase = Depends(get_invoice_use_case)) -> DownloadResult:
    return await uc.download_invoice_pdf(invoice_id)
