"""Invoice endpoints - per-brand pending items, PDF export and history."""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from src.studio.api.dependencies import InvoiceServiceDep
from src.studio.models import Brand
from src.studio.schemas import (
    BrandTotal,
    DeletedCount,
    ExportedInvoiceRead,
    InvoiceCounterRead,
    InvoiceProjectRead,
    PendingInvoiceRead,
)
from src.studio.services.invoice_service import ExportResult

router = APIRouter(prefix="/invoices", tags=["invoices"])


def _pdf_response(result: ExportResult, status_code: int = status.HTTP_200_OK) -> Response:
    return Response(
        content=result.pdf,
        status_code=status_code,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.invoice.file_name}"',
            "X-Invoice-Number": result.invoice.invoice_number,
        },
    )


@router.get(
    "/counters",
    response_model=list[InvoiceCounterRead],
    summary="Invoice counters",
    description="The next invoice number each brand will use.",
)
async def list_counters(service: InvoiceServiceDep) -> list[InvoiceCounterRead]:
    numbers = await service.list_counters()
    return [InvoiceCounterRead(brand=brand, next_number=n) for brand, n in numbers.items()]


@router.get(
    "/{brand}/pending",
    response_model=PendingInvoiceRead,
    summary="Pending invoice",
    description="Completed, priced projects waiting to be invoiced for a brand.",
)
async def list_pending(brand: Brand, service: InvoiceServiceDep) -> PendingInvoiceRead:
    projects = await service.list_pending(brand)
    total = await service.get_brand_total(brand)
    return PendingInvoiceRead(
        brand=brand,
        projects=[InvoiceProjectRead.model_validate(p) for p in projects],
        total=total,
    )


@router.get(
    "/{brand}/total",
    response_model=BrandTotal,
    summary="Pending total",
)
async def get_brand_total(brand: Brand, service: InvoiceServiceDep) -> BrandTotal:
    return BrandTotal(brand=brand, total=await service.get_brand_total(brand))


@router.delete(
    "/{brand}/pending/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove from invoice",
    description="Take a project off the brand's pending invoice. The project itself is kept.",
    responses={
        204: {"description": "Removed"},
        404: {"description": "Project is not on this brand's invoice"},
    },
)
async def remove_from_pending(brand: Brand, project_id: UUID, service: InvoiceServiceDep) -> None:
    await service.remove_from_pending(brand, project_id)


@router.post(
    "/{brand}/export",
    status_code=status.HTTP_201_CREATED,
    summary="Export invoice",
    description=(
        "Assign the next invoice number, render every pending project into a PDF, "
        "record it in history, and clear the pending list."
    ),
    response_class=Response,
    responses={
        201: {"content": {"application/pdf": {}}, "description": "Invoice PDF"},
        409: {"description": "No pending projects for this brand"},
        503: {"description": "Invoice could not be saved"},
    },
)
async def export_invoice(
    brand: Brand,
    service: InvoiceServiceDep,
    invoice_date: Annotated[
        date | None, Query(description="Date printed on the invoice (defaults to today, UTC)")
    ] = None,
) -> Response:
    result = await service.export_invoice(brand, today=invoice_date)
    return _pdf_response(result, status.HTTP_201_CREATED)


@router.get(
    "/{brand}/history",
    response_model=list[ExportedInvoiceRead],
    summary="Invoice history",
    description="A brand's exported invoices, newest first.",
)
async def list_history(brand: Brand, service: InvoiceServiceDep) -> list[ExportedInvoiceRead]:
    invoices = await service.list_history(brand)
    return [ExportedInvoiceRead.model_validate(i) for i in invoices]


@router.delete(
    "/{brand}/history",
    response_model=DeletedCount,
    summary="Clear invoice history",
    description="Delete a brand's exported invoices. Pending items are kept.",
)
async def clear_history(brand: Brand, service: InvoiceServiceDep) -> DeletedCount:
    return DeletedCount(deleted=await service.clear_history(brand))


@router.patch(
    "/{brand}/history/{invoice_id}/paid",
    response_model=ExportedInvoiceRead,
    summary="Toggle paid",
    responses={
        200: {"description": "Payment status flipped"},
        404: {"description": "Invoice not found for this brand"},
    },
)
async def toggle_paid(
    brand: Brand, invoice_id: UUID, service: InvoiceServiceDep
) -> ExportedInvoiceRead:
    invoice = await service.toggle_paid(brand, invoice_id)
    return ExportedInvoiceRead.model_validate(invoice)


@router.get(
    "/{brand}/history/{invoice_id}/pdf",
    summary="Download exported invoice",
    description="Re-render an exported invoice from its saved snapshot.",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Invoice PDF"},
        404: {"description": "Invoice not found for this brand"},
    },
)
async def download_invoice(brand: Brand, invoice_id: UUID, service: InvoiceServiceDep) -> Response:
    result = await service.render_exported(brand, invoice_id)
    return _pdf_response(result)
