"""Invoice schemas for API request/response."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from src.studio.models.enums import Brand


class InvoiceProjectRead(BaseModel):
    """A completed, priced project waiting on (or frozen into) an invoice."""

    project_id: UUID
    title: str
    brand: Brand
    type: str
    description: str
    deadline: datetime
    priority: int
    status: str
    created_at: datetime
    files: list[dict[str, Any]]
    invoice_price: Decimal
    added_to_invoice_at: datetime

    model_config = {"from_attributes": True}


class PendingInvoiceRead(BaseModel):
    """A brand's pending invoice collection with its running total."""

    brand: Brand
    projects: list[InvoiceProjectRead]
    total: Decimal


class BrandTotal(BaseModel):
    brand: Brand
    total: Decimal


class ExportedInvoiceRead(BaseModel):
    """Schema for reading an exported invoice and its frozen projects."""

    id: UUID
    brand: Brand
    invoice_number: str
    file_name: str
    total_amount: Decimal
    invoice_date: date
    exported_at: datetime
    is_paid: bool
    projects: list[InvoiceProjectRead]

    model_config = {"from_attributes": True}


class InvoiceCounterRead(BaseModel):
    brand: Brand
    next_number: int
