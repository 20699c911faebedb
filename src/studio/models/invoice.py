"""Invoice models - pending invoice items, exported invoices and counters."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Date, DateTime, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from src.studio.models.base import utc_now


class InvoiceProject(SQLModel, table=True):
    """Snapshot of a completed project waiting to be invoiced.

    Copied from the project at completion time and never linked back to it:
    deleting or editing the project leaves this row alone.
    """

    __tablename__ = "invoice_projects"
    __table_args__ = (
        Index("ix_invoice_projects_brand_added", "brand", "added_to_invoice_at"),
    )

    project_id: UUID = Field(primary_key=True)
    title: str = Field(max_length=200)
    brand: str = Field(max_length=50)
    type: str = Field(max_length=50)
    description: str = Field(max_length=5000)
    deadline: datetime = Field(sa_type=DateTime())
    priority: int
    status: str = Field(max_length=20)
    created_at: datetime = Field(sa_type=DateTime())
    files: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )
    invoice_price: Decimal = Field(max_digits=10, decimal_places=2)
    added_to_invoice_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())


class ExportedInvoice(SQLModel, table=True):
    """An invoice that has been generated. Only ``is_paid`` changes afterwards."""

    __tablename__ = "exported_invoices"
    __table_args__ = (
        Index("ix_exported_invoices_brand_exported", "brand", "exported_at"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    brand: str = Field(max_length=50)
    invoice_number: str = Field(max_length=20)
    file_name: str = Field(max_length=255)
    total_amount: Decimal = Field(max_digits=12, decimal_places=2)
    invoice_date: date = Field(sa_type=Date())
    exported_at: datetime = Field(default_factory=utc_now, sa_type=DateTime())
    is_paid: bool = Field(default=False)
    projects: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )


class InvoiceCounter(SQLModel, table=True):
    """Next invoice number to issue for a brand."""

    __tablename__ = "invoice_counters"

    brand: str = Field(max_length=50, primary_key=True)
    current_number: int = Field(default=1)
