"""Repositories for invoice tables."""

from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.dialects.postgresql import insert
from sqlmodel import col, select

from src.studio.models import Brand, ExportedInvoice, InvoiceCounter, InvoiceProject
from src.studio.repositories.base import BaseRepository


class InvoiceProjectRepository(BaseRepository[InvoiceProject]):
    """Pending invoice items, grouped by brand."""

    model = InvoiceProject

    async def list_by_brand(self, brand: Brand) -> list[InvoiceProject]:
        """Pending items for a brand, oldest first."""
        query = (
            select(InvoiceProject)
            .where(InvoiceProject.brand == brand.value)
            .order_by(col(InvoiceProject.added_to_invoice_at))
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_for_brand(self, brand: Brand, project_id: UUID) -> InvoiceProject | None:
        result = await self.session.execute(
            select(InvoiceProject).where(
                InvoiceProject.project_id == project_id,
                InvoiceProject.brand == brand.value,
            )
        )
        return result.scalar_one_or_none()


class ExportedInvoiceRepository(BaseRepository[ExportedInvoice]):
    """Exported invoice history."""

    model = ExportedInvoice

    async def list_by_brand(self, brand: Brand) -> list[ExportedInvoice]:
        """A brand's exported invoices, newest first."""
        query = (
            select(ExportedInvoice)
            .where(ExportedInvoice.brand == brand.value)
            .order_by(col(ExportedInvoice.exported_at).desc())
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_for_brand(self, brand: Brand, invoice_id: UUID) -> ExportedInvoice | None:
        result = await self.session.execute(
            select(ExportedInvoice).where(
                ExportedInvoice.id == invoice_id,
                ExportedInvoice.brand == brand.value,
            )
        )
        return result.scalar_one_or_none()

    async def delete_by_brand(self, brand: Brand) -> int:
        """Remove a brand's whole history. Returns the number removed."""
        result = await self.session.execute(
            delete(ExportedInvoice).where(col(ExportedInvoice.brand) == brand.value)
        )
        return result.rowcount or 0


class InvoiceCounterRepository(BaseRepository[InvoiceCounter]):
    """Per-brand invoice number sequences."""

    model = InvoiceCounter

    async def next_number(self, brand: Brand) -> int:
        """Claim the next invoice number for a brand.

        A single upsert statement both reads and advances the counter, so
        concurrent exports for one brand can never receive the same number.
        A brand without a row starts at 1.
        """
        stmt = insert(InvoiceCounter).values(brand=brand.value, current_number=2)
        stmt = stmt.on_conflict_do_update(
            index_elements=[InvoiceCounter.brand],
            set_={"current_number": InvoiceCounter.current_number + 1},
        ).returning(InvoiceCounter.current_number)
        result = await self.session.execute(stmt)
        return result.scalar_one() - 1

    async def list_all(self) -> list[InvoiceCounter]:
        result = await self.session.execute(select(InvoiceCounter))
        return list(result.scalars().all())
