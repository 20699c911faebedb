"""Invoice service - pending collections, PDF export and exported history."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.studio.core.config import Settings, get_settings
from src.studio.core.exceptions import BackendError, EmptyInvoiceError, NotFoundError
from src.studio.core.logging import get_logger
from src.studio.models import Brand, ExportedInvoice, InvoiceProject
from src.studio.models.base import utc_now
from src.studio.repositories import (
    ExportedInvoiceRepository,
    InvoiceCounterRepository,
    InvoiceProjectRepository,
)
from src.studio.schemas.invoice import InvoiceProjectRead
from src.studio.services.invoice_pdf import (
    InvoiceDocument,
    InvoiceLine,
    format_invoice_number,
    render_invoice_pdf,
    to_cents,
)

logger = get_logger(__name__)


class InvoiceNumberCache:
    """Last known next invoice number per brand.

    Only consulted when the database counter can't be reached, so numbers
    it hands out are not guaranteed unique across processes.
    """

    def __init__(self) -> None:
        self._next: dict[Brand, int] = {}

    def peek(self, brand: Brand) -> int:
        return self._next.get(brand, 1)

    def remember(self, brand: Brand, next_number: int) -> None:
        self._next[brand] = next_number

    def claim(self, brand: Brand) -> int:
        number = self.peek(brand)
        self._next[brand] = number + 1
        return number


@dataclass(frozen=True)
class ExportResult:
    invoice: ExportedInvoice
    pdf: bytes


class InvoiceService:
    """Per-brand invoicing: pending items, export, and history."""

    def __init__(
        self,
        invoice_project_repo: InvoiceProjectRepository,
        exported_invoice_repo: ExportedInvoiceRepository,
        counter_repo: InvoiceCounterRepository,
        session: AsyncSession,
        number_cache: InvoiceNumberCache,
        settings: Settings | None = None,
    ):
        self.invoice_project_repo = invoice_project_repo
        self.exported_invoice_repo = exported_invoice_repo
        self.counter_repo = counter_repo
        self.session = session
        self.number_cache = number_cache
        self.settings = settings or get_settings()

    async def _commit(self, action: str) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to {action}", error=str(e))
            raise BackendError(f"Failed to {action}") from e

    # --- Pending invoice collection ---

    async def list_pending(self, brand: Brand) -> list[InvoiceProject]:
        return await self.invoice_project_repo.list_by_brand(brand)

    async def get_brand_total(self, brand: Brand) -> Decimal:
        """Sum of pending invoice prices for a brand (0.00 when empty)."""
        pending = await self.list_pending(brand)
        return to_cents(sum((p.invoice_price for p in pending), Decimal("0")))

    async def remove_from_pending(self, brand: Brand, project_id: UUID) -> None:
        """Take one project off a brand's pending invoice.

        The original project and exported invoices are untouched.
        """
        item = await self.invoice_project_repo.get_for_brand(brand, project_id)
        if item is None:
            raise NotFoundError(f"Project {project_id} is not on the {brand.value} invoice")
        await self.invoice_project_repo.delete(item)
        await self._commit("remove from invoice")
        logger.info("Removed from pending invoice", brand=brand.value, project_id=str(project_id))

    # --- Export ---

    async def _claim_invoice_number(self, brand: Brand) -> int:
        """Advance the brand's counter and return the number to print.

        The increment is committed on its own so the number is consumed even
        if the export fails later. If the counter can't be reached, the
        cached number is used instead.
        """
        try:
            number = await self.counter_repo.next_number(brand)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            number = self.number_cache.claim(brand)
            logger.warning(
                "Invoice counter unavailable, using cached invoice number",
                brand=brand.value,
                invoice_number=number,
                error=str(e),
            )
            return number

        self.number_cache.remember(brand, number + 1)
        return number

    def _document(
        self,
        brand: Brand,
        invoice_number: str,
        issued_on: date,
        projects: list[InvoiceProjectRead],
    ) -> InvoiceDocument:
        return InvoiceDocument(
            invoice_number=invoice_number,
            brand=brand,
            issued_on=issued_on,
            lines=[InvoiceLine(p.title, p.type, p.invoice_price) for p in projects],
            issuer_lines=self.settings.invoice_issuer_lines,
            payment_lines=self.settings.invoice_payment_lines,
        )

    async def export_invoice(self, brand: Brand, today: date | None = None) -> ExportResult:
        """Bundle all of a brand's pending projects into one invoice.

        Steps: claim a number, render the PDF, then save the exported
        invoice and remove the invoiced pending rows in one transaction.

        Raises:
            EmptyInvoiceError: If the brand has nothing pending
            BackendError: If saving the invoice fails. The claimed number
                stays consumed.
        """
        pending = await self.list_pending(brand)
        if not pending:
            raise EmptyInvoiceError(f"No projects to invoice for {brand.value}")

        # A failed counter claim rolls back and expires the loaded rows
        snapshot = [InvoiceProjectRead.model_validate(p) for p in pending]
        number = await self._claim_invoice_number(brand)
        invoice_number = format_invoice_number(number)
        exported_at = utc_now()
        issued_on = today or exported_at.date()

        document = self._document(brand, invoice_number, issued_on, snapshot)
        pdf = render_invoice_pdf(document)

        invoice = ExportedInvoice(
            brand=brand.value,
            invoice_number=invoice_number,
            file_name=document.file_name,
            total_amount=to_cents(document.total),
            invoice_date=issued_on,
            exported_at=exported_at,
            is_paid=False,
            projects=[p.model_dump(mode="json") for p in snapshot],
        )
        self.exported_invoice_repo.add(invoice)
        for item in pending:
            await self.invoice_project_repo.delete(item)

        try:
            await self._commit("save invoice")
        except BackendError:
            logger.error(
                "Invoice number consumed without a saved invoice",
                brand=brand.value,
                invoice_number=invoice_number,
            )
            raise

        logger.info(
            "Invoice exported",
            brand=brand.value,
            invoice_number=invoice_number,
            file_name=invoice.file_name,
            total_amount=str(invoice.total_amount),
            project_count=len(snapshot),
        )
        return ExportResult(invoice=invoice, pdf=pdf)

    # --- History ---

    async def list_history(self, brand: Brand) -> list[ExportedInvoice]:
        return await self.exported_invoice_repo.list_by_brand(brand)

    async def get_exported(self, brand: Brand, invoice_id: UUID) -> ExportedInvoice:
        invoice = await self.exported_invoice_repo.get_for_brand(brand, invoice_id)
        if invoice is None:
            raise NotFoundError(f"Invoice {invoice_id} not found for {brand.value}")
        return invoice

    async def toggle_paid(self, brand: Brand, invoice_id: UUID) -> ExportedInvoice:
        """Flip the paid flag on one exported invoice."""
        invoice = await self.get_exported(brand, invoice_id)
        invoice.is_paid = not invoice.is_paid
        await self._commit("update payment status")
        logger.info(
            "Invoice payment status updated",
            brand=brand.value,
            invoice_number=invoice.invoice_number,
            is_paid=invoice.is_paid,
        )
        return invoice

    async def clear_history(self, brand: Brand) -> int:
        """Delete a brand's exported invoices. Pending items are kept."""
        deleted = await self.exported_invoice_repo.delete_by_brand(brand)
        await self._commit("clear invoice history")
        logger.info("Invoice history cleared", brand=brand.value, deleted=deleted)
        return deleted

    async def render_exported(self, brand: Brand, invoice_id: UUID) -> ExportResult:
        """Re-render an exported invoice's PDF from its frozen snapshot."""
        invoice = await self.get_exported(brand, invoice_id)
        snapshot = [InvoiceProjectRead.model_validate(p) for p in invoice.projects]
        document = self._document(brand, invoice.invoice_number, invoice.invoice_date, snapshot)
        return ExportResult(invoice=invoice, pdf=render_invoice_pdf(document))

    # --- Counters ---

    async def list_counters(self) -> dict[Brand, int]:
        """Next invoice number per brand (1 for brands never invoiced)."""
        numbers = {brand: 1 for brand in Brand}
        for counter in await self.counter_repo.list_all():
            try:
                brand = Brand(counter.brand)
            except ValueError:
                logger.warning("Ignoring counter for unknown brand", brand=counter.brand)
                continue
            numbers[brand] = counter.current_number
            self.number_cache.remember(brand, counter.current_number)
        return numbers
