"""Invoice factories for test data generation."""

from datetime import date, timedelta
from decimal import Decimal

from polyfactory import Use

from src.studio.models import Brand, ExportedInvoice, InvoiceProject, ProjectStatus, ProjectType
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class InvoiceProjectFactory(BaseFactory):
    """Factory for pending invoice items."""

    __model__ = InvoiceProject

    project_id = Use(generate_uuid)
    title = Use(lambda: f"Promo {generate_uuid().hex[-6:]}")
    brand = Brand.WAMI_LIVE.value
    type = ProjectType.FLYER.value
    description = "Completed design work"
    deadline = Use(lambda: utc_now() + timedelta(days=3))
    priority = 1
    status = ProjectStatus.COMPLETED.value
    created_at = Use(utc_now)
    files = Use(list)
    invoice_price = Decimal("50.00")
    added_to_invoice_at = Use(utc_now)


class ExportedInvoiceFactory(BaseFactory):
    """Factory for exported invoice history rows."""

    __model__ = ExportedInvoice

    id = Use(generate_uuid)
    brand = Brand.WAMI_LIVE.value
    invoice_number = "001"
    file_name = "WAMI_LIVE_Invoice_1-01-26.pdf"
    total_amount = Decimal("50.00")
    invoice_date = date(2026, 1, 1)
    exported_at = Use(utc_now)
    is_paid = False
    projects = Use(list)
