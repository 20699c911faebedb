"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import ProjectFactory, InvoiceProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.invoice import ExportedInvoiceFactory, InvoiceProjectFactory
from tests.factories.project import ProjectFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid",
    "utc_now",
    # Projects
    "ProjectFactory",
    # Invoices
    "ExportedInvoiceFactory",
    "InvoiceProjectFactory",
]
