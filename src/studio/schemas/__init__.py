"""Request/response schemas."""

from src.studio.schemas.invoice import (
    BrandTotal,
    ExportedInvoiceRead,
    InvoiceCounterRead,
    InvoiceProjectRead,
    PendingInvoiceRead,
)
from src.studio.schemas.project import (
    CompletionRead,
    DeletedCount,
    ProjectCompletion,
    ProjectCreate,
    ProjectFile,
    ProjectOrder,
    ProjectRead,
    ProjectUpdate,
    StatusChange,
    StatusSummary,
)

__all__ = [
    # Invoices
    "BrandTotal",
    "ExportedInvoiceRead",
    "InvoiceCounterRead",
    "InvoiceProjectRead",
    "PendingInvoiceRead",
    # Projects
    "CompletionRead",
    "DeletedCount",
    "ProjectCompletion",
    "ProjectCreate",
    "ProjectFile",
    "ProjectOrder",
    "ProjectRead",
    "ProjectUpdate",
    "StatusChange",
    "StatusSummary",
]
