"""Model exports.

Import from here: `from src.studio.models import Project, ExportedInvoice`
"""

from src.studio.models.enums import Brand, ProjectStatus, ProjectType
from src.studio.models.invoice import ExportedInvoice, InvoiceCounter, InvoiceProject
from src.studio.models.project import Project

__all__ = [
    # Enums
    "Brand",
    "ProjectStatus",
    "ProjectType",
    # Tables
    "ExportedInvoice",
    "InvoiceCounter",
    "InvoiceProject",
    "Project",
]
