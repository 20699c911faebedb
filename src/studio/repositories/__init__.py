"""Repository layer - data access abstraction."""

from src.studio.repositories.base import BaseRepository
from src.studio.repositories.invoice import (
    ExportedInvoiceRepository,
    InvoiceCounterRepository,
    InvoiceProjectRepository,
)
from src.studio.repositories.project import ProjectRepository

__all__ = [
    "BaseRepository",
    "ExportedInvoiceRepository",
    "InvoiceCounterRepository",
    "InvoiceProjectRepository",
    "ProjectRepository",
]
