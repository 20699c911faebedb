"""FastAPI dependency injection definitions.

Re-exports all dependencies so routers import from one place.
"""

from src.studio.api.dependencies.db import DBSession, get_db_session
from src.studio.api.dependencies.repositories import (
    ExportedInvoiceRepo,
    InvoiceCounterRepo,
    InvoiceProjectRepo,
    ProjectRepo,
    get_exported_invoice_repository,
    get_invoice_counter_repository,
    get_invoice_project_repository,
    get_project_repository,
)
from src.studio.api.dependencies.services import (
    InvoiceServiceDep,
    ProjectServiceDep,
    get_invoice_number_cache,
    get_invoice_service,
    get_project_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "ExportedInvoiceRepo",
    "InvoiceCounterRepo",
    "InvoiceProjectRepo",
    "ProjectRepo",
    "get_exported_invoice_repository",
    "get_invoice_counter_repository",
    "get_invoice_project_repository",
    "get_project_repository",
    # Services
    "InvoiceServiceDep",
    "ProjectServiceDep",
    "get_invoice_number_cache",
    "get_invoice_service",
    "get_project_service",
]
