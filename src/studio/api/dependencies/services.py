"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from src.studio.api.dependencies.db import DBSession
from src.studio.api.dependencies.repositories import (
    ExportedInvoiceRepo,
    InvoiceCounterRepo,
    InvoiceProjectRepo,
    ProjectRepo,
)
from src.studio.core.config import get_settings
from src.studio.services.file_storage import get_file_storage
from src.studio.services.invoice_service import InvoiceNumberCache, InvoiceService
from src.studio.services.project_service import ProjectService


def get_project_service(
    project_repo: ProjectRepo,
    invoice_project_repo: InvoiceProjectRepo,
    session: DBSession,
) -> ProjectService:
    """Get project service with local attachment storage."""
    return ProjectService(project_repo, invoice_project_repo, session, get_file_storage())


def get_invoice_number_cache(request: Request) -> InvoiceNumberCache:
    """Process-wide fallback invoice numbers, created at app startup."""
    return request.app.state.invoice_numbers


def get_invoice_service(
    invoice_project_repo: InvoiceProjectRepo,
    exported_invoice_repo: ExportedInvoiceRepo,
    counter_repo: InvoiceCounterRepo,
    session: DBSession,
    number_cache: Annotated[InvoiceNumberCache, Depends(get_invoice_number_cache)],
) -> InvoiceService:
    """Get invoice service."""
    return InvoiceService(
        invoice_project_repo,
        exported_invoice_repo,
        counter_repo,
        session,
        number_cache,
        get_settings(),
    )


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
InvoiceServiceDep = Annotated[InvoiceService, Depends(get_invoice_service)]
