"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.studio.api.dependencies.db import DBSession
from src.studio.repositories import (
    ExportedInvoiceRepository,
    InvoiceCounterRepository,
    InvoiceProjectRepository,
    ProjectRepository,
)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_invoice_project_repository(session: DBSession) -> InvoiceProjectRepository:
    return InvoiceProjectRepository(session)


def get_exported_invoice_repository(session: DBSession) -> ExportedInvoiceRepository:
    return ExportedInvoiceRepository(session)


def get_invoice_counter_repository(session: DBSession) -> InvoiceCounterRepository:
    return InvoiceCounterRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
InvoiceProjectRepo = Annotated[InvoiceProjectRepository, Depends(get_invoice_project_repository)]
ExportedInvoiceRepo = Annotated[
    ExportedInvoiceRepository, Depends(get_exported_invoice_repository)
]
InvoiceCounterRepo = Annotated[InvoiceCounterRepository, Depends(get_invoice_counter_repository)]
