"""Project endpoints - dashboard list, priorities, status changes and attachments."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, File, Query, UploadFile, status

from src.studio.api.dependencies import ProjectServiceDep
from src.studio.core.config import get_settings
from src.studio.core.exceptions import ValidationError
from src.studio.schemas import (
    CompletionRead,
    DeletedCount,
    InvoiceProjectRead,
    ProjectCompletion,
    ProjectCreate,
    ProjectOrder,
    ProjectRead,
    ProjectUpdate,
    StatusChange,
    StatusSummary,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="Active projects in priority order. Pass include_completed to list every project.",
)
async def list_projects(
    service: ProjectServiceDep,
    include_completed: Annotated[
        bool, Query(description="Include Completed projects")
    ] = False,
) -> list[ProjectRead]:
    projects = await service.list_projects(include_completed=include_completed)
    return [ProjectRead.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    description="Create a Pending project. Without a priority it is added to the end of the list.",
    responses={
        201: {"description": "Project created"},
        422: {"description": "Missing or invalid fields"},
    },
)
async def create_project(request: ProjectCreate, service: ProjectServiceDep) -> ProjectRead:
    project = await service.create_project(request)
    return ProjectRead.model_validate(project)


@router.get(
    "/summary",
    response_model=StatusSummary,
    summary="Status summary",
    description="Project counts per status and the completion percentage.",
)
async def get_status_summary(service: ProjectServiceDep) -> StatusSummary:
    return await service.get_status_summary()


@router.put(
    "/order",
    response_model=list[ProjectRead],
    summary="Reorder projects",
    description=(
        "Set the display order of active projects. The list must contain every "
        "active project id exactly once. Priorities become 1..N in list order."
    ),
    responses={
        200: {"description": "Projects in their new order"},
        422: {"description": "Ids don't match the active projects"},
        503: {"description": "Order could not be saved; reload the list"},
    },
)
async def reorder_projects(request: ProjectOrder, service: ProjectServiceDep) -> list[ProjectRead]:
    projects = await service.reorder_projects(request.project_ids)
    return [ProjectRead.model_validate(p) for p in projects]


@router.delete(
    "/completed",
    response_model=DeletedCount,
    summary="Clear completed projects",
    description="Delete every Completed project. Pending and exported invoices are kept.",
)
async def clear_completed(service: ProjectServiceDep) -> DeletedCount:
    deleted = await service.clear_completed()
    return DeletedCount(deleted=deleted)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(project_id: UUID, service: ProjectServiceDep) -> ProjectRead:
    project = await service.get_project(project_id)
    return ProjectRead.model_validate(project)


@router.put(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Replace a project's fields. Its status is unchanged.",
    responses={
        200: {"description": "Project updated"},
        404: {"description": "Project not found"},
        422: {"description": "Missing or invalid fields"},
    },
)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    service: ProjectServiceDep,
) -> ProjectRead:
    project = await service.update_project(project_id, request)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Permanently delete a project. Invoice records are not affected.",
    responses={
        204: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(project_id: UUID, service: ProjectServiceDep) -> None:
    await service.delete_project(project_id)


@router.patch(
    "/{project_id}/status",
    response_model=ProjectRead,
    summary="Change status",
    description="Change a project's status. Moving to Completed requires a price.",
    responses={
        200: {"description": "Status updated"},
        404: {"description": "Project not found"},
        422: {"description": "Missing or invalid price"},
    },
)
async def change_status(
    project_id: UUID,
    request: StatusChange,
    service: ProjectServiceDep,
) -> ProjectRead:
    project = await service.change_status(project_id, request.status, request.price)
    return ProjectRead.model_validate(project)


@router.post(
    "/{project_id}/complete",
    response_model=CompletionRead,
    summary="Complete project",
    description=(
        "Mark a project Completed and add it, with its price, to the brand's "
        "pending invoice."
    ),
    responses={
        200: {"description": "Project completed and added to the invoice"},
        404: {"description": "Project not found"},
        422: {"description": "Missing or invalid price, or already completed"},
        503: {"description": "Nothing was saved"},
    },
)
async def complete_project(
    project_id: UUID,
    request: ProjectCompletion,
    service: ProjectServiceDep,
) -> CompletionRead:
    project, invoice_project = await service.complete_project(project_id, request.price)
    return CompletionRead(
        project=ProjectRead.model_validate(project),
        invoice_project=InvoiceProjectRead.model_validate(invoice_project),
    )


@router.post(
    "/{project_id}/files",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Attach file",
    description="Upload a reference file (10MB max by default) and attach it to the project.",
    responses={
        201: {"description": "File attached"},
        404: {"description": "Project not found"},
        422: {"description": "File empty or too large"},
    },
)
async def attach_file(
    project_id: UUID,
    service: ProjectServiceDep,
    file: Annotated[UploadFile, File(description="File to attach")],
) -> ProjectRead:
    max_bytes = get_settings().max_upload_bytes
    # Read one byte past the limit so oversize uploads are detected without buffering them whole
    data = await file.read(max_bytes + 1)
    name = file.filename or "file"
    if len(data) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise ValidationError(f"File {name} is too large. Maximum size is {limit_mb}MB.")

    project = await service.attach_file(project_id, name, file.content_type, data)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}/files/{file_id}",
    response_model=ProjectRead,
    summary="Remove file",
    responses={
        200: {"description": "File removed"},
        404: {"description": "Project or file not found"},
    },
)
async def remove_file(project_id: UUID, file_id: str, service: ProjectServiceDep) -> ProjectRead:
    project = await service.remove_file(project_id, file_id)
    return ProjectRead.model_validate(project)
