"""Project schemas for API request/response."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.studio.models.enums import Brand, ProjectStatus, ProjectType
from src.studio.schemas.invoice import InvoiceProjectRead


class ProjectFile(BaseModel):
    """Attachment metadata stored alongside a project."""

    id: str
    name: str
    size: int = Field(ge=0)
    type: str = ""
    url: str
    uploaded_at: datetime


class ProjectFields(BaseModel):
    """Submission form fields shared by create and update.

    Every field is optional at the schema level so the service can report
    all missing fields together as one validation error.
    """

    title: str | None = Field(default=None, max_length=200)
    brand: Brand | None = None
    type: ProjectType | None = None
    description: str | None = Field(default=None, max_length=5000)
    deadline: datetime | None = None
    priority: int | None = None
    files: list[ProjectFile] = Field(default_factory=list)

    @field_validator("title", "description")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v


class ProjectCreate(ProjectFields):
    """Schema for creating a project. Priority defaults to the end of the list."""


class ProjectUpdate(ProjectFields):
    """Schema for updating a project. A missing priority keeps the current one."""


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    id: UUID
    title: str
    brand: Brand
    type: ProjectType
    description: str
    deadline: datetime
    priority: int
    status: ProjectStatus
    created_at: datetime
    files: list[ProjectFile]

    model_config = {"from_attributes": True}


class StatusChange(BaseModel):
    """Status change request. ``price`` is required when completing."""

    status: ProjectStatus
    price: Decimal | str | None = None


class ProjectCompletion(BaseModel):
    """Price entered when a project is marked Completed."""

    price: Decimal | str | None = None


class CompletionRead(BaseModel):
    """Result of a priced completion."""

    project: ProjectRead
    invoice_project: InvoiceProjectRead


class ProjectOrder(BaseModel):
    """Active project ids in their new display order."""

    project_ids: list[UUID]


class StatusSummary(BaseModel):
    """Project counts per status for the overview panel."""

    pending: int
    in_progress: int
    completed: int
    total: int
    completion_percentage: int


class DeletedCount(BaseModel):
    """Number of rows removed by a bulk delete."""

    deleted: int
