"""Project model - the work items shown on the dashboard."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, DateTime, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, SQLModel

from src.studio.models.base import utc_now
from src.studio.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """A flyer or promo video tracked from request to completion.

    ``files`` holds attachment metadata (see ``schemas.project.ProjectFile``).
    Reassign the list rather than mutating it in place so the change is
    flushed.
    """

    __tablename__ = "projects"
    __table_args__ = (
        Index("ix_projects_status_priority", "status", "priority"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=200)
    brand: str = Field(max_length=50, index=True)  # Brand value
    type: str = Field(max_length=50)  # ProjectType value
    description: str = Field(max_length=5000)
    deadline: datetime = Field(sa_type=DateTime())
    priority: int = Field(default=1)
    status: str = Field(default=ProjectStatus.PENDING.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(), index=True)
    files: list[dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSONB, nullable=False, server_default="[]"),
    )

    @property
    def is_active(self) -> bool:
        """Active projects are the ones still on the prioritized list."""
        return self.status != ProjectStatus.COMPLETED.value
