"""Repository for Project entity."""

from sqlalchemy import delete, func
from sqlmodel import col, select

from src.studio.models import Project, ProjectStatus
from src.studio.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    """Repository for dashboard projects."""

    model = Project

    async def list_active(self) -> list[Project]:
        """Projects not yet Completed, in display order."""
        query = (
            select(Project)
            .where(Project.status != ProjectStatus.COMPLETED.value)
            .order_by(col(Project.priority), col(Project.created_at))
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_all(self) -> list[Project]:
        """Every project, Completed ones included, ordered by priority."""
        query = select(Project).order_by(col(Project.priority), col(Project.created_at))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def delete_completed(self) -> int:
        """Bulk-delete Completed projects. Returns the number removed."""
        result = await self.session.execute(
            delete(Project).where(col(Project.status) == ProjectStatus.COMPLETED.value)
        )
        return result.rowcount or 0

    async def count_by_status(self) -> dict[str, int]:
        """Map of status value to project count (absent statuses omitted)."""
        result = await self.session.execute(
            select(Project.status, func.count()).group_by(Project.status)
        )
        return {status: count for status, count in result.all()}
