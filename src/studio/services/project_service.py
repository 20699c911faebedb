"""Project lifecycle service - priorities, status changes and the completion gate."""

from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.studio.core.exceptions import BackendError, NotFoundError, ValidationError
from src.studio.core.logging import get_logger
from src.studio.models import InvoiceProject, Project, ProjectStatus
from src.studio.models.base import utc_now
from src.studio.repositories import InvoiceProjectRepository, ProjectRepository
from src.studio.schemas.project import ProjectFields, ProjectFile, StatusSummary
from src.studio.services.file_storage import FileStorage
from src.studio.services.invoice_pdf import to_cents

logger = get_logger(__name__)

REQUIRED_FIELDS = ("title", "brand", "type", "description", "deadline")
MAX_PRICE = Decimal("100000000")  # invoice_price is NUMERIC(10, 2)


def parse_price(raw: object) -> Decimal:
    """Parse a user-entered invoice price into a positive amount in cents.

    Raises:
        ValidationError: If the price is missing, not a number, not finite,
            not positive, or too large to store
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError("An invoice price is required to complete a project")
    if isinstance(raw, bool):
        raise ValidationError("Please enter a valid price")

    try:
        price = Decimal(str(raw).strip())
        if not price.is_finite():
            raise ValidationError("Please enter a valid price")
        price = to_cents(price)
    except InvalidOperation as e:
        raise ValidationError("Please enter a valid price") from e

    if price <= 0:
        raise ValidationError("Please enter a valid price")
    if price >= MAX_PRICE:
        raise ValidationError("Price is too large")
    return price


def _naive_utc(value: datetime) -> datetime:
    """Normalize to naive UTC to match TIMESTAMP WITHOUT TIME ZONE columns."""
    if value.tzinfo is not None:
        return value.astimezone(UTC).replace(tzinfo=None)
    return value


def _renumber(ordered: list[Project]) -> None:
    """Give projects priorities 1..N in list order."""
    for position, project in enumerate(ordered, start=1):
        if project.priority != position:
            project.priority = position


def _place(active: list[Project], project: Project, position: int) -> None:
    """Move ``project`` to 1-based ``position`` among ``active`` and renumber."""
    others = [p for p in active if p.id != project.id]
    index = min(max(position, 1), len(others) + 1) - 1
    others.insert(index, project)
    _renumber(others)


class ProjectService:
    """Business logic for dashboard projects.

    Keeps active (non-Completed) priorities a dense 1..N sequence matching
    display order after every mutation.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        invoice_project_repo: InvoiceProjectRepository,
        session: AsyncSession,
        file_storage: FileStorage | None = None,
    ):
        self.project_repo = project_repo
        self.invoice_project_repo = invoice_project_repo
        self.session = session
        self.file_storage = file_storage

    async def _commit(self, action: str) -> None:
        """Commit the unit of work, rolling back and raising BackendError on failure."""
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Failed to {action}", error=str(e))
            raise BackendError(f"Failed to {action}") from e

    @staticmethod
    def _require_fields(data: ProjectFields) -> None:
        missing = [name for name in REQUIRED_FIELDS if getattr(data, name) is None]
        if missing:
            raise ValidationError(f"Please fill in all fields. Missing: {', '.join(missing)}")
        if data.priority is not None and data.priority < 1:
            raise ValidationError("Priority must be a positive number")

    async def list_projects(self, include_completed: bool = False) -> list[Project]:
        """Active projects in priority order, or every project if requested."""
        if include_completed:
            return await self.project_repo.list_all()
        return await self.project_repo.list_active()

    async def get_project(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    async def create_project(self, data: ProjectFields) -> Project:
        """Create a Pending project.

        Without a priority the project goes to the end of the list; with one
        it is inserted at that position and the rest shift down.
        """
        self._require_fields(data)
        active = await self.project_repo.list_active()

        project = Project(
            title=data.title,
            brand=data.brand.value,
            type=data.type.value,
            description=data.description,
            deadline=_naive_utc(data.deadline),
            priority=len(active) + 1,
            status=ProjectStatus.PENDING.value,
            files=[f.model_dump(mode="json") for f in data.files],
        )
        position = data.priority if data.priority is not None else len(active) + 1
        _place(active, project, position)
        self.project_repo.add(project)
        await self._commit("create project")

        logger.info(
            "Project created",
            project_id=str(project.id),
            brand=project.brand,
            priority=project.priority,
        )
        return project

    async def update_project(self, project_id: UUID, data: ProjectFields) -> Project:
        """Replace a project's fields, keeping its status."""
        project = await self.get_project(project_id)
        self._require_fields(data)

        project.title = data.title
        project.brand = data.brand.value
        project.type = data.type.value
        project.description = data.description
        project.deadline = _naive_utc(data.deadline)
        project.files = [f.model_dump(mode="json") for f in data.files]

        if data.priority is not None and data.priority != project.priority:
            if project.is_active:
                active = await self.project_repo.list_active()
                _place(active, project, data.priority)
            else:
                project.priority = data.priority

        await self._commit("update project")
        logger.info("Project updated", project_id=str(project.id))
        return project

    async def change_status(
        self,
        project_id: UUID,
        status: ProjectStatus,
        price: object = None,
    ) -> Project:
        """Change a project's status.

        Completing goes through ``complete_project`` and needs a price.
        Leaving Completed puts the project back at the end of the active
        list; its invoice snapshot is left as is.
        """
        project = await self.get_project(project_id)
        if project.status == status.value:
            return project

        if status is ProjectStatus.COMPLETED:
            project, _ = await self.complete_project(project_id, price)
            return project

        if project.is_active:
            project.status = status.value
        else:
            active = await self.project_repo.list_active()
            project.status = status.value
            _place(active, project, len(active) + 1)

        await self._commit("update status")
        logger.info("Project status changed", project_id=str(project.id), status=status.value)
        return project

    async def complete_project(
        self, project_id: UUID, price: object
    ) -> tuple[Project, InvoiceProject]:
        """Mark a project Completed and add it to its brand's pending invoice.

        The status write and the invoice snapshot share one transaction, so
        either both persist or neither does.

        Raises:
            NotFoundError: If the project doesn't exist
            ValidationError: If the price is invalid or the project is already
                Completed or already waiting on an invoice
            BackendError: If the transaction fails
        """
        project = await self.get_project(project_id)
        invoice_price = parse_price(price)

        if not project.is_active:
            raise ValidationError(f"Project '{project.title}' is already completed")
        if await self.invoice_project_repo.get_by_id(project.id) is not None:
            raise ValidationError(f"Project '{project.title}' is already on a pending invoice")

        active = await self.project_repo.list_active()
        project.status = ProjectStatus.COMPLETED.value
        invoice_project = InvoiceProject(
            project_id=project.id,
            title=project.title,
            brand=project.brand,
            type=project.type,
            description=project.description,
            deadline=project.deadline,
            priority=project.priority,
            status=ProjectStatus.COMPLETED.value,
            created_at=project.created_at,
            files=list(project.files),
            invoice_price=invoice_price,
            added_to_invoice_at=utc_now(),
        )
        self.invoice_project_repo.add(invoice_project)
        _renumber([p for p in active if p.id != project.id])
        await self._commit("complete project")

        logger.info(
            "Project completed and added to invoice",
            project_id=str(project.id),
            brand=project.brand,
            invoice_price=str(invoice_price),
        )
        return project, invoice_project

    async def reorder_projects(self, project_ids: list[UUID]) -> list[Project]:
        """Apply a new display order to the active projects.

        All priorities are written in one transaction. If it fails nothing
        is kept and the caller should reload the list.

        Raises:
            ValidationError: If ``project_ids`` is not exactly the active ids
            BackendError: If the transaction fails
        """
        active = await self.project_repo.list_active()
        by_id = {p.id: p for p in active}
        if len(project_ids) != len(by_id) or set(project_ids) != set(by_id):
            raise ValidationError("Project order must list every active project exactly once")

        ordered = [by_id[project_id] for project_id in project_ids]
        _renumber(ordered)
        await self._commit("update project order")

        logger.info("Projects reordered", count=len(ordered))
        return ordered

    async def delete_project(self, project_id: UUID) -> None:
        """Permanently delete a project. Invoice snapshots are not affected."""
        project = await self.get_project(project_id)
        if project.is_active:
            active = await self.project_repo.list_active()
            _renumber([p for p in active if p.id != project.id])
        await self.project_repo.delete(project)
        await self._commit("delete project")
        logger.info("Project deleted", project_id=str(project_id))

    async def clear_completed(self) -> int:
        """Delete every Completed project. Invoice data is preserved."""
        deleted = await self.project_repo.delete_completed()
        await self._commit("clear completed projects")
        logger.info("Completed projects cleared", deleted=deleted)
        return deleted

    async def get_status_summary(self) -> StatusSummary:
        counts = await self.project_repo.count_by_status()
        pending = counts.get(ProjectStatus.PENDING.value, 0)
        in_progress = counts.get(ProjectStatus.IN_PROGRESS.value, 0)
        completed = counts.get(ProjectStatus.COMPLETED.value, 0)
        total = pending + in_progress + completed
        percentage = round(completed / total * 100) if total else 0
        return StatusSummary(
            pending=pending,
            in_progress=in_progress,
            completed=completed,
            total=total,
            completion_percentage=percentage,
        )

    def _storage(self) -> FileStorage:
        if self.file_storage is None:
            raise RuntimeError("ProjectService was created without file storage")
        return self.file_storage

    async def attach_file(
        self,
        project_id: UUID,
        name: str,
        content_type: str | None,
        data: bytes,
    ) -> Project:
        """Store an upload and append it to the project's files."""
        project = await self.get_project(project_id)
        storage = self._storage()
        stored = await storage.save(project_id, name, content_type, data)

        project.files = [*project.files, stored.model_dump(mode="json")]
        try:
            await self._commit("attach file")
        except BackendError:
            await storage.remove(project_id, stored)
            raise

        logger.info("File attached", project_id=str(project_id), file_id=stored.id)
        return project

    async def remove_file(self, project_id: UUID, file_id: str) -> Project:
        """Detach a file from a project and delete its stored copy."""
        project = await self.get_project(project_id)
        match = next((f for f in project.files if f.get("id") == file_id), None)
        if match is None:
            raise NotFoundError(f"File {file_id} not found on project {project_id}")

        project.files = [f for f in project.files if f.get("id") != file_id]
        await self._commit("remove file")
        await self._storage().remove(project.id, ProjectFile.model_validate(match))

        logger.info("File removed", project_id=str(project.id), file_id=file_id)
        return project
