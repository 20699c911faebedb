"""In-memory stand-ins for the session and repositories.

``FakeSession`` stages ``add``/``delete`` calls and applies them on commit,
so services can be exercised (rollbacks included) without PostgreSQL.
Attribute changes on loaded entities are plain object mutations, as with a
real session using ``expire_on_commit=False``.
"""

from collections import Counter, defaultdict
from collections.abc import Callable
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, make_transient_to_detached

from src.studio.models import (
    Brand,
    ExportedInvoice,
    InvoiceCounter,
    InvoiceProject,
    Project,
    ProjectStatus,
)

PRIMARY_KEYS: dict[type, str] = {InvoiceProject: "project_id", InvoiceCounter: "brand"}


def _pk(entity: Any) -> Any:
    identity = inspect(entity).identity
    if identity is not None:
        return identity[0]
    return getattr(entity, PRIMARY_KEYS.get(type(entity), "id"))


def db_error(message: str = "connection refused") -> OperationalError:
    """A driver-level failure like the ones asyncpg raises when Postgres is down."""
    return OperationalError("COMMIT", {}, Exception(message))


class FakeSession:
    """Unit of work over in-memory tables."""

    def __init__(self) -> None:
        self.tables: dict[type, dict[Any, Any]] = defaultdict(dict)
        self._added: list[Any] = []
        self._deleted: list[Any] = []
        self.commit_errors: list[Exception | None] = []
        self.commits = 0
        self.rollbacks = 0
        self.rollback_hooks: list[Callable[[], None]] = []

    def seed(self, *entities: Any) -> None:
        """Insert rows as already committed."""
        for entity in entities:
            self.tables[type(entity)][_pk(entity)] = entity

    def rows(self, model: type) -> list[Any]:
        return list(self.tables[model].values())

    def add(self, entity: Any) -> None:
        self._added.append(entity)

    async def delete(self, entity: Any) -> None:
        self._deleted.append(entity)

    def fail_next_commit(self, error: Exception | None = None, skip: int = 0) -> None:
        """Make a commit fail. ``skip`` lets that many commits succeed first."""
        self.commit_errors.extend([None] * skip)
        self.commit_errors.append(error or db_error())

    async def commit(self) -> None:
        error = self.commit_errors.pop(0) if self.commit_errors else None
        if error is not None:
            raise error
        for entity in self._added:
            self.tables[type(entity)][_pk(entity)] = entity
        for entity in self._deleted:
            self.tables[type(entity)].pop(_pk(entity), None)
        self._added.clear()
        self._deleted.clear()
        self.commits += 1

    async def rollback(self) -> None:
        self._added.clear()
        self._deleted.clear()
        self.rollbacks += 1
        for hook in self.rollback_hooks:
            hook()


class _FakeRepository:
    model: type

    def __init__(self, session: FakeSession):
        self.session = session

    async def get_by_id(self, id: Any) -> Any:
        return self.session.tables[self.model].get(id)

    def add(self, entity: Any) -> None:
        self.session.add(entity)

    async def delete(self, entity: Any) -> None:
        await self.session.delete(entity)


class FakeProjectRepository(_FakeRepository):
    model = Project

    async def list_active(self) -> list[Project]:
        active = [p for p in self.session.rows(Project) if p.is_active]
        return sorted(active, key=lambda p: (p.priority, p.created_at))

    async def list_all(self) -> list[Project]:
        return sorted(self.session.rows(Project), key=lambda p: (p.priority, p.created_at))

    async def delete_completed(self) -> int:
        completed = [p for p in self.session.rows(Project) if not p.is_active]
        for project in completed:
            await self.session.delete(project)
        return len(completed)

    async def count_by_status(self) -> dict[str, int]:
        return dict(Counter(p.status for p in self.session.rows(Project)))


class FakeInvoiceProjectRepository(_FakeRepository):
    model = InvoiceProject

    async def list_by_brand(self, brand: Brand) -> list[InvoiceProject]:
        items = [i for i in self.session.rows(InvoiceProject) if i.brand == brand.value]
        return sorted(items, key=lambda i: i.added_to_invoice_at)

    async def get_for_brand(self, brand: Brand, project_id: Any) -> InvoiceProject | None:
        item = self.session.tables[InvoiceProject].get(project_id)
        if item is None or item.brand != brand.value:
            return None
        return item


class FakeExportedInvoiceRepository(_FakeRepository):
    model = ExportedInvoice

    async def list_by_brand(self, brand: Brand) -> list[ExportedInvoice]:
        invoices = [i for i in self.session.rows(ExportedInvoice) if i.brand == brand.value]
        return sorted(invoices, key=lambda i: i.exported_at, reverse=True)

    async def get_for_brand(self, brand: Brand, invoice_id: Any) -> ExportedInvoice | None:
        invoice = self.session.tables[ExportedInvoice].get(invoice_id)
        if invoice is None or invoice.brand != brand.value:
            return None
        return invoice

    async def delete_by_brand(self, brand: Brand) -> int:
        invoices = await self.list_by_brand(brand)
        for invoice in invoices:
            await self.session.delete(invoice)
        return len(invoices)


class FakeInvoiceCounterRepository(_FakeRepository):
    """Counter upsert applied immediately, outside the staged unit of work."""

    model = InvoiceCounter

    def __init__(self, session: FakeSession):
        super().__init__(session)
        self.errors: list[Exception] = []

    async def next_number(self, brand: Brand) -> int:
        if self.errors:
            raise self.errors.pop(0)
        counters = self.session.tables[InvoiceCounter]
        counter = counters.get(brand.value)
        if counter is None:
            counter = InvoiceCounter(brand=brand.value, current_number=1)
            counters[brand.value] = counter
        number = counter.current_number
        counter.current_number = number + 1
        return number

    async def list_all(self) -> list[InvoiceCounter]:
        return self.session.rows(InvoiceCounter)


def active_order(session: FakeSession) -> list[tuple[str, int]]:
    """(title, priority) for active projects in display order."""
    active = [p for p in session.rows(Project) if p.status != ProjectStatus.COMPLETED.value]
    return [(p.title, p.priority) for p in sorted(active, key=lambda p: p.priority)]


def expire_on_rollback(session: FakeSession, *entities: Any) -> None:
    """Expire ``entities`` whenever ``session`` rolls back.

    Mirrors an ``AsyncSession``: after a rollback, reading a column attribute
    needs a reload and raises instead. Staged deletes still find the row by
    its identity key, as a real flush does.
    """
    orm = Session()
    for entity in entities:
        make_transient_to_detached(entity)
        orm.add(entity)

    def expire() -> None:
        for entity in entities:
            orm.expire(entity)

    session.rollback_hooks.append(expire)
