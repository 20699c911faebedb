"""Store the printed issue date on exported invoices

Revision ID: 002
Revises: 001
Create Date: 2026-10-18 12:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

revision: str = "002"
down_revision: str | None = "001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.add_column("exported_invoices", sa.Column("invoice_date", sa.Date(), nullable=True))
    # Existing rows were printed with their export date
    op.execute("UPDATE exported_invoices SET invoice_date = exported_at::date")
    op.alter_column("exported_invoices", "invoice_date", nullable=False)


def downgrade() -> None:
    op.drop_column("exported_invoices", "invoice_date")
