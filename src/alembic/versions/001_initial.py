"""Initial migration - projects, invoice items, exported invoices, counters

Revision ID: 001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # 1. Projects
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("brand", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("type", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=False),
        sa.Column("deadline", sa.DateTime(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column(
            "status",
            sqlmodel.sql.sqltypes.AutoString(length=20),
            nullable=False,
            server_default="Pending",
        ),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column(
            "files",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default="[]",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_brand", "projects", ["brand"], unique=False)
    op.create_index("ix_projects_created_at", "projects", ["created_at"], unique=False)
    op.create_index(
        "ix_projects_status_priority", "projects", ["status", "priority"], unique=False
    )

    # 2. Pending invoice items (snapshots, no FK to projects)
    op.create_table(
        "invoice_projects",
        sa.Column("project_id", sa.Uuid(), nullable=False),
        sa.Column("title", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("brand", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("type", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=False),
        sa.Column("deadline", sa.DateTime(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column(
            "files",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default="[]",
        ),
        sa.Column("invoice_price", sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column("added_to_invoice_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("project_id"),
        sa.CheckConstraint("invoice_price > 0", name="ck_invoice_projects_price_positive"),
    )
    op.create_index(
        "ix_invoice_projects_brand_added",
        "invoice_projects",
        ["brand", "added_to_invoice_at"],
        unique=False,
    )

    # 3. Exported invoices
    op.create_table(
        "exported_invoices",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("brand", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("invoice_number", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("file_name", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("total_amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("exported_at", sa.DateTime(), nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column(
            "projects",
            postgresql.JSONB(astext_type=sa.Text()),
            nullable=False,
            server_default="[]",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_exported_invoices_brand_exported",
        "exported_invoices",
        ["brand", "exported_at"],
        unique=False,
    )

    # 4. Invoice counters (next number to issue per brand)
    op.create_table(
        "invoice_counters",
        sa.Column("brand", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("current_number", sa.Integer(), nullable=False, server_default="1"),
        sa.PrimaryKeyConstraint("brand"),
        sa.CheckConstraint("current_number >= 1", name="ck_invoice_counters_positive"),
    )


def downgrade() -> None:
    op.drop_table("invoice_counters")
    op.drop_index("ix_exported_invoices_brand_exported", table_name="exported_invoices")
    op.drop_table("exported_invoices")
    op.drop_index("ix_invoice_projects_brand_added", table_name="invoice_projects")
    op.drop_table("invoice_projects")
    op.drop_index("ix_projects_status_priority", table_name="projects")
    op.drop_index("ix_projects_created_at", table_name="projects")
    op.drop_index("ix_projects_brand", table_name="projects")
    op.drop_table("projects")
