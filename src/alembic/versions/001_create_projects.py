"""Create projects table

Revision ID: 001
Revises:
Create Date: 2025-01-06 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("category", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("location", sqlmodel.sql.sqltypes.AutoString(length=200), nullable=False),
        sa.Column("created_date", sa.Date(), nullable=False),
        sa.Column("project_deadline", sa.Date(), nullable=False),
        sa.Column("application_deadline", sa.Date(), nullable=False),
        sa.Column("required_categories", sa.JSON(), nullable=False),
        sa.Column("required_people", sa.Integer(), nullable=False),
        sa.Column("swipe_algorithm_enabled", sa.Boolean(), nullable=False),
        sa.Column("description", sqlmodel.sql.sqltypes.AutoString(length=5000), nullable=False),
        sa.Column("ongoing_status", sa.Boolean(), nullable=False),
        sa.Column("remote_status", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column("liked", sa.Integer(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_projects_owner_id", "projects", ["owner_id"], unique=False)
    op.create_index("ix_projects_created_date", "projects", ["created_date"], unique=False)
    op.create_index(
        "ix_projects_application_deadline", "projects", ["application_deadline"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_projects_application_deadline", table_name="projects")
    op.drop_index("ix_projects_created_date", table_name="projects")
    op.drop_index("ix_projects_owner_id", table_name="projects")
    op.drop_table("projects")
