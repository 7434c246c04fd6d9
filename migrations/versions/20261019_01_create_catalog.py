"""create users and apps tables

Revision ID: 20261019_01
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "apps",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("name", sa.String(length=150), nullable=False),
        sa.Column("version", sa.String(length=50), nullable=False),
        sa.Column("developer", sa.String(length=150), nullable=False),
        sa.Column("category", sa.String(length=30), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("size", sa.String(length=30), nullable=False),
        sa.Column("upload_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("icon_url", sa.String(length=500), nullable=False),
        sa.Column("asset_ref", sa.String(length=300), nullable=False),
    )
    op.create_index("ix_apps_category", "apps", ["category"])
    op.create_index("ix_apps_upload_date", "apps", ["upload_date"])


def downgrade() -> None:
    op.drop_index("ix_apps_upload_date", table_name="apps")
    op.drop_index("ix_apps_category", table_name="apps")
    op.drop_table("apps")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
