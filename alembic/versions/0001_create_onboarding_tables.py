"""create_onboarding_tables

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "groups",
        sa.Column("id", sa.String(length=36), nullable=False, comment="Group ID (UUID)"),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False, comment="User ID (UUID)"),
        sa.Column("login", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column(
            "domain_id",
            sa.String(length=100),
            nullable=False,
            server_default="",
            comment="Identity provider scope; empty for local accounts",
        ),
        sa.Column("external_type", sa.String(length=100), nullable=True),
        sa.Column(
            "password_hash",
            sa.String(length=255),
            nullable=True,
            comment="Hashed password (argon2)",
        ),
        sa.Column("activation_token", sa.String(length=255), nullable=True),
        sa.Column("first_name", sa.String(length=255), nullable=True),
        sa.Column("last_name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("country", sa.String(length=8), nullable=True),
        sa.Column("language_id", sa.Integer(), nullable=True),
        sa.Column("timezone_id", sa.String(length=64), nullable=True),
        sa.Column("picture_uri", sa.String(length=2048), nullable=True),
        sa.Column("show_contact_data_to_contacts", sa.Boolean(), nullable=False),
        sa.Column("rights", sa.JSON(), nullable=False),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_by", sa.String(length=36), nullable=True),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_activation_token", "users", ["activation_token"])
    op.create_index("ix_users_email", "users", ["email"])
    # Uniqueness only applies to accounts that are not soft-deleted
    op.create_index(
        "uq_users_login_type_domain_active",
        "users",
        ["login", "type", "domain_id"],
        unique=True,
        sqlite_where=sa.text("deleted = 0"),
        postgresql_where=sa.text("deleted = false"),
    )
    op.create_index(
        "uq_users_email_type_domain_active",
        "users",
        [sa.text("lower(email)"), "type", "domain_id"],
        unique=True,
        sqlite_where=sa.text("deleted = 0 AND email IS NOT NULL AND email <> ''"),
        postgresql_where=sa.text("deleted = false AND email IS NOT NULL AND email <> ''"),
    )

    op.create_table(
        "users_groups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("group_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["group_id"], ["groups.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "group_id", name="uq_users_groups_user_group"),
    )
    op.create_index("ix_users_groups_user_id", "users_groups", ["user_id"])

    op.create_table(
        "configurations",
        sa.Column("key", sa.String(length=255), nullable=False),
        sa.Column("value", sa.Text(), nullable=True),
        sa.Column("description", sa.String(length=500), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("key"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("configurations")
    op.drop_index("ix_users_groups_user_id", table_name="users_groups")
    op.drop_table("users_groups")
    op.drop_index("uq_users_login_type_domain_active", table_name="users")
    op.drop_index("uq_users_email_type_domain_active", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_activation_token", table_name="users")
    op.drop_table("users")
    op.drop_table("groups")
