"""create users, press kits, media and analytics tables

Revision ID: 5c1e2a9d7b30
Revises:
Create Date: 2026-10-18 10:12:07.418233

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1e2a9d7b30"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("profile_picture", sa.String(length=1024), server_default="", nullable=False),
        sa.Column("reset_password_token", sa.String(length=64), nullable=True),
        sa.Column("reset_password_expires", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_admin", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(
        op.f("ix_users_reset_password_token"), "users", ["reset_password_token"], unique=False
    )

    op.create_table(
        "press_kits",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("template", sa.String(length=100), nullable=False),
        sa.Column("customization", sa.JSON(), nullable=False),
        sa.Column("is_published", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            "is_password_protected", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
        sa.Column("access_password_hash", sa.String(length=255), nullable=True),
        sa.Column("sections", sa.JSON(), nullable=False),
        sa.Column("last_published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_press_kits_id"), "press_kits", ["id"], unique=False)
    op.create_index(op.f("ix_press_kits_owner_id"), "press_kits", ["owner_id"], unique=False)
    op.create_index(op.f("ix_press_kits_slug"), "press_kits", ["slug"], unique=True)

    op.create_table(
        "media",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("press_kit_id", sa.Integer(), sa.ForeignKey("press_kits.id"), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("file_url", sa.String(length=1024), nullable=False),
        sa.Column("thumbnail_url", sa.String(length=1024), nullable=True),
        sa.Column("file_size", sa.Integer(), nullable=True),
        sa.Column("duration", sa.Float(), nullable=True),
        sa.Column("storage_key", sa.String(length=512), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index(op.f("ix_media_id"), "media", ["id"], unique=False)
    op.create_index(op.f("ix_media_owner_id"), "media", ["owner_id"], unique=False)
    op.create_index(op.f("ix_media_press_kit_id"), "media", ["press_kit_id"], unique=False)

    op.create_table(
        "analytics",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("press_kit_id", sa.Integer(), sa.ForeignKey("press_kits.id"), nullable=False),
        sa.Column("visitor_ip", sa.String(length=45), nullable=True),
        sa.Column("user_agent", sa.String(length=512), nullable=True),
        sa.Column("referrer", sa.String(length=1024), nullable=True),
        sa.Column("country", sa.String(length=100), nullable=True),
        sa.Column("city", sa.String(length=100), nullable=True),
        sa.Column(
            "timestamp", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("interactions", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index(op.f("ix_analytics_id"), "analytics", ["id"], unique=False)
    op.create_index(
        op.f("ix_analytics_press_kit_id"), "analytics", ["press_kit_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_analytics_press_kit_id"), table_name="analytics")
    op.drop_index(op.f("ix_analytics_id"), table_name="analytics")
    op.drop_table("analytics")

    op.drop_index(op.f("ix_media_press_kit_id"), table_name="media")
    op.drop_index(op.f("ix_media_owner_id"), table_name="media")
    op.drop_index(op.f("ix_media_id"), table_name="media")
    op.drop_table("media")

    op.drop_index(op.f("ix_press_kits_slug"), table_name="press_kits")
    op.drop_index(op.f("ix_press_kits_owner_id"), table_name="press_kits")
    op.drop_index(op.f("ix_press_kits_id"), table_name="press_kits")
    op.drop_table("press_kits")

    op.drop_index(op.f("ix_users_reset_password_token"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_id"), table_name="users")
    op.drop_table("users")
