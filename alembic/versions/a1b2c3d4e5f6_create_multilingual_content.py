"""create_multilingual_content

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19

Creates the per-language content tables linked by group_id, the pages
table and the additional_images gallery table.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels = None
depends_on = None


def _grouped_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer, primary_key=True, index=True, autoincrement=True),
        sa.Column("lang", sa.String(8), nullable=False, index=True),
        sa.Column("group_id", sa.String(36), nullable=True, index=True),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "events",
        *_grouped_columns(),
        sa.Column("slug", sa.String, nullable=True),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("event_date", sa.Date, nullable=True),
        sa.Column("location", sa.String, nullable=True),
        sa.Column("image_url", sa.String, nullable=True),
    )
    op.create_index("events_lang_slug_idx", "events", ["lang", "slug"], unique=True)

    op.create_table(
        "news",
        *_grouped_columns(),
        sa.Column("slug", sa.String, nullable=True),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("summary", sa.Text, nullable=True),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column("image_url", sa.String, nullable=True),
        sa.Column("published_at", sa.DateTime, nullable=True),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default=sa.true()),
    )
    op.create_index("news_lang_slug_idx", "news", ["lang", "slug"], unique=True)
    op.create_index("news_published_idx", "news", ["is_published", "published_at"])

    op.create_table(
        "themes",
        *_grouped_columns(),
        sa.Column("slug", sa.String, nullable=False),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image_url", sa.String, nullable=True),
    )
    op.create_index("themes_lang_slug_idx", "themes", ["lang", "slug"], unique=True)

    op.create_table(
        "team_members",
        *_grouped_columns(),
        sa.Column("name", sa.String, nullable=False),
        sa.Column("role", sa.String, nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("photo_url", sa.String, nullable=True),
        sa.Column("linkedin", sa.String, nullable=True),
        sa.Column("facebook", sa.String, nullable=True),
        sa.Column("twitter", sa.String, nullable=True),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "documents",
        *_grouped_columns(),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("file_url", sa.String, nullable=False, server_default=""),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("published", sa.Boolean, nullable=False, server_default=sa.true(), index=True),
    )

    op.create_table(
        "focus_areas",
        *_grouped_columns(),
        sa.Column("fields", sa.JSON, nullable=False),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("published", sa.Boolean, nullable=False, server_default=sa.true(), index=True),
    )

    op.create_table(
        "pages",
        sa.Column("id", sa.Integer, primary_key=True, index=True, autoincrement=True),
        sa.Column("lang", sa.String(8), nullable=False, index=True),
        sa.Column("slug", sa.String, nullable=False),
        sa.Column("title", sa.String, nullable=False),
        sa.Column("content", sa.JSON, nullable=False),
        sa.Column("image_url", sa.String, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
        sa.UniqueConstraint("lang", "slug", name="uq_pages_lang_slug"),
    )

    op.create_table(
        "additional_images",
        sa.Column("id", sa.Integer, primary_key=True, index=True, autoincrement=True),
        sa.Column("content_type", sa.String(16), nullable=False),
        sa.Column("content_id", sa.Integer, nullable=False),
        sa.Column("image_url", sa.String, nullable=False),
        sa.Column("alt_text", sa.String, nullable=True),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime, nullable=False),
    )
    op.create_index("additional_images_content_idx", "additional_images", ["content_type", "content_id"])


def downgrade() -> None:
    op.drop_index("additional_images_content_idx", table_name="additional_images")
    op.drop_table("additional_images")
    op.drop_table("pages")
    op.drop_table("focus_areas")
    op.drop_table("documents")
    op.drop_table("team_members")
    op.drop_index("themes_lang_slug_idx", table_name="themes")
    op.drop_table("themes")
    op.drop_index("news_published_idx", table_name="news")
    op.drop_index("news_lang_slug_idx", table_name="news")
    op.drop_table("news")
    op.drop_index("events_lang_slug_idx", table_name="events")
    op.drop_table("events")
