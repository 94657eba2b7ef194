"""about page with clients and contacts, site-wide seo settings, legal pages

Revision ID: 0002_site_content
Revises: 0001_initial
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa  # type: ignore[import-not-found]

from alembic import op

revision = "0002_site_content"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "about_page",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("exergue", sa.Text(), nullable=False, server_default=""),
        # JSON array of {"title", "content"} objects
        sa.Column("sections", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "about_clients",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("website_url", sa.Text(), nullable=True),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "about_contacts",
        sa.Column("id", sa.Uuid(), primary_key=True, nullable=False),
        sa.Column("type", sa.Text(), nullable=False, server_default="website"),
        sa.Column("label", sa.Text(), nullable=False),
        sa.Column("value", sa.Text(), nullable=False, server_default=""),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("order_index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )

    op.create_table(
        "seo_settings",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("site_name", sa.Text(), nullable=False, server_default=""),
        sa.Column("author_name", sa.Text(), nullable=False, server_default=""),
        sa.Column("contact_email", sa.Text(), nullable=False, server_default=""),
        sa.Column("location", sa.Text(), nullable=False, server_default=""),
        sa.Column("robots_mode", sa.Text(), nullable=False, server_default="allow_all"),
        sa.Column("google_verification", sa.Text(), nullable=False, server_default=""),
        sa.Column("facebook_verification", sa.Text(), nullable=False, server_default=""),
        sa.Column("pinterest_verification", sa.Text(), nullable=False, server_default=""),
        sa.Column("bing_verification", sa.Text(), nullable=False, server_default=""),
        sa.Column("default_language", sa.Text(), nullable=False, server_default="fr"),
        sa.Column("copyright_text", sa.Text(), nullable=False, server_default=""),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint(
            "robots_mode IN ('allow_all', 'protect_admin', 'block_all')",
            name="seo_settings_robots_mode_check",
        ),
    )

    op.create_table(
        "legal_pages",
        sa.Column("type", sa.Text(), primary_key=True, nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("legal_pages")
    op.drop_table("seo_settings")
    op.drop_table("about_contacts")
    op.drop_table("about_clients")
    op.drop_table("about_page")
