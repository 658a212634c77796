"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None


def _base_columns():
    return [
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade():
    op.create_table(
        "categories",
        *_base_columns(),
        sa.Column("name", sa.String(length=50), nullable=False, unique=True),
        sa.Column("slug", sa.String(length=80), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("cover_image", postgresql.JSONB(), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "artworks",
        *_base_columns(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=260), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("medium", sa.String(length=30), nullable=False, server_default="oil"),
        sa.Column("surface", sa.String(length=30), nullable=False, server_default="canvas"),
        sa.Column("dimensions", postgresql.JSONB(), nullable=True),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("currency", sa.String(length=10), nullable=False, server_default="USD"),
        sa.Column("is_for_sale", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("is_sold", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column(
            "category_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("tags", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("media", postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="published"),
        sa.Column("competition", postgresql.JSONB(), nullable=True),
    )
    op.create_index("ix_artworks_slug", "artworks", ["slug"])
    op.create_index("ix_artworks_status", "artworks", ["status"])
    op.create_index("ix_artworks_medium", "artworks", ["medium"])
    op.create_index("ix_artworks_year", "artworks", ["year"])
    op.create_index("ix_artworks_featured", "artworks", ["featured"])
    op.create_index("ix_artworks_category_id", "artworks", ["category_id"])

    op.create_table(
        "hero_slides",
        *_base_columns(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("subtitle", sa.String(length=500), nullable=True),
        sa.Column("image_url", sa.String(length=1000), nullable=False),
        sa.Column("image_public_id", sa.String(length=500), nullable=True),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    op.create_index("ix_hero_slides_is_active_order", "hero_slides", ["is_active", "order"])

    op.create_table(
        "awards",
        *_base_columns(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("award", sa.String(length=100), nullable=True),
        sa.Column("type", sa.String(length=20), nullable=False, server_default="other"),
        sa.Column("image_url", sa.String(length=1000), nullable=True),
        sa.Column("image_public_id", sa.String(length=500), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_awards_is_active_year_order", "awards", ["is_active", "year", "order"])

    op.create_table(
        "photography",
        *_base_columns(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(length=1000), nullable=False),
        sa.Column("image_public_id", sa.String(length=500), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("date_taken", sa.DateTime(timezone=True), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_photography_is_active_created_at", "photography", ["is_active", "created_at"])
    op.create_index("ix_photography_category", "photography", ["category"])

    op.create_table(
        "messages",
        *_base_columns(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column("subject", sa.String(length=30), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.text("false")),
    )


def downgrade():
    op.drop_table("messages")
    op.drop_index("ix_photography_category", table_name="photography")
    op.drop_index("ix_photography_is_active_created_at", table_name="photography")
    op.drop_table("photography")
    op.drop_index("ix_awards_is_active_year_order", table_name="awards")
    op.drop_table("awards")
    op.drop_index("ix_hero_slides_is_active_order", table_name="hero_slides")
    op.drop_table("hero_slides")
    for name in ("category_id", "featured", "year", "medium", "status", "slug"):
        op.drop_index(f"ix_artworks_{name}", table_name="artworks")
    op.drop_table("artworks")
    op.drop_table("categories")
