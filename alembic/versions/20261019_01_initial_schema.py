"""Initial talent CMS schema."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    )


def upgrade() -> None:
    op.create_table(
        "homeVideo",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("video_path", sa.String(length=255)),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.create_table(
        "banners",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("image_path", sa.String(length=255)),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )
    op.bulk_insert(
        sa.table("homeVideo", sa.column("id", sa.Integer())),
        [{"id": 1}],
    )
    op.bulk_insert(
        sa.table("banners", sa.column("id", sa.Integer())),
        [{"id": 1}, {"id": 2}],
    )

    op.create_table(
        "about_us",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("html_content", sa.Text()),
        _timestamp("updated_at"),
    )
    op.create_table(
        "terms_and_conditions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("html_content", sa.Text(), nullable=False),
        _timestamp("last_updated"),
    )
    op.create_table(
        "privacy_policy",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("html_content", sa.Text(), nullable=False),
        _timestamp("last_updated"),
    )

    op.create_table(
        "popular_categories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("avatar", sa.String(length=255), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("talent_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.Text()),
        sa.Column("gender", sa.String(length=16), nullable=False),
        _timestamp("created_at"),
    )
    op.create_table(
        "featured_talents",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("gender", sa.String(length=16), nullable=False),
        sa.Column("age", sa.Integer()),
        sa.Column("location", sa.String(length=100)),
        sa.Column("height", sa.String(length=50)),
        sa.Column("hair_color", sa.String(length=50)),
        sa.Column("shoe_size", sa.String(length=50)),
        sa.Column("eye_color", sa.String(length=50)),
        sa.Column("profile_img", sa.String(length=255)),
        sa.Column("image1", sa.String(length=255)),
        sa.Column("image2", sa.String(length=255)),
        sa.Column("image3", sa.String(length=255)),
        _timestamp("created_at"),
    )
    op.create_table(
        "testimonials",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("avatar", sa.String(length=255), nullable=False),
        sa.Column("them", sa.Integer(), nullable=False, server_default="1"),
        _timestamp("created_at"),
    )
    op.create_table(
        "plan_details",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("heading", sa.String(length=255)),
        sa.Column("description", sa.Text()),
        sa.Column("plan_benefits", sa.Text()),
        sa.Column("from_whom", sa.Text()),
        sa.Column("why_subscribe", sa.Text()),
        sa.Column("price", sa.String(length=64)),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=32)),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("plan", sa.String(length=64), nullable=False, server_default="free"),
        sa.Column("blocked", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("suspended", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("suspended_from", sa.DateTime()),
        sa.Column("suspended_to", sa.DateTime()),
        _timestamp("created_at"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_table(
        "tickets",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("subject", sa.String(length=255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False, server_default="open"),
        _timestamp("created_at"),
    )
    op.create_index("ix_tickets_user_id", "tickets", ["user_id"])
    op.create_table(
        "activity_log",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("info", sa.Text(), nullable=False),
        _timestamp("created_at"),
    )


def downgrade() -> None:
    for table in (
        "activity_log",
        "tickets",
        "users",
        "plan_details",
        "testimonials",
        "featured_talents",
        "popular_categories",
        "privacy_policy",
        "terms_and_conditions",
        "about_us",
        "banners",
        "homeVideo",
    ):
        if table == "tickets":
            op.drop_index("ix_tickets_user_id", table_name="tickets")
        if table == "users":
            op.drop_index("ix_users_email", table_name="users")
        op.drop_table(table)
