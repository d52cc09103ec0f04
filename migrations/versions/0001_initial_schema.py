"""initial schema: users, sessions, catalogue, submissions, content singletons

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ABOUT_FIELDS = (
    "main_heading", "image_url", "image_alt", "history_text", "mission_text",
    "philosophy_heading", "philosophy_quote",
    "value1_title", "value1_text", "value2_title", "value2_text", "value3_title", "value3_text",
)
HOME_FIELDS = (
    "hero_image_url", "hero_image_alt", "hero_heading_line1", "hero_heading_line2", "hero_paragraph",
    "hero_button_text", "intro_heading", "intro_paragraph1", "intro_paragraph2",
    "featured_heading", "featured_map_url", "featured_map_alt", "featured_map_caption", "featured_button_text",
    "carousel_heading", "why_heading",
    "why1_icon", "why1_title", "why1_text", "why2_icon", "why2_title", "why2_text",
    "why3_icon", "why3_title", "why3_text", "testimonials_heading",
)
GALLERY_PAGE_FIELDS = ("page_heading", "page_paragraph")
CONTACT_PAGE_FIELDS = (
    "page_heading", "location_heading", "address", "email", "phone", "office_hours_heading", "office_hours_text",
)
SITE_FIELDS = ("site_name", "tagline", "contact_email", "footer_text")

CONTENT_TABLES = {
    "about_page_content": ABOUT_FIELDS,
    "home_page_content": HOME_FIELDS,
    "gallery_page_settings": GALLERY_PAGE_FIELDS,
    "contact_page_settings": CONTACT_PAGE_FIELDS,
    "site_settings": SITE_FIELDS,
}


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    insp = inspect(bind)
    existing_tables = set(insp.get_table_names())

    if "users" not in existing_tables:
        op.create_table(
            "users",
            sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
            sa.Column("username", sa.String(length=255), nullable=False),
            sa.Column("password", sa.String(length=255), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
            sa.UniqueConstraint("username", name="uq_users_username"),
        )

    if "user_sessions" not in existing_tables:
        op.create_table(
            "user_sessions",
            sa.Column("id", sa.String(length=64), primary_key=True, nullable=False),
            sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
            sa.Column("expires_at", sa.DateTime(timezone=False), nullable=False),
        )
        op.create_index("idx_user_sessions_user", "user_sessions", ["user_id"])
        op.create_index("idx_user_sessions_expires", "user_sessions", ["expires_at"])

    if "tours" not in existing_tables:
        op.create_table(
            "tours",
            sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
            sa.Column("title", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=False),
            sa.Column("long_description", sa.Text(), nullable=False),
            sa.Column("location", sa.String(length=255), nullable=False, server_default=""),
            sa.Column("duration", sa.String(length=128), nullable=False),
            sa.Column("difficulty", sa.String(length=32), nullable=False),
            sa.Column("accommodation", sa.String(length=255), nullable=False),
            sa.Column("group_size", sa.String(length=128), nullable=False),
            sa.Column("price", sa.Integer(), nullable=False),
            sa.Column("image_url", sa.Text(), nullable=True),
            sa.Column("featured", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("itinerary", sa.Text(), nullable=False, server_default="[]"),
        )
        op.create_index("idx_tours_featured", "tours", ["featured"])
        op.create_index("idx_tours_location", "tours", ["location"])

    if "inquiries" not in existing_tables:
        op.create_table(
            "inquiries",
            sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("email", sa.String(length=320), nullable=False),
            sa.Column("message", sa.Text(), nullable=False),
            sa.Column("tour_id", sa.Integer(), nullable=False),
            sa.Column("tour_name", sa.String(length=255), nullable=False),
            sa.Column("handled", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
        )
        op.create_index("idx_inquiries_handled", "inquiries", ["handled"])
        op.create_index("idx_inquiries_created_at", "inquiries", ["created_at"])

    if "contact_messages" not in existing_tables:
        op.create_table(
            "contact_messages",
            sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("email", sa.String(length=320), nullable=False),
            sa.Column("phone", sa.String(length=64), nullable=True),
            sa.Column("subject", sa.String(length=255), nullable=False),
            sa.Column("message", sa.Text(), nullable=False),
            sa.Column("handled", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
        )
        op.create_index("idx_contact_messages_handled", "contact_messages", ["handled"])
        op.create_index("idx_contact_messages_created_at", "contact_messages", ["created_at"])

    if "testimonials" not in existing_tables:
        op.create_table(
            "testimonials",
            sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("location", sa.String(length=255), nullable=True),
            sa.Column("content", sa.Text(), nullable=False),
        )

    if "gallery_images" not in existing_tables:
        op.create_table(
            "gallery_images",
            sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
            sa.Column("caption", sa.Text(), nullable=False),
            sa.Column("type", sa.String(length=512), nullable=False),
        )

    if "newsletter_subscribers" not in existing_tables:
        op.create_table(
            "newsletter_subscribers",
            sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
            sa.Column("email", sa.String(length=320), nullable=False),
            sa.Column("created_at", sa.DateTime(timezone=False), nullable=False),
            sa.UniqueConstraint("email", name="uq_newsletter_subscribers_email"),
        )

    # Rows are seeded with defaults by the application on first read.
    for table, fields in CONTENT_TABLES.items():
        if table in existing_tables:
            continue
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
            *[sa.Column(name, sa.Text(), nullable=False) for name in fields],
            sa.Column("updated_at", sa.DateTime(timezone=False), nullable=False),
        )


def downgrade() -> None:
    """Downgrade schema."""
    for table in reversed(list(CONTENT_TABLES)):
        op.drop_table(table)
    op.drop_table("newsletter_subscribers")
    op.drop_table("gallery_images")
    op.drop_table("testimonials")
    op.drop_index("idx_contact_messages_created_at", table_name="contact_messages")
    op.drop_index("idx_contact_messages_handled", table_name="contact_messages")
    op.drop_table("contact_messages")
    op.drop_index("idx_inquiries_created_at", table_name="inquiries")
    op.drop_index("idx_inquiries_handled", table_name="inquiries")
    op.drop_table("inquiries")
    op.drop_index("idx_tours_location", table_name="tours")
    op.drop_index("idx_tours_featured", table_name="tours")
    op.drop_table("tours")
    op.drop_index("idx_user_sessions_expires", table_name="user_sessions")
    op.drop_index("idx_user_sessions_user", table_name="user_sessions")
    op.drop_table("user_sessions")
    op.drop_table("users")
