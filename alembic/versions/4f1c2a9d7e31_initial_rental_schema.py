"""initial_rental_schema

Revision ID: 4f1c2a9d7e31
Revises:
Create Date: 2026-10-19 10:12:03.481920

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4f1c2a9d7e31"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

category_type = sa.Enum("COSTUME", "ACCESSORY", name="categorytype")
item_type = sa.Enum("COSTUME", "ACCESSORY", name="itemtype")
item_status = sa.Enum("AVAILABLE", "RENTED", "CLEANING", "DAMAGED", name="itemstatus")
booking_status = sa.Enum(
    "ACTIVE", "COMPLETED", "OVERDUE", "CANCELLED", name="bookingstatus"
)
payment_status = sa.Enum("PENDING", "PAID", "REFUNDED", name="paymentstatus")
admin_role = sa.Enum("ADMIN", "SUPERADMIN", name="adminrole")


def upgrade() -> None:
    """Create the catalog, booking and admin tables."""

    op.create_table(
        "categories",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", category_type, nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    op.create_table(
        "items",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("item_type", item_type, nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category_id", sa.String(length=36), nullable=True),
        sa.Column("size", sa.String(), nullable=True),
        sa.Column("theme", sa.String(), nullable=True),
        sa.Column("price_per_day", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", item_status, nullable=False),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_items_item_type", "items", ["item_type"])
    op.create_index("ix_items_size", "items", ["size"])
    op.create_index("ix_items_theme", "items", ["theme"])
    op.create_index("ix_items_status", "items", ["status"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("customer_name", sa.String(), nullable=False),
        sa.Column("customer_email", sa.String(), nullable=False),
        sa.Column("customer_phone", sa.String(), nullable=True),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", booking_status, nullable=False),
        sa.Column("payment_status", payment_status, nullable=False),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("security_deposit", sa.Numeric(10, 2), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_bookings_status", "bookings", ["status"])
    op.create_index("idx_bookings_dates_range", "bookings", ["start_date", "end_date"])

    op.create_table(
        "booking_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("booking_id", sa.String(length=36), nullable=False),
        sa.Column("item_id", sa.String(length=36), nullable=False),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("item_type", item_type, nullable=False),
        sa.Column("item_name", sa.String(), nullable=False),
        sa.Column("size", sa.String(), nullable=True),
        sa.Column("price_per_day", sa.Numeric(10, 2), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["booking_id"], ["bookings.id"]),
        sa.ForeignKeyConstraint(["item_id"], ["items.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_booking_items_id", "booking_items", ["id"])
    op.create_index("ix_booking_items_item_id", "booking_items", ["item_id"])

    op.create_table(
        "admin_users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("hashed_password", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=False),
        sa.Column("role", admin_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_admin_users_email", "admin_users", ["email"], unique=True)


def downgrade() -> None:
    """Drop every rental table."""

    op.drop_index("ix_admin_users_email", table_name="admin_users")
    op.drop_table("admin_users")

    op.drop_index("ix_booking_items_item_id", table_name="booking_items")
    op.drop_index("ix_booking_items_id", table_name="booking_items")
    op.drop_table("booking_items")

    op.drop_index("idx_bookings_dates_range", table_name="bookings")
    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_items_status", table_name="items")
    op.drop_index("ix_items_theme", table_name="items")
    op.drop_index("ix_items_size", table_name="items")
    op.drop_index("ix_items_item_type", table_name="items")
    op.drop_table("items")

    op.drop_table("categories")

    bind = op.get_bind()
    for enum_type in (
        admin_role,
        payment_status,
        booking_status,
        item_status,
        item_type,
        category_type,
    ):
        enum_type.drop(bind, checkfirst=True)
