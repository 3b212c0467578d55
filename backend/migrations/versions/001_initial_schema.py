"""initial_schema

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "sequence_counters",
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("seq", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("name"),
        sa.CheckConstraint("seq >= 0", name="ck_sequence_counters_seq_non_negative"),
    )

    # Medicines (ULID as UUID)
    op.create_table(
        "medicines",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("medicine_id", sa.String(length=32), nullable=False),
        sa.Column("medicine_name", sa.String(length=200), nullable=False),
        sa.Column("generic_name", sa.String(length=200), nullable=True),
        sa.Column("strength", sa.String(length=50), nullable=True),
        sa.Column("unit", sa.String(length=50), nullable=True),
        sa.Column("dosage_form", sa.String(length=50), nullable=True),
        sa.Column("batch_number", sa.String(length=64), nullable=True),
        sa.Column("quantity", sa.Integer(), nullable=False),
        sa.Column("reorder_level", sa.Integer(), nullable=False),
        sa.Column("manufacture_date", sa.Date(), nullable=True),
        sa.Column("expiry_date", sa.Date(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_medicines_medicine_id", "medicines", ["medicine_id"], unique=True)
    op.create_index("ix_medicines_batch_number", "medicines", ["batch_number"], unique=True)

    # Orders (ULID as UUID)
    order_status = sa.Enum("Pending", "Processing", "Delivered", "Cancelled", name="orderstatus")
    op.create_table(
        "orders",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("order_number", sa.String(length=32), nullable=False),
        sa.Column("supplier", sa.String(length=200), nullable=False),
        sa.Column("supplier_email", sa.String(length=254), nullable=True),
        sa.Column("items", sa.JSON(), nullable=False),
        sa.Column("status", order_status, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_orders_order_number", "orders", ["order_number"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_orders_order_number", table_name="orders")
    op.drop_table("orders")
    sa.Enum(name="orderstatus").drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_medicines_batch_number", table_name="medicines")
    op.drop_index("ix_medicines_medicine_id", table_name="medicines")
    op.drop_table("medicines")
    op.drop_table("sequence_counters")
