"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.current_timestamp()),
    )

    op.create_table(
        "activities",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "organization_id",
            sa.Integer,
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("duration_minutes", sa.Integer, nullable=False),
        sa.Column("min_party_size", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("max_party_size", sa.Integer, nullable=False),
        sa.Column("capacity", sa.Integer),
        sa.Column("price", sa.Float, nullable=False, server_default=sa.text("0")),
        sa.Column("is_active", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("schedule", sa.Text),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.current_timestamp()),
        sa.CheckConstraint("duration_minutes > 0", name="ck_activities_duration"),
        sa.CheckConstraint("min_party_size >= 1", name="ck_activities_min_party"),
        sa.CheckConstraint("max_party_size >= min_party_size", name="ck_activities_max_party"),
    )

    op.create_table(
        "activity_blocks",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "activity_id",
            sa.Integer,
            sa.ForeignKey("activities.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("start_time", sa.Text),
        sa.Column("end_time", sa.Text),
        sa.Column("reason", sa.Text),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.current_timestamp()),
    )
    op.create_index("ix_activity_blocks_activity_date", "activity_blocks", ["activity_id", "date"])

    op.create_table(
        "customers",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "organization_id",
            sa.Integer,
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("email", sa.Text, nullable=False),
        sa.Column("full_name", sa.Text),
        sa.Column("phone", sa.Text),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.current_timestamp()),
        sa.UniqueConstraint("organization_id", "email"),
    )

    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "organization_id",
            sa.Integer,
            sa.ForeignKey("organizations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "activity_id",
            sa.Integer,
            sa.ForeignKey("activities.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "customer_id",
            sa.Integer,
            sa.ForeignKey("customers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("confirmation_code", sa.Text, nullable=False, unique=True),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("start_minute", sa.Integer, nullable=False),
        sa.Column("end_minute", sa.Integer, nullable=False),
        sa.Column("party_size", sa.Integer, nullable=False),
        sa.Column("status", sa.Text, nullable=False, server_default=sa.text("'pending'")),
        sa.Column("payment_status", sa.Text, nullable=False, server_default=sa.text("'pending'")),
        sa.Column("total_amount", sa.Float, nullable=False, server_default=sa.text("0")),
        sa.Column("notes", sa.Text),
        sa.Column("cancel_reason", sa.Text),
        sa.Column("created_at", sa.DateTime, nullable=False),
        sa.Column("updated_at", sa.DateTime, nullable=False),
        sa.CheckConstraint("party_size >= 1", name="ck_reservations_party_size"),
        sa.CheckConstraint("end_minute > start_minute", name="ck_reservations_interval"),
        sa.CheckConstraint(
            "status IN ('pending', 'confirmed', 'checked-in', 'completed', 'cancelled', 'no-show')",
            name="ck_reservations_status",
        ),
        sa.CheckConstraint(
            "payment_status IN ('pending', 'paid', 'partial', 'refunded')",
            name="ck_reservations_payment_status",
        ),
    )
    op.create_index("ix_reservations_activity_date", "reservations", ["activity_id", "date"])
    op.create_index("ix_reservations_status_created", "reservations", ["status", "created_at"])


def downgrade():
    op.drop_index("ix_reservations_status_created", table_name="reservations")
    op.drop_index("ix_reservations_activity_date", table_name="reservations")
    op.drop_table("reservations")
    op.drop_table("customers")
    op.drop_index("ix_activity_blocks_activity_date", table_name="activity_blocks")
    op.drop_table("activity_blocks")
    op.drop_table("activities")
    op.drop_table("organizations")
