"""initial schema

Revision ID: 3f1a9c0d2b7e
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "3f1a9c0d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _record_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uuid", sa.String(26), nullable=False, unique=True),
        sa.Column("user_id", sa.String(255), nullable=False),
    ]


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "clients",
        *_record_columns(),
        sa.Column("first_name", sa.String(255), nullable=False),
        sa.Column("last_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(64), nullable=False, server_default=""),
        sa.Column("company", sa.String(255), nullable=False, server_default=""),
        sa.Column("client_type", sa.String(64), nullable=False, server_default=""),
        sa.Column("address", sa.Text, nullable=False, server_default=""),
        sa.Column("city", sa.String(255), nullable=False, server_default=""),
        sa.Column("state", sa.String(255), nullable=False, server_default=""),
        sa.Column("zip_code", sa.String(32), nullable=False, server_default=""),
        sa.Column("country", sa.String(255), nullable=False, server_default=""),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        *_timestamp_columns(),
    )
    op.create_index("ix_clients_user_id", "clients", ["user_id"])

    op.create_table(
        "vendors",
        *_record_columns(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("contact_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False, server_default=""),
        sa.Column("phone", sa.String(64), nullable=False, server_default=""),
        sa.Column("website", sa.String(255), nullable=False, server_default=""),
        sa.Column("address", sa.Text, nullable=False, server_default=""),
        sa.Column("city", sa.String(255), nullable=False, server_default=""),
        sa.Column("state", sa.String(255), nullable=False, server_default=""),
        sa.Column("zip_code", sa.String(32), nullable=False, server_default=""),
        sa.Column("vendor_type", sa.String(64), nullable=False, server_default=""),
        sa.Column("rate", sa.Float, nullable=True),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        *_timestamp_columns(),
    )
    op.create_index("ix_vendors_user_id", "vendors", ["user_id"])

    op.create_table(
        "events",
        *_record_columns(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("event_type", sa.String(64), nullable=False, server_default=""),
        sa.Column("event_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("description", sa.Text, nullable=False, server_default=""),
        sa.Column("client_id", sa.Integer, sa.ForeignKey("clients.id"), nullable=True),
        sa.Column("client_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("budget", sa.Float, nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="tentative"),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        *_timestamp_columns(),
    )
    op.create_index("ix_events_user_id", "events", ["user_id"])
    op.create_index("ix_events_client_id", "events", ["client_id"])

    op.create_table(
        "event_vendors",
        sa.Column("event_id", sa.Integer, sa.ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("vendor_id", sa.Integer, sa.ForeignKey("vendors.id", ondelete="CASCADE"), primary_key=True),
    )

    op.create_table(
        "event_tasks",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer, sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("completed", sa.Boolean, nullable=False, server_default="0"),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_event_tasks_event_id", "event_tasks", ["event_id"])

    op.create_table(
        "invoices",
        *_record_columns(),
        sa.Column("invoice_number", sa.String(32), nullable=False),
        sa.Column("client_id", sa.Integer, sa.ForeignKey("clients.id"), nullable=False),
        sa.Column("event_id", sa.Integer, sa.ForeignKey("events.id"), nullable=True),
        sa.Column("issue_date", sa.Date, nullable=False),
        sa.Column("due_date", sa.Date, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="Draft"),
        sa.Column("tax_rate", sa.Float, nullable=False, server_default="0"),
        sa.Column("discount_type", sa.String(20), nullable=False, server_default="percentage"),
        sa.Column("discount_value", sa.Float, nullable=False, server_default="0"),
        sa.Column("subtotal", sa.Float, nullable=False, server_default="0"),
        sa.Column("tax_amount", sa.Float, nullable=False, server_default="0"),
        sa.Column("discount_amount", sa.Float, nullable=False, server_default="0"),
        sa.Column("amount", sa.Float, nullable=False, server_default="0"),
        sa.Column("notes", sa.Text, nullable=False, server_default=""),
        sa.Column("pdf_path", sa.Text, nullable=True),
        *_timestamp_columns(),
    )
    op.create_index("ix_invoices_user_id", "invoices", ["user_id"])
    op.create_index("ix_invoices_client_id", "invoices", ["client_id"])

    op.create_table(
        "invoice_items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("invoice_id", sa.Integer, sa.ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("quantity", sa.Float, nullable=False, server_default="1"),
        sa.Column("unit_price", sa.Float, nullable=False, server_default="0"),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_invoice_items_invoice_id", "invoice_items", ["invoice_id"])


def downgrade() -> None:
    op.drop_index("ix_invoice_items_invoice_id", table_name="invoice_items")
    op.drop_table("invoice_items")
    op.drop_index("ix_invoices_client_id", table_name="invoices")
    op.drop_index("ix_invoices_user_id", table_name="invoices")
    op.drop_table("invoices")
    op.drop_index("ix_event_tasks_event_id", table_name="event_tasks")
    op.drop_table("event_tasks")
    op.drop_table("event_vendors")
    op.drop_index("ix_events_client_id", table_name="events")
    op.drop_index("ix_events_user_id", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_vendors_user_id", table_name="vendors")
    op.drop_table("vendors")
    op.drop_index("ix_clients_user_id", table_name="clients")
    op.drop_table("clients")
