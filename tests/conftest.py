"""Root conftest: in-memory SQLite engine and fixtures for the full schema."""

from __future__ import annotations

from datetime import date, datetime

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from eventra.constants import APP_TZ
from eventra.models.client import Client
from eventra.models.event import Event, EventStatus, EventTask
from eventra.models.invoice import DiscountSpec, DiscountType, Invoice, LineItem
from eventra.models.vendor import Vendor

USER_ID = "user-1"
OTHER_USER_ID = "user-2"

# Matches Alembic head: 8c4e2d6a1f30 (create user preferences)
SCHEMA_DDL = """
CREATE TABLE clients (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    user_id VARCHAR(255) NOT NULL,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    email TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    company TEXT NOT NULL DEFAULT '',
    client_type TEXT NOT NULL DEFAULT '',
    address TEXT NOT NULL DEFAULT '',
    city TEXT NOT NULL DEFAULT '',
    state TEXT NOT NULL DEFAULT '',
    zip_code TEXT NOT NULL DEFAULT '',
    country TEXT NOT NULL DEFAULT '',
    notes TEXT NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE vendors (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    user_id VARCHAR(255) NOT NULL,
    name TEXT NOT NULL,
    contact_name TEXT NOT NULL DEFAULT '',
    email TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    website TEXT NOT NULL DEFAULT '',
    address TEXT NOT NULL DEFAULT '',
    city TEXT NOT NULL DEFAULT '',
    state TEXT NOT NULL DEFAULT '',
    zip_code TEXT NOT NULL DEFAULT '',
    vendor_type TEXT NOT NULL DEFAULT '',
    rate REAL,
    notes TEXT NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    user_id VARCHAR(255) NOT NULL,
    title TEXT NOT NULL,
    event_type TEXT NOT NULL DEFAULT '',
    event_date DATETIME NOT NULL,
    end_time DATETIME,
    location TEXT NOT NULL DEFAULT '',
    description TEXT NOT NULL DEFAULT '',
    client_id INTEGER REFERENCES clients(id),
    client_name TEXT NOT NULL DEFAULT '',
    budget REAL NOT NULL DEFAULT 0,
    status TEXT NOT NULL DEFAULT 'tentative',
    notes TEXT NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE event_vendors (
    event_id INTEGER NOT NULL REFERENCES events(id) ON DELETE CASCADE,
    vendor_id INTEGER NOT NULL REFERENCES vendors(id) ON DELETE CASCADE,
    PRIMARY KEY (event_id, vendor_id)
);

CREATE TABLE event_tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    event_id INTEGER NOT NULL REFERENCES events(id) ON DELETE CASCADE,
    description TEXT NOT NULL,
    completed BOOLEAN NOT NULL DEFAULT 0,
    sort_order INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE invoices (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    user_id VARCHAR(255) NOT NULL,
    invoice_number TEXT NOT NULL,
    client_id INTEGER NOT NULL REFERENCES clients(id),
    event_id INTEGER REFERENCES events(id),
    issue_date DATE NOT NULL,
    due_date DATE NOT NULL,
    status TEXT NOT NULL DEFAULT 'Draft',
    tax_rate REAL NOT NULL DEFAULT 0,
    discount_type TEXT NOT NULL DEFAULT 'percentage',
    discount_value REAL NOT NULL DEFAULT 0,
    subtotal REAL NOT NULL DEFAULT 0,
    tax_amount REAL NOT NULL DEFAULT 0,
    discount_amount REAL NOT NULL DEFAULT 0,
    amount REAL NOT NULL DEFAULT 0,
    notes TEXT NOT NULL DEFAULT '',
    pdf_path TEXT,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE invoice_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    invoice_id INTEGER NOT NULL REFERENCES invoices(id) ON DELETE CASCADE,
    description TEXT NOT NULL,
    quantity REAL NOT NULL DEFAULT 1,
    unit_price REAL NOT NULL DEFAULT 0,
    sort_order INTEGER NOT NULL DEFAULT 0
);

CREATE TABLE user_preferences (
    user_id VARCHAR(255) PRIMARY KEY,
    currency VARCHAR(3) NOT NULL DEFAULT 'USD',
    country VARCHAR(2),
    updated_at DATETIME NOT NULL
);
"""


def apply_schema(conn: Connection) -> None:
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    apply_schema(conn)
    yield conn
    conn.close()


def _sample_client(**overrides) -> Client:
    defaults = dict(
        user_id=USER_ID,
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        phone="+1 (555) 010-2030",
        company="Analytical Engines",
        type="Corporate",
        city="London",
    )
    defaults.update(overrides)
    return Client(**defaults)


def _sample_vendor(**overrides) -> Vendor:
    defaults = dict(
        user_id=USER_ID,
        name="Golden Catering",
        contact_name="Grace",
        email="grace@catering.example",
        phone="555-0101",
        type="Catering",
        rate=1500.0,
    )
    defaults.update(overrides)
    return Vendor(**defaults)


def _sample_event(**overrides) -> Event:
    defaults = dict(
        user_id=USER_ID,
        title="Spring Gala",
        type="Corporate",
        date=datetime(2025, 4, 12, 18, 30, tzinfo=APP_TZ),
        location="Town Hall",
        budget=5000.0,
        status=EventStatus.CONFIRMED,
        tasks=[EventTask(description="Book venue"), EventTask(description="Send invites")],
    )
    defaults.update(overrides)
    return Event(**defaults)


def _sample_invoice(client_id: int = 1, **overrides) -> Invoice:
    defaults = dict(
        user_id=USER_ID,
        invoice_number="INV-2503-0001",
        client_id=client_id,
        issue_date=date(2025, 3, 1),
        due_date=date(2025, 3, 31),
        items=[
            LineItem(description="Venue rental", quantity=1, unit_price=2000.0),
            LineItem(description="Catering per guest", quantity=50, unit_price=40.0),
        ],
        tax_rate=10.0,
        discount=DiscountSpec(type=DiscountType.PERCENTAGE, value=5.0),
        notes="Thank you!",
    )
    defaults.update(overrides)
    return Invoice(**defaults)


@pytest.fixture()
def sample_client():
    return _sample_client


@pytest.fixture()
def sample_vendor():
    return _sample_vendor


@pytest.fixture()
def sample_event():
    return _sample_event


@pytest.fixture()
def sample_invoice():
    return _sample_invoice
