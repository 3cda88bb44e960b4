from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from ulid import ULID

from eventra.constants import now as _now
from eventra.models.client import Client
from eventra.models.event import Event, EventStatus, EventTask
from eventra.models.invoice import DiscountSpec, DiscountType, Invoice, InvoiceStatus, LineItem
from eventra.models.preferences import Preferences
from eventra.models.vendor import Vendor
from eventra.records import to_date, to_datetime, to_float, to_optional_datetime
from eventra.repositories.base import (
    ClientRepository,
    EventRepository,
    InvoiceRepository,
    PreferenceRepository,
    VendorRepository,
)


def _in_clause(ids: Sequence[int]) -> tuple[str, dict[str, int]]:
    placeholders = ", ".join(f":id{i}" for i in range(len(ids)))
    params = {f"id{i}": value for i, value in enumerate(ids)}
    return placeholders, params


def _timestamps(row: RowMapping) -> dict[str, datetime | None]:
    return {
        "created_at": to_optional_datetime(row["created_at"], "created_at"),
        "updated_at": to_optional_datetime(row["updated_at"], "updated_at"),
        "deleted_at": to_optional_datetime(row["deleted_at"], "deleted_at"),
    }


class SQLAlchemyClientRepository(ClientRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _params(client: Client) -> dict:
        return {
            "first_name": client.first_name,
            "last_name": client.last_name,
            "email": client.email,
            "phone": client.phone,
            "company": client.company,
            "client_type": client.type,
            "address": client.address,
            "city": client.city,
            "state": client.state,
            "zip_code": client.zip_code,
            "country": client.country,
            "notes": client.notes,
        }

    @staticmethod
    def _row_to_client(row: RowMapping) -> Client:
        return Client(
            id=row["id"],
            uuid=row["uuid"],
            user_id=row["user_id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            phone=row["phone"],
            company=row["company"],
            type=row["client_type"],
            address=row["address"],
            city=row["city"],
            state=row["state"],
            zip_code=row["zip_code"],
            country=row["country"],
            notes=row["notes"],
            **_timestamps(row),
        )

    def create(self, client: Client) -> Client:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO clients (uuid, user_id, first_name, last_name, email, phone, company, client_type, "
                "address, city, state, zip_code, country, notes, created_at, updated_at) "
                "VALUES (:uuid, :user_id, :first_name, :last_name, :email, :phone, :company, :client_type, "
                ":address, :city, :state, :zip_code, :country, :notes, :created_at, :updated_at)"
            ),
            {
                **self._params(client),
                "uuid": str(ULID()),
                "user_id": client.user_id,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        client_id = result.lastrowid
        created = self.get_by_id(client_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve client after create (id={client_id})")
        return created

    def get_by_id(self, client_id: int) -> Client | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM clients WHERE id = :id AND deleted_at IS NULL"),
                {"id": client_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_client(row)

    def get_by_uuid(self, uuid: str) -> Client | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM clients WHERE uuid = :uuid AND deleted_at IS NULL"),
                {"uuid": uuid},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_client(row)

    def list_for_user(self, user_id: str) -> list[Client]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM clients WHERE user_id = :user_id AND deleted_at IS NULL "
                    "ORDER BY created_at DESC, id DESC"
                ),
                {"user_id": user_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_client(row) for row in rows]

    def update(self, client: Client) -> Client:
        if client.id is None:
            raise ValueError("Cannot update client without an id")
        self.conn.execute(
            text(
                "UPDATE clients SET first_name = :first_name, last_name = :last_name, email = :email, "
                "phone = :phone, company = :company, client_type = :client_type, address = :address, "
                "city = :city, state = :state, zip_code = :zip_code, country = :country, notes = :notes, "
                "updated_at = :updated_at WHERE id = :id"
            ),
            {**self._params(client), "updated_at": _now(), "id": client.id},
        )
        self.conn.commit()
        result = self.get_by_id(client.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve client after update (id={client.id})")
        return result

    def delete(self, client_id: int) -> None:
        self.conn.execute(
            text("UPDATE clients SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": client_id},
        )
        self.conn.commit()


class SQLAlchemyVendorRepository(VendorRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _params(vendor: Vendor) -> dict:
        return {
            "name": vendor.name,
            "contact_name": vendor.contact_name,
            "email": vendor.email,
            "phone": vendor.phone,
            "website": vendor.website,
            "address": vendor.address,
            "city": vendor.city,
            "state": vendor.state,
            "zip_code": vendor.zip_code,
            "vendor_type": vendor.type,
            "rate": vendor.rate,
            "notes": vendor.notes,
        }

    @staticmethod
    def _row_to_vendor(row: RowMapping) -> Vendor:
        return Vendor(
            id=row["id"],
            uuid=row["uuid"],
            user_id=row["user_id"],
            name=row["name"],
            contact_name=row["contact_name"],
            email=row["email"],
            phone=row["phone"],
            website=row["website"],
            address=row["address"],
            city=row["city"],
            state=row["state"],
            zip_code=row["zip_code"],
            type=row["vendor_type"],
            rate=to_float(row["rate"], "rate", default=None),
            notes=row["notes"],
            **_timestamps(row),
        )

    def create(self, vendor: Vendor) -> Vendor:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO vendors (uuid, user_id, name, contact_name, email, phone, website, address, city, "
                "state, zip_code, vendor_type, rate, notes, created_at, updated_at) "
                "VALUES (:uuid, :user_id, :name, :contact_name, :email, :phone, :website, :address, :city, "
                ":state, :zip_code, :vendor_type, :rate, :notes, :created_at, :updated_at)"
            ),
            {
                **self._params(vendor),
                "uuid": str(ULID()),
                "user_id": vendor.user_id,
                "created_at": now,
                "updated_at": now,
            },
        )
        self.conn.commit()
        vendor_id = result.lastrowid
        created = self.get_by_id(vendor_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve vendor after create (id={vendor_id})")
        return created

    def get_by_id(self, vendor_id: int) -> Vendor | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM vendors WHERE id = :id AND deleted_at IS NULL"),
                {"id": vendor_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_vendor(row)

    def get_by_uuid(self, uuid: str) -> Vendor | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM vendors WHERE uuid = :uuid AND deleted_at IS NULL"),
                {"uuid": uuid},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_vendor(row)

    def list_for_user(self, user_id: str) -> list[Vendor]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM vendors WHERE user_id = :user_id AND deleted_at IS NULL ORDER BY name"),
                {"user_id": user_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_vendor(row) for row in rows]

    def update(self, vendor: Vendor) -> Vendor:
        if vendor.id is None:
            raise ValueError("Cannot update vendor without an id")
        self.conn.execute(
            text(
                "UPDATE vendors SET name = :name, contact_name = :contact_name, email = :email, phone = :phone, "
                "website = :website, address = :address, city = :city, state = :state, zip_code = :zip_code, "
                "vendor_type = :vendor_type, rate = :rate, notes = :notes, updated_at = :updated_at "
                "WHERE id = :id"
            ),
            {**self._params(vendor), "updated_at": _now(), "id": vendor.id},
        )
        self.conn.commit()
        result = self.get_by_id(vendor.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve vendor after update (id={vendor.id})")
        return result

    def delete(self, vendor_id: int) -> None:
        self.conn.execute(
            text("UPDATE vendors SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": vendor_id},
        )
        self.conn.commit()


class SQLAlchemyEventRepository(EventRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _params(event: Event) -> dict:
        return {
            "title": event.title,
            "event_type": event.type,
            "event_date": event.date,
            "end_time": event.end_time,
            "location": event.location,
            "description": event.description,
            "client_id": event.client_id,
            "client_name": event.client_name,
            "budget": event.budget,
            "status": event.status.value,
            "notes": event.notes,
        }

    def _write_children(self, event_id: int, event: Event) -> None:
        self.conn.execute(text("DELETE FROM event_vendors WHERE event_id = :event_id"), {"event_id": event_id})
        self.conn.execute(text("DELETE FROM event_tasks WHERE event_id = :event_id"), {"event_id": event_id})
        for vendor_id in dict.fromkeys(event.vendor_ids):
            self.conn.execute(
                text("INSERT INTO event_vendors (event_id, vendor_id) VALUES (:event_id, :vendor_id)"),
                {"event_id": event_id, "vendor_id": vendor_id},
            )
        for i, task in enumerate(event.tasks):
            self.conn.execute(
                text(
                    "INSERT INTO event_tasks (event_id, description, completed, sort_order) "
                    "VALUES (:event_id, :description, :completed, :sort_order)"
                ),
                {"event_id": event_id, "description": task.description, "completed": task.completed, "sort_order": i},
            )

    @staticmethod
    def _build_event(row: RowMapping, vendor_rows: list[RowMapping], task_rows: list[RowMapping]) -> Event:
        return Event(
            id=row["id"],
            uuid=row["uuid"],
            user_id=row["user_id"],
            title=row["title"],
            type=row["event_type"],
            date=to_datetime(row["event_date"], "date"),
            end_time=to_optional_datetime(row["end_time"], "end_time"),
            location=row["location"],
            description=row["description"],
            client_id=row["client_id"],
            client_name=row["client_name"],
            budget=to_float(row["budget"], "budget"),
            status=EventStatus(row["status"]),
            vendor_ids=[vendor_row["vendor_id"] for vendor_row in vendor_rows],
            tasks=[
                EventTask(
                    id=task_row["id"],
                    event_id=task_row["event_id"],
                    description=task_row["description"],
                    completed=bool(task_row["completed"]),
                    sort_order=task_row["sort_order"],
                )
                for task_row in task_rows
            ],
            notes=row["notes"],
            **_timestamps(row),
        )

    def _build_events_from_rows(self, rows: Sequence[RowMapping]) -> list[Event]:
        if not rows:
            return []
        placeholders, params = _in_clause([row["id"] for row in rows])
        vendor_rows = (
            self.conn.execute(
                text(f"SELECT * FROM event_vendors WHERE event_id IN ({placeholders}) ORDER BY vendor_id"),
                params,
            )
            .mappings()
            .fetchall()
        )
        task_rows = (
            self.conn.execute(
                text(f"SELECT * FROM event_tasks WHERE event_id IN ({placeholders}) ORDER BY sort_order"),
                params,
            )
            .mappings()
            .fetchall()
        )
        vendors_by_event: dict[int, list[RowMapping]] = {}
        for vendor_row in vendor_rows:
            vendors_by_event.setdefault(vendor_row["event_id"], []).append(vendor_row)
        tasks_by_event: dict[int, list[RowMapping]] = {}
        for task_row in task_rows:
            tasks_by_event.setdefault(task_row["event_id"], []).append(task_row)
        return [
            self._build_event(row, vendors_by_event.get(row["id"], []), tasks_by_event.get(row["id"], []))
            for row in rows
        ]

    def create(self, event: Event) -> Event:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO events (uuid, user_id, title, event_type, event_date, end_time, location, description, "
                "client_id, client_name, budget, status, notes, created_at, updated_at) "
                "VALUES (:uuid, :user_id, :title, :event_type, :event_date, :end_time, :location, :description, "
                ":client_id, :client_name, :budget, :status, :notes, :created_at, :updated_at)"
            ),
            {
                **self._params(event),
                "uuid": str(ULID()),
                "user_id": event.user_id,
                "created_at": now,
                "updated_at": now,
            },
        )
        event_id = result.lastrowid
        self._write_children(event_id, event)
        self.conn.commit()
        created = self.get_by_id(event_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve event after create (id={event_id})")
        return created

    def get_by_id(self, event_id: int) -> Event | None:
        rows = (
            self.conn.execute(
                text("SELECT * FROM events WHERE id = :id AND deleted_at IS NULL"),
                {"id": event_id},
            )
            .mappings()
            .fetchall()
        )
        events = self._build_events_from_rows(rows)
        return events[0] if events else None

    def get_by_uuid(self, uuid: str) -> Event | None:
        rows = (
            self.conn.execute(
                text("SELECT * FROM events WHERE uuid = :uuid AND deleted_at IS NULL"),
                {"uuid": uuid},
            )
            .mappings()
            .fetchall()
        )
        events = self._build_events_from_rows(rows)
        return events[0] if events else None

    def list_for_user(self, user_id: str) -> list[Event]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM events WHERE user_id = :user_id AND deleted_at IS NULL "
                    "ORDER BY event_date DESC, id DESC"
                ),
                {"user_id": user_id},
            )
            .mappings()
            .fetchall()
        )
        return self._build_events_from_rows(rows)

    def list_for_client(self, client_id: int) -> list[Event]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM events WHERE client_id = :client_id AND deleted_at IS NULL "
                    "ORDER BY event_date DESC, id DESC"
                ),
                {"client_id": client_id},
            )
            .mappings()
            .fetchall()
        )
        return self._build_events_from_rows(rows)

    def update(self, event: Event) -> Event:
        if event.id is None:
            raise ValueError("Cannot update event without an id")
        self.conn.execute(
            text(
                "UPDATE events SET title = :title, event_type = :event_type, event_date = :event_date, "
                "end_time = :end_time, location = :location, description = :description, "
                "client_id = :client_id, client_name = :client_name, budget = :budget, status = :status, "
                "notes = :notes, updated_at = :updated_at WHERE id = :id"
            ),
            {**self._params(event), "updated_at": _now(), "id": event.id},
        )
        self._write_children(event.id, event)
        self.conn.commit()
        result = self.get_by_id(event.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve event after update (id={event.id})")
        return result

    def delete(self, event_id: int) -> None:
        self.conn.execute(
            text("UPDATE events SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": event_id},
        )
        self.conn.commit()


class SQLAlchemyInvoiceRepository(InvoiceRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _params(invoice: Invoice) -> dict:
        return {
            "invoice_number": invoice.invoice_number,
            "client_id": invoice.client_id,
            "event_id": invoice.event_id,
            "issue_date": invoice.issue_date,
            "due_date": invoice.due_date,
            "status": invoice.status.value,
            "tax_rate": invoice.tax_rate,
            "discount_type": invoice.discount.type.value,
            "discount_value": invoice.discount.value,
            "subtotal": invoice.subtotal,
            "tax_amount": invoice.tax_amount,
            "discount_amount": invoice.discount_amount,
            "amount": invoice.amount,
            "notes": invoice.notes,
        }

    def _write_items(self, invoice_id: int, items: list[LineItem]) -> None:
        self.conn.execute(text("DELETE FROM invoice_items WHERE invoice_id = :invoice_id"), {"invoice_id": invoice_id})
        for i, item in enumerate(items):
            self.conn.execute(
                text(
                    "INSERT INTO invoice_items (invoice_id, description, quantity, unit_price, sort_order) "
                    "VALUES (:invoice_id, :description, :quantity, :unit_price, :sort_order)"
                ),
                {
                    "invoice_id": invoice_id,
                    "description": item.description,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "sort_order": i,
                },
            )

    @staticmethod
    def _build_invoice(row: RowMapping, item_rows: list[RowMapping]) -> Invoice:
        return Invoice(
            id=row["id"],
            uuid=row["uuid"],
            user_id=row["user_id"],
            invoice_number=row["invoice_number"],
            client_id=row["client_id"],
            event_id=row["event_id"],
            issue_date=to_date(row["issue_date"], "issue_date"),
            due_date=to_date(row["due_date"], "due_date"),
            status=InvoiceStatus(row["status"]),
            items=[
                LineItem(
                    id=item_row["id"],
                    invoice_id=item_row["invoice_id"],
                    description=item_row["description"],
                    quantity=to_float(item_row["quantity"], "quantity"),
                    unit_price=to_float(item_row["unit_price"], "unit_price"),
                    sort_order=item_row["sort_order"],
                )
                for item_row in item_rows
            ],
            tax_rate=to_float(row["tax_rate"], "tax_rate"),
            discount=DiscountSpec(
                type=DiscountType(row["discount_type"]),
                value=to_float(row["discount_value"], "discount_value"),
            ),
            subtotal=to_float(row["subtotal"], "subtotal"),
            tax_amount=to_float(row["tax_amount"], "tax_amount"),
            discount_amount=to_float(row["discount_amount"], "discount_amount"),
            amount=to_float(row["amount"], "amount"),
            notes=row["notes"],
            pdf_path=row["pdf_path"],
            **_timestamps(row),
        )

    def _build_invoices_from_rows(self, rows: Sequence[RowMapping]) -> list[Invoice]:
        if not rows:
            return []
        placeholders, params = _in_clause([row["id"] for row in rows])
        all_items = (
            self.conn.execute(
                text(f"SELECT * FROM invoice_items WHERE invoice_id IN ({placeholders}) ORDER BY sort_order"),
                params,
            )
            .mappings()
            .fetchall()
        )
        items_by_invoice: dict[int, list[RowMapping]] = {}
        for item_row in all_items:
            items_by_invoice.setdefault(item_row["invoice_id"], []).append(item_row)
        return [self._build_invoice(row, items_by_invoice.get(row["id"], [])) for row in rows]

    def _select(self, where: str, params: dict) -> list[Invoice]:
        rows = (
            self.conn.execute(
                text(f"SELECT * FROM invoices WHERE {where} AND deleted_at IS NULL ORDER BY issue_date DESC, id DESC"),
                params,
            )
            .mappings()
            .fetchall()
        )
        return self._build_invoices_from_rows(rows)

    def create(self, invoice: Invoice) -> Invoice:
        now = _now()
        result = self.conn.execute(
            text(
                "INSERT INTO invoices (uuid, user_id, invoice_number, client_id, event_id, issue_date, due_date, "
                "status, tax_rate, discount_type, discount_value, subtotal, tax_amount, discount_amount, amount, "
                "notes, created_at, updated_at) "
                "VALUES (:uuid, :user_id, :invoice_number, :client_id, :event_id, :issue_date, :due_date, "
                ":status, :tax_rate, :discount_type, :discount_value, :subtotal, :tax_amount, :discount_amount, "
                ":amount, :notes, :created_at, :updated_at)"
            ),
            {
                **self._params(invoice),
                "uuid": str(ULID()),
                "user_id": invoice.user_id,
                "created_at": now,
                "updated_at": now,
            },
        )
        invoice_id = result.lastrowid
        self._write_items(invoice_id, invoice.items)
        self.conn.commit()
        created = self.get_by_id(invoice_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve invoice after create (id={invoice_id})")
        return created

    def get_by_id(self, invoice_id: int) -> Invoice | None:
        invoices = self._select("id = :id", {"id": invoice_id})
        return invoices[0] if invoices else None

    def get_by_uuid(self, uuid: str) -> Invoice | None:
        invoices = self._select("uuid = :uuid", {"uuid": uuid})
        return invoices[0] if invoices else None

    def list_for_user(self, user_id: str) -> list[Invoice]:
        return self._select("user_id = :user_id", {"user_id": user_id})

    def numbers_with_prefix(self, user_id: str, prefix: str) -> list[str]:
        rows = self.conn.execute(
            text("SELECT invoice_number FROM invoices WHERE user_id = :user_id AND invoice_number LIKE :pattern"),
            {"user_id": user_id, "pattern": f"{prefix}%"},
        ).fetchall()
        return [row[0] for row in rows]

    def list_for_client(self, client_id: int) -> list[Invoice]:
        return self._select("client_id = :client_id", {"client_id": client_id})

    def list_for_event(self, event_id: int) -> list[Invoice]:
        return self._select("event_id = :event_id", {"event_id": event_id})

    def update(self, invoice: Invoice) -> Invoice:
        if invoice.id is None:
            raise ValueError("Cannot update invoice without an id")
        self.conn.execute(
            text(
                "UPDATE invoices SET invoice_number = :invoice_number, client_id = :client_id, "
                "event_id = :event_id, issue_date = :issue_date, due_date = :due_date, status = :status, "
                "tax_rate = :tax_rate, discount_type = :discount_type, discount_value = :discount_value, "
                "subtotal = :subtotal, tax_amount = :tax_amount, discount_amount = :discount_amount, "
                "amount = :amount, notes = :notes, updated_at = :updated_at WHERE id = :id"
            ),
            {**self._params(invoice), "updated_at": _now(), "id": invoice.id},
        )
        self._write_items(invoice.id, invoice.items)
        self.conn.commit()
        result = self.get_by_id(invoice.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve invoice after update (id={invoice.id})")
        return result

    def update_status(self, invoice_id: int, status: InvoiceStatus) -> None:
        self.conn.execute(
            text("UPDATE invoices SET status = :status, updated_at = :updated_at WHERE id = :id"),
            {"status": status.value, "updated_at": _now(), "id": invoice_id},
        )
        self.conn.commit()

    def update_pdf_path(self, invoice_id: int, pdf_path: str) -> None:
        self.conn.execute(
            text("UPDATE invoices SET pdf_path = :pdf_path WHERE id = :id"),
            {"pdf_path": pdf_path, "id": invoice_id},
        )
        self.conn.commit()

    def delete(self, invoice_id: int) -> None:
        self.conn.execute(
            text("UPDATE invoices SET deleted_at = :deleted_at WHERE id = :id"),
            {"deleted_at": _now(), "id": invoice_id},
        )
        self.conn.commit()


class SQLAlchemyPreferenceRepository(PreferenceRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    def get(self, user_id: str) -> Preferences | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM user_preferences WHERE user_id = :user_id"),
                {"user_id": user_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return Preferences(
            user_id=row["user_id"],
            currency=row["currency"],
            country=row["country"],
            updated_at=to_optional_datetime(row["updated_at"], "updated_at"),
        )

    def upsert(self, preferences: Preferences) -> Preferences:
        params = {
            "user_id": preferences.user_id,
            "currency": preferences.currency,
            "country": preferences.country,
            "updated_at": _now(),
        }
        updated = self.conn.execute(
            text(
                "UPDATE user_preferences SET currency = :currency, country = :country, "
                "updated_at = :updated_at WHERE user_id = :user_id"
            ),
            params,
        )
        if updated.rowcount == 0:
            self.conn.execute(
                text(
                    "INSERT INTO user_preferences (user_id, currency, country, updated_at) "
                    "VALUES (:user_id, :currency, :country, :updated_at)"
                ),
                params,
            )
        self.conn.commit()
        result = self.get(preferences.user_id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve preferences after upsert (user_id={preferences.user_id})")
        return result
