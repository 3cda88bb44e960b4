from datetime import date

import pytest

from eventra.models.invoice import DiscountSpec, DiscountType, InvoiceStatus, LineItem
from eventra.services.invoice_service import InvoiceService
from eventra.totals import compute_totals


@pytest.fixture()
def client_id(client_repo, sample_client):
    return client_repo.create(sample_client()).id


class TestInvoiceRepoCRUD:
    def test_create_and_get(self, invoice_repo, sample_invoice, client_id):
        invoice = sample_invoice(client_id=client_id)
        invoice.apply_totals(compute_totals(invoice.items, invoice.tax_rate, invoice.discount))
        created = invoice_repo.create(invoice)

        assert created.id is not None
        assert created.uuid != ""
        assert created.invoice_number == "INV-2503-0001"
        assert created.issue_date == date(2025, 3, 1)
        assert created.due_date == date(2025, 3, 31)
        assert created.status == InvoiceStatus.DRAFT
        assert created.discount == DiscountSpec(type=DiscountType.PERCENTAGE, value=5.0)
        assert created.tax_rate == 10.0
        assert created.amount == pytest.approx(4000 + 400 - 200)

    def test_items_round_trip_in_order(self, invoice_repo, sample_invoice, client_id):
        created = invoice_repo.create(sample_invoice(client_id=client_id))

        assert [i.description for i in created.items] == ["Venue rental", "Catering per guest"]
        assert [i.sort_order for i in created.items] == [0, 1]
        assert created.items[1].quantity == 50
        assert created.items[1].amount == 2000.0

    def test_get_by_uuid(self, invoice_repo, sample_invoice, client_id):
        created = invoice_repo.create(sample_invoice(client_id=client_id))
        assert invoice_repo.get_by_uuid(created.uuid).id == created.id

    def test_get_not_found(self, invoice_repo):
        assert invoice_repo.get_by_id(9999) is None
        assert invoice_repo.get_by_uuid("missing") is None

    def test_list_for_user_latest_issue_first(self, invoice_repo, sample_invoice, client_id):
        older = invoice_repo.create(sample_invoice(client_id=client_id, issue_date=date(2025, 1, 1)))
        newer = invoice_repo.create(sample_invoice(client_id=client_id, issue_date=date(2025, 6, 1)))

        invoices = invoice_repo.list_for_user("user-1")
        assert [i.id for i in invoices] == [newer.id, older.id]
        assert invoice_repo.list_for_user("someone-else") == []

    def test_list_for_client_and_event(self, invoice_repo, event_repo, sample_invoice, sample_event, client_id):
        event = event_repo.create(sample_event(client_id=client_id))
        linked = invoice_repo.create(sample_invoice(client_id=client_id, event_id=event.id))
        invoice_repo.create(sample_invoice(client_id=client_id))

        assert len(invoice_repo.list_for_client(client_id)) == 2
        assert [i.id for i in invoice_repo.list_for_event(event.id)] == [linked.id]

    def test_update_replaces_items(self, invoice_repo, sample_invoice, client_id):
        created = invoice_repo.create(sample_invoice(client_id=client_id))
        created.items = [LineItem(description="Flat fee", quantity=1, unit_price=999.0)]
        created.discount = DiscountSpec(type=DiscountType.FIXED, value=99.0)
        created.notes = "Revised"
        updated = invoice_repo.update(created)

        assert [i.description for i in updated.items] == ["Flat fee"]
        assert updated.discount.type == DiscountType.FIXED
        assert updated.discount.value == 99.0
        assert updated.notes == "Revised"

    def test_update_status(self, invoice_repo, sample_invoice, client_id):
        created = invoice_repo.create(sample_invoice(client_id=client_id))
        invoice_repo.update_status(created.id, InvoiceStatus.PAID)

        assert invoice_repo.get_by_id(created.id).status == InvoiceStatus.PAID

    def test_update_pdf_path(self, invoice_repo, sample_invoice, client_id):
        created = invoice_repo.create(sample_invoice(client_id=client_id))
        assert created.pdf_path is None
        invoice_repo.update_pdf_path(created.id, "/tmp/invoices/x.pdf")

        assert invoice_repo.get_by_id(created.id).pdf_path == "/tmp/invoices/x.pdf"

    def test_soft_delete(self, invoice_repo, sample_invoice, client_id):
        created = invoice_repo.create(sample_invoice(client_id=client_id))
        invoice_repo.delete(created.id)

        assert invoice_repo.get_by_id(created.id) is None
        assert invoice_repo.list_for_client(client_id) == []


class TestInvoiceNumbering:
    def test_numbers_with_prefix_includes_deleted(self, invoice_repo, sample_invoice, client_id):
        kept = invoice_repo.create(sample_invoice(client_id=client_id, invoice_number="INV-2503-0001"))
        gone = invoice_repo.create(sample_invoice(client_id=client_id, invoice_number="INV-2503-0002"))
        invoice_repo.create(sample_invoice(client_id=client_id, invoice_number="INV-2504-0001"))
        invoice_repo.create(sample_invoice(client_id=client_id, user_id="user-2", invoice_number="INV-2503-0009"))
        invoice_repo.delete(gone.id)

        numbers = invoice_repo.numbers_with_prefix("user-1", "INV-2503-")

        assert sorted(numbers) == [kept.invoice_number, "INV-2503-0002"]

    def test_deleted_number_is_not_reissued(self, invoice_repo, client_repo, event_repo, sample_invoice, client_id):
        service = InvoiceService(invoice_repo, client_repo, event_repo)
        first = service.create_invoice("user-1", sample_invoice(client_id=client_id, invoice_number=""))
        service.delete_invoice("user-1", first.id)

        second = service.create_invoice("user-1", sample_invoice(client_id=client_id, invoice_number=""))

        assert first.invoice_number == "INV-2503-0001"
        assert second.invoice_number == "INV-2503-0002"
