from abc import ABC, abstractmethod

from eventra.models.client import Client
from eventra.models.event import Event
from eventra.models.invoice import Invoice, InvoiceStatus
from eventra.models.preferences import Preferences
from eventra.models.vendor import Vendor


class ClientRepository(ABC):
    @abstractmethod
    def create(self, client: Client) -> Client: ...

    @abstractmethod
    def get_by_id(self, client_id: int) -> Client | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Client | None: ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Client]: ...

    @abstractmethod
    def update(self, client: Client) -> Client: ...

    @abstractmethod
    def delete(self, client_id: int) -> None: ...


class VendorRepository(ABC):
    @abstractmethod
    def create(self, vendor: Vendor) -> Vendor: ...

    @abstractmethod
    def get_by_id(self, vendor_id: int) -> Vendor | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Vendor | None: ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Vendor]: ...

    @abstractmethod
    def update(self, vendor: Vendor) -> Vendor: ...

    @abstractmethod
    def delete(self, vendor_id: int) -> None: ...


class EventRepository(ABC):
    @abstractmethod
    def create(self, event: Event) -> Event: ...

    @abstractmethod
    def get_by_id(self, event_id: int) -> Event | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Event | None: ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Event]: ...

    @abstractmethod
    def list_for_client(self, client_id: int) -> list[Event]: ...

    @abstractmethod
    def update(self, event: Event) -> Event: ...

    @abstractmethod
    def delete(self, event_id: int) -> None: ...


class InvoiceRepository(ABC):
    @abstractmethod
    def create(self, invoice: Invoice) -> Invoice: ...

    @abstractmethod
    def get_by_id(self, invoice_id: int) -> Invoice | None: ...

    @abstractmethod
    def get_by_uuid(self, uuid: str) -> Invoice | None: ...

    @abstractmethod
    def list_for_user(self, user_id: str) -> list[Invoice]: ...

    @abstractmethod
    def numbers_with_prefix(self, user_id: str, prefix: str) -> list[str]:
        """Invoice numbers starting with ``prefix``, soft-deleted invoices included."""
        ...

    @abstractmethod
    def list_for_client(self, client_id: int) -> list[Invoice]: ...

    @abstractmethod
    def list_for_event(self, event_id: int) -> list[Invoice]: ...

    @abstractmethod
    def update(self, invoice: Invoice) -> Invoice: ...

    @abstractmethod
    def update_status(self, invoice_id: int, status: InvoiceStatus) -> None: ...

    @abstractmethod
    def update_pdf_path(self, invoice_id: int, pdf_path: str) -> None: ...

    @abstractmethod
    def delete(self, invoice_id: int) -> None: ...


class PreferenceRepository(ABC):
    @abstractmethod
    def get(self, user_id: str) -> Preferences | None: ...

    @abstractmethod
    def upsert(self, preferences: Preferences) -> Preferences: ...
