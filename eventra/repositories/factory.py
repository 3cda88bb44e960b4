from eventra.repositories.base import (
    ClientRepository,
    EventRepository,
    InvoiceRepository,
    PreferenceRepository,
    VendorRepository,
)


def get_client_repository() -> ClientRepository:
    from eventra.db import get_connection
    from eventra.repositories.sqlalchemy import SQLAlchemyClientRepository

    return SQLAlchemyClientRepository(get_connection())


def get_vendor_repository() -> VendorRepository:
    from eventra.db import get_connection
    from eventra.repositories.sqlalchemy import SQLAlchemyVendorRepository

    return SQLAlchemyVendorRepository(get_connection())


def get_event_repository() -> EventRepository:
    from eventra.db import get_connection
    from eventra.repositories.sqlalchemy import SQLAlchemyEventRepository

    return SQLAlchemyEventRepository(get_connection())


def get_invoice_repository() -> InvoiceRepository:
    from eventra.db import get_connection
    from eventra.repositories.sqlalchemy import SQLAlchemyInvoiceRepository

    return SQLAlchemyInvoiceRepository(get_connection())


def get_preference_repository() -> PreferenceRepository:
    from eventra.db import get_connection
    from eventra.repositories.sqlalchemy import SQLAlchemyPreferenceRepository

    return SQLAlchemyPreferenceRepository(get_connection())
