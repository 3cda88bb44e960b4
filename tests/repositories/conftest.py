import pytest
from sqlalchemy import Connection

from eventra.repositories.sqlalchemy import (
    SQLAlchemyClientRepository,
    SQLAlchemyEventRepository,
    SQLAlchemyInvoiceRepository,
    SQLAlchemyPreferenceRepository,
    SQLAlchemyVendorRepository,
)


@pytest.fixture()
def client_repo(db_connection: Connection) -> SQLAlchemyClientRepository:
    return SQLAlchemyClientRepository(db_connection)


@pytest.fixture()
def vendor_repo(db_connection: Connection) -> SQLAlchemyVendorRepository:
    return SQLAlchemyVendorRepository(db_connection)


@pytest.fixture()
def event_repo(db_connection: Connection) -> SQLAlchemyEventRepository:
    return SQLAlchemyEventRepository(db_connection)


@pytest.fixture()
def invoice_repo(db_connection: Connection) -> SQLAlchemyInvoiceRepository:
    return SQLAlchemyInvoiceRepository(db_connection)


@pytest.fixture()
def preference_repo(db_connection: Connection) -> SQLAlchemyPreferenceRepository:
    return SQLAlchemyPreferenceRepository(db_connection)
