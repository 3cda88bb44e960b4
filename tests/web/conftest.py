"""Web test fixtures: TestClient over a shared in-memory SQLite database."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from eventra.models.client import Client
from eventra.repositories.sqlalchemy import SQLAlchemyClientRepository
from eventra.storage.local import LocalStorage
from tests.conftest import OTHER_USER_ID, USER_ID, apply_schema


def _make_test_engine():
    """Fresh in-memory SQLite engine whose pool hands out a single shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    with engine.connect() as conn:
        apply_schema(conn)

    return engine


def create_client_in_db(engine, **overrides) -> Client:
    defaults = dict(user_id=USER_ID, first_name="Ada", last_name="Lovelace", type="Corporate")
    defaults.update(overrides)
    with engine.connect() as conn:
        return SQLAlchemyClientRepository(conn).create(Client(**defaults))


@pytest.fixture(autouse=True)
def web_test_db(monkeypatch, tmp_path):
    """Point the web app at the in-memory DB and a temporary PDF directory."""
    engine = _make_test_engine()

    import web.deps as deps_module

    monkeypatch.setattr(deps_module, "get_engine", lambda: engine)
    monkeypatch.setattr(deps_module, "get_storage", lambda: LocalStorage(str(tmp_path / "pdfs")))

    import web.app as app_module

    monkeypatch.setattr(app_module, "initialize_db", lambda: None)

    yield engine

    engine.dispose()


@pytest.fixture()
def test_engine(web_test_db):
    return web_test_db


@pytest.fixture()
def anon_client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app)


@pytest.fixture()
def client():
    """Client that identifies as the test user on every request."""
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app, headers={"X-User-Id": USER_ID})


@pytest.fixture()
def other_client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app, headers={"X-User-Id": OTHER_USER_ID})
