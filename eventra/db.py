import logging
import os

from alembic.config import Config
from sqlalchemy import Connection, create_engine, event
from sqlalchemy.engine import Engine

from alembic import command
from eventra.settings import settings

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_connection: Connection | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def build_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(url)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(url, pool_pre_ping=True, pool_recycle=1800)


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = build_engine(settings.db_url)
        logger.info("Database engine created: dialect=%s", _engine.dialect.name)
    return _engine


def get_connection() -> Connection:
    """Return a process-wide connection for the CLI.

    The web app opens one connection per request in DBConnectionMiddleware.
    """
    global _connection
    if _connection is None:
        _connection = get_engine().connect()
        logger.debug("Singleton DB connection created")
    return _connection


def close_connection() -> None:
    global _connection
    if _connection is not None:
        _connection.close()
        _connection = None
        logger.debug("Singleton DB connection closed")


def _get_alembic_config() -> Config:
    project_root = os.path.dirname(os.path.dirname(__file__))
    ini_path = os.path.join(project_root, "alembic.ini")
    if not os.path.exists(ini_path):
        ini_path = os.path.join(os.getcwd(), "alembic.ini")
    cfg = Config(ini_path)
    cfg.set_main_option("script_location", os.path.join(project_root, "alembic"))
    cfg.set_main_option("sqlalchemy.url", settings.db_url.replace("%", "%%"))
    return cfg


def initialize_db() -> None:
    """Bring the schema up to date by running pending Alembic migrations."""
    logger.info("Running Alembic migrations against %s", get_engine().dialect.name)
    command.upgrade(_get_alembic_config(), "head")
    logger.info("Migrations complete")
