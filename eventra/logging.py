import logging
import sys

from eventra.settings import settings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Third-party loggers that are too chatty at INFO.
QUIET_LOGGERS = ("uvicorn.access", "botocore", "fontTools", "alembic.runtime.migration")


def configure_logging(level: str | None = None) -> None:
    """Install a single stderr handler on the root logger.

    Output is JSON (python-json-logger) when ``EVENTRA_LOG_JSON`` is set.
    """
    level_name = (level or settings.log_level).upper()
    handler = logging.StreamHandler(sys.stderr)

    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(
                fmt=JSON_FORMAT,
                rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# Alembic's fileConfig replaces the root handlers; call this afterwards.
reconfigure = configure_logging
