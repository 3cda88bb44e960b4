import logging

import questionary

from eventra.cli.app import main_menu
from eventra.db import close_connection, initialize_db
from eventra.logging import configure_logging, reconfigure
from eventra.settings import settings

logger = logging.getLogger(__name__)


def _resolve_user_id() -> str | None:
    if settings.user_id:
        return settings.user_id
    return questionary.text("User id:").ask() or None


def main() -> None:
    configure_logging()
    initialize_db()
    reconfigure()

    user_id = _resolve_user_id()
    if not user_id:
        logger.warning("No user id given; exiting")
        return
    try:
        main_menu(user_id)
    finally:
        close_connection()


if __name__ == "__main__":
    main()
