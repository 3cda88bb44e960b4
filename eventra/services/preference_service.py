from __future__ import annotations

import logging

from eventra.currency import COUNTRY_TO_CURRENCY, CURRENCY_CONFIG, currency_for_country
from eventra.exceptions import InvalidInputError
from eventra.models.preferences import Preferences
from eventra.repositories.base import PreferenceRepository
from eventra.settings import settings

logger = logging.getLogger(__name__)


class PreferenceService:
    def __init__(self, repo: PreferenceRepository) -> None:
        self.repo = repo

    def get_preferences(self, user_id: str) -> Preferences:
        result = self.repo.get(user_id)
        logger.debug("get_preferences user=%s found=%s", user_id, result is not None)
        if result is None:
            return Preferences(user_id=user_id, currency=settings.default_currency.upper())
        return result

    def get_currency(self, user_id: str) -> str:
        return self.get_preferences(user_id).currency

    def set_currency(self, user_id: str, currency: str) -> Preferences:
        code = currency.strip().upper()
        if code not in CURRENCY_CONFIG:
            raise InvalidInputError(f"Unsupported currency: {currency}", context={"currency": currency})
        prefs = self.get_preferences(user_id)
        prefs.currency = code
        result = self.repo.upsert(prefs)
        logger.info("Currency for user=%s set to %s", user_id, code)
        return result

    def set_country(self, user_id: str, country: str) -> Preferences:
        """Record the user's country and switch to that country's currency."""
        code = country.strip().upper()
        if code not in COUNTRY_TO_CURRENCY:
            raise InvalidInputError(f"Unsupported country: {country}", context={"country": country})
        prefs = self.get_preferences(user_id)
        prefs.country = code
        prefs.currency = currency_for_country(code)
        result = self.repo.upsert(prefs)
        logger.info("Country for user=%s set to %s (currency=%s)", user_id, code, result.currency)
        return result
