from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from eventra.currency import available_currencies
from eventra.models.preferences import Preferences
from web.deps import current_user, get_preference_service
from web.schemas import PreferencesIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/preferences", tags=["preferences"])


@router.get("")
async def preferences_detail(request: Request) -> Preferences:
    return get_preference_service(request).get_preferences(current_user(request))


@router.put("")
async def preferences_update(request: Request, body: PreferencesIn) -> Preferences:
    service = get_preference_service(request)
    user_id = current_user(request)
    # A country implies its currency; an explicit currency wins when both are given.
    prefs = service.get_preferences(user_id)
    if body.country:
        prefs = service.set_country(user_id, body.country)
    if body.currency:
        prefs = service.set_currency(user_id, body.currency)
    return prefs


@router.get("/currencies")
async def currency_list() -> list[dict[str, str]]:
    return available_currencies()
