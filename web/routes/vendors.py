from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response

from eventra.models.vendor import Vendor
from eventra.search import ALL, search_vendors
from web.deps import current_user, get_vendor_service
from web.schemas import VendorIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/vendors", tags=["vendors"])


@router.get("")
async def vendor_list(request: Request, q: str = "", type: str = ALL) -> list[Vendor]:
    vendors = get_vendor_service(request).list_vendors(current_user(request))
    return search_vendors(vendors, q, type)


@router.post("", status_code=201)
async def vendor_create(request: Request, body: VendorIn) -> Vendor:
    return get_vendor_service(request).create_vendor(current_user(request), Vendor(**body.model_dump()))


@router.get("/{vendor_id}")
async def vendor_detail(request: Request, vendor_id: int) -> Vendor:
    return get_vendor_service(request).get_vendor(current_user(request), vendor_id)


@router.put("/{vendor_id}")
async def vendor_update(request: Request, vendor_id: int, body: VendorIn) -> Vendor:
    service = get_vendor_service(request)
    user_id = current_user(request)
    existing = service.get_vendor(user_id, vendor_id)
    return service.update_vendor(user_id, existing.model_copy(update=body.model_dump()))


@router.delete("/{vendor_id}", status_code=204)
async def vendor_delete(request: Request, vendor_id: int) -> Response:
    get_vendor_service(request).delete_vendor(current_user(request), vendor_id)
    return Response(status_code=204)
