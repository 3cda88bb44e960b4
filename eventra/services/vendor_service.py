from __future__ import annotations

import logging

from eventra.exceptions import NotFoundError
from eventra.models.vendor import Vendor
from eventra.repositories.base import VendorRepository

logger = logging.getLogger(__name__)


class VendorService:
    def __init__(self, repo: VendorRepository) -> None:
        self.repo = repo

    def create_vendor(self, user_id: str, vendor: Vendor) -> Vendor:
        vendor.user_id = user_id
        result = self.repo.create(vendor)
        logger.info("Vendor created: id=%s, name=%s", result.id, result.name)
        return result

    def list_vendors(self, user_id: str) -> list[Vendor]:
        result = self.repo.list_for_user(user_id)
        logger.debug("Listed %d vendors for user=%s", len(result), user_id)
        return result

    def get_vendor(self, user_id: str, vendor_id: int) -> Vendor:
        result = self.repo.get_by_id(vendor_id)
        logger.debug("get_vendor id=%s found=%s", vendor_id, result is not None)
        if result is None or result.user_id != user_id:
            raise NotFoundError("vendor", vendor_id)
        return result

    def get_vendor_by_uuid(self, user_id: str, uuid: str) -> Vendor:
        result = self.repo.get_by_uuid(uuid)
        if result is None or result.user_id != user_id:
            raise NotFoundError("vendor", uuid)
        return result

    def update_vendor(self, user_id: str, vendor: Vendor) -> Vendor:
        if vendor.id is None:
            raise ValueError("Cannot update vendor without an id")
        self.get_vendor(user_id, vendor.id)
        vendor.user_id = user_id
        result = self.repo.update(vendor)
        logger.info("Vendor updated: id=%s, name=%s", result.id, result.name)
        return result

    def delete_vendor(self, user_id: str, vendor_id: int) -> None:
        self.get_vendor(user_id, vendor_id)
        self.repo.delete(vendor_id)
        logger.info("Vendor %s soft-deleted", vendor_id)
