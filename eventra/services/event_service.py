from __future__ import annotations

import logging

from eventra.exceptions import InvalidInputError, NotFoundError
from eventra.models.event import Event, EventStatus
from eventra.repositories.base import ClientRepository, EventRepository, VendorRepository

logger = logging.getLogger(__name__)


class EventService:
    def __init__(
        self,
        repo: EventRepository,
        client_repo: ClientRepository,
        vendor_repo: VendorRepository,
    ) -> None:
        self.repo = repo
        self.client_repo = client_repo
        self.vendor_repo = vendor_repo

    def _resolve_client(self, user_id: str, event: Event) -> None:
        """Copy the client's display name onto the event."""
        if event.client_id is None:
            event.client_name = ""
            return
        client = self.client_repo.get_by_id(event.client_id)
        if client is None or client.user_id != user_id:
            raise NotFoundError("client", event.client_id)
        event.client_name = client.full_name

    def _check_vendors(self, user_id: str, event: Event) -> None:
        for vendor_id in event.vendor_ids:
            vendor = self.vendor_repo.get_by_id(vendor_id)
            if vendor is None or vendor.user_id != user_id:
                raise NotFoundError("vendor", vendor_id)

    def create_event(self, user_id: str, event: Event) -> Event:
        event.user_id = user_id
        self._resolve_client(user_id, event)
        self._check_vendors(user_id, event)
        result = self.repo.create(event)
        logger.info("Event created: id=%s, title=%s, date=%s", result.id, result.title, result.date)
        return result

    def list_events(self, user_id: str) -> list[Event]:
        result = self.repo.list_for_user(user_id)
        logger.debug("Listed %d events for user=%s", len(result), user_id)
        return result

    def list_for_client(self, user_id: str, client_id: int) -> list[Event]:
        client = self.client_repo.get_by_id(client_id)
        if client is None or client.user_id != user_id:
            raise NotFoundError("client", client_id)
        return [e for e in self.repo.list_for_client(client_id) if e.user_id == user_id]

    def get_event(self, user_id: str, event_id: int) -> Event:
        result = self.repo.get_by_id(event_id)
        logger.debug("get_event id=%s found=%s", event_id, result is not None)
        if result is None or result.user_id != user_id:
            raise NotFoundError("event", event_id)
        return result

    def get_event_by_uuid(self, user_id: str, uuid: str) -> Event:
        result = self.repo.get_by_uuid(uuid)
        if result is None or result.user_id != user_id:
            raise NotFoundError("event", uuid)
        return result

    def update_event(self, user_id: str, event: Event) -> Event:
        if event.id is None:
            raise ValueError("Cannot update event without an id")
        self.get_event(user_id, event.id)
        event.user_id = user_id
        self._resolve_client(user_id, event)
        self._check_vendors(user_id, event)
        result = self.repo.update(event)
        logger.info("Event updated: id=%s, title=%s", result.id, result.title)
        return result

    def set_status(self, user_id: str, event_id: int, status: EventStatus) -> Event:
        event = self.get_event(user_id, event_id)
        event.status = status
        result = self.repo.update(event)
        logger.info("Event %s status set to %s", event_id, status.value)
        return result

    def set_task_completed(self, user_id: str, event_id: int, task_index: int, completed: bool = True) -> Event:
        event = self.get_event(user_id, event_id)
        if not 0 <= task_index < len(event.tasks):
            raise InvalidInputError(
                f"Event {event_id} has no task #{task_index}",
                context={"event_id": event_id, "task_index": task_index},
            )
        event.tasks[task_index].completed = completed
        result = self.repo.update(event)
        logger.info("Event %s task %d completed=%s", event_id, task_index, completed)
        return result

    def delete_event(self, user_id: str, event_id: int) -> None:
        self.get_event(user_id, event_id)
        self.repo.delete(event_id)
        logger.info("Event %s soft-deleted", event_id)
