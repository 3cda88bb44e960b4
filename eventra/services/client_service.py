from __future__ import annotations

import logging

from eventra.aggregation import sum_confirmed_revenue
from eventra.exceptions import NotFoundError
from eventra.models.client import Client
from eventra.repositories.base import ClientRepository, EventRepository

logger = logging.getLogger(__name__)


class ClientService:
    def __init__(self, repo: ClientRepository, event_repo: EventRepository | None = None) -> None:
        self.repo = repo
        self.event_repo = event_repo

    def create_client(self, user_id: str, client: Client) -> Client:
        client.user_id = user_id
        result = self.repo.create(client)
        logger.info("Client created: id=%s, name=%s", result.id, result.full_name)
        return result

    def list_clients(self, user_id: str) -> list[Client]:
        result = self.repo.list_for_user(user_id)
        logger.debug("Listed %d clients for user=%s", len(result), user_id)
        return result

    def get_client(self, user_id: str, client_id: int) -> Client:
        result = self.repo.get_by_id(client_id)
        logger.debug("get_client id=%s found=%s", client_id, result is not None)
        if result is None or result.user_id != user_id:
            raise NotFoundError("client", client_id)
        return result

    def get_client_by_uuid(self, user_id: str, uuid: str) -> Client:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_client_by_uuid uuid=%s found=%s", uuid, result is not None)
        if result is None or result.user_id != user_id:
            raise NotFoundError("client", uuid)
        return result

    def update_client(self, user_id: str, client: Client) -> Client:
        if client.id is None:
            raise ValueError("Cannot update client without an id")
        self.get_client(user_id, client.id)
        client.user_id = user_id
        result = self.repo.update(client)
        logger.info("Client updated: id=%s, name=%s", result.id, result.full_name)
        return result

    def delete_client(self, user_id: str, client_id: int) -> None:
        self.get_client(user_id, client_id)
        self.repo.delete(client_id)
        logger.info("Client %s soft-deleted", client_id)

    def client_revenue(self, user_id: str, client_id: int) -> float:
        """Confirmed revenue from the client's events."""
        self.get_client(user_id, client_id)
        if self.event_repo is None:
            raise ValueError("ClientService needs an event repository to compute revenue")
        events = [e for e in self.event_repo.list_for_client(client_id) if e.user_id == user_id]
        return sum_confirmed_revenue(events)
