from datetime import datetime
from unittest.mock import MagicMock

import pytest

from eventra.exceptions import InvalidInputError, NotFoundError
from eventra.models.client import Client
from eventra.models.event import Event, EventStatus, EventTask
from eventra.models.vendor import Vendor
from eventra.services.event_service import EventService


def _event(**overrides):
    defaults = dict(
        id=10,
        uuid="e-uuid",
        user_id="user-1",
        title="Spring Gala",
        date=datetime(2025, 4, 12, 18, 30),
        tasks=[EventTask(description="Book venue"), EventTask(description="Send invites")],
    )
    defaults.update(overrides)
    return Event(**defaults)


class TestEventService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.mock_client_repo = MagicMock()
        self.mock_vendor_repo = MagicMock()
        self.service = EventService(self.mock_repo, self.mock_client_repo, self.mock_vendor_repo)
        self.mock_repo.update.side_effect = lambda event: event

    def test_create_event_resolves_client_name(self):
        self.mock_client_repo.get_by_id.return_value = Client(
            id=1, user_id="user-1", first_name="Ada", last_name="Lovelace"
        )
        self.mock_repo.create.side_effect = lambda event: event

        result = self.service.create_event("user-1", _event(id=None, client_id=1, client_name="stale"))

        assert result.user_id == "user-1"
        assert result.client_name == "Ada Lovelace"

    def test_create_event_without_client_clears_name(self):
        self.mock_repo.create.side_effect = lambda event: event
        result = self.service.create_event("user-1", _event(id=None, client_name="stale"))
        assert result.client_name == ""
        self.mock_client_repo.get_by_id.assert_not_called()

    def test_create_event_with_foreign_client(self):
        self.mock_client_repo.get_by_id.return_value = Client(
            id=1, user_id="user-2", first_name="Ada", last_name="Lovelace"
        )
        with pytest.raises(NotFoundError):
            self.service.create_event("user-1", _event(id=None, client_id=1))
        self.mock_repo.create.assert_not_called()

    def test_create_event_with_unknown_vendor(self):
        self.mock_vendor_repo.get_by_id.side_effect = [Vendor(id=1, user_id="user-1", name="A"), None]
        with pytest.raises(NotFoundError, match="Vendor"):
            self.service.create_event("user-1", _event(id=None, vendor_ids=[1, 2]))

    def test_list_for_client_filters_owner(self):
        self.mock_client_repo.get_by_id.return_value = Client(
            id=1, user_id="user-1", first_name="Ada", last_name="Lovelace"
        )
        self.mock_repo.list_for_client.return_value = [_event(), _event(id=11, user_id="user-2")]

        assert [e.id for e in self.service.list_for_client("user-1", 1)] == [10]

    def test_get_event_foreign(self):
        self.mock_repo.get_by_id.return_value = _event(user_id="user-2")
        with pytest.raises(NotFoundError):
            self.service.get_event("user-1", 10)

    def test_get_event_by_uuid(self):
        self.mock_repo.get_by_uuid.return_value = _event()
        assert self.service.get_event_by_uuid("user-1", "e-uuid").id == 10

    def test_update_event(self):
        self.mock_repo.get_by_id.return_value = _event()
        result = self.service.update_event("user-1", _event(title="Renamed"))
        assert result.title == "Renamed"

    def test_set_status(self):
        self.mock_repo.get_by_id.return_value = _event()
        result = self.service.set_status("user-1", 10, EventStatus.CONFIRMED)

        assert result.status == EventStatus.CONFIRMED
        assert self.mock_repo.update.call_args[0][0].status == EventStatus.CONFIRMED

    def test_set_task_completed(self):
        self.mock_repo.get_by_id.return_value = _event()
        result = self.service.set_task_completed("user-1", 10, 1)

        assert [t.completed for t in result.tasks] == [False, True]

    def test_set_task_uncompleted(self):
        event = _event()
        event.tasks[0].completed = True
        self.mock_repo.get_by_id.return_value = event

        result = self.service.set_task_completed("user-1", 10, 0, completed=False)
        assert result.tasks[0].completed is False

    @pytest.mark.parametrize("index", [-1, 2, 99])
    def test_set_task_bad_index(self, index):
        self.mock_repo.get_by_id.return_value = _event()
        with pytest.raises(InvalidInputError):
            self.service.set_task_completed("user-1", 10, index)
        self.mock_repo.update.assert_not_called()

    def test_delete_event(self):
        self.mock_repo.get_by_id.return_value = _event()
        self.service.delete_event("user-1", 10)
        self.mock_repo.delete.assert_called_once_with(10)
