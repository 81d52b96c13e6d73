# tests/test_app_controller.py

from __future__ import annotations

import logging

import pytest

from controller.app_controller import AppController, SessionClosed
from core.colors import COLOR_POOL
from core.exceptions import IndexOutOfRange, TransportError, UnknownUser
from services import task_service
from storage.document_store import DocumentStore

from fakes import FakeSession, InMemoryUserRecords, make_task, network_down

BASE = "https://example-rtdb.test"


@pytest.fixture()
def controller(store: DocumentStore, users: InMemoryUserRecords) -> AppController:
    store.write("contacts", [{"name": "Max Mustermann", "email": "max@example.com", "color": COLOR_POOL[4]}])
    c = AppController(store)
    c.open_session("u1", users)
    return c


def test_open_session_loads_tasks_and_contacts(controller: AppController) -> None:
    assert controller.is_open
    assert len(controller.tasks) == 3
    assert [c.name for c in controller.contacts] == ["Max Mustermann"]
    assert controller.color_for("Max Mustermann") == COLOR_POOL[4]
    assert controller.initials_for("Max Mustermann") == "MM"


def test_close_session_drops_caches(controller: AppController) -> None:
    controller.close_session()
    assert not controller.is_open
    with pytest.raises(SessionClosed):
        controller.tasks
    with pytest.raises(SessionClosed):
        controller.add_task(make_task("late"))


def test_open_session_for_unknown_user_fails(store: DocumentStore) -> None:
    c = AppController(store)
    with pytest.raises(UnknownUser):
        c.open_session("ghost", InMemoryUserRecords("ghost", None))
    assert not c.is_open


def test_default_user_records_live_in_the_store(store: DocumentStore, session: FakeSession) -> None:
    store.write("users/u2", {"name": "Erika Musterfrau", "tasks": [make_task("Remote", ["a"]).to_dict()]})
    c = AppController(store)
    c.open_session("u2")
    assert c.set_subtask_done(0, 0, True) is True
    assert session.stored(f"{BASE}/users/u2.json")["tasks"][0]["numberOfDoneSubtasks"] == 1


def test_task_operations_report_success(controller: AppController, users: InMemoryUserRecords) -> None:
    assert controller.add_task(make_task("New", ["one"])) is True
    assert controller.add_subtask(3, "two") is True
    assert controller.set_subtask_done(3, 1, True) is True
    assert controller.delete_task(0) is True
    assert [t.title for t in controller.tasks] == ["Plan sprint", "Fix login", "New"]
    assert users.document["tasks"][2]["doneSubtask"] == [False, True]


def test_index_errors_propagate(controller: AppController) -> None:
    with pytest.raises(IndexOutOfRange):
        controller.delete_task(10)
    with pytest.raises(IndexOutOfRange):
        controller.set_subtask_done(2, 0, True)


def test_failed_save_is_logged_and_kept_locally(controller: AppController, users: InMemoryUserRecords,
                                                caplog: pytest.LogCaptureFixture) -> None:
    users.fail_save_with = TransportError("offline")
    with caplog.at_level(logging.ERROR, logger="controller.app_controller"):
        assert controller.add_task(make_task("Unsaved")) is False
    assert "Add task failed" in caplog.text
    assert controller.tasks[-1].title == "Unsaved"
    assert len(users.document["tasks"]) == 3


def test_contact_operations(controller: AppController, session: FakeSession) -> None:
    assert controller.add_contact("Erika Musterfrau", "erika@example.com") is True
    assert controller.contacts[-1].color == COLOR_POOL[0]

    session.fail_with = network_down()
    assert controller.add_contact("Offline Person") is False
    assert controller.contacts[-1].name == "Offline Person"
    assert controller.load_contacts() is False

    session.fail_with = None
    assert controller.save_contacts() is True
    assert controller.load_contacts() is True
    assert [c.name for c in controller.contacts] == ["Max Mustermann", "Erika Musterfrau", "Offline Person"]
    assert controller.delete_contact(0) is True
    assert len(session.stored(f"{BASE}/contacts.json")) == 2


def test_close_session_releases_user_lock(controller: AppController) -> None:
    controller.add_task(make_task("locked"))
    assert "u1" in task_service._user_locks
    controller.close_session()
    assert "u1" not in task_service._user_locks
