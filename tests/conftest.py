# tests/conftest.py

from __future__ import annotations

import pytest

from storage.document_store import DocumentStore

from fakes import FakeSession, InMemoryUserRecords, make_task

BASE = "https://example-rtdb.test"


@pytest.fixture()
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture()
def store(session: FakeSession) -> DocumentStore:
    return DocumentStore(BASE, auth_token=None, timeout=5, session=session)


@pytest.fixture()
def user_doc() -> dict:
    return {
        "name": "Max Mustermann",
        "email": "max@example.com",
        "password": "secret",
        "tasks": [
            make_task("Write report", ["outline", "draft", "review"], [True, False, False]).to_dict(),
            make_task("Plan sprint", ["backlog"]).to_dict(),
            make_task("Fix login").to_dict(),
        ],
    }


@pytest.fixture()
def users(user_doc: dict) -> InMemoryUserRecords:
    return InMemoryUserRecords("u1", user_doc)
