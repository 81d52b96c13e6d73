# tests/test_app.py

from __future__ import annotations

import pytest

from app.app import main
from core.colors import COLOR_POOL
from storage.document_store import DocumentStore

from fakes import FakeSession, make_task, network_down


def test_main_prints_summary(store: DocumentStore, capsys: pytest.CaptureFixture[str]) -> None:
    store.write("users/u1", {"name": "Max Mustermann",
                             "tasks": [make_task("Write report", ["a", "b"], [True, False]).to_dict()]})
    store.write("contacts", [{"name": "Erika Musterfrau", "email": "erika@example.com", "color": COLOR_POOL[2]}])

    assert main(["u1"], store=store) == 0
    out = capsys.readouterr().out
    assert "[0] Write report (1/2) · 2024-05-01" in out
    assert f"EM {COLOR_POOL[2]} Erika Musterfrau <erika@example.com>" in out


def test_main_without_user_id(store: DocumentStore, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("app.app.USER_ID", "")
    assert main([], store=store) == 2


def test_main_store_failure(store: DocumentStore, session: FakeSession) -> None:
    session.fail_with = network_down()
    assert main(["u1"], store=store) == 1
