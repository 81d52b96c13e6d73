from __future__ import annotations

import logging
from typing import List

from core.config import TASKS_PATH
from core.models import Task, as_list
from storage.document_store import DocumentStore

logger = logging.getLogger(__name__)


class SharedBoard:
    """Top-level `tasks` document, independent of any user record."""

    def __init__(self, store: DocumentStore, path: str = TASKS_PATH):
        self.store = store
        self.path = path

    def load_tasks(self) -> List[Task]:
        data = self.store.read(self.path)
        if not data:
            return []
        return [Task.from_dict(t) for t in as_list(data) if t]

    def save_tasks(self, tasks: List[Task]) -> None:
        self.store.write(self.path, [t.to_dict() for t in tasks])
        logger.debug("Saved %d board tasks", len(tasks))
