from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, List, Optional, TypeVar

from core.exceptions import IndexOutOfRange
from core.models import Task, UserRecord
from storage.user_records import UserRecordAccess

logger = logging.getLogger(__name__)

T = TypeVar("T")

# un lock por usuario, compartido por todas las instancias del proceso
_user_locks: Dict[str, threading.Lock] = {}
_registry_lock = threading.Lock()


def _lock_for(user_id: str) -> threading.Lock:
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = _user_locks[user_id] = threading.Lock()
        return lock


def release_user_lock(user_id: str) -> None:
    """Forget the lock of `user_id` unless a mutation is holding it."""
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is not None and not lock.locked():
            del _user_locks[user_id]


def check_index(index: int, size: int, what: str) -> None:
    if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < size:
        raise IndexOutOfRange(f"{what} index {index!r} out of range (0..{size - 1})")


class TaskModel:
    """
    Task list of the current user, written through to the user record.

    Every mutation is read record -> mutate -> write whole record. Indices are
    positions in `tasks` and are invalidated by `delete_task`.
    """

    def __init__(self, users: UserRecordAccess):
        self.users = users
        self.tasks: List[Task] = []

    def transaction(self, mutator: Callable[[UserRecord], T],
                    persist_if: Optional[Callable[[T], bool]] = None) -> T:
        """
        Run `mutator` on a fresh copy of the user record and save it. Serialized per user.

        `persist_if(result)` returning False skips the write.
        """
        with _lock_for(self.users.user_id):
            user = self.users.get_user()
            result = mutator(user)
            # la mutación local queda aplicada aunque falle el guardado
            self.tasks = user.tasks
            if persist_if is None or persist_if(result):
                self.users.save_user(user)
            return result

    def load_current_user_tasks(self) -> List[Task]:
        self.tasks = self.users.get_user().tasks
        return self.tasks

    def add_task(self, task: Task) -> int:
        """Append `task` and persist. Returns its index."""
        def mutate(user: UserRecord) -> int:
            user.tasks.append(task)
            return len(user.tasks) - 1

        index = self.transaction(mutate)
        logger.info("Added task %d %r", index, task.title)
        return index

    def add_subtask(self, task_index: int, title: str) -> int:
        def mutate(user: UserRecord) -> int:
            check_index(task_index, len(user.tasks), "task")
            return user.tasks[task_index].add_subtask(title)

        return self.transaction(mutate)

    def set_subtask_done(self, task_index: int, subtask_index: int, done: bool) -> bool:
        """
        Mark one subtask done/undone.

        Idempotent: when the flag already equals `done` nothing is written and
        False is returned. The done counter is derived from the flags.
        """
        def mutate(user: UserRecord) -> bool:
            check_index(task_index, len(user.tasks), "task")
            task = user.tasks[task_index]
            check_index(subtask_index, len(task.subtasks), "subtask")
            return task.set_subtask_done(subtask_index, done)

        changed = self.transaction(mutate, persist_if=bool)
        if not changed:
            logger.debug("Subtask %d/%d already done=%s; no write", task_index, subtask_index, done)
        return changed

    def delete_task(self, index: int) -> Task:
        """Remove the task at `index`; later tasks shift down by one."""
        def mutate(user: UserRecord) -> Task:
            check_index(index, len(user.tasks), "task")
            return user.tasks.pop(index)

        removed = self.transaction(mutate)
        logger.info("Deleted task %d %r", index, removed.title)
        return removed
