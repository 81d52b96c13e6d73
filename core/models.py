from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# claves de wire que el modelo conoce; el resto va a `extra`
_TASK_KEYS = {
    "title", "description", "dueDate", "priority", "category",
    "subtasks", "doneSubtask", "numberOfDoneSubtasks", "assignedContacts",
}
_CONTACT_KEYS = {"name", "email", "phone", "color"}
_USER_KEYS = {"name", "tasks"}


def as_list(value: Any) -> list:
    # Firebase omite los arrays vacíos: None y ausente valen como []
    if value is None:
        return []
    if isinstance(value, dict):
        return [value[k] for k in sorted(value, key=lambda k: int(k) if str(k).isdigit() else 0)]
    return list(value)


@dataclass
class Task:
    title: str
    description: str = ""
    due_date: Optional[str] = None  # YYYY-MM-DD
    priority: Optional[str] = None
    category: Optional[str] = None
    subtasks: List[str] = field(default_factory=list)
    done_subtask: List[bool] = field(default_factory=list)
    assigned_contacts: List[Any] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # doneSubtask siempre paralelo a subtasks
        flags = [bool(f) for f in self.done_subtask[: len(self.subtasks)]]
        flags += [False] * (len(self.subtasks) - len(flags))
        self.done_subtask = flags

    @property
    def number_of_done_subtasks(self) -> int:
        """Derived from `done_subtask`, so it cannot drift from the flags."""
        return sum(1 for f in self.done_subtask if f)

    def add_subtask(self, title: str) -> int:
        self.subtasks.append(title)
        self.done_subtask.append(False)
        return len(self.subtasks) - 1

    def set_subtask_done(self, subtask_index: int, done: bool) -> bool:
        """Set one flag. Returns False (and changes nothing) when it already had that value."""
        if not isinstance(done, bool):
            raise TypeError(f"done must be a bool, got {done!r}")
        if self.done_subtask[subtask_index] == done:
            return False
        self.done_subtask[subtask_index] = done
        return True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        task = cls(
            title=data.get("title") or "",
            description=data.get("description") or "",
            due_date=data.get("dueDate"),
            priority=data.get("priority"),
            category=data.get("category"),
            subtasks=[str(s) for s in as_list(data.get("subtasks"))],
            done_subtask=as_list(data.get("doneSubtask")),
            assigned_contacts=as_list(data.get("assignedContacts")),
            extra={k: v for k, v in data.items() if k not in _TASK_KEYS},
        )
        stored = data.get("numberOfDoneSubtasks")
        if stored is not None and stored != task.number_of_done_subtasks:
            logger.debug("Task %r: stored numberOfDoneSubtasks=%s, recomputed %s",
                         task.title, stored, task.number_of_done_subtasks)
        return task

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.extra,
            "title": self.title,
            "description": self.description,
            "dueDate": self.due_date,
            "priority": self.priority,
            "category": self.category,
            "subtasks": list(self.subtasks),
            "doneSubtask": list(self.done_subtask),
            "numberOfDoneSubtasks": self.number_of_done_subtasks,
            "assignedContacts": list(self.assigned_contacts),
        }


@dataclass
class Contact:
    name: str
    email: str = ""
    phone: str = ""
    color: Optional[str] = None  # miembro de COLOR_POOL
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Contact":
        return cls(
            name=data.get("name") or "",
            email=data.get("email") or "",
            phone=data.get("phone") or "",
            color=data.get("color"),
            extra={k: v for k, v in data.items() if k not in _CONTACT_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {**self.extra, "name": self.name, "email": self.email,
                "phone": self.phone, "color": self.color}


@dataclass
class UserRecord:
    """Full profile document of one user. Only `name` and `tasks` are interpreted."""
    name: str
    tasks: List[Task] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserRecord":
        return cls(
            name=data.get("name") or "",
            tasks=[Task.from_dict(t) for t in as_list(data.get("tasks")) if t is not None],
            extra={k: v for k, v in data.items() if k not in _USER_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {**self.extra, "name": self.name, "tasks": [t.to_dict() for t in self.tasks]}
