from __future__ import annotations

import logging
from typing import Protocol

from core.config import USERS_PATH
from core.exceptions import SerializationError, UnknownUser
from core.models import UserRecord
from storage.document_store import DocumentStore

logger = logging.getLogger(__name__)


class UserRecordAccess(Protocol):
    """Get/set of the current user's full profile document."""

    user_id: str

    def get_user(self) -> UserRecord: ...

    def save_user(self, user: UserRecord) -> None: ...


class RemoteUserRecords:
    """User records stored one document per user under `<users_path>/<user_id>`."""

    def __init__(self, store: DocumentStore, user_id: str, users_path: str = USERS_PATH):
        if not user_id:
            raise ValueError("user_id is required")
        self.store = store
        self.user_id = user_id
        self.path = f"{users_path.strip('/')}/{user_id}"

    def get_user(self) -> UserRecord:
        data = self.store.read(self.path)
        if data is None:
            raise UnknownUser(f"No user record at {self.path!r}")
        if not isinstance(data, dict):
            raise SerializationError(f"User record at {self.path!r} is not an object")
        return UserRecord.from_dict(data)

    def save_user(self, user: UserRecord) -> None:
        self.store.write(self.path, user.to_dict())
        logger.debug("Saved user %s (%d tasks)", self.user_id, len(user.tasks))
