import logging
from typing import List, Optional

from core.colors import ColorAssigner
from core.exceptions import IndexOutOfRange, StoreError
from core.labels import get_initials
from core.models import Contact, Task
from services.board_service import SharedBoard
from services.contact_service import ContactModel
from services.task_service import TaskModel, release_user_lock
from storage.document_store import DocumentStore
from storage.user_records import RemoteUserRecords, UserRecordAccess

logger = logging.getLogger(__name__)


class SessionClosed(RuntimeError):
    pass


class AppController:
    """Coordina la UI con el store remoto: una sesión de usuario a la vez."""
    def __init__(self, store: DocumentStore, assigner: Optional[ColorAssigner] = None):
        self.store = store
        self.assigner = assigner or ColorAssigner()
        self.user_id: Optional[str] = None
        self.task_model: Optional[TaskModel] = None
        self.contact_model: Optional[ContactModel] = None
        self.board = SharedBoard(store)

    # ---- session lifecycle ----
    def open_session(self, user_id: str, users: Optional[UserRecordAccess] = None) -> None:
        """Login: crea los modelos del usuario y carga tareas y contactos."""
        if self.user_id is not None:
            self.close_session()
        users = users or RemoteUserRecords(self.store, user_id)
        self.task_model = TaskModel(users)
        self.contact_model = ContactModel(self.store, self.assigner)
        self.user_id = user_id
        try:
            self.task_model.load_current_user_tasks()
            self.contact_model.contacts = self.contact_model.load_contacts()
        except StoreError:
            self.close_session()
            raise
        logger.info("Session opened for %s: %d tasks, %d contacts",
                    user_id, len(self.tasks), len(self.contacts))

    def close_session(self) -> None:
        """Logout: descarta los caches."""
        if self.user_id is not None:
            logger.info("Session closed for %s", self.user_id)
            release_user_lock(self.user_id)
        self.user_id = None
        self.task_model = None
        self.contact_model = None

    @property
    def is_open(self) -> bool:
        return self.user_id is not None

    def _tasks_model(self) -> TaskModel:
        if self.task_model is None:
            raise SessionClosed("No open session")
        return self.task_model

    def _contacts_model(self) -> ContactModel:
        if self.contact_model is None:
            raise SessionClosed("No open session")
        return self.contact_model

    @property
    def tasks(self) -> List[Task]:
        return self._tasks_model().tasks

    @property
    def contacts(self) -> List[Contact]:
        return self._contacts_model().contacts

    def _persist(self, what: str, fn, *args) -> bool:
        # errores de guardado: se loguean, no se reintenta, el cambio local queda
        try:
            fn(*args)
            return True
        except IndexOutOfRange:
            raise
        except StoreError:
            logger.exception("%s failed", what)
            return False

    # ---- tasks ----
    def load_current_user_tasks(self) -> bool:
        return self._persist("Load tasks", self._tasks_model().load_current_user_tasks)

    def add_task(self, task: Task) -> bool:
        return self._persist("Add task", self._tasks_model().add_task, task)

    def add_subtask(self, task_index: int, title: str) -> bool:
        return self._persist("Add subtask", self._tasks_model().add_subtask, task_index, title)

    def set_subtask_done(self, task_index: int, subtask_index: int, done: bool) -> bool:
        return self._persist("Save subtask", self._tasks_model().set_subtask_done,
                             task_index, subtask_index, done)

    def delete_task(self, index: int) -> bool:
        return self._persist("Delete task", self._tasks_model().delete_task, index)

    # ---- contacts ----
    def load_contacts(self) -> bool:
        model = self._contacts_model()

        def load():
            model.contacts = model.load_contacts()

        return self._persist("Load contacts", load)

    def save_contacts(self) -> bool:
        return self._persist("Save contacts", self._contacts_model().save_contacts)

    def add_contact(self, name: str, email: str = "", phone: str = "") -> bool:
        return self._persist("Add contact", self._contacts_model().add_contact, name, email, phone)

    def delete_contact(self, index: int) -> bool:
        return self._persist("Delete contact", self._contacts_model().delete_contact, index)

    def color_for(self, name: str) -> str:
        return self._contacts_model().color_for(name)

    def initials_for(self, name: str) -> str:
        return get_initials(name)
