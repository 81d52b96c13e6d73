from __future__ import annotations

import logging
from typing import List, Optional

from core.colors import ColorAssigner
from core.config import CONTACTS_PATH
from core.labels import get_initials
from core.models import Contact, as_list
from services.task_service import check_index
from storage.document_store import DocumentStore

logger = logging.getLogger(__name__)


class ContactModel:
    """Shared contact list, persisted as one top-level document (not inside the user record)."""

    def __init__(self, store: DocumentStore, assigner: Optional[ColorAssigner] = None,
                 path: str = CONTACTS_PATH):
        self.store = store
        self.assigner = assigner or ColorAssigner()
        self.path = path
        self.contacts: List[Contact] = []

    def load_contacts(self) -> List[Contact]:
        """Fetch the contacts document. The caller assigns the result to `contacts`."""
        data = self.store.read(self.path)
        if data is None:
            return []
        contacts = [Contact.from_dict(c) for c in as_list(data) if c]
        # contactos viejos sin color (o con uno fuera de la paleta)
        self.assigner.assign_all(contacts)
        logger.debug("Loaded %d contacts", len(contacts))
        return contacts

    def save_contacts(self) -> None:
        # nunca se escribe un contacto sin color de la paleta
        self.assigner.assign_all(self.contacts)
        self.store.write(self.path, [c.to_dict() for c in self.contacts])
        logger.debug("Saved %d contacts", len(self.contacts))

    def add_contact(self, name: str, email: str = "", phone: str = "") -> Contact:
        color = self.assigner.pick(c.color for c in self.contacts)
        contact = Contact(name=name, email=email, phone=phone, color=color)
        self.contacts.append(contact)
        self.save_contacts()
        logger.info("Added contact %r (%s)", name, color)
        return contact

    def delete_contact(self, index: int) -> Contact:
        check_index(index, len(self.contacts), "contact")
        removed = self.contacts.pop(index)
        self.save_contacts()
        return removed

    def find(self, name: str) -> Optional[Contact]:
        for c in self.contacts:
            if c.name == name:
                return c
        return None

    def color_for(self, name: str) -> str:
        """Persisted color of a known contact; for an unknown name, the color it would get next."""
        contact = self.find(name)
        if contact is not None:
            if not self.assigner.is_palette_color(contact.color):
                contact.color = self.assigner.pick(c.color for c in self.contacts if c is not contact)
            return contact.color
        return self.assigner.pick(c.color for c in self.contacts)

    def initials_for(self, name: str) -> str:
        return get_initials(name)
