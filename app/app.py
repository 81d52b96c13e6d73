import logging
import sys
from typing import List, Optional

from core.config import LOG_DIR, LOG_LEVEL, STORAGE_URL, USER_ID
from core.exceptions import StoreError
from core.logging_setup import setup_logging
from controller.app_controller import AppController
from storage.document_store import DocumentStore

logger = logging.getLogger(__name__)


def render_summary(controller: AppController) -> str:
    lines = [f"Tasks ({len(controller.tasks)}):"]
    for i, t in enumerate(controller.tasks):
        due = f" · {t.due_date}" if t.due_date else ""
        lines.append(f"  [{i}] {t.title} ({t.number_of_done_subtasks}/{len(t.subtasks)}){due}")
    lines.append(f"Contacts ({len(controller.contacts)}):")
    for c in controller.contacts:
        lines.append(f"  {controller.initials_for(c.name):<2} {c.color} {c.name} <{c.email}>")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None, store: Optional[DocumentStore] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    setup_logging(LOG_LEVEL, LOG_DIR or None)

    user_id = argv[0] if argv else USER_ID
    if not user_id:
        print("usage: python -m app.app <user_id>  (o JOIN_USER_ID)", file=sys.stderr)
        return 2

    controller = AppController(store or DocumentStore(STORAGE_URL))
    try:
        controller.open_session(user_id)
    except StoreError as e:
        logger.error("Login error: %s", e)
        return 1
    try:
        print(render_summary(controller))
    finally:
        controller.close_session()
    return 0


if __name__ == "__main__":
    sys.exit(main())
