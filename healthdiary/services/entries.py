"""
Create/update/delete of health entries with reload-after-mutation.

The in-memory ``entries`` list is always a snapshot of the store: every
successful mutation is followed by a full reload, and nothing is patched
locally. Failures are caught here and turned into a single notification;
the list and dialog are left exactly as they were.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import Session

from ..auth import SessionContext
from ..db import SessionLocal
from ..exceptions import EntryNotFoundError, InvalidEntryError, StoreError
from ..logging_config import get_logger
from ..notifications import Notification, error, success
from .health_entries import delete_entry, insert_entry, list_entries, update_entry

logger = get_logger(__name__)

CLOSED = "closed"
OPEN = "open"


class EntryDialog:
    """closed -> open (empty or prefilled) -> closed on cancel or save."""

    def __init__(self):
        self.state = CLOSED
        self.entry = None

    @property
    def is_open(self) -> bool:
        return self.state == OPEN

    @property
    def is_edit(self) -> bool:
        return self.is_open and self.entry is not None

    def open_new(self):
        self.state = OPEN
        self.entry = None

    def open_edit(self, entry):
        self.state = OPEN
        self.entry = entry

    def close(self):
        self.state = CLOSED
        self.entry = None

    cancel = close


class EntryOrchestrator:
    def __init__(self, context: SessionContext, session_factory: Callable[[], Session] = SessionLocal):
        self.context = context
        self.session_factory = session_factory
        self.entries: List[Any] = []
        self.loaded = False
        self.notifications: List[Notification] = []
        self.dialog = EntryDialog()
        self._reload_seq = 0

    def _notify(self, notification: Notification):
        self.notifications.append(notification)

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    def _ready(self) -> bool:
        return self.context.loaded and self.context.identity is not None

    def reload(self) -> bool:
        """
        Replace the entry list with the store's current rows.

        On failure the previous list is kept. A response is dropped if a
        newer reload was issued while it was in flight.
        """
        if not self._ready():
            return False

        self._reload_seq += 1
        seq = self._reload_seq
        db = self.session_factory()
        try:
            rows = list_entries(self.context.user_id, db)
        except StoreError:
            logger.exception("Reload of health entries failed for user %s", self.context.user_id)
            self._notify(error("Failed to load your health entries."))
            return False
        finally:
            db.close()

        if seq != self._reload_seq:
            logger.debug("Discarding stale reload %s (latest %s)", seq, self._reload_seq)
            return False
        self.entries = list(rows)
        self.loaded = True
        return True

    def _mutate(self, action: Callable[[Session], Any], failure: str, done: Optional[str]) -> bool:
        if not self._ready():
            self._notify(error("Please sign in to manage your entries."))
            return False

        db = self.session_factory()
        try:
            action(db)
        except InvalidEntryError as e:
            logger.warning("Rejected health entry input for user %s: %s", self.context.user_id, e)
            self._notify(error("Please enter a valid date (YYYY-MM-DD)."))
            return False
        except EntryNotFoundError:
            logger.warning("Entry vanished before mutation for user %s", self.context.user_id)
            self._notify(error("That entry no longer exists."))
            return False
        except StoreError:
            logger.exception("Health entry mutation failed for user %s", self.context.user_id)
            self._notify(error(failure))
            return False
        finally:
            db.close()

        if done:
            self._notify(success(done))
        self.reload()
        return True

    def create(self, fields: Dict[str, Any]) -> bool:
        user_id = self.context.user_id
        return self._mutate(
            lambda db: insert_entry(user_id, fields, db),
            "Failed to save your health entry.",
            "Health entry saved.",
        )

    def update(self, entry_id: int, fields: Dict[str, Any]) -> bool:
        user_id = self.context.user_id
        return self._mutate(
            lambda db: update_entry(user_id, entry_id, fields, db),
            "Failed to update your health entry.",
            "Health entry updated.",
        )

    def delete(self, entry_id: int) -> bool:
        user_id = self.context.user_id
        return self._mutate(
            lambda db: delete_entry(user_id, entry_id, db),
            "Failed to delete your health entry.",
            "Health entry deleted.",
        )

    def submit_dialog(self, fields: Dict[str, Any]) -> bool:
        """Save the dialog's form. The dialog stays open when saving fails."""
        if not self.dialog.is_open:
            return False
        if self.dialog.entry is None:
            ok = self.create(fields)
        else:
            ok = self.update(self.dialog.entry.id, fields)
        if ok:
            self.dialog.close()
        return ok
