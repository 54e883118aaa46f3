"""
Board operations: one read-modify-write cycle per call.

Each operation loads the whole document from the store, applies a single
change in memory and saves the whole document back. StoreError from the
store propagates to the caller unchanged.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from .ids import IdGenerator
from .schema import JournalEntry, utc_now
from .store import KanbanStore

logger = logging.getLogger(__name__)

JOURNAL_PAGE = 50  # GET /api/journal returns at most this many, newest last


def _truthy(value: Any) -> bool:
    """JSON-client truthiness: null, false, 0 and "" are unset; empty lists and objects are set."""
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


class KanbanBoard:
    """Task map and journal operations over an injected store."""

    def __init__(self, store: KanbanStore, ids: Optional[IdGenerator] = None):
        self.store = store
        self.ids = ids or IdGenerator()

    # ── Tasks ────────────────────────────────────────────────────────────

    def list_tasks(self) -> Dict[str, Dict[str, Any]]:
        return self.store.load_tasks()

    def update_task_status(self, task_id: str, status: Any) -> Optional[Dict[str, Any]]:
        """Set currentStatus and refresh updatedAt. Returns None (store untouched) if id is unknown."""
        tasks = self.store.load_tasks()
        task = tasks.get(task_id)
        if task is None:
            return None
        task["currentStatus"] = status
        task["updatedAt"] = utc_now()
        self.store.save_tasks(tasks)
        logger.info(f"Task {task_id} → {status}")
        return task

    def create_task(self, fields: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        """Store fields under their id (or a fresh one), replacing any existing record."""
        task_id = fields.get("id")
        task_id = str(task_id) if _truthy(task_id) else self.ids.next_str()
        tasks = self.store.load_tasks()
        task = dict(fields)
        task["updatedAt"] = utc_now()
        tasks[task_id] = task
        self.store.save_tasks(tasks)
        logger.info(f"Task {task_id} saved")
        return task_id, task

    # ── Journal ──────────────────────────────────────────────────────────

    def list_journal(self, limit: int = JOURNAL_PAGE) -> List[Dict[str, Any]]:
        entries = self.store.load_journal()
        return entries[-limit:] if limit > 0 else []

    def add_journal_entry(self, text: Optional[str]) -> Dict[str, Any]:
        entries = self.store.load_journal()
        entry = JournalEntry.make(self.ids.next_int(), text).to_dict()
        entries.append(entry)
        self.store.save_journal(entries)
        logger.info(f"Journal entry {entry['id']} added")
        return entry

    # ── Combined ─────────────────────────────────────────────────────────

    def combined_update(self, task_id: Optional[str] = None, status: Any = None,
                        journal_text: Optional[str] = None) -> Dict[str, bool]:
        """
        Apply a status change and/or a journal append, independently.

        Unlike update_task_status through its own endpoint, an unknown
        task id here is skipped without error. Returns which parts applied.
        """
        applied = {"task": False, "journal": False}
        if _truthy(task_id) and _truthy(status):
            applied["task"] = self.update_task_status(str(task_id), status) is not None
            if not applied["task"]:
                logger.debug(f"Combined update: task {task_id} not found, skipped")
        if _truthy(journal_text):
            self.add_journal_entry(journal_text)
            applied["journal"] = True
        return applied
