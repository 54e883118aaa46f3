"""
Kanban document storage.

Two documents: the task map (id -> task dict) and the journal (list of
entries, oldest first). Every mutation rewrites a whole document.

There is no locking. Two concurrent read-modify-write cycles on the same
document race and the later save silently drops the earlier one's change
(last writer wins).
"""
import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from .schema import default_tasks

logger = logging.getLogger(__name__)

TASKS_FILENAME = "tasks.json"
JOURNAL_FILENAME = "journal.json"

TaskMap = Dict[str, Dict[str, Any]]
Journal = List[Dict[str, Any]]


class StoreError(IOError):
    """Raised when a document cannot be read, parsed or written."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class KanbanStore(Protocol):
    """Whole-document load/save for the task map and the journal."""

    def load_tasks(self) -> TaskMap:
        ...

    def save_tasks(self, tasks: TaskMap) -> None:
        ...

    def load_journal(self) -> Journal:
        ...

    def save_journal(self, entries: Journal) -> None:
        ...


class JsonKanbanStore:
    """Pretty-printed JSON files under a data directory."""

    def __init__(self, data_dir):
        self.data_dir = Path(data_dir)
        self.tasks_path = self.data_dir / TASKS_FILENAME
        self.journal_path = self.data_dir / JOURNAL_FILENAME

    def initialize(self) -> None:
        """Create the data directory and seed any missing document."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Cannot create data dir {self.data_dir}: {e}")
            raise StoreError(f"cannot create {self.data_dir}", self.data_dir) from e

        if not self.tasks_path.exists():
            logger.info(f"Seeding {self.tasks_path}")
            self._write(self.tasks_path, default_tasks())
        if not self.journal_path.exists():
            logger.info(f"Seeding {self.journal_path}")
            self._write(self.journal_path, [])

    def load_tasks(self) -> TaskMap:
        return self._read(self.tasks_path, dict)

    def save_tasks(self, tasks: TaskMap) -> None:
        self._write(self.tasks_path, tasks)

    def load_journal(self) -> Journal:
        return self._read(self.journal_path, list)

    def save_journal(self, entries: Journal) -> None:
        self._write(self.journal_path, entries)

    def _read(self, path: Path, expected: type):
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise StoreError(f"cannot load {path.name}", path) from e
        if not isinstance(data, expected):
            logger.error(f"{path} holds {type(data).__name__}, expected {expected.__name__}")
            raise StoreError(f"malformed {path.name}", path)
        return data

    def _write(self, path: Path, data: Any) -> None:
        """Write to a temp file in the same directory, then rename over the target."""
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent)
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StoreError(f"cannot save {path.name}", path) from e


class MemoryKanbanStore:
    """
    In-process store with the same contract as JsonKanbanStore.
    Documents are deep-copied in and out, so callers never share state.
    """

    def __init__(self, tasks: Optional[TaskMap] = None, journal: Optional[Journal] = None,
                 seed: bool = True):
        if tasks is None:
            tasks = default_tasks() if seed else {}
        self._tasks = copy.deepcopy(tasks)
        self._journal = copy.deepcopy(journal or [])

    def initialize(self) -> None:
        pass

    def load_tasks(self) -> TaskMap:
        return copy.deepcopy(self._tasks)

    def save_tasks(self, tasks: TaskMap) -> None:
        self._tasks = copy.deepcopy(tasks)

    def load_journal(self) -> Journal:
        return copy.deepcopy(self._journal)

    def save_journal(self, entries: Journal) -> None:
        self._journal = copy.deepcopy(entries)
