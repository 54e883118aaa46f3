"""
Kanban API client.

Thin wrapper over the board's HTTP endpoints. Every method returns the
parsed JSON body, or {"error": message} when the request or the JSON
decode fails. Nothing is raised and nothing is retried.

Usage:
    kanban = KanbanClient("http://localhost:3000")
    kanban.move_task("sam-scripts", "In Progress")
    kanban.add_journal_entry("Fixed modal bug in kanban board")
    kanban.quick_update(task_id="sam-scripts", status="Done",
                        journal_entry="Completed Sam ad script review")
"""
import logging
import os
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"


class KanbanClient:
    """HTTP client for the kanban task board API."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 10):
        self.base_url = (base_url or os.environ.get("KANBAN_API_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def _call(self, method: str, path: str, action: str, body: Any = None) -> Any:
        try:
            r = self.session.request(
                method,
                f"{self.base_url}{path}",
                json=body,
                timeout=self.timeout,
            )
            return r.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Failed to {action}: {e}")
            return {"error": str(e)}

    def move_task(self, task_id: str, new_status: str) -> Dict[str, Any]:
        """Move a task to another column."""
        return self._call("PUT", f"/api/tasks/{quote(task_id, safe='')}/status",
                          "move task", {"currentStatus": new_status})

    def add_journal_entry(self, entry: str) -> Dict[str, Any]:
        return self._call("POST", "/api/journal", "add journal entry", {"entry": entry})

    def add_task(self, task_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create or replace a task; include "id" to choose the key."""
        return self._call("POST", "/api/tasks", "add task", task_data)

    def quick_update(self, task_id: Optional[str] = None, status: Optional[str] = None,
                     journal_entry: Optional[str] = None) -> Dict[str, Any]:
        """Task status and journal entry in one call. Absent arguments are left out."""
        body = {}
        if task_id is not None:
            body["taskId"] = task_id
        if status is not None:
            body["status"] = status
        if journal_entry is not None:
            body["journalEntry"] = journal_entry
        return self._call("POST", "/api/nova/update", "apply updates", body)

    def get_tasks(self) -> Dict[str, Any]:
        return self._call("GET", "/api/tasks", "get tasks")

    def get_journal(self) -> Any:
        return self._call("GET", "/api/journal", "get journal")
