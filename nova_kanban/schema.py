"""
Kanban task and journal schema.

Tasks are free-form dicts on the wire and on disk; the dataclasses here
describe the known fields and build the first-run seed. Journal entries
are immutable once written.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any


def utc_now(when: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2026-10-19T08:30:00.000Z."""
    now = when or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def display_date(when: Optional[datetime] = None) -> str:
    """Human-readable date in server local time, e.g. 'Mon Oct 19 2026'."""
    when = (when or datetime.now(timezone.utc)).astimezone()
    return when.strftime("%a %b %d %Y")


@dataclass
class Subtask:
    """One checklist item on a task."""
    text: str
    tokens: str = ""               # display-only cost annotation
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "tokens": self.tokens, "completed": self.completed}


@dataclass
class Task:
    """Known task fields. Stored records may carry any extra keys."""

    title: str
    description: str = ""
    status: str = ""               # free-form label, e.g. "Urgent"
    category: str = ""
    assignee: str = ""
    priority: str = ""
    tokens: str = ""               # display-only cost annotation
    current_status: str = "To Do"  # workflow column, never validated
    detailed_desc: str = ""
    subtasks: List[Subtask] = field(default_factory=list)
    updated_at: str = field(default_factory=utc_now)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys clients expect."""
        return {
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "category": self.category,
            "assignee": self.assignee,
            "priority": self.priority,
            "tokens": self.tokens,
            "currentStatus": self.current_status,
            "detailedDesc": self.detailed_desc,
            "subtasks": [s.to_dict() for s in self.subtasks],
            "updatedAt": self.updated_at,
        }


@dataclass(frozen=True)
class JournalEntry:
    """Append-only journal record."""
    id: int
    entry: Optional[str]
    timestamp: str
    date: str

    @classmethod
    def make(cls, entry_id: int, text: Optional[str]) -> "JournalEntry":
        now = datetime.now(timezone.utc)
        return cls(
            id=entry_id,
            entry=text,
            timestamp=utc_now(now),
            date=display_date(now),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "entry": self.entry, "timestamp": self.timestamp, "date": self.date}


SEED_TASK_ID = "sam-scripts"


def default_tasks() -> Dict[str, Dict[str, Any]]:
    """The single example task written on first run."""
    task = Task(
        title="Sam Ad Script Review",
        description="Final review with Austin for video shoot",
        status="Urgent",
        category="LYNKS",
        assignee="Austin",
        priority="Urgent",
        tokens="~$3 tokens",
        current_status="To Do",
        detailed_desc="Complete final review of ad scripts for Sam's video shoot campaign.",
        subtasks=[
            Subtask("Review script hooks for engagement", "$1"),
            Subtask("Check messaging alignment with LYNKS brand", "$1"),
            Subtask("Finalize call-to-action language", "$1"),
        ],
    )
    return {SEED_TASK_ID: task.to_dict()}
