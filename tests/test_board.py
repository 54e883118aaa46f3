"""
Tests for board operations against the in-memory store.
"""
from datetime import datetime, timezone

import pytest

from nova_kanban.board import KanbanBoard, JOURNAL_PAGE
from nova_kanban.ids import IdGenerator
from nova_kanban.schema import SEED_TASK_ID, display_date
from nova_kanban.store import MemoryKanbanStore


@pytest.fixture
def board():
    return KanbanBoard(MemoryKanbanStore())


class TestIdGenerator:

    def test_ids_strictly_increase_with_frozen_clock(self):
        ids = IdGenerator(clock=lambda: 1700000000000)
        assert [ids.next_int() for _ in range(3)] == [1700000000000, 1700000000001, 1700000000002]

    def test_clock_going_backwards_still_increases(self):
        ticks = iter([200, 100, 300])
        ids = IdGenerator(clock=lambda: next(ticks))
        assert [ids.next_int() for _ in range(3)] == [200, 201, 300]

    def test_next_str_is_digits(self):
        assert IdGenerator().next_str().isdigit()


class TestTasks:

    def test_create_with_explicit_id(self, board):
        task_id, task = board.create_task({"id": "blog-post", "title": "Blog", "priority": "Urgent"})
        assert task_id == "blog-post"
        stored = board.list_tasks()["blog-post"]
        assert stored["title"] == "Blog"
        assert stored["priority"] == "Urgent"
        assert stored["updatedAt"] == task["updatedAt"]

    def test_create_without_id_generates_distinct_ids(self, board):
        first, _ = board.create_task({"title": "One"})
        second, _ = board.create_task({"title": "Two"})
        assert first != second
        assert first.isdigit() and second.isdigit()
        tasks = board.list_tasks()
        assert tasks[first]["title"] == "One"
        assert tasks[second]["title"] == "Two"

    def test_create_replaces_existing_record(self, board):
        board.create_task({"id": SEED_TASK_ID, "title": "Replaced"})
        task = board.list_tasks()[SEED_TASK_ID]
        assert task["title"] == "Replaced"
        assert "subtasks" not in task

    def test_update_status_changes_only_status_and_timestamp(self, board):
        before = board.list_tasks()[SEED_TASK_ID]
        task = board.update_task_status(SEED_TASK_ID, "In Progress")

        assert task["currentStatus"] == "In Progress"
        after = board.list_tasks()[SEED_TASK_ID]
        changed = {k for k in after if after[k] != before.get(k)}
        assert changed <= {"currentStatus", "updatedAt"}
        assert "currentStatus" in changed

    def test_update_status_accepts_any_string(self, board):
        task = board.update_task_status(SEED_TASK_ID, "Waiting on legal ☕")
        assert task["currentStatus"] == "Waiting on legal ☕"

    def test_update_status_unknown_id_returns_none(self, board):
        before = board.list_tasks()
        assert board.update_task_status("nope", "Done") is None
        assert board.list_tasks() == before


class TestJournal:

    def test_add_entry_appends_last(self, board):
        board.add_journal_entry("first")
        entry = board.add_journal_entry("second")

        entries = board.store.load_journal()
        assert len(entries) == 2
        assert entries[-1] == entry
        assert entry["entry"] == "second"
        assert isinstance(entry["id"], int)
        assert entry["timestamp"].endswith("Z")
        assert entry["date"]

    def test_list_returns_most_recent_page(self, board):
        for i in range(JOURNAL_PAGE + 5):
            board.add_journal_entry(f"note {i}")

        page = board.list_journal()
        assert len(page) == JOURNAL_PAGE
        assert page[0]["entry"] == "note 5"
        assert page[-1]["entry"] == f"note {JOURNAL_PAGE + 4}"

    def test_list_returns_all_when_short(self, board):
        board.add_journal_entry("only")
        assert [e["entry"] for e in board.list_journal()] == ["only"]


class TestCombinedUpdate:

    def test_journal_only(self, board):
        tasks_before = board.list_tasks()
        applied = board.combined_update(journal_text="shipped")
        assert applied == {"task": False, "journal": True}
        assert board.list_tasks() == tasks_before
        assert board.store.load_journal()[-1]["entry"] == "shipped"

    def test_status_only(self, board):
        applied = board.combined_update(task_id=SEED_TASK_ID, status="Done")
        assert applied == {"task": True, "journal": False}
        assert board.list_tasks()[SEED_TASK_ID]["currentStatus"] == "Done"
        assert board.store.load_journal() == []

    def test_unknown_task_is_skipped(self, board):
        tasks_before = board.list_tasks()
        applied = board.combined_update(task_id="ghost", status="Done")
        assert applied == {"task": False, "journal": False}
        assert board.list_tasks() == tasks_before
        assert board.store.load_journal() == []

    def test_task_id_without_status_is_ignored(self, board):
        applied = board.combined_update(task_id=SEED_TASK_ID)
        assert applied["task"] is False
        assert board.list_tasks()[SEED_TASK_ID]["currentStatus"] == "To Do"

    def test_numeric_task_id_matches_string_key(self, board):
        task_id, _ = board.create_task({"id": 5, "title": "Numeric"})
        assert task_id == "5"
        applied = board.combined_update(task_id=5, status="Done")
        assert applied["task"] is True
        assert board.list_tasks()["5"]["currentStatus"] == "Done"

    @pytest.mark.parametrize("status", [[], {}, "0"])
    def test_empty_containers_count_as_set(self, board, status):
        applied = board.combined_update(task_id=SEED_TASK_ID, status=status, journal_text={})
        assert applied == {"task": True, "journal": True}
        assert board.list_tasks()[SEED_TASK_ID]["currentStatus"] == status

    @pytest.mark.parametrize("value", [None, False, 0, ""])
    def test_unset_values_are_skipped(self, board, value):
        applied = board.combined_update(task_id=SEED_TASK_ID, status=value, journal_text=value)
        assert applied == {"task": False, "journal": False}


class TestDisplayDate:

    def test_uses_local_calendar_date(self):
        when = datetime(2026, 10, 19, 23, 30, tzinfo=timezone.utc)
        assert display_date(when) == when.astimezone().strftime("%a %b %d %Y")

    def test_journal_date_follows_local_time_of_timestamp(self, board):
        entry = board.add_journal_entry("late night")
        stamp = datetime.fromisoformat(entry["timestamp"].replace("Z", "+00:00"))
        assert entry["date"] == stamp.astimezone().strftime("%a %b %d %Y")
