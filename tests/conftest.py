"""Shared test fixtures for the kanban server tests."""

import sys
from pathlib import Path

import pytest

# Ensure the repo root (kanban_server.py, nova_kanban/) is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from nova_kanban.config import ServerConfig
from nova_kanban.store import JsonKanbanStore


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def json_store(data_dir):
    store = JsonKanbanStore(data_dir)
    store.initialize()
    return store


@pytest.fixture
def client(json_store, data_dir):
    """Flask test client wired to a fresh temp-dir JSON store."""
    import kanban_server

    kanban_server.configure(ServerConfig(data_dir=str(data_dir)), store=json_store)
    kanban_server.app.config["TESTING"] = True
    with kanban_server.app.test_client() as c:
        yield c
    for key in ("KANBAN_STORE", "KANBAN_PUBLIC_DIR", "KANBAN_DATA_DIR"):
        kanban_server.app.config.pop(key, None)
