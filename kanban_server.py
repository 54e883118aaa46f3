#!/usr/bin/env python3
"""
Nova Kanban Server
------------------
JSON API for the task board and its journal, backed by two JSON files
(tasks.json, journal.json) under the data directory.

Usage:
    python kanban_server.py
    python kanban_server.py --port 8080 --data-dir /var/lib/nova-kanban
    PORT=8080 KANBAN_DATA_DIR=./data python kanban_server.py

API:
    GET  /                          → landing page (public/index.html)
    GET  /api/tasks                 → JSON: { <taskId>: task, ... }
    PUT  /api/tasks/<id>/status     → body { currentStatus }
                                      Returns: { success, task } or 404
    POST /api/tasks                 → body: task fields (+ optional id)
                                      Returns: { success, taskId, task }
    GET  /api/journal               → last 50 entries, oldest first
    POST /api/journal               → body { entry }
                                      Returns: { success, entry }
    POST /api/nova/update           → body { taskId?, status?, journalEntry? }
                                      Returns: { success, message }
    GET  /health                    → JSON: { status, dataDir, tasks, journal }

No auth, no locking: concurrent writers to the same document race and
the last save wins.
"""

import argparse
import logging
from pathlib import Path

from flask import Flask, jsonify, request, send_file, abort

from nova_kanban.board import KanbanBoard
from nova_kanban.config import ServerConfig
from nova_kanban.ids import IdGenerator
from nova_kanban.logging_setup import setup_logging
from nova_kanban.store import JsonKanbanStore, StoreError

logger = logging.getLogger("kanban_server")

app = Flask(__name__)

# Shared across requests so generated ids stay strictly increasing
_ids = IdGenerator()


# ── Store wiring ─────────────────────────────────────────────────────────────

def configure(cfg: ServerConfig, store=None) -> None:
    """Attach config and a store to the app; seeds a JSON store on first run."""
    if store is None:
        store = JsonKanbanStore(cfg.data_dir)
    if hasattr(store, "initialize"):
        store.initialize()
    app.config["KANBAN_STORE"] = store
    app.config["KANBAN_PUBLIC_DIR"] = cfg.public_dir
    app.config["KANBAN_DATA_DIR"] = cfg.data_dir


def get_store():
    store = app.config.get("KANBAN_STORE")
    if store is None:
        configure(ServerConfig.load())
        store = app.config["KANBAN_STORE"]
    return store


def get_board() -> KanbanBoard:
    return KanbanBoard(get_store(), _ids)


def _json_body() -> dict:
    """Request JSON as a dict; missing, invalid or non-object bodies read as {}."""
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _failure(message: str, e: Exception):
    app.logger.warning(f"{message}: {e}")
    return jsonify({"error": message}), 500


# ── Routes ───────────────────────────────────────────────────────────────────

@app.route("/")
def index():
    public_dir = Path(app.config.get("KANBAN_PUBLIC_DIR") or ServerConfig().public_dir)
    html_path = public_dir / "index.html"
    if not html_path.exists():
        abort(404, "index.html not found in public dir")
    return send_file(html_path.resolve())


@app.route("/api/tasks", methods=["GET"])
def api_tasks():
    try:
        return jsonify(get_board().list_tasks())
    except StoreError as e:
        return _failure("Failed to load tasks", e)


@app.route("/api/tasks/<task_id>/status", methods=["PUT"])
def api_update_task_status(task_id):
    data = _json_body()
    try:
        task = get_board().update_task_status(task_id, data.get("currentStatus"))
    except StoreError as e:
        return _failure("Failed to update task", e)
    if task is None:
        return jsonify({"error": "Task not found"}), 404
    return jsonify({"success": True, "task": task})


@app.route("/api/tasks", methods=["POST"])
def api_create_task():
    data = _json_body()
    try:
        task_id, task = get_board().create_task(data)
    except StoreError as e:
        return _failure("Failed to add task", e)
    return jsonify({"success": True, "taskId": task_id, "task": task})


@app.route("/api/journal", methods=["GET"])
def api_journal():
    try:
        return jsonify(get_board().list_journal())
    except StoreError as e:
        return _failure("Failed to load journal", e)


@app.route("/api/journal", methods=["POST"])
def api_add_journal_entry():
    data = _json_body()
    try:
        entry = get_board().add_journal_entry(data.get("entry"))
    except StoreError as e:
        return _failure("Failed to add journal entry", e)
    return jsonify({"success": True, "entry": entry})


@app.route("/api/nova/update", methods=["POST"])
def api_combined_update():
    """Status change and/or journal append in one call; unknown task ids are skipped."""
    data = _json_body()
    try:
        get_board().combined_update(
            task_id=data.get("taskId"),
            status=data.get("status"),
            journal_text=data.get("journalEntry"),
        )
    except StoreError as e:
        return _failure("Failed to apply updates", e)
    return jsonify({"success": True, "message": "Updates applied"})


@app.route("/health")
def health():
    try:
        board = get_board()
        tasks = board.list_tasks()
        journal = board.store.load_journal()
    except StoreError as e:
        app.logger.warning(f"Health check failed: {e}")
        return jsonify({"status": "error"}), 500
    return jsonify({
        "status":  "ok",
        "dataDir": str(app.config.get("KANBAN_DATA_DIR", "")),
        "tasks":   len(tasks),
        "journal": len(journal),
    })


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv=None):
    parser = argparse.ArgumentParser(description="Nova Kanban Server")
    parser.add_argument("--host", help="Bind address (use 0.0.0.0 to expose on network)")
    parser.add_argument("--port", type=int, help="Port (overrides PORT env var)")
    parser.add_argument("--data-dir", help="Directory for tasks.json and journal.json")
    parser.add_argument("--config", help="Path to kanban.yaml (overrides KANBAN_CONFIG)")
    args = parser.parse_args(argv)

    cfg = ServerConfig.load(args.config)
    if args.host:
        cfg.host = args.host
    if args.port:
        cfg.port = args.port
    if args.data_dir:
        cfg.data_dir = args.data_dir

    setup_logging(cfg.log_level)
    configure(cfg)
    logger.info(f"Nova Kanban Tracker API running on port {cfg.port} (data: {cfg.data_dir})")

    app.run(host=cfg.host, port=cfg.port, debug=False, threaded=True)


if __name__ == "__main__":
    main()
