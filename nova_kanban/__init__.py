# Nova kanban board: task map + journal persisted as flat JSON documents.
#
# Components:
#   schema.py        - Data model (Task, Subtask, JournalEntry) and timestamp helpers
#   ids.py           - Monotonic time-based identifier generator
#   store.py         - Storage interface, JSON-file and in-memory backends
#   board.py         - Read-modify-write operations used by the HTTP routes
#   config.py        - Server configuration (YAML file + environment)
#   client.py        - HTTP client wrapper for the board API
#   logging_setup.py - Process-wide logging configuration
