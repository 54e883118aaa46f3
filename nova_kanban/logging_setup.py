import logging
import sys


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging to stdout for the server process."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [kanban] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
