# Kanban server configuration
# Defaults < kanban.yaml < environment (PORT, KANBAN_DATA_DIR) < CLI flags.

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

ROOT_DIR = Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT_DIR / "kanban.yaml"

DEFAULT_PORT = 3000


@dataclass
class ServerConfig:
    """Runtime configuration for the kanban server."""

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    data_dir: str = "./data"
    public_dir: str = str(ROOT_DIR / "public")
    log_level: str = "INFO"

    def apply_env(self, environ=None) -> "ServerConfig":
        """Override from PORT / KANBAN_DATA_DIR when set."""
        environ = os.environ if environ is None else environ
        port = environ.get("PORT")
        if port:
            try:
                self.port = int(port)
            except ValueError:
                logger.warning(f"Ignoring non-numeric PORT={port!r}")
        if environ.get("KANBAN_DATA_DIR"):
            self.data_dir = environ["KANBAN_DATA_DIR"]
        return self

    @classmethod
    def load(cls, path: Optional[str] = None, environ=None) -> "ServerConfig":
        """Load config from YAML file, falling back to defaults, then apply env."""
        environ = os.environ if environ is None else environ
        cfg_path = Path(path or environ.get("KANBAN_CONFIG") or CONFIG_PATH)
        known = {f.name for f in fields(cls)}
        cfg = cls()
        if cfg_path.exists():
            try:
                with open(cfg_path, "r") as f:
                    data = yaml.safe_load(f) or {}
                cfg = cls(**{k: v for k, v in data.items() if k in known})
                cfg.port = int(cfg.port)
            except (OSError, yaml.YAMLError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Cannot read {cfg_path}, using defaults: {e}")
                cfg = cls()
        return cfg.apply_env(environ)
