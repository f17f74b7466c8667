"""Data directory, path helpers and settings for the kanban board.

The data root holds the SQLite store, the debug log and an optional
``config.yaml``::

    db_name: kanban.db
    log_level: INFO
    log_file: debug.log
"""

from __future__ import annotations

import fcntl
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

APP_NAME = "kanban"
CONFIG_NAME = "config.yaml"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def data_root() -> Path:
    """Directory for the store file: $KANBAN_ROOT, else the XDG user data dir."""
    override = os.environ.get("KANBAN_ROOT")
    if override:
        return Path(override).expanduser().resolve()
    xdg = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return (Path(xdg).expanduser() / APP_NAME).resolve()


def ensure_root(root: Path | None = None) -> Path:
    """Create the data root on first run. Returns it."""
    if root is None:
        root = data_root()
    root.mkdir(mode=0o770, parents=True, exist_ok=True)
    return root


# ── Settings ──────────────────────────────────────────────────


@dataclass
class Settings:
    db_name: str = "kanban.db"
    log_level: str = "INFO"
    log_file: str = "debug.log"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        level = str(d.get("log_level", "INFO")).strip().upper()
        if level not in LOG_LEVELS:
            level = "INFO"
        return cls(
            db_name=str(d.get("db_name") or "kanban.db"),
            log_level=level,
            log_file=str(d.get("log_file") or "debug.log"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"db_name": self.db_name, "log_level": self.log_level, "log_file": self.log_file}


def config_path(root: Path | None = None) -> Path:
    if root is None:
        root = data_root()
    return root / CONFIG_NAME


def load_settings(root: Path | None = None) -> Settings:
    """Read config.yaml, falling back to defaults if missing or unreadable."""
    path = config_path(root)
    if not path.exists():
        return Settings()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring malformed {path}: {e}")
        return Settings()
    return Settings.from_dict(data if isinstance(data, dict) else {})


def write_settings(settings: Settings, root: Path | None = None) -> None:
    """Write config.yaml atomically: temp file + flock + rename."""
    path = config_path(root)
    path.parent.mkdir(parents=True, exist_ok=True)
    content = yaml.dump(settings.to_dict(), default_flow_style=False, sort_keys=False)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=".tmp_", suffix=".yaml")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            try:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        os.rename(tmp, path)
    except Exception:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise


def init_settings(root: Path | None = None) -> Settings:
    """Load settings, writing a default config.yaml on first run."""
    root = ensure_root(root)
    if not config_path(root).exists():
        settings = Settings()
        write_settings(settings, root)
        return settings
    return load_settings(root)


# ── Path helpers ──────────────────────────────────────────────


def db_path(root: Path | None = None, settings: Settings | None = None) -> Path:
    if root is None:
        root = data_root()
    if settings is None:
        settings = load_settings(root)
    return root / settings.db_name


def log_path(root: Path | None = None, settings: Settings | None = None) -> Path:
    if root is None:
        root = data_root()
    if settings is None:
        settings = load_settings(root)
    return root / settings.log_file
