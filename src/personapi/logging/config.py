"""The persisted log level behind ``personapi logging set-level``."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path


def config_path() -> Path:
    """``PERSONAPI_LOG_CONFIG``, else ``logging.json`` in ``PERSONAPI_CONFIG_DIR``."""

    explicit = os.environ.get("PERSONAPI_LOG_CONFIG", "").strip()
    if explicit:
        return Path(explicit).expanduser()
    config_dir = os.environ.get("PERSONAPI_CONFIG_DIR", "").strip()
    base = Path(config_dir).expanduser() if config_dir else Path.home() / ".personapi"
    return base / "logging.json"


def level_value(name: str) -> int | None:
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else None


def load_log_level() -> int | None:
    """Return the stored level, or ``None`` when nothing usable is stored."""

    try:
        stored = json.loads(config_path().read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    name = stored.get("log_level") if isinstance(stored, dict) else None
    return level_value(name) if isinstance(name, str) else None


def save_log_level(name: str) -> Path:
    if level_value(name) is None:
        raise ValueError(f"Unknown logging level: {name!r}")
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"log_level": name.strip().upper()}) + "\n", encoding="utf-8")
    return path
