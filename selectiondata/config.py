"""Persistent JSON config helpers.

Stores the tunables of the selection engine: branch chunk size and the
direct-child limit above which roots start collapsed.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .grouping import MIN_CHUNK_SIZE

APP_NAME = "selectiondata"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored so a read-only config
    directory never breaks the caller.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def _valid_int(value: object, minimum: int) -> bool:
    return not isinstance(value, bool) and isinstance(value, int) and value >= minimum


def _load_int(key: str, minimum: int = 1) -> int | None:
    """Read an integer no smaller than ``minimum``; booleans and other types are rejected."""
    value = load_config().get(key)
    return value if _valid_int(value, minimum) else None


def _save_int(key: str, value: int, minimum: int = 1) -> None:
    if not _valid_int(value, minimum):
        return
    config = load_config()
    config[key] = value
    save_config(config)


def load_chunk_size() -> int | None:
    """Load the maximum number of direct children per branch before grouping."""
    return _load_int("chunk_size", MIN_CHUNK_SIZE)


def save_chunk_size(chunk_size: int) -> None:
    """Persist the branch chunk size."""
    _save_int("chunk_size", chunk_size, MIN_CHUNK_SIZE)


def load_max_root_children() -> int | None:
    """Load the direct-child count at which a root starts collapsed."""
    return _load_int("max_root_children")


def save_max_root_children(max_root_children: int) -> None:
    """Persist the root collapse threshold."""
    _save_int("max_root_children", max_root_children)
