"""Persistent JSON config helpers.

Stores default listing and diff preferences. All access is defensive:
malformed or missing config falls back to built-in defaults, and values of
the wrong type are ignored key by key.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "treelens"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write failures are logged."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _load_str(config: dict[str, object], key: str) -> str | None:
    value = config.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _load_bool(config: dict[str, object], key: str) -> bool | None:
    value = config.get(key)
    return value if isinstance(value, bool) else None


def _load_number(config: dict[str, object], key: str) -> float | None:
    """Numbers only; booleans are rejected. Range checks happen downstream."""
    value = config.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        number = math.inf
    if not math.isfinite(number):
        logger.warning("ignoring non-finite config value for %s", key)
        return None
    return number


def load_sort_by(config: dict[str, object] | None = None) -> str | None:
    return _load_str(load_config() if config is None else config, "sort_by")


def load_directory_order(config: dict[str, object] | None = None) -> str | None:
    return _load_str(load_config() if config is None else config, "directory_order")


def load_reverse(config: dict[str, object] | None = None) -> bool:
    return bool(_load_bool(load_config() if config is None else config, "reverse"))


def load_show_hidden(config: dict[str, object] | None = None) -> bool:
    return bool(_load_bool(load_config() if config is None else config, "show_hidden"))


def load_skip_gitignored(config: dict[str, object] | None = None) -> bool:
    return bool(_load_bool(load_config() if config is None else config, "skip_gitignored"))


def load_move_threshold(config: dict[str, object] | None = None) -> float | None:
    return _load_number(load_config() if config is None else config, "move_threshold")


def load_size_threshold(config: dict[str, object] | None = None) -> int | None:
    value = _load_number(load_config() if config is None else config, "size_threshold")
    return None if value is None else int(value)


def load_time_threshold(config: dict[str, object] | None = None) -> float | None:
    return _load_number(load_config() if config is None else config, "time_threshold")


def save_sort_preferences(sort_by: str, directory_order: str, reverse: bool) -> None:
    """Persist listing sort defaults."""
    config = load_config()
    config["sort_by"] = str(sort_by)
    config["directory_order"] = str(directory_order)
    config["reverse"] = bool(reverse)
    save_config(config)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_sort_by",
    "load_directory_order",
    "load_reverse",
    "load_show_hidden",
    "load_skip_gitignored",
    "load_move_threshold",
    "load_size_threshold",
    "load_time_threshold",
    "save_sort_preferences",
]
