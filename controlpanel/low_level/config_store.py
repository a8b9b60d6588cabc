#!/usr/bin/env python3
# config_store.py
# Reads the operator-owned panel definition fresh from disk.
# Author: Daniel Würmli

"""
Panel configuration loader.

The file is re-read on every call so that edits take effect without a
restart. Two layouts are accepted::

    {"status_url": "http://...", "controls": [{...}, ...]}
    [{...}, ...]

Values are taken literally; URLs in particular are never templated.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Union

from .models import Configuration, Control, ControlKind

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"


class ConfigError(Exception):
    """Base error for an unusable panel configuration."""

    def __init__(self, path, message: str):
        super().__init__(f"{path}: {message}")
        self.path = str(path)
        self.message = message


class ConfigIOError(ConfigError):
    """The configuration file is missing or unreadable."""


class ConfigFormatError(ConfigError):
    """The configuration file does not parse into the expected shape."""


def default_config_path() -> str:
    return os.environ.get("CONTROLPANEL_CONFIG", DEFAULT_CONFIG_PATH)


def load(path: Union[str, Path, None] = None) -> Configuration:
    """Read and validate the panel configuration. No caching."""
    path = Path(path) if path else Path(default_config_path())
    try:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigFormatError(path, f"invalid JSON: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigIOError(path, f"could not be read: {exc}") from exc

    try:
        cfg = parse_config(raw)
    except ValueError as exc:
        raise ConfigFormatError(path, str(exc)) from exc

    dupes = cfg.duplicate_names()
    if dupes:
        logger.warning("Duplicate control names in %s (first one wins): %s", path, ", ".join(dupes))
    return cfg


def parse_config(raw: Any) -> Configuration:
    """Turn decoded JSON into a Configuration. Raises ValueError on bad shape."""
    status_url = None
    if isinstance(raw, list):
        entries = raw
    elif isinstance(raw, dict):
        entries = raw.get("controls", [])
        status_url = raw.get("status_url")
        if status_url is not None and not isinstance(status_url, str):
            raise ValueError("'status_url' must be a string.")
        if status_url is not None and not status_url.strip():
            status_url = None
    else:
        raise ValueError("Configuration must be a JSON object or array.")

    if not isinstance(entries, list):
        raise ValueError("'controls' must be a JSON array.")

    controls: List[Control] = [parse_control(entry, idx) for idx, entry in enumerate(entries)]
    return Configuration(controls=tuple(controls), status_url=status_url)


def parse_control(entry: Any, idx: int = 0) -> Control:
    if not isinstance(entry, dict):
        raise ValueError(f"Control #{idx} must be a JSON object.")

    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError(f"Control #{idx} needs a non-empty string 'name'.")

    if "type" not in entry:
        raise ValueError(f"Control '{name}' has no 'type'.")
    kind = ControlKind.parse(entry["type"])

    url = entry.get("url")
    if not isinstance(url, str) or not url:
        raise ValueError(f"Control '{name}' needs a string 'url'.")

    icon = entry.get("icon", "")
    if icon is None:
        icon = ""
    if not isinstance(icon, str):
        raise ValueError(f"Control '{name}': 'icon' must be a string.")

    return Control(
        name=name,
        kind=kind,
        icon=icon,
        min=_int_field(entry, "min", name),
        max=_int_field(entry, "max", name),
        url=url,
    )


def _int_field(entry: dict, key: str, name: str) -> int:
    val = entry.get(key, 0)
    if val is None:
        return 0
    if isinstance(val, bool) or not isinstance(val, int):
        raise ValueError(f"Control '{name}': '{key}' must be an integer, got {val!r}")
    return val


__all__ = [
    "ConfigError",
    "ConfigIOError",
    "ConfigFormatError",
    "DEFAULT_CONFIG_PATH",
    "default_config_path",
    "load",
    "parse_config",
    "parse_control",
]
