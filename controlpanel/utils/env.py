#!/usr/bin/env python3
# env.py
# Helpers for .env files and typed environment lookups.
# Author: Daniel Würmli

import os
import re
from pathlib import Path
from typing import Optional, Union

_ENV_ASSIGN_RE = re.compile(r"^\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*)\s*$")


def _default_dotenv_path() -> Path:
    override = os.environ.get("CONTROLPANEL_ENV_FILE")
    if override:
        return Path(override).expanduser()
    return Path.cwd() / ".env"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def load_dotenv(dotenv_path: Union[str, Path, None] = None, override: bool = False) -> Path:
    """
    Load KEY=value lines from a dotenv file into os.environ.

    :param dotenv_path: Explicit file. Defaults to $CONTROLPANEL_ENV_FILE or ./.env.
    :param override: Overwrite variables that are already set.
    :return: The path that was looked at, whether or not it existed.
    """
    path = Path(dotenv_path) if dotenv_path else _default_dotenv_path()
    if not path.is_file():
        return path

    with path.open("r", encoding="utf-8") as handle:
        for raw_line in handle:
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            match = _ENV_ASSIGN_RE.match(line)
            if not match:
                continue
            key, value = match.groups()
            if override or key not in os.environ:
                os.environ[key] = _strip_quotes(value)
    return path


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return float(default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' is not a number: {raw!r}") from None


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Environment variable '{name}' is not an integer: {raw!r}") from None


def env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    raw = os.environ.get(name)
    return raw if raw else default


__all__ = [
    "load_dotenv",
    "env_float",
    "env_int",
    "env_str",
]
