#!/usr/bin/env python3
# http_client.py
# Shared outbound HTTP session used for status fetches and activations.
# Author: Daniel Würmli

"""Shared outbound HTTP session used for status fetches and activations."""

import threading
from typing import Optional

import requests

DEFAULT_TIMEOUT_S = 5.0
USER_AGENT = "controlpanel/0.1"

_lock = threading.Lock()
_session: Optional[requests.Session] = None


def create_session() -> requests.Session:
    """New session without retries; callers pass the timeout per request."""
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    return session


def get_session() -> requests.Session:
    """Return the process-wide session, creating it on first use."""
    global _session
    with _lock:
        if _session is None:
            _session = create_session()
        return _session


def close_session() -> None:
    global _session
    with _lock:
        if _session is not None:
            _session.close()
            _session = None


__all__ = ["DEFAULT_TIMEOUT_S", "create_session", "get_session", "close_session"]
