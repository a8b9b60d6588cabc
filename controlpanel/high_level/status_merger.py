#!/usr/bin/env python3
# status_merger.py
# Best-effort overlay of live slider values from the status endpoint.
# Author: Daniel Würmli

"""
Status merge for the render path.

The status endpoint answers ``GET status_url`` with a JSON array of
``{"id": str, "value": int}``. Values are copied onto sliders with a matching
name. Any failure is logged and the controls are returned with their default
values so that rendering never depends on the status backend.
"""

import logging
from typing import Dict, List, Optional, Sequence

import requests

from ..low_level.http_client import DEFAULT_TIMEOUT_S, get_session
from ..low_level.models import Control, StatusEntry

logger = logging.getLogger(__name__)


class StatusFetchError(Exception):
    """The status endpoint could not be reached or answered garbage."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url


def _parse_entries(url: str, payload) -> List[StatusEntry]:
    if not isinstance(payload, list):
        raise StatusFetchError(url, "status response is not a JSON array")
    entries: List[StatusEntry] = []
    for item in payload:
        if not isinstance(item, dict):
            logger.warning("Skipping status entry that is not an object: %r", item)
            continue
        ident, value = item.get("id"), item.get("value")
        if not isinstance(ident, str) or isinstance(value, bool) or not isinstance(value, int):
            logger.warning("Skipping malformed status entry: %r", item)
            continue
        entries.append(StatusEntry(id=ident, value=value))
    return entries


def fetch_status_values(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> Dict[str, int]:
    """GET the status endpoint and return ``{id: value}``. Raises StatusFetchError."""
    session = session or get_session()
    try:
        resp = session.get(url, timeout=timeout)
    except (requests.RequestException, ValueError) as exc:
        # urllib3 rejects some hosts (empty or oversized labels) only at send time
        raise StatusFetchError(url, f"status request failed: {exc}") from exc

    with resp:
        if not 200 <= resp.status_code < 300:
            raise StatusFetchError(url, f"status endpoint returned HTTP {resp.status_code}")
        try:
            payload = resp.json()
        except ValueError as exc:
            raise StatusFetchError(url, f"status response is not JSON: {exc}") from exc

    return {entry.id: entry.value for entry in _parse_entries(url, payload)}


def apply_values(controls: Sequence[Control], values: Dict[str, int]) -> List[Control]:
    """Copy values onto matching sliders. Buttons are left alone."""
    merged = []
    for ctrl in controls:
        if ctrl.is_slider and ctrl.name in values:
            ctrl = ctrl.with_value(values[ctrl.name])
        merged.append(ctrl)
    return merged


def merge(
    controls: Sequence[Control],
    status_url: Optional[str],
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> List[Control]:
    """Overlay live values on ``controls``; never raises for status problems."""
    if not status_url or not status_url.strip():
        return list(controls)
    try:
        values = fetch_status_values(status_url, session=session, timeout=timeout)
    except StatusFetchError as exc:
        logger.warning("fetch status values failed: %s", exc)
        return list(controls)
    return apply_values(controls, values)


__all__ = ["StatusFetchError", "fetch_status_values", "apply_values", "merge"]
