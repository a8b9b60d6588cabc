#!/usr/bin/env python3
# dispatcher.py
# Turns an activation into one outbound call to the control's backend.
# Author: Daniel Würmli

"""
Activation dispatch.

Each activation runs resolve -> build -> call -> classify with no retries and
no memory of earlier calls.

Wire format towards the backend:

* slider: ``POST <url>`` with ``{"value": "<value as received>"}``
* button: ``GET <url>`` with an empty JSON object as body

Both carry ``Content-Type: application/json``. The slider value always travels
in the JSON body; a ``?value=`` query string is not supported.
"""

import json
import logging
from typing import Optional, Sequence

import requests

from ..low_level.http_client import DEFAULT_TIMEOUT_S, get_session
from ..low_level.models import (
    ActivationRequest,
    ActivationResult,
    Control,
    ControlKind,
    find_control,
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class DispatchError(Exception):
    """Base class for activation failures. ``http_status`` is what the caller sees."""

    http_status = 502


class UnknownControlError(DispatchError):
    http_status = 400

    def __init__(self, name: str):
        super().__init__(f"unknown control: {name!r}")
        self.name = name


class RequestBuildError(DispatchError):
    def __init__(self, url: str, reason: str):
        super().__init__(f"request build failed: {reason}")
        self.url = url


class BackendUnreachableError(DispatchError):
    def __init__(self, url: str, reason: str):
        super().__init__(f"backend call failed: {reason}")
        self.url = url


class BackendRejectedError(DispatchError):
    def __init__(self, status_code: int, url: str, reason: str = ""):
        status = f"{status_code} {reason}".strip()
        super().__init__(f"backend returned error: {status} - {url}")
        self.status_code = status_code
        self.url = url


def resolve(controls: Sequence[Control], name: str) -> Control:
    target = find_control(controls, name)
    if target is None:
        raise UnknownControlError(name)
    return target


def build_request(control: Control, activation: ActivationRequest) -> requests.Request:
    """Describe the outbound call for ``control``; nothing is sent here."""
    if control.kind is ControlKind.SLIDER:
        body = json.dumps({"value": activation.value})
        return requests.Request("POST", control.url, data=body, headers=dict(JSON_HEADERS))
    if control.kind is ControlKind.BUTTON:
        return requests.Request("GET", control.url, data="{}", headers=dict(JSON_HEADERS))
    raise RequestBuildError(control.url, f"unsupported control kind {control.kind!r}")


def _prepare(session: requests.Session, outbound: requests.Request) -> requests.PreparedRequest:
    try:
        return session.prepare_request(outbound)
    except (requests.RequestException, ValueError) as exc:
        raise RequestBuildError(outbound.url, str(exc)) from exc


def activate(
    controls: Sequence[Control],
    activation: ActivationRequest,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> ActivationResult:
    """Resolve, call and classify. Raises a DispatchError subclass on failure."""
    logger.info("Activate request: name=%r value=%r", activation.name, activation.value)
    target = resolve(controls, activation.name)
    logger.debug("Found control: %r", target)

    session = session or get_session()
    prepared = _prepare(session, build_request(target, activation))

    logger.info("Calling backend: %s %s", prepared.method, target.url)
    try:
        resp = session.send(prepared, timeout=timeout)
    except requests.RequestException as exc:
        raise BackendUnreachableError(target.url, str(exc)) from exc
    except ValueError as exc:
        # urllib3 rejects some hosts (empty or oversized labels) only at send time
        raise RequestBuildError(target.url, str(exc)) from exc

    try:
        logger.info("Backend response: %s %s", resp.status_code, resp.reason or "")
        if not 200 <= resp.status_code < 300:
            raise BackendRejectedError(resp.status_code, target.url, resp.reason or "")
    finally:
        resp.close()

    return ActivationResult(ok=True, status="success")


__all__ = [
    "DispatchError",
    "UnknownControlError",
    "RequestBuildError",
    "BackendUnreachableError",
    "BackendRejectedError",
    "JSON_HEADERS",
    "resolve",
    "build_request",
    "activate",
]
