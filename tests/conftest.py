"""Shared pytest fixtures for the control panel tests."""

import json

import pytest
import requests


class RecordingRaw:
    """Stand-in for the urllib3 body; notes when the connection is handed back."""

    def __init__(self):
        self.released = False

    def release_conn(self):
        self.released = True


def make_response(status_code=200, body=b"", reason="OK", url=""):
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason
    resp.url = url
    resp.raw = RecordingRaw()
    resp._content = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    resp._content_consumed = True
    resp.headers["Content-Type"] = "application/json"
    return resp


class FakeSession(requests.Session):
    """Session that records prepared requests instead of touching the network."""

    def __init__(self, responses=None, error=None):
        super().__init__()
        self.sent = []
        self.timeouts = []
        self.responses = []
        self._responses = dict(responses or {})
        self._error = error

    def send(self, request, **kwargs):
        self.sent.append(request)
        self.timeouts.append(kwargs.get("timeout"))
        if self._error is not None:
            raise self._error
        status, body = self._responses.get(request.url, (200, b""))
        resp = make_response(status, body, reason="OK" if status < 400 else "Error", url=request.url)
        self.responses.append(resp)
        return resp


def offline_session():
    """Real session that ignores proxy settings from the environment."""
    session = requests.Session()
    session.trust_env = False
    return session


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def write_config(tmp_path):
    """Write a config document to tmp_path and return its path."""

    def _write(doc, name="config.json"):
        path = tmp_path / name
        if isinstance(doc, str):
            path.write_text(doc, encoding="utf-8")
        else:
            path.write_text(json.dumps(doc), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def panel_doc():
    return {
        "status_url": "http://status.local/values",
        "controls": [
            {"name": "porch-light", "type": "button", "icon": "bulb", "url": "http://x/on"},
            {"name": "lamp", "type": "slider", "icon": "dim", "min": 0, "max": 100, "url": "http://x/lamp"},
            {"name": "fan", "type": "slider", "min": 1, "max": 5, "url": "http://x/fan"},
        ],
    }
