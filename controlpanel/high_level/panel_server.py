#!/usr/bin/env python3
# panel_server.py
# Flask front end: renders the panel and forwards activations.
# Author: Daniel Würmli

"""Flask front end: renders the panel and forwards activations."""

import logging
import os
from pathlib import Path
from typing import Optional, Sequence, Union

import requests
from flask import Flask, Response, jsonify, render_template_string, request
from jinja2 import TemplateError

from ..low_level import config_store
from ..low_level.http_client import DEFAULT_TIMEOUT_S
from ..low_level.models import ActivationRequest, Control
from . import dispatcher, status_merger

logger = logging.getLogger(__name__)

INDEX_HTML = """<!doctype html><html><head><meta charset="utf-8"><title>Control Panel</title>
<meta name="viewport" content="width=device-width, initial-scale=1">
<style>body{background:#111;color:#eee;font-family:system-ui;margin:0}
.wrap{display:flex;flex-wrap:wrap;gap:12px;padding:16px;justify-content:center}
.ctl{background:#1c1c1c;border-radius:8px;padding:12px;min-width:160px;text-align:center}
button{font-size:1.1em;padding:10px 18px;border-radius:6px;border:0;background:#2e7d32;color:#fff}
#msg{text-align:center;min-height:1.4em;color:#aaa}</style>
</head><body><div class="wrap">
{% for c in controls %}
  <div class="ctl" data-name="{{ c.name }}">
    {% if c.icon %}<div class="icon">{{ c.icon }}</div>{% endif %}
    {% if c.is_slider %}
      <label>{{ c.name }} <output>{{ c.value }}</output></label><br>
      <input type="range" min="{{ c.min }}" max="{{ c.max }}" value="{{ c.value }}"
             onchange='activate({{ c.name|tojson }}, this.value, this)'>
    {% else %}
      <button onclick='activate({{ c.name|tojson }}, "", this)'>{{ c.name }}</button>
    {% endif %}
  </div>
{% endfor %}
</div><div id="msg"></div>
<script>
async function activate(name, value, el) {
  const msg = document.getElementById("msg");
  const out = el.parentElement.querySelector("output");
  if (out) out.textContent = value;
  try {
    const r = await fetch("activate", {method: "POST",
      headers: {"Content-Type": "application/json"},
      body: JSON.stringify({name: name, value: String(value)})});
    msg.textContent = r.ok ? name + ": ok" : name + ": " + (await r.text());
  } catch (err) {
    msg.textContent = name + ": " + err;
  }
}
</script></body></html>"""


def render_controls(controls: Sequence[Control], template_path: Union[str, Path, None] = None) -> str:
    """
    Render the panel HTML. Must run inside a Flask app context.

    An operator template is read from disk on every call so edits show up on
    the next page load.
    """
    source = INDEX_HTML
    if template_path:
        with open(template_path, "r", encoding="utf-8") as handle:
            source = handle.read()
    return render_template_string(source, controls=list(controls))


def create_app(
    config_path: Union[str, Path, None] = None,
    session: Optional[requests.Session] = None,
    timeout: float = DEFAULT_TIMEOUT_S,
    template_path: Union[str, Path, None] = None,
    static_dir: Union[str, Path, None] = "static",
) -> Flask:
    """Create the Flask app. Configuration is loaded per request, never cached."""
    static_folder = os.path.abspath(static_dir) if static_dir else None
    app = Flask(__name__, static_folder=static_folder, static_url_path="/static")

    def _load():
        return config_store.load(config_path)

    def _merged_controls(cfg):
        return status_merger.merge(cfg.controls, cfg.status_url, session=session, timeout=timeout)

    @app.route("/")
    def index():
        try:
            cfg = _load()
        except config_store.ConfigError as exc:
            logger.error("Config load error: %s", exc)
            return f"Config load error: {exc}", 500
        controls = _merged_controls(cfg)
        try:
            html = render_controls(controls, template_path)
        except (OSError, TemplateError) as exc:
            logger.error("Template error: %s", exc)
            return f"Template error: {exc}", 500
        return Response(html, mimetype="text/html")

    @app.route("/api/controls")
    def controls_json():
        try:
            cfg = _load()
        except config_store.ConfigError as exc:
            logger.error("Config load error: %s", exc)
            return f"Config load error: {exc}", 500
        return jsonify({"controls": [c.to_dict() for c in _merged_controls(cfg)]})

    @app.route("/activate", methods=["POST"])
    def activate():
        try:
            cfg = _load()
        except config_store.ConfigError as exc:
            logger.error("Config load error: %s", exc)
            return "Config load error", 500

        payload = request.get_json(force=True, silent=True)
        try:
            activation = ActivationRequest.from_payload(payload)
        except ValueError as exc:
            logger.warning("Bad request body: %s", exc)
            return "bad request", 400

        try:
            result = dispatcher.activate(cfg.controls, activation, session=session, timeout=timeout)
        except dispatcher.DispatchError as exc:
            logger.warning("Activation of %r failed: %s", activation.name, exc)
            return str(exc), exc.http_status
        return jsonify(result.to_dict())

    @app.route("/healthz")
    def health():
        return "ok"

    return app


__all__ = ["INDEX_HTML", "create_app", "render_controls"]
