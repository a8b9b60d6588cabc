#!/usr/bin/env python3
# control_system.py
# Main CLI orchestrator for the control panel.
# Author: Daniel Würmli


import argparse, logging, sys

from ..high_level import dispatcher, status_merger
from ..high_level.panel_system import PanelSystem
from ..low_level import config_store
from ..low_level.http_client import DEFAULT_TIMEOUT_S, close_session, get_session
from ..low_level.models import ActivationRequest
from ..utils.env import env_float, env_int, env_str

LOG_FORMAT = "[%(levelname)s] %(message)s"

# ---------- Utils ----------
def die(msg: str, code: int = 1):
    print(f"[FATAL] {msg}")
    sys.exit(code)

def positive_float(val):
    try:
        f = float(val)
    except (TypeError, ValueError):
        raise argparse.ArgumentTypeError(f"Invalid number: {val!r}")
    if f <= 0:
        raise argparse.ArgumentTypeError(f"Value must be > 0: {val!r}")
    return f

def load_or_die(path: str):
    try:
        return config_store.load(path)
    except config_store.ConfigError as exc:
        die(f"Config load error: {exc}")

def setup_logging(level: str):
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)


# ---------- Modes ----------
def run_check(args) -> int:
    cfg = load_or_die(args.config)
    print(f"[INFO] {args.config}: {len(cfg.controls)} control(s), status_url={cfg.status_url or '-'}")
    for c in cfg.controls:
        extra = f" range={c.min}..{c.max}" if c.is_slider else ""
        print(f"  {c.kind.value:<6} {c.name:<24} -> {c.url}{extra}")
    for name in cfg.duplicate_names():
        print(f"[WARN] duplicate control name: {name}")
    return 0

def run_status(args) -> int:
    cfg = load_or_die(args.config)
    if not cfg.status_url:
        print("[INFO] No status_url configured; all values are 0.")
    controls = status_merger.merge(cfg.controls, cfg.status_url, session=get_session(), timeout=args.timeout)
    for c in controls:
        if c.is_slider:
            print(f"  {c.name:<24} {c.value}")
    return 0

def run_activate(args) -> int:
    cfg = load_or_die(args.config)
    name, value = args.activate
    try:
        result = dispatcher.activate(
            cfg.controls,
            ActivationRequest(name=name, value=value),
            session=get_session(),
            timeout=args.timeout,
        )
    except dispatcher.DispatchError as exc:
        die(str(exc))
    print(f"[INFO] {name}: {result.status}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Control panel: render buttons/sliders and forward activations")

    # --- Modes (default: serve) ---
    ap.add_argument("--check", action="store_true", help="validate the config and list controls")
    ap.add_argument("--status", action="store_true", help="print live slider values from the status endpoint")
    ap.add_argument("--activate", nargs=2, metavar=("NAME", "VALUE"), help="activate one control and exit")

    # --- Config & server ---
    ap.add_argument("--config", default=config_store.default_config_path())
    ap.add_argument("--host", default=env_str("CONTROLPANEL_HOST", "0.0.0.0"))
    ap.add_argument("--port", type=int, default=None)
    ap.add_argument("--timeout", type=positive_float, default=None,
                    help=f"outbound timeout in seconds (default {DEFAULT_TIMEOUT_S:g})")
    ap.add_argument("--template", default=None, help="optional Jinja template, re-read per request")
    ap.add_argument("--static", default="static", help="directory served under /static/")
    ap.add_argument("--log_level", default="INFO")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    # Environment fallbacks for flags left unset
    try:
        if args.port is None:
            args.port = env_int("CONTROLPANEL_PORT", 8080)
        if args.timeout is None:
            args.timeout = positive_float(env_float("CONTROLPANEL_TIMEOUT_S", DEFAULT_TIMEOUT_S))
    except (ValueError, argparse.ArgumentTypeError) as exc:
        die(str(exc))

    try:
        if args.check:
            return run_check(args)
        if args.status:
            return run_status(args)
        if args.activate:
            return run_activate(args)
    finally:
        close_session()

    panel = PanelSystem(
        config_path=args.config,
        host=args.host,
        port=args.port,
        timeout=args.timeout,
        template_path=args.template,
        static_dir=args.static,
    )
    try:
        panel.start(background=False)
    except KeyboardInterrupt:
        pass
    return 0

if __name__ == "__main__":
    sys.exit(main())
