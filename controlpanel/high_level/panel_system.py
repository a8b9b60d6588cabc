#!/usr/bin/env python3
# panel_system.py
# Lifecycle wrapper around the panel web server.
# Author: Daniel Würmli

"""Lifecycle wrapper around the panel web server."""

import logging
import threading
from typing import Optional

from ..low_level.http_client import DEFAULT_TIMEOUT_S, close_session, get_session
from .panel_server import create_app

logger = logging.getLogger(__name__)


class PanelSystem:
    """Run the panel server either blocking or in a background thread."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        host: str = "0.0.0.0",
        port: int = 8080,
        timeout: float = DEFAULT_TIMEOUT_S,
        template_path: Optional[str] = None,
        static_dir: Optional[str] = "static",
    ):
        self.config_path = config_path
        self.host = host
        self.port = int(port)
        self.timeout = float(timeout)
        self.template_path = template_path
        self.static_dir = static_dir

        self._app = None
        self._thread: Optional[threading.Thread] = None

    @property
    def app(self):
        self._init_app()
        return self._app

    def _init_app(self) -> None:
        if self._app is None:
            self._app = create_app(
                config_path=self.config_path,
                session=get_session(),
                timeout=self.timeout,
                template_path=self.template_path,
                static_dir=self.static_dir,
            )

    def _run_blocking(self) -> None:
        logger.info("Server running on %s:%d (config: %s)", self.host, self.port, self.config_path)
        self._app.run(host=self.host, port=self.port, threaded=True)

    def start(self, background: bool = True) -> Optional[threading.Thread]:
        """
        Start serving. Returns the server thread, or None when running blocking.
        """
        self._init_app()
        if not background:
            try:
                self._run_blocking()
            finally:
                self.stop()
            return None

        if self._thread and self._thread.is_alive():
            return self._thread

        self._thread = threading.Thread(target=self._run_blocking, daemon=True)
        self._thread.start()
        return self._thread

    def stop(self) -> None:
        """Release the shared HTTP session; the Flask dev server stops with the process."""
        close_session()


__all__ = ["PanelSystem"]
