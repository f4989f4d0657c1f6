"""
Process lifecycle: listen in the background, open a browser, then block
until the listener fails or the user interrupts.
"""

from __future__ import annotations

import logging
import queue
import socket
import threading
import webbrowser
from typing import Optional

from flask import Flask
from werkzeug.serving import BaseWSGIServer, make_server, select_address_family

from serving.config import ServerConfig, root_url

logger = logging.getLogger(__name__)

STARTUP_DELAY = 1.0
POLL_INTERVAL = 0.5


class Listener(threading.Thread):
    """Runs the WSGI server; reports its one fatal error on ``errors``."""

    def __init__(self, app: Flask, host: str, port: int):
        super().__init__(name="listener", daemon=True)
        self.app = app
        self.host = host
        self.port = port
        self.errors: "queue.Queue[BaseException]" = queue.Queue(maxsize=1)
        self.ready = threading.Event()
        self.server: Optional[BaseWSGIServer] = None

    def run(self):
        try:
            # Bind here so a busy port surfaces as an OSError rather than
            # werkzeug printing and calling sys.exit from this thread.
            sock = socket.create_server(
                (self.host, self.port),
                family=select_address_family(self.host, self.port),
            )
            try:
                self.server = make_server(self.host, self.port, self.app,
                                          threaded=True, fd=sock.fileno())
            finally:
                sock.close()
            self.port = self.server.port
            self.ready.set()
            self.server.serve_forever()
        except Exception as e:
            self.errors.put_nowait(e)

    def shutdown(self):
        if self.server is not None:
            self.server.shutdown()
            self.server.server_close()


def open_browser(url: str) -> bool:
    logger.info("open '%s' in browser", url)
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        logger.warning("unable to open %s: %s", url, e)
        return False
    if not opened:
        logger.warning("unable to open %s: no runnable browser found", url)
    return opened


def wait_for_exit(errors: "queue.Queue[BaseException]",
                  poll: float = POLL_INTERVAL) -> BaseException:
    """Block until the listener reports an error.

    Polls with a timeout so KeyboardInterrupt is delivered promptly on every
    platform.
    """
    while True:
        try:
            return errors.get(timeout=poll)
        except queue.Empty:
            continue


def serve(config: ServerConfig, app: Flask) -> int:
    """Run until the listener fails (returns 1) or SIGINT arrives (returns 0)."""
    listener = Listener(app, config.host, config.port)
    try:
        logger.info("hosting '%s' at %s:%d", config.directory, config.host, config.port)
        listener.start()

        listener.ready.wait(STARTUP_DELAY)
        if config.open_browser:
            open_browser(root_url(listener.port))

        err = wait_for_exit(listener.errors)
        logger.error("serve error: %s", err)
        return 1
    except KeyboardInterrupt:
        logger.info("quit!")
        return 0
