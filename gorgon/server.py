"""Development server for Gorgon.

Serves a configured site over HTTP, rendering pages on every request.

Ctrl-C once asks for a reload, twice to exit. The server never restarts
itself: a watcher thread notices the interrupt, shuts the HTTP server down,
waits a short grace period for requests in flight and reports an exit code.
RELOAD_EXIT_CODE tells the supervisor (see supervisor.py) to start a fresh
process with the same command line.

Key classes:
- ServerState: Running, reload requested or exiting.
- ReloadFlag: The state shared by the signal handler and the watcher.
- DevServerController: Runs the HTTP server and the watcher.
- _SiteHTTPHandler: Adapts http.server requests to RequestHandler.
"""

from __future__ import annotations

import functools
import signal
import threading
import time
from collections.abc import Callable
from enum import IntEnum
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import TYPE_CHECKING, Any

from .handler import RequestHandler

if TYPE_CHECKING:
    from .site import Site

RELOAD_EXIT_CODE = 3

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3456


class ServerState(IntEnum):
    RUNNING = 0
    RELOAD_REQUESTED = 1
    EXITING = 2


class ReloadFlag:
    """Forward-only server state shared between threads."""

    def __init__(self) -> None:
        self._state = ServerState.RUNNING
        # Reentrant: a second SIGINT can arrive while the handler holds it.
        self._lock = threading.RLock()

    @property
    def state(self) -> ServerState:
        return self._state

    def interrupt(self) -> ServerState:
        """Advance the state one step: running -> reload -> exit."""
        with self._lock:
            if self._state is ServerState.RUNNING:
                self._state = ServerState.RELOAD_REQUESTED
            else:
                self._state = ServerState.EXITING
            return self._state


class _SiteHTTPHandler(BaseHTTPRequestHandler):
    """HTTP request handler that delegates every method to RequestHandler."""

    def __init__(self, *args: Any, request_handler: RequestHandler, **kwargs: Any):
        self.request_handler = request_handler
        super().__init__(*args, **kwargs)

    def __getattr__(self, name: str):
        # BaseHTTPRequestHandler looks up do_<METHOD>; answer for all of them so
        # unsupported methods get a 405 instead of a 501.
        if name.startswith("do_"):
            return self._dispatch
        raise AttributeError(name)

    def _dispatch(self) -> None:
        response = self.request_handler.handle(self.command, self.path)
        self.send_response(response.status)
        self.send_header("Content-Type", response.content_type)
        self.send_header("Content-Length", str(len(response.body)))
        self.send_header("Cache-Control", "no-cache, no-store, must-revalidate")
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(response.body)


ServerFactory = Callable[[tuple[str, int], Callable[..., BaseHTTPRequestHandler]], Any]


class DevServerController:
    """Runs the dev server until Ctrl-C asks it to reload or exit.

    Attributes:
        site: The configured site to serve.
        host: Interface to bind.
        port: Port to bind.
        flag: Shared reload/exit state.
        poll_interval: Seconds between watcher checks of the flag.
        grace_period: Seconds to let in-flight requests finish after shutdown.
        exit_code: 0 after an exit, RELOAD_EXIT_CODE after a reload request.
    """

    def __init__(
        self,
        site: Site,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        poll_interval: float = 0.1,
        grace_period: float = 0.1,
        server_factory: ServerFactory | None = None,
    ):
        self.site = site
        self.host = host
        self.port = port
        self.flag = ReloadFlag()
        self.poll_interval = poll_interval
        self.grace_period = grace_period
        self.exit_code = 0
        self._server_factory = server_factory or ThreadingHTTPServer
        self._httpd: Any = None

    def interrupt(self) -> ServerState:
        state = self.flag.interrupt()
        if state is ServerState.RELOAD_REQUESTED:
            print("\nReloading the server, hit ctrl-c twice to exit\n")
        return state

    def _handle_signal(self, signum: int, frame: Any) -> None:
        self.interrupt()

    def run(self) -> int:
        """Serve until interrupted and return the process exit code."""
        handler = functools.partial(
            _SiteHTTPHandler, request_handler=RequestHandler(self.site)
        )
        self._httpd = self._server_factory((self.host, self.port), handler)
        previous = signal.signal(signal.SIGINT, self._handle_signal)
        watcher = threading.Thread(target=self._watch, name="gorgon-watcher", daemon=True)
        print(
            f"\nStarting dev server at http://{self.host}:{self.port}, "
            "hit ctrl-c once to reload, twice to exit\n"
        )
        try:
            watcher.start()
            self._httpd.serve_forever()
            watcher.join()
        finally:
            signal.signal(signal.SIGINT, previous)
            self._httpd.server_close()
        return self.exit_code

    def _watch(self) -> None:
        while self.flag.state is ServerState.RUNNING:
            time.sleep(self.poll_interval)
        self._httpd.shutdown()
        time.sleep(self.grace_period)
        if self.flag.state is ServerState.EXITING:
            self.exit_code = 0
        else:
            self.exit_code = RELOAD_EXIT_CODE
