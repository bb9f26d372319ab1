"""Process supervision for the Gorgon dev server.

The dev server asks to be restarted by exiting with RELOAD_EXIT_CODE.
supervise() runs the server as a child process and starts it again, with the
same command line, each time that happens.
"""

from __future__ import annotations

import os
import signal
import subprocess
import sys
from collections.abc import Callable, Mapping, Sequence

from .server import RELOAD_EXIT_CODE

SUPERVISED_ENV = "GORGON_SUPERVISED"

Runner = Callable[..., int]


def is_supervised(environ: Mapping[str, str] | None = None) -> bool:
    """Return True when running as a child of supervise()."""
    environ = os.environ if environ is None else environ
    return environ.get(SUPERVISED_ENV) == "1"


def worker_command(argv: Sequence[str] | None = None) -> list[str]:
    """Return the command line that runs the CLI again with the same arguments."""
    args = list(sys.argv[1:] if argv is None else argv)
    return [sys.executable, "-m", "gorgon", *args]


def supervise(command: Sequence[str], runner: Runner = subprocess.call) -> int:
    """Run ``command`` until it exits with anything but RELOAD_EXIT_CODE.

    Ctrl-C reaches the whole process group; the supervisor ignores it so only
    the child decides whether to reload or exit.

    Returns:
        The child's final exit code.
    """
    env = {**os.environ, SUPERVISED_ENV: "1"}
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    try:
        while True:
            code = runner(list(command), env=env)
            if code != RELOAD_EXIT_CODE:
                return code
            print("Restarting the dev server...")
    finally:
        signal.signal(signal.SIGINT, previous)
