"""Broker commands that manage a running instance."""

from __future__ import annotations

import os
import signal
import sys
import tempfile
from collections.abc import Sequence

from nanoedge.broker_options import BrokerError, usage_text
from nanoedge.pidfile import status_check

PID_PATH = os.path.join(tempfile.gettempdir(), "nanomq", "nanomq.pid")


def broker_stop(argv: Sequence[str], pid_path: str | os.PathLike = PID_PATH) -> int:
    """Stop the running broker named in the pid file and return its pid.

    Raises BrokerError when arguments are given or no instance runs.
    """
    if len(argv) != 0:
        raise BrokerError(usage_text())
    pid = status_check(pid_path)
    if pid is None:
        raise BrokerError("There is no running NanoMQ instance.")
    os.kill(pid, signal.SIGTERM)
    print("NanoMQ stopped.", file=sys.stderr)
    return pid


def broker_dflt(argv: Sequence[str]) -> int:
    """Print the broker usage text."""
    print(usage_text(), end="")
    return 0