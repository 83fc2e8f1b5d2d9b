"""Pid file handling that tells whether a broker instance is running."""

from __future__ import annotations

import os
import re

_LEADING_NUMBER = re.compile(r"\s*(\d+)")


def _is_alive(pid: int) -> bool:
    if pid <= 0:
        return False
    try:
        os.kill(pid, 0)
    except (OSError, OverflowError):
        return False
    return True


def status_check(pid_path: str | os.PathLike) -> int | None:
    """Return the pid of a running instance, or None if there is none.

    A pid file naming no live process is removed. Raises OSError when a
    stale pid file cannot be removed.
    """
    try:
        with open(pid_path, "rb") as handle:
            data = handle.read()
    except OSError:
        return None

    match = _LEADING_NUMBER.match(data.decode("ascii", "replace"))
    if match:
        pid = int(match.group(1))
        if _is_alive(pid):
            return pid
    os.remove(pid_path)
    return None


def store_pid(pid_path: str | os.PathLike) -> int:
    """Write the current process id to ``pid_path`` and return it."""
    pid = os.getpid()
    with open(pid_path, "w", encoding="ascii") as handle:
        handle.write(str(pid))
    return pid