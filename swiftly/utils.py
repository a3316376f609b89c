"""Process helpers shared by the compiler, the interpreter and compiled artifacts."""

from __future__ import annotations

import signal
import subprocess
import threading
from contextlib import contextmanager
from typing import Iterator, Sequence

from swiftly.logging import get_logger

logger = get_logger("Process")

EXIT_FAILURE = 1
"""Exit status for failures reported by swiftly itself."""

EXIT_COMMAND_NOT_FOUND = 127
"""Exit status when an executable cannot be found, as reported by POSIX shells."""

_INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGQUIT)


def exit_status_from_returncode(returncode: int) -> int:
    """Convert a ``subprocess`` return code to a process exit status.

    A child terminated by signal ``N`` has return code ``-N``; shells report it as ``128 + N``.

    Examples
    --------
    >>> exit_status_from_returncode(3)
    3
    >>> exit_status_from_returncode(-9)
    137
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


@contextmanager
def _interrupts_ignored() -> Iterator[None]:
    """Ignore SIGINT and SIGQUIT in this process while the block runs.

    A terminal delivers these signals to the whole foreground process group, so the child gets
    them too and decides on its own whether to exit. Handlers can only be changed from the main
    thread; elsewhere this is a no-op.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous = {}
    for signum in _INTERRUPT_SIGNALS:
        previous[signum] = signal.signal(signum, signal.SIG_IGN)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            # None means the handler was not installed from Python.
            signal.signal(signum, signal.SIG_DFL if handler is None else handler)


def run_process(command: Sequence[str]) -> int:
    """Run a command in the foreground and wait for it.

    The child inherits stdin, stdout and stderr. There is no timeout. While waiting, keyboard
    interrupts are left to the child, like ``os.system`` does, so swiftly always ends with the
    child's exit status.

    Parameters
    ----------
    command : Sequence[str]
        The executable followed by its arguments.

    Returns
    -------
    int
        The child's exit status, or ``EXIT_COMMAND_NOT_FOUND`` if the executable does not
        exist.

    Raises
    ------
    OSError
        If the executable exists but cannot be started (e.g. permission denied).
    """
    logger.debug(f"Running {list(command)}")
    try:
        # The child starts with the default handlers; only this process ignores interrupts.
        proc = subprocess.Popen(list(command))
    except FileNotFoundError:
        logger.error(f"Command not found: {command[0]}")
        return EXIT_COMMAND_NOT_FOUND
    with _interrupts_ignored():
        returncode = proc.wait()
    return exit_status_from_returncode(returncode)
