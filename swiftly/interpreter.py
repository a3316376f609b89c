"""The external interpreter, used when no caching is applicable."""

from __future__ import annotations

import subprocess
from typing import List, Sequence

from swiftly.logging import get_logger
from swiftly.utils import run_process

logger = get_logger("Interpreter")


class Interpreter:
    """Runs the language's own interpreter or driver (``swift`` by default)."""

    executable: str
    """The interpreter executable."""

    def __init__(self, executable: str = "swift") -> None:
        self.executable = executable

    def command(self, args: Sequence[str]) -> List[str]:
        return [self.executable, *args]

    def run(self, args: Sequence[str] = ()) -> int:
        """Run the interpreter in the foreground, forwarding ``args`` unchanged.

        Returns
        -------
        int
            The interpreter's exit status.
        """
        return run_process(self.command(args))

    def help_text(self) -> str:
        """Capture the output of ``<interpreter> -h``.

        Returns
        -------
        str
            The combined stdout and stderr of the help request, or an empty string if the
            interpreter cannot be run.
        """
        try:
            proc = subprocess.run(
                self.command(["-h"]), capture_output=True, text=True, check=False
            )
        except OSError as e:
            logger.warning(f"Cannot get help from interpreter '{self.executable}': {e}")
            return ""
        return (proc.stdout or "") + (proc.stderr or "")
