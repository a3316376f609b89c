"""The external compiler, invoked as a subprocess."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Union

from swiftly.logging import get_logger
from swiftly.utils import run_process

logger = get_logger("Compiler")


class Compiler:
    """Turns one source file into one executable file.

    The compiler is invoked as ``<executable> [flags...] -o <output_path> <source_path>``. It
    must accept a source file with a recognized extension and report success through its exit
    status. It is trusted not to leave a runnable file at the output path on failure.
    """

    executable: str
    """The compiler executable, e.g. ``swiftc``."""

    flags: List[str]
    """Extra flags placed before the output and source paths."""

    def __init__(self, executable: str = "swiftc", flags: Optional[Sequence[str]] = None) -> None:
        self.executable = executable
        self.flags = list(flags or [])

    def command(
        self, output_path: Union[str, Path, None], source_path: Union[str, Path, None]
    ) -> List[str]:
        """Build the command line compiling ``source_path`` into ``output_path``.

        Raises
        ------
        ValueError
            If the output path or the source path is missing.
        """
        if not output_path:
            raise ValueError("Compiler requires an output path")
        if not source_path:
            raise ValueError("Compiler requires a source path")
        return [self.executable, *self.flags, "-o", str(output_path), str(source_path)]

    def compile(self, output_path: Path, source_path: Path) -> int:
        """Compile ``source_path`` into the executable ``output_path``.

        Parameters
        ----------
        output_path : Path
            Where the executable is written.
        source_path : Path
            The source file.

        Returns
        -------
        int
            The compiler's exit status. Zero means the executable was produced.
        """
        command = self.command(output_path, source_path)
        logger.info(f"Compiling {source_path} -> {output_path}")
        return run_process(command)
