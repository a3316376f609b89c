"""Resolution of the program reference given on the command line."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Optional

from swiftly.data import ProgramReference
from swiftly.logging import get_logger

logger = get_logger("Resolver")


class ResolutionError(RuntimeError):
    """Raised when a program reference is neither a file nor an executable on the search path."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Cannot resolve program '{raw}' to a file or a search-path executable")
        self.raw = raw


def split_extension(base_name: str) -> str:
    """Return the substring after the last ``.`` in ``base_name``.

    Examples
    --------
    >>> split_extension("hello.swift")
    'swift'
    >>> split_extension("hello")
    ''
    >>> split_extension("archive.tar.gz")
    'gz'
    """
    if "." not in base_name:
        return ""
    return base_name.rsplit(".", 1)[1]


def resolve_program(raw: str, search_path: Optional[str] = None) -> ProgramReference:
    """Resolve a program reference to an existing source file.

    A reference naming an existing regular file resolves to that file. Otherwise the execution
    search path is searched for an executable with the reference's base name. Only read-only
    filesystem queries are made.

    Parameters
    ----------
    raw : str
        The first positional argument of the invocation.
    search_path : Optional[str]
        A ``PATH``-style search path. Default is the ``PATH`` environment variable.

    Returns
    -------
    ProgramReference
        The resolved reference, with the file's modification time in whole seconds.

    Raises
    ------
    ResolutionError
        If the reference is neither an existing file nor found on the search path.
    """
    if not raw:
        raise ResolutionError(raw)

    base_name = os.path.basename(raw.rstrip(os.sep)) or raw
    path = Path(raw)
    if not path.is_file():
        found = shutil.which(base_name, path=search_path)
        if found is None:
            logger.debug(f"'{raw}' is neither a file nor on the search path")
            raise ResolutionError(raw)
        path = Path(found)
        logger.debug(f"Resolved '{raw}' on the search path to {path}")

    try:
        mtime = int(path.stat().st_mtime)
    except OSError as e:
        # Removed between the existence check and the stat.
        raise ResolutionError(raw) from e

    return ProgramReference(
        raw=raw,
        base_name=base_name,
        extension=split_extension(base_name),
        path=path,
        mtime=mtime,
    )
