"""On-disk store of compiled artifacts."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import List, Optional, Tuple

from swiftly.data import CacheKey
from swiftly.env import get_swiftly_cache_path
from swiftly.logging import get_logger

logger = get_logger("CacheStore")


class CacheStore:
    """Maps cache keys to directories holding exactly one compiled artifact.

    The store exclusively owns the layout under its root::

        <root>/<base_name>/<timestamp>/<base_name>

    The root is created lazily by :meth:`register`. No locking is done: concurrent invocations
    for the same key overwrite each other's artifact, and concurrent prunes of the same program
    tolerate entries that disappear underneath them.
    """

    _root: Path
    """The cache root."""

    def __init__(self, root: Optional[Path] = None) -> None:
        """Constructor for the CacheStore class.

        Parameters
        ----------
        root : Optional[Path]
            The cache root. Default is the value of ``get_swiftly_cache_path()``.
        """
        self._root = Path(root) if root is not None else get_swiftly_cache_path()

    @property
    def root(self) -> Path:
        return self._root

    def program_dir(self, base_name: str) -> Path:
        """The directory holding all entries of one program."""
        return self._root / base_name

    def entry_dir(self, key: CacheKey) -> Path:
        """The directory of the entry for ``key``. It may not exist."""
        return self._root / key.relative_dir()

    def path_for(self, key: CacheKey) -> Path:
        """The artifact path for ``key``, named after the program base name.

        This is pure path arithmetic; the entry does not need to exist.
        """
        return self.entry_dir(key) / key.base_name

    def exists(self, key: CacheKey) -> bool:
        """Check whether the artifact for ``key`` is a regular executable file."""
        path = self.path_for(key)
        return path.is_file() and os.access(path, os.X_OK)

    def register(self, key: CacheKey) -> Path:
        """Create the entry directory for ``key`` and return the path the artifact goes to.

        The artifact itself is written by the compiler directly to the returned path.

        Parameters
        ----------
        key : CacheKey
            The key of the new entry.

        Returns
        -------
        Path
            ``path_for(key)``.

        Raises
        ------
        OSError
            If the directory cannot be created (e.g. permission denied). Creating a directory
            that already exists is not an error.
        """
        entry_dir = self.entry_dir(key)
        entry_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Registered cache entry {entry_dir}")
        return self.path_for(key)

    def entries(self, base_name: str) -> List[Path]:
        """List the entries of a program, most recently modified first.

        Entries are ordered by the modification time of the directory entry itself, not by the
        timestamp in its name. Entries with the same modification time are ordered by name,
        highest first.

        Parameters
        ----------
        base_name : str
            The program base name.

        Returns
        -------
        List[Path]
            The entries, or an empty list if the program has no directory.
        """
        try:
            children = list(self.program_dir(base_name).iterdir())
        except OSError:
            return []

        stamped: List[Tuple[int, Path]] = []
        for child in children:
            try:
                stamped.append((child.lstat().st_mtime_ns, child))
            except OSError:
                # Removed by a concurrent prune.
                continue
        stamped.sort(key=lambda item: item[1].name, reverse=True)
        stamped.sort(key=lambda item: item[0], reverse=True)
        return [path for _, path in stamped]

    def prune(self, base_name: str) -> List[Path]:
        """Delete every entry of a program except the most recently modified one.

        This is best effort. Entries that cannot be removed are logged and skipped, and a
        program with zero or one entries is left untouched.

        Parameters
        ----------
        base_name : str
            The program base name.

        Returns
        -------
        List[Path]
            The entries that were removed.
        """
        entries = self.entries(base_name)
        if len(entries) <= 1:
            return []

        kept, *stale = entries
        logger.debug(f"Keeping {kept}, pruning {len(stale)} stale entries")

        removed: List[Path] = []
        for entry in stale:
            try:
                if entry.is_dir() and not entry.is_symlink():
                    shutil.rmtree(entry)
                else:
                    entry.unlink()
            except FileNotFoundError:
                logger.debug(f"Stale entry {entry} already removed")
            except OSError as e:
                logger.warning(f"Failed to prune stale entry {entry}: {e}")
            else:
                logger.info(f"Pruned stale entry {entry}")
                removed.append(entry)
        return removed
