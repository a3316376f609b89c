"""Builds programs into cache entries on a cache miss."""

from __future__ import annotations

from pathlib import Path

from swiftly.cache import CacheStore
from swiftly.data import CacheKey, ProgramReference
from swiftly.logging import get_logger

from .compiler import Compiler
from .runnable import Runnable, RunnableMetadata
from .utils import stage_source

logger = get_logger("Builder")


class BuildError(RuntimeError):
    """Raised when the compiler fails to produce an artifact.

    The compiler's exit status is kept in ``returncode`` and becomes swiftly's exit status.
    """

    def __init__(self, message: str, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode


class Builder:
    """Compiles a program into the cache entry for its key.

    The builder is the only producer of cache entries. It operates in the entry directory
    ``<cache_root>/<base_name>/<timestamp>/`` and compiles straight into the artifact path, so
    there is no copy step and a failed compilation leaves nothing runnable behind.
    """

    _store: CacheStore
    """The store the artifact is registered in."""

    _compiler: Compiler
    """The external compiler."""

    _source_extension: str
    """Extension appended to staged copies of extensionless sources."""

    def __init__(self, store: CacheStore, compiler: Compiler, source_extension: str = "swift"):
        """Initialize the builder.

        Parameters
        ----------
        store : CacheStore
            The cache store.
        compiler : Compiler
            The compiler collaborator.
        source_extension : str
            The extension (without the dot) the compiler requires. Default is ``swift``.
        """
        self._store = store
        self._compiler = compiler
        self._source_extension = source_extension.lstrip(".")

    def source_for(self, program: ProgramReference, entry_dir: Path) -> Path:
        """Get the path handed to the compiler, staging a copy if the program has no extension.

        Parameters
        ----------
        program : ProgramReference
            The resolved program.
        entry_dir : Path
            The entry directory, which must exist.

        Returns
        -------
        Path
            The original source path, or the staged copy inside ``entry_dir``.
        """
        if program.has_extension:
            return program.path
        staged = stage_source(program, entry_dir, self._source_extension)
        logger.debug(f"Staged {program.path} as {staged}")
        return staged

    def build(self, program: ProgramReference, key: CacheKey) -> Runnable:
        """Build a program into the cache entry for ``key``.

        On success, stale entries of the same program are pruned.

        Parameters
        ----------
        program : ProgramReference
            The resolved program.
        key : CacheKey
            The cache key derived from ``program``.

        Returns
        -------
        Runnable
            An executable wrapper around the new artifact.

        Raises
        ------
        BuildError
            If the compiler exits with a non-zero status.
        OSError
            If the entry directory cannot be created or the source cannot be staged.
        """
        output_path = self._store.register(key)
        source_path = self.source_for(program, self._store.entry_dir(key))

        returncode = self._compiler.compile(output_path, source_path)
        if returncode != 0:
            raise BuildError(
                f"Compilation of '{program.raw}' failed with exit status {returncode}",
                returncode,
            )

        removed = self._store.prune(key.base_name)
        if removed:
            logger.debug(f"Pruned {len(removed)} stale entries of '{key.base_name}'")

        metadata = RunnableMetadata(key=key, source=program.path, cached=False)
        return Runnable(path=output_path, metadata=metadata)
