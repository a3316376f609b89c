"""Runnable wrapper for compiled artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from pydantic import BaseModel

from swiftly.data import CacheKey
from swiftly.utils import run_process


class RunnableMetadata(BaseModel):
    """Metadata about a runnable artifact.

    This class stores where the artifact came from and whether this invocation built it.
    """

    key: CacheKey
    """The cache key of the artifact."""
    source: Path
    """The source file the artifact was compiled from."""
    cached: bool
    """True if the artifact was found in the cache, False if it was just built."""


class Runnable:
    """An executable wrapper around a compiled artifact.

    Calling the runnable executes the artifact with the given arguments in the foreground and
    returns its exit status.
    """

    path: Path
    """Path to the executable artifact."""

    metadata: RunnableMetadata
    """Metadata about the artifact."""

    def __init__(self, path: Path, metadata: RunnableMetadata) -> None:
        """Constructor for the Runnable class.

        Parameters
        ----------
        path : Path
            Path to the executable artifact.
        metadata : RunnableMetadata
            The metadata for the runnable.
        """
        self.path = Path(path)
        self.metadata = metadata

    def command(self, args: Sequence[str]) -> List[str]:
        return [str(self.path), *args]

    def __call__(self, args: Sequence[str] = ()) -> int:
        """Execute the artifact, forwarding ``args`` unchanged and in order.

        Parameters
        ----------
        args : Sequence[str]
            Arguments for the artifact.

        Returns
        -------
        int
            The artifact's exit status.
        """
        return run_process(self.command(args))

    def __repr__(self) -> str:
        state = "cached" if self.metadata.cached else "built"
        return f"Runnable({self.path}, {state})"
