"""Strong-typed reference to the program requested on the command line."""

from pathlib import Path

from .utils import FrozenModel, NonEmptyString


class ProgramReference(FrozenModel):
    """A program reference after resolution.

    Produced once per invocation by the path resolver and never modified afterwards.
    """

    raw: NonEmptyString
    """The identifier exactly as given on the command line: a filesystem path or a bare name
    looked up on the execution search path."""
    base_name: NonEmptyString
    """The final path component of ``raw``. Also the name of the compiled artifact."""
    extension: str = ""
    """The substring after the last ``.`` in the base name, or an empty string when the base
    name contains no dot."""
    path: Path
    """The resolved path of the source file."""
    mtime: int
    """Last modification time of ``path`` in whole seconds since the epoch, as reported by the
    filesystem. Negative for files dated before 1970."""

    @property
    def has_extension(self) -> bool:
        return bool(self.extension)
